"""Hit Dice Healing.

Hit Dice healing and a three-tier rest system (Short / Long / Full) for
Pathfinder Second Edition characters.

Example:
    >>> from hit_dice_healing import HitDiceHealing, InMemoryCharacterStore, RestTier
    >>> api = HitDiceHealing()
    >>> result = await api.rest(InMemoryCharacterStore(hero), RestTier.LONG)
"""

from __future__ import annotations

from hit_dice_healing.api import HitDiceHealing, setup
from hit_dice_healing.engine import (
    D20RollEngine,
    HealingEngine,
    HitDicePool,
    RestController,
    RestResult,
    RestTier,
    SpellSlotRecovery,
)
from hit_dice_healing.host import ChatMessage, InMemoryCharacterStore, NotificationLog
from hit_dice_healing.models import Character


__version__ = "0.1.0"

__all__ = [
    "HitDiceHealing",
    "setup",
    "D20RollEngine",
    "HealingEngine",
    "HitDicePool",
    "RestController",
    "RestResult",
    "RestTier",
    "SpellSlotRecovery",
    "ChatMessage",
    "InMemoryCharacterStore",
    "NotificationLog",
    "Character",
]
