"""Resource accounting and rest orchestration.

Submodules:
    dice: Formula evaluation with the d20 library
    hit_dice: Hit Dice pool bookkeeping
    healing: Spending Hit Dice on HP
    spell_slots: Spending Hit Dice on spell slots
    rest: Short / Long / Full rest controller

Example:
    >>> from hit_dice_healing.engine import HealingEngine
    >>> HealingEngine.build_formula(3, 8, 2)
    '3d8+6'
"""

from __future__ import annotations

from hit_dice_healing.engine.dice import D20RollEngine, RollOutcome
from hit_dice_healing.engine.healing import (
    HealingEngine,
    HealingPreview,
    HealingRange,
    HealingResult,
)
from hit_dice_healing.engine.hit_dice import HitDiceInfo, HitDicePool, ReplenishResult
from hit_dice_healing.engine.rest import RestController, RestResult, RestTier
from hit_dice_healing.engine.spell_slots import (
    DepletedSlot,
    SlotRestoreResult,
    SpellSlotRecovery,
)


__all__ = [
    # Dice
    "D20RollEngine",
    "RollOutcome",
    # Pool
    "HitDiceInfo",
    "HitDicePool",
    "ReplenishResult",
    # Healing
    "HealingEngine",
    "HealingPreview",
    "HealingRange",
    "HealingResult",
    # Spell slots
    "DepletedSlot",
    "SlotRestoreResult",
    "SpellSlotRecovery",
    # Rest
    "RestController",
    "RestResult",
    "RestTier",
]
