"""Typed models of the host character document.

Example:
    >>> from hit_dice_healing.models import Character, HitPoints
    >>> hero = Character(name="Ezren", level=3, class_name="Wizard",
    ...                  hp=HitPoints(value=12, max=21))
"""

from __future__ import annotations

from hit_dice_healing.models.character import (
    Character,
    Component,
    ConditionState,
    Frequency,
    HitPoints,
    Item,
    ResourcePool,
    SpellSlot,
    Spellcasting,
)
from hit_dice_healing.models.enums import (
    ActorType,
    CastingType,
    ConsumableType,
    FrequencyPeriod,
    ItemType,
)


__all__ = [
    # Enums
    "ActorType",
    "CastingType",
    "ConsumableType",
    "FrequencyPeriod",
    "ItemType",
    # Components
    "Component",
    "ConditionState",
    "Frequency",
    "HitPoints",
    "ResourcePool",
    "SpellSlot",
    "Spellcasting",
    # Entities
    "Item",
    "Character",
]
