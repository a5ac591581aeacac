"""Enumerations shared by the character model and the engines."""

from __future__ import annotations

from enum import StrEnum


class ActorType(StrEnum):
    """Kind of actor document the host hands us."""

    CHARACTER = "character"
    """Player character. The only actor type that owns a Hit Dice pool."""

    NPC = "npc"


class ItemType(StrEnum):
    """Item document types relevant to resting."""

    CLASS = "class"
    CONSUMABLE = "consumable"
    ACTION = "action"
    FEAT = "feat"
    EQUIPMENT = "equipment"
    WEAPON = "weapon"
    SPELLCASTING_ENTRY = "spellcastingEntry"


class ConsumableType(StrEnum):
    """Consumable categories that receive special treatment on rest."""

    WAND = "wand"
    SCROLL = "scroll"
    POTION = "potion"
    ELIXIR = "elixir"
    OTHER = "other"


class FrequencyPeriod(StrEnum):
    """Reset period of a frequency-limited use."""

    TURN = "turn"
    ROUND = "round"
    MINUTE = "PT1M"
    TEN_MINUTES = "PT10M"
    HOUR = "PT1H"
    DAY = "day"
    WEEK = "P1W"
    MONTH = "P1M"


class CastingType(StrEnum):
    """Spellcasting entry tradition of preparation."""

    PREPARED = "prepared"
    SPONTANEOUS = "spontaneous"
    INNATE = "innate"
    FOCUS = "focus"
    RITUAL = "ritual"
    ITEMS = "items"

    @property
    def uses_slots(self) -> bool:
        """Whether the entry draws on regular spell slots."""
        return self in (CastingType.PREPARED, CastingType.SPONTANEOUS)


__all__ = [
    "ActorType",
    "ItemType",
    "ConsumableType",
    "FrequencyPeriod",
    "CastingType",
]
