"""Pydantic models for the host character document.

The character belongs to the host game runtime. These models give the
engines a typed view of the fields they read; all writes go through a
CharacterStore so the host stays the owner of persistence.
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hit_dice_healing.core.constants import MAX_SLOT_LEVEL, MIN_SLOT_LEVEL
from hit_dice_healing.models.enums import (
    ActorType,
    CastingType,
    ConsumableType,
    FrequencyPeriod,
    ItemType,
)


def _new_id() -> str:
    return uuid4().hex[:16]


# =============================================================================
# Base Component
# =============================================================================


class Component(BaseModel):
    """Base class for character sub-documents.

    Components are mutable so that store writes can be applied in place,
    and every assignment is re-validated.
    """

    model_config = ConfigDict(
        frozen=False,
        validate_assignment=True,
        extra="ignore",
    )


# =============================================================================
# Resources
# =============================================================================


class ResourcePool(Component):
    """A current/maximum pair such as focus points or infused reagents."""

    value: int = Field(default=0, ge=0)
    max: int = Field(default=0, ge=0)

    @property
    def is_full(self) -> bool:
        return self.value >= self.max


class HitPoints(Component):
    """Current and maximum hit points."""

    value: int = Field(default=10, ge=0, description="Current hit points")
    max: int = Field(default=10, ge=1, description="Maximum hit points")

    @property
    def missing(self) -> int:
        return max(0, self.max - self.value)


class ConditionState(Component):
    """An active status condition.

    ``value`` is the severity for valued conditions (doomed 2, drained 1)
    and None for conditions without a value.
    """

    slug: str
    value: int | None = Field(default=None, ge=1)


# =============================================================================
# Items
# =============================================================================


class Frequency(Component):
    """Limited uses that reset on a fixed period."""

    value: int = Field(default=0, ge=0)
    max: int = Field(default=1, ge=0)
    per: FrequencyPeriod = FrequencyPeriod.DAY


class SpellSlot(Component):
    """One spell slot level of a spellcasting entry.

    A ``max`` of zero means the entry does not have this level.
    """

    value: int = Field(default=0, ge=0)
    max: int = Field(default=0, ge=0)


class Spellcasting(Component):
    """Spellcasting data carried by a spellcasting entry item."""

    casting_type: CastingType = CastingType.PREPARED
    slots: dict[int, SpellSlot] = Field(default_factory=dict)

    @field_validator("slots", mode="after")
    @classmethod
    def validate_slot_levels(cls, v: dict[int, SpellSlot]) -> dict[int, SpellSlot]:
        """Spell slot levels run from 1 to 10."""
        for level in v:
            if not MIN_SLOT_LEVEL <= level <= MAX_SLOT_LEVEL:
                raise ValueError(f"Spell slot level {level} outside {MIN_SLOT_LEVEL}-{MAX_SLOT_LEVEL}")
        return v

    def get_slot(self, level: int) -> SpellSlot | None:
        return self.slots.get(level)


class Item(Component):
    """An embedded item document on the character."""

    id: str = Field(default_factory=_new_id)
    name: str
    type: ItemType = ItemType.EQUIPMENT
    consumable_type: ConsumableType | None = None
    frequency: Frequency | None = None
    temporary: bool = False
    spellcasting: Spellcasting | None = None

    @property
    def is_wand(self) -> bool:
        return self.type == ItemType.CONSUMABLE and self.consumable_type == ConsumableType.WAND


# =============================================================================
# Character
# =============================================================================


class Character(Component):
    """A player character as exposed by the host.

    Example:
        >>> hero = Character(name="Valeros", level=5, class_name="Fighter",
        ...                  hp=HitPoints(value=20, max=68))
        >>> hero.get_item("missing") is None
        True
    """

    id: str = Field(default_factory=_new_id)
    name: str = Field(min_length=1)
    actor_type: ActorType = ActorType.CHARACTER
    level: int = Field(default=1, ge=1)
    class_name: str | None = None
    con_modifier: int | None = None
    hp: HitPoints = Field(default_factory=HitPoints)
    conditions: list[ConditionState] = Field(default_factory=list)
    focus: ResourcePool | None = None
    infused_reagents: ResourcePool | None = None
    items: list[Item] = Field(default_factory=list)
    flags: dict[str, dict[str, Any]] = Field(default_factory=dict)

    @property
    def is_player_character(self) -> bool:
        return self.actor_type == ActorType.CHARACTER

    def get_item(self, item_id: str) -> Item | None:
        """Look up an embedded item by id."""
        return next((item for item in self.items if item.id == item_id), None)

    def get_class_item(self) -> Item | None:
        return next((item for item in self.items if item.type == ItemType.CLASS), None)

    def get_condition(self, slug: str) -> ConditionState | None:
        return next((c for c in self.conditions if c.slug == slug), None)

    def has_condition(self, slug: str) -> bool:
        return self.get_condition(slug) is not None

    @property
    def spellcasting_entries(self) -> list[Item]:
        """All items that carry spellcasting data, in sheet order."""
        return [item for item in self.items if item.spellcasting is not None]


__all__ = [
    "Component",
    "ResourcePool",
    "HitPoints",
    "ConditionState",
    "Frequency",
    "SpellSlot",
    "Spellcasting",
    "Item",
    "Character",
]
