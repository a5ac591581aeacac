"""Restoring spell slots with Hit Dice.

One slot is restored per call and costs as many Hit Dice as the slot
level. Only prepared and spontaneous spellcasting entries take part;
innate, focus, ritual and item casting have no regular slots.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from hit_dice_healing.core.constants import (
    MSG_ENTRY_NOT_FOUND,
    MSG_NOT_ENOUGH_DICE_FOR_SLOT,
    MSG_SLOT_ALREADY_FULL,
    SLOT_LEVELS,
)
from hit_dice_healing.core.exceptions import EntryNotFoundError, InsufficientDiceError, SlotFullError
from hit_dice_healing.core.logging import get_logger
from hit_dice_healing.host.protocols import ChatMessage


if TYPE_CHECKING:
    from hit_dice_healing.engine.hit_dice import HitDicePool
    from hit_dice_healing.host.protocols import CharacterStore, Notifier
    from hit_dice_healing.models.character import Item


logger = get_logger(__name__)


@dataclass(frozen=True)
class DepletedSlot:
    """A spell slot level below its maximum."""

    entry_id: str
    entry_name: str
    level: int
    current: int
    max: int


@dataclass(frozen=True)
class SlotRestoreResult:
    """Outcome of restoring one spell slot."""

    entry_id: str
    entry_name: str
    level: int
    slot_value: int
    dice_spent: int
    remaining: int


class SpellSlotRecovery:
    """Lists depleted spell slots and buys them back with Hit Dice."""

    def __init__(self, pool: HitDicePool, notifier: Notifier) -> None:
        self._pool = pool
        self._notifier = notifier

    @staticmethod
    def _slot_entries(character: CharacterStore) -> list[Item]:
        return [
            entry
            for entry in character.data.spellcasting_entries
            if entry.spellcasting is not None and entry.spellcasting.casting_type.uses_slots
        ]

    def is_spellcaster(self, character: CharacterStore) -> bool:
        """True if the character has a prepared or spontaneous entry."""
        return bool(self._slot_entries(character))

    def get_depleted_slots(self, character: CharacterStore) -> list[DepletedSlot]:
        """Every depleted slot level, lowest level first.

        Levels with a maximum of zero do not exist for the entry and are
        skipped. Entries keep their sheet order within a level.
        """
        depleted: list[DepletedSlot] = []
        for entry in self._slot_entries(character):
            slots = entry.spellcasting.slots
            for level in SLOT_LEVELS:
                slot = slots.get(level)
                if slot is None or slot.max == 0:
                    continue
                if slot.value < slot.max:
                    depleted.append(
                        DepletedSlot(
                            entry_id=entry.id,
                            entry_name=entry.name,
                            level=level,
                            current=slot.value,
                            max=slot.max,
                        )
                    )
        return sorted(depleted, key=lambda s: s.level)

    async def restore_slot(self, character: CharacterStore, entry_id: str, level: int) -> SlotRestoreResult:
        """Restore one slot of ``level`` on ``entry_id`` for ``level`` Hit Dice.

        Raises:
            InsufficientDiceError: If the pool cannot pay the cost.
            EntryNotFoundError: If the entry is missing or has no slots.
            SlotFullError: If the slot is already at its maximum.
            PersistenceError: If the store rejects a write.
        """
        cost = level
        current = self._pool.get_current(character)

        if cost > current:
            message = MSG_NOT_ENOUGH_DICE_FOR_SLOT.format(cost=cost, current=current)
            self._notifier.warn(message)
            raise InsufficientDiceError(message, required=cost, available=current)

        entry = next((e for e in self._slot_entries(character) if e.id == entry_id), None)
        if entry is None:
            self._notifier.warn(MSG_ENTRY_NOT_FOUND)
            raise EntryNotFoundError(MSG_ENTRY_NOT_FOUND, entry_id=entry_id)

        slot = entry.spellcasting.get_slot(level)
        if slot is None or slot.value >= slot.max:
            self._notifier.warn(MSG_SLOT_ALREADY_FULL)
            raise SlotFullError(MSG_SLOT_ALREADY_FULL, entry_id=entry_id, level=level)

        new_value = slot.value + 1
        await character.update_item(entry.id, {f"spellcasting.slots.{level}.value": new_value})
        remaining = await self._pool.set_current(character, current - cost)

        logger.info(
            "Spell slot restored",
            character=character.data.name,
            entry=entry.name,
            level=level,
            cost=cost,
            remaining=remaining,
        )
        await self._notifier.post_message(
            ChatMessage(
                content=(
                    f"{character.data.name} restores a level {level} spell slot "
                    f"({entry.name}) by spending {cost} Hit Dice."
                ),
                speaker=character.data.name,
            )
        )
        return SlotRestoreResult(
            entry_id=entry.id,
            entry_name=entry.name,
            level=level,
            slot_value=new_value,
            dice_spent=cost,
            remaining=remaining,
        )


__all__ = [
    "DepletedSlot",
    "SlotRestoreResult",
    "SpellSlotRecovery",
]
