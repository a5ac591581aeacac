"""Hit Dice pool bookkeeping.

The pool maximum is derived from the character level (level + 1). The
current count is persisted as a single integer flag on the character and
is created lazily: until the first write, the pool reads as full.

Every write is clamped to ``[0, level + 1]`` and reads are clamped too,
so a character that lost levels never reports more dice than its maximum.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from hit_dice_healing.core.config import Settings, get_settings
from hit_dice_healing.core.constants import CLASS_DIE_TYPES, DEFAULT_DIE_TYPE
from hit_dice_healing.core.logging import get_logger


if TYPE_CHECKING:
    from hit_dice_healing.host.protocols import CharacterStore


logger = get_logger(__name__)


@dataclass(frozen=True)
class HitDiceInfo:
    """Snapshot of a character's pool for display."""

    current: int
    max: int
    die_type: int
    con_mod: int


@dataclass(frozen=True)
class ReplenishResult:
    """Outcome of refilling the pool.

    Attributes:
        replenished: Dice added by this call (0 when already full).
        total: Pool maximum after the call.
    """

    replenished: int
    total: int


class HitDicePool:
    """Typed adapter over the Hit Dice counter flag.

    Args:
        settings: Source of the flag namespace and key. Defaults to the
            application settings.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings or get_settings()
        self._namespace = settings.flag_namespace
        self._key = settings.flag_key

    def get_max(self, character: CharacterStore) -> int:
        """Maximum Hit Dice: character level + 1."""
        return character.data.level + 1

    def get_current(self, character: CharacterStore) -> int:
        """Available Hit Dice, or the maximum when never written."""
        maximum = self.get_max(character)
        stored = character.get_value(self._namespace, self._key)
        if stored is None:
            return maximum
        if isinstance(stored, bool) or not isinstance(stored, int):
            logger.warning(
                "Ignoring non-integer Hit Dice flag",
                character=character.data.name,
                stored=stored,
            )
            return maximum
        return max(0, min(stored, maximum))

    async def set_current(self, character: CharacterStore, value: int) -> int:
        """Persist a new count, clamped to ``[0, max]``.

        Returns:
            The value actually stored.
        """
        clamped = max(0, min(value, self.get_max(character)))
        await character.set_value(self._namespace, self._key, clamped)
        return clamped

    def get_die_type(self, character: CharacterStore) -> int:
        """Die size for the character's class.

        The class name comes from the character's class field, falling back
        to its class item. Unknown or missing classes use a d8.
        """
        data = character.data
        class_name = data.class_name
        if not class_name:
            class_item = data.get_class_item()
            class_name = class_item.name if class_item is not None else None

        if class_name:
            die_type = CLASS_DIE_TYPES.get(class_name.strip().lower())
            if die_type is not None:
                return die_type

        logger.warning(
            "Unknown class, defaulting Hit Die",
            class_name=class_name,
            die_type=DEFAULT_DIE_TYPE,
        )
        return DEFAULT_DIE_TYPE

    def get_con_modifier(self, character: CharacterStore) -> int:
        modifier = character.data.con_modifier
        return modifier if modifier is not None else 0

    def get_info(self, character: CharacterStore) -> HitDiceInfo:
        return HitDiceInfo(
            current=self.get_current(character),
            max=self.get_max(character),
            die_type=self.get_die_type(character),
            con_mod=self.get_con_modifier(character),
        )

    async def replenish(self, character: CharacterStore) -> ReplenishResult:
        """Refill the pool to its maximum.

        Nothing is written when the pool is already full.
        """
        maximum = self.get_max(character)
        current = self.get_current(character)
        if current < maximum:
            await self.set_current(character, maximum)
            logger.info(
                "Hit Dice replenished",
                character=character.data.name,
                replenished=maximum - current,
                total=maximum,
            )
            return ReplenishResult(replenished=maximum - current, total=maximum)
        return ReplenishResult(replenished=0, total=maximum)


__all__ = [
    "HitDiceInfo",
    "ReplenishResult",
    "HitDicePool",
]
