"""Spending Hit Dice for healing.

A spend rolls ``N`` dice of the class die size plus the constitution
modifier once per die. Two rules shape the result:

* Floor healing: at least 1 HP per die spent, whatever the roll or a
  negative modifier would give.
* HP cap: healing never raises HP past its maximum, so the HP actually
  restored can be lower than the rolled healing.

roll_and_heal runs strictly in order: validate, roll, compute, persist
HP, persist the pool, then log and post the chat message. Messages
therefore always describe state that was already written.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from hit_dice_healing.core.constants import (
    MIN_DICE_PER_ROLL,
    MSG_MINIMUM_ONE_DIE,
    MSG_NOT_ENOUGH_DICE,
)
from hit_dice_healing.core.exceptions import BelowMinimumDiceCountError, InsufficientDiceError
from hit_dice_healing.core.logging import get_logger
from hit_dice_healing.host.protocols import ChatMessage


if TYPE_CHECKING:
    from hit_dice_healing.engine.dice import RollOutcome
    from hit_dice_healing.engine.hit_dice import HitDicePool
    from hit_dice_healing.host.protocols import CharacterStore, Notifier, RollEngine


logger = get_logger(__name__)


@dataclass(frozen=True)
class HealingRange:
    """Smallest and largest possible healing for a spend."""

    minimum: int
    maximum: int


@dataclass(frozen=True)
class HealingPreview:
    """What a prospective spend would look like.

    Attributes:
        dice_count: Requested count clamped to ``[1, available]``.
        available: Dice currently in the pool.
        max_dice: Pool maximum.
        die_type: Die size for the character's class.
        con_mod: Constitution modifier applied per die.
        formula: Roll formula for ``dice_count`` dice.
        range: Healing range for ``dice_count`` dice.
    """

    dice_count: int
    available: int
    max_dice: int
    die_type: int
    con_mod: int
    formula: str
    range: HealingRange

    @property
    def can_roll(self) -> bool:
        return self.available > 0

    @property
    def can_increment(self) -> bool:
        return self.dice_count < self.available

    @property
    def can_decrement(self) -> bool:
        return self.dice_count > MIN_DICE_PER_ROLL


@dataclass(frozen=True)
class HealingResult:
    """Outcome of a successful spend.

    Attributes:
        roll: The evaluated roll.
        healing: Healing after the per-die floor, before the HP cap.
        actual_healing: HP actually restored.
        dice_spent: Dice removed from the pool.
        remaining: Dice left in the pool.
        was_limited: True when the HP cap absorbed part of the healing.
    """

    roll: RollOutcome
    healing: int
    actual_healing: int
    dice_spent: int
    remaining: int

    @property
    def was_limited(self) -> bool:
        return self.healing > self.actual_healing


class HealingEngine:
    """Converts spent Hit Dice into HP.

    Args:
        pool: Hit Dice pool adapter.
        roll_engine: Evaluates the healing formula.
        notifier: Receives warnings and the roll chat message.
    """

    def __init__(self, pool: HitDicePool, roll_engine: RollEngine, notifier: Notifier) -> None:
        self._pool = pool
        self._roll_engine = roll_engine
        self._notifier = notifier

    @staticmethod
    def calculate_range(dice_count: int, die_type: int, con_mod: int) -> HealingRange:
        """Healing range for a spend, honouring the 1 HP per die floor.

        Example:
            >>> HealingEngine.calculate_range(2, 8, 3)
            HealingRange(minimum=8, maximum=22)
        """
        total_mod = con_mod * dice_count
        minimum = max(dice_count, dice_count + total_mod)
        maximum = max(dice_count, die_type * dice_count + total_mod)
        return HealingRange(minimum=minimum, maximum=maximum)

    @staticmethod
    def build_formula(dice_count: int, die_type: int, con_mod: int) -> str:
        """Roll formula such as ``3d8+6``, ``2d6-2`` or ``1d10``."""
        total_mod = con_mod * dice_count
        if total_mod == 0:
            return f"{dice_count}d{die_type}"
        if total_mod > 0:
            return f"{dice_count}d{die_type}+{total_mod}"
        return f"{dice_count}d{die_type}{total_mod}"

    def preview(self, character: CharacterStore, dice_count: int = MIN_DICE_PER_ROLL) -> HealingPreview:
        """Formula and range for a prospective spend, without rolling."""
        info = self._pool.get_info(character)
        count = max(MIN_DICE_PER_ROLL, min(dice_count, info.current))
        return HealingPreview(
            dice_count=count,
            available=info.current,
            max_dice=info.max,
            die_type=info.die_type,
            con_mod=info.con_mod,
            formula=self.build_formula(count, info.die_type, info.con_mod),
            range=self.calculate_range(count, info.die_type, info.con_mod),
        )

    async def roll_and_heal(self, character: CharacterStore, dice_count: int) -> HealingResult:
        """Spend ``dice_count`` Hit Dice and heal the character.

        Raises:
            BelowMinimumDiceCountError: If ``dice_count`` is below 1.
            InsufficientDiceError: If the pool holds fewer dice.
            PersistenceError: If the store rejects a write.
        """
        data = character.data
        current = self._pool.get_current(character)

        if dice_count < MIN_DICE_PER_ROLL:
            self._notifier.warn(MSG_MINIMUM_ONE_DIE)
            raise BelowMinimumDiceCountError(MSG_MINIMUM_ONE_DIE, requested=dice_count)

        if dice_count > current:
            message = MSG_NOT_ENOUGH_DICE.format(name=data.name, available=current, required=dice_count)
            self._notifier.warn(message)
            raise InsufficientDiceError(message, required=dice_count, available=current)

        die_type = self._pool.get_die_type(character)
        con_mod = self._pool.get_con_modifier(character)
        formula = self.build_formula(dice_count, die_type, con_mod)

        roll = await self._roll_engine.evaluate(formula)

        healing = max(roll.total, dice_count)
        current_hp = data.hp.value
        new_hp = min(current_hp + healing, data.hp.max)
        actual_healing = new_hp - current_hp

        await character.update_fields({"hp.value": new_hp})
        remaining = await self._pool.set_current(character, current - dice_count)

        result = HealingResult(
            roll=roll,
            healing=healing,
            actual_healing=actual_healing,
            dice_spent=dice_count,
            remaining=remaining,
        )
        logger.info(
            "Hit Dice spent",
            character=data.name,
            formula=roll.formula,
            roll_total=roll.total,
            healing=actual_healing,
            remaining=remaining,
            was_limited=result.was_limited,
        )
        await self._notifier.post_message(
            ChatMessage(
                content=self._format_message(character, result, die_type),
                speaker=data.name,
                roll=roll,
            )
        )
        return result

    def _format_message(self, character: CharacterStore, result: HealingResult, die_type: int) -> str:
        die_word = "Hit Die" if result.dice_spent == 1 else "Hit Dice"
        text = (
            f"{character.data.name} spends {result.dice_spent} {die_word} (d{die_type}): "
            f"{result.roll.formula} = {result.roll.total}. Healed {result.actual_healing} HP"
        )
        if result.was_limited:
            text += " (limited by maximum HP)"
        return f"{text}. Hit Dice remaining: {result.remaining}/{self._pool.get_max(character)}."


__all__ = [
    "HealingRange",
    "HealingPreview",
    "HealingResult",
    "HealingEngine",
]
