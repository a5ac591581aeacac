"""Dice formula evaluation backed by the d20 library.

D20RollEngine implements the RollEngine protocol used by the healing
engine. Formulas follow the ``NdD[+M|-M]`` grammar produced by
HealingEngine.build_formula, though any d20 expression is accepted.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any

import d20

from hit_dice_healing.core.exceptions import DiceRollError
from hit_dice_healing.core.logging import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class RollOutcome:
    """Result of evaluating a dice formula.

    Attributes:
        formula: The formula that was rolled.
        total: Total of the roll including modifiers.
        dice: Individual kept die results.
        modifier: Static part of the total (total minus the dice).
    """

    formula: str
    total: int
    dice: tuple[int, ...] = ()
    modifier: int = 0


class D20RollEngine:
    """Roll engine using d20.

    Example:
        >>> engine = D20RollEngine(seed=7)
        >>> outcome = engine.roll("2d8+6")
        >>> 8 <= outcome.total <= 22
        True
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the roll engine.

        Args:
            seed: Optional random seed for reproducible rolls.
        """
        self._seed = seed
        if seed is not None:
            random.seed(seed)
        logger.debug("D20RollEngine initialized", seed=seed)

    async def evaluate(self, formula: str) -> RollOutcome:
        """Evaluate a formula. See roll()."""
        return self.roll(formula)

    def roll(self, formula: str) -> RollOutcome:
        """Roll a dice formula.

        Args:
            formula: Dice expression (e.g. '3d8+6', '2d6-2').

        Returns:
            RollOutcome with total and individual dice.

        Raises:
            DiceRollError: If the formula is empty or invalid.
        """
        if not formula or not formula.strip():
            raise DiceRollError("Empty dice expression", expression=formula)

        try:
            result: d20.RollResult = d20.roll(formula)
        except d20.RollError as exc:
            raise DiceRollError(
                f"Invalid dice expression: {exc}",
                expression=formula,
            ) from exc

        dice_values = self._extract_dice_values(result.expr)
        outcome = RollOutcome(
            formula=formula,
            total=result.total,
            dice=tuple(dice_values),
            modifier=result.total - sum(dice_values),
        )
        logger.debug("Dice rolled", formula=formula, total=outcome.total, dice=outcome.dice)
        return outcome

    def _extract_dice_values(self, expr: Any) -> list[int]:
        """Extract kept die values from a d20 expression tree."""
        values: list[int] = []

        def traverse(node: Any) -> None:
            if isinstance(node, d20.Dice):
                for die in node.values:
                    if die.kept:
                        values.append(die.number)
            elif hasattr(node, "children"):
                for child in node.children:
                    traverse(child)

        traverse(expr)
        return values


__all__ = [
    "RollOutcome",
    "D20RollEngine",
]
