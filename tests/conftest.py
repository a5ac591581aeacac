"""Pytest configuration and shared fixtures.

This module provides common fixtures for the Hit Dice Healing test suite:
sample characters wrapped in in-memory stores, a recording notifier and
a deterministic roll engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from hit_dice_healing.engine.dice import RollOutcome


if TYPE_CHECKING:
    from collections.abc import Generator

    from hit_dice_healing.api import HitDiceHealing
    from hit_dice_healing.engine.healing import HealingEngine
    from hit_dice_healing.engine.hit_dice import HitDicePool
    from hit_dice_healing.engine.rest import RestController
    from hit_dice_healing.engine.spell_slots import SpellSlotRecovery
    from hit_dice_healing.host.memory import InMemoryCharacterStore, NotificationLog
    from hit_dice_healing.models.character import Character


# =============================================================================
# Test Doubles
# =============================================================================


class FixedRollEngine:
    """Roll engine that always returns the same total.

    Attributes:
        total: Total returned for every formula.
        formulas: Every formula evaluated, in order.
    """

    def __init__(self, total: int) -> None:
        self.total = total
        self.formulas: list[str] = []

    async def evaluate(self, formula: str) -> RollOutcome:
        self.formulas.append(formula)
        return RollOutcome(formula=formula, total=self.total)


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from hit_dice_healing.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "HIT_DICE_DEBUG": "true",
        "HIT_DICE_LOG_LEVEL": "DEBUG",
        "HIT_DICE_FLAG_NAMESPACE": "test-namespace",
        "HIT_DICE_REQUIRE_GM_FOR_REPLENISH": "false",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Character Fixtures
# =============================================================================


@pytest.fixture
def rogue() -> Character:
    """Level 5 rogue (d8) with a +3 constitution modifier at 20/60 HP."""
    from hit_dice_healing.models import Character, HitPoints

    return Character(
        name="Merisiel",
        level=5,
        class_name="Rogue",
        con_modifier=3,
        hp=HitPoints(value=20, max=60),
    )


@pytest.fixture
def rogue_store(rogue: Character) -> InMemoryCharacterStore:
    from hit_dice_healing.host.memory import InMemoryCharacterStore

    return InMemoryCharacterStore(rogue)


@pytest.fixture
def wizard() -> Character:
    """Level 9 wizard with a prepared entry, an innate entry and a focus pool."""
    from hit_dice_healing.models import (
        CastingType,
        Character,
        HitPoints,
        Item,
        ItemType,
        ResourcePool,
        Spellcasting,
        SpellSlot,
    )

    arcane = Item(
        id="arcane-prepared",
        name="Arcane Prepared Spells",
        type=ItemType.SPELLCASTING_ENTRY,
        spellcasting=Spellcasting(
            casting_type=CastingType.PREPARED,
            slots={
                1: SpellSlot(value=1, max=3),
                2: SpellSlot(value=3, max=3),
                3: SpellSlot(value=0, max=3),
                5: SpellSlot(value=1, max=2),
                6: SpellSlot(value=0, max=0),
            },
        ),
    )
    innate = Item(
        id="innate",
        name="Elven Innate Spells",
        type=ItemType.SPELLCASTING_ENTRY,
        spellcasting=Spellcasting(
            casting_type=CastingType.INNATE,
            slots={1: SpellSlot(value=0, max=1)},
        ),
    )
    return Character(
        name="Ezren",
        level=9,
        class_name="Wizard",
        con_modifier=1,
        hp=HitPoints(value=30, max=70),
        focus=ResourcePool(value=0, max=2),
        items=[arcane, innate],
    )


@pytest.fixture
def wizard_store(wizard: Character) -> InMemoryCharacterStore:
    from hit_dice_healing.host.memory import InMemoryCharacterStore

    return InMemoryCharacterStore(wizard)


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def notifier() -> NotificationLog:
    from hit_dice_healing.host.memory import NotificationLog

    return NotificationLog()


@pytest.fixture
def roll_engine() -> FixedRollEngine:
    """Roll engine returning 10 for every formula."""
    return FixedRollEngine(total=10)


@pytest.fixture
def make_roll_engine() -> type[FixedRollEngine]:
    """The FixedRollEngine class, for tests that need another total."""
    return FixedRollEngine


@pytest.fixture
def pool() -> HitDicePool:
    from hit_dice_healing.engine.hit_dice import HitDicePool

    return HitDicePool()


@pytest.fixture
def healing(
    pool: HitDicePool,
    roll_engine: FixedRollEngine,
    notifier: NotificationLog,
) -> HealingEngine:
    from hit_dice_healing.engine.healing import HealingEngine

    return HealingEngine(pool, roll_engine, notifier)


@pytest.fixture
def spell_slots(pool: HitDicePool, notifier: NotificationLog) -> SpellSlotRecovery:
    from hit_dice_healing.engine.spell_slots import SpellSlotRecovery

    return SpellSlotRecovery(pool, notifier)


@pytest.fixture
def rest_controller(
    pool: HitDicePool,
    spell_slots: SpellSlotRecovery,
    notifier: NotificationLog,
) -> RestController:
    from hit_dice_healing.engine.rest import RestController

    return RestController(pool, spell_slots, notifier)


@pytest.fixture
def api(roll_engine: FixedRollEngine, notifier: NotificationLog) -> HitDiceHealing:
    from hit_dice_healing.api import HitDiceHealing

    return HitDiceHealing(roll_engine=roll_engine, notifier=notifier)
