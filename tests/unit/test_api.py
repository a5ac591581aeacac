"""Tests for the HitDiceHealing facade."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from hit_dice_healing.api import HitDiceHealing, setup
from hit_dice_healing.core.config import Settings
from hit_dice_healing.core.constants import MSG_REPLENISH_GM_ONLY
from hit_dice_healing.engine.dice import D20RollEngine
from hit_dice_healing.engine.hit_dice import ReplenishResult
from hit_dice_healing.host.memory import InMemoryCharacterStore, NotificationLog
from hit_dice_healing.models import ActorType, Character


if TYPE_CHECKING:
    from hit_dice_healing.engine.hit_dice import HitDicePool

    from conftest import FixedRollEngine


class TestReplenish:
    """Tests for manual replenishment."""

    async def test_player_cannot_replenish(
        self,
        api: HitDiceHealing,
        rogue_store: InMemoryCharacterStore,
        notifier: NotificationLog,
    ) -> None:
        """Test non-GM callers are refused when GM is required."""
        await api.pool.set_current(rogue_store, 1)

        result = await api.replenish(rogue_store, is_gm=False)

        assert result is None
        assert notifier.warnings == [MSG_REPLENISH_GM_ONLY]
        assert api.pool.get_current(rogue_store) == 1

    async def test_gm_replenishes(
        self,
        api: HitDiceHealing,
        rogue_store: InMemoryCharacterStore,
        notifier: NotificationLog,
    ) -> None:
        """Test the GM can refill a pool."""
        await api.pool.set_current(rogue_store, 1)

        result = await api.replenish(rogue_store, is_gm=True)

        assert result == ReplenishResult(replenished=5, total=6)
        assert notifier.infos == ["Merisiel: 5 Hit Dice replenished (6/6)"]

    async def test_gm_check_disabled(
        self,
        rogue_store: InMemoryCharacterStore,
        notifier: NotificationLog,
    ) -> None:
        """Test settings can open replenishment to everyone."""
        api = HitDiceHealing(settings=Settings(require_gm_for_replenish=False), notifier=notifier)
        await api.pool.set_current(rogue_store, 0)

        result = await api.replenish(rogue_store, is_gm=False)

        assert result == ReplenishResult(replenished=6, total=6)


class TestHostRest:
    """Tests for the host rest-for-the-night handler."""

    async def test_player_character_regains_dice(
        self,
        api: HitDiceHealing,
        rogue_store: InMemoryCharacterStore,
        notifier: NotificationLog,
    ) -> None:
        """Test the host rest refills the pool."""
        await api.pool.set_current(rogue_store, 3)

        result = await api.on_host_rest(rogue_store)

        assert result == ReplenishResult(replenished=3, total=6)
        assert notifier.infos == ["Merisiel: 3 Hit Dice regained!"]

    async def test_npc_ignored(self, api: HitDiceHealing, notifier: NotificationLog) -> None:
        """Test non-player actors are skipped."""
        store = InMemoryCharacterStore(Character(name="Goblin", actor_type=ActorType.NPC))

        assert await api.on_host_rest(store) is None
        assert store.data.flags == {}
        assert notifier.infos == []

    async def test_full_pool_is_quiet(
        self,
        api: HitDiceHealing,
        rogue_store: InMemoryCharacterStore,
        notifier: NotificationLog,
    ) -> None:
        """Test nothing is announced when no dice were missing."""
        result = await api.on_host_rest(rogue_store)

        assert result == ReplenishResult(replenished=0, total=6)
        assert notifier.infos == []


class TestFacade:
    """Tests for wiring and delegation."""

    def test_defaults(self) -> None:
        """Test default collaborators."""
        api = HitDiceHealing()

        assert isinstance(api.notifier, NotificationLog)
        assert isinstance(api.healing._roll_engine, D20RollEngine)

    def test_settings_reach_pool(self) -> None:
        """Test the pool reads the configured flag."""
        api = HitDiceHealing(settings=Settings(flag_namespace="custom", flag_key="dice"))
        store = InMemoryCharacterStore(Character(name="Lem", level=3, flags={"custom": {"dice": 1}}))

        assert api.get_info(store).current == 1

    def test_queries(self, api: HitDiceHealing, wizard_store: InMemoryCharacterStore) -> None:
        """Test query methods delegate to the engines."""
        assert api.get_info(wizard_store).die_type == 6
        assert api.preview(wizard_store, 3).formula == "3d6+3"
        assert len(api.depleted_slots(wizard_store)) == 3

    async def test_actions(
        self,
        api: HitDiceHealing,
        pool: HitDicePool,
        wizard_store: InMemoryCharacterStore,
    ) -> None:
        """Test action methods delegate to the engines."""
        healed = await api.spend(wizard_store, 2)
        restored = await api.restore_slot(wizard_store, "arcane-prepared", 3)
        rest = await api.rest(wizard_store, "long")

        assert healed.remaining == 8
        assert restored.remaining == 5
        assert rest.hit_dice_replenished == 5
        assert pool.get_current(wizard_store) == 10

    def test_setup_configures_logging(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test setup builds a facade from environment settings."""
        monkeypatch.setenv("HIT_DICE_LOG_LEVEL", "WARNING")

        api = setup(notifier=NotificationLog())

        assert api.settings.log_level == "WARNING"
        assert isinstance(api, HitDiceHealing)

    async def test_setup_wires_collaborators(
        self,
        rogue_store: InMemoryCharacterStore,
        make_roll_engine: type[FixedRollEngine],
    ) -> None:
        """Test setup hands its collaborators to the facade."""
        notifier = NotificationLog()
        roll_engine = make_roll_engine(total=4)
        calls: list[bool] = []

        async def host_full_rest(*, character: Any, skip_confirmation: bool) -> None:
            calls.append(skip_confirmation)

        api = setup(roll_engine=roll_engine, notifier=notifier, full_rest=host_full_rest)
        await api.spend(rogue_store, 1)
        result = await api.rest(rogue_store, "full")

        assert roll_engine.formulas == ["1d8+3"]
        assert notifier.messages[0].roll.total == 4
        assert result.full_rest_delegated
        assert calls == [True]
