"""Public entry point for hosts and macros.

HitDiceHealing wires the pool, the engines and the rest controller
together for one host. ``setup()`` additionally configures logging from
the application settings, which is what a host calls once at startup.

Example:
    >>> api = setup()
    >>> store = InMemoryCharacterStore(hero)
    >>> api.get_info(store)
    HitDiceInfo(current=6, max=6, die_type=10, con_mod=2)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hit_dice_healing.core.config import Settings, get_settings
from hit_dice_healing.core.constants import MSG_REPLENISH_GM_ONLY, MSG_REPLENISHED
from hit_dice_healing.core.logging import configure_logging, get_logger
from hit_dice_healing.engine.dice import D20RollEngine
from hit_dice_healing.engine.healing import HealingEngine, HealingPreview, HealingResult
from hit_dice_healing.engine.hit_dice import HitDiceInfo, HitDicePool, ReplenishResult
from hit_dice_healing.engine.rest import RestController, RestResult, RestTier
from hit_dice_healing.engine.spell_slots import DepletedSlot, SlotRestoreResult, SpellSlotRecovery
from hit_dice_healing.host.memory import NotificationLog


if TYPE_CHECKING:
    from hit_dice_healing.host.protocols import (
        CharacterStore,
        FullRestProcedure,
        Notifier,
        RollEngine,
        ShortRestHandler,
    )


logger = get_logger(__name__)


class HitDiceHealing:
    """Facade over the Hit Dice components.

    Args:
        settings: Application settings. Defaults to get_settings().
        roll_engine: Formula evaluator. Defaults to D20RollEngine.
        notifier: Notification channel. Defaults to a NotificationLog.
        full_rest: Host complete-rest procedure, if available.
        on_short_rest: Presentation hook run on a Short Rest.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        roll_engine: RollEngine | None = None,
        notifier: Notifier | None = None,
        full_rest: FullRestProcedure | None = None,
        on_short_rest: ShortRestHandler | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.notifier: Notifier = notifier if notifier is not None else NotificationLog()
        self.pool = HitDicePool(self.settings)
        self.healing = HealingEngine(self.pool, roll_engine or D20RollEngine(), self.notifier)
        self.spell_slots = SpellSlotRecovery(self.pool, self.notifier)
        self.rests = RestController(
            self.pool,
            self.spell_slots,
            self.notifier,
            full_rest=full_rest,
            on_short_rest=on_short_rest,
        )

    # =========================================================================
    # Queries
    # =========================================================================

    def get_info(self, character: CharacterStore) -> HitDiceInfo:
        return self.pool.get_info(character)

    def preview(self, character: CharacterStore, dice_count: int = 1) -> HealingPreview:
        return self.healing.preview(character, dice_count)

    def depleted_slots(self, character: CharacterStore) -> list[DepletedSlot]:
        return self.spell_slots.get_depleted_slots(character)

    # =========================================================================
    # Actions
    # =========================================================================

    async def spend(self, character: CharacterStore, dice_count: int) -> HealingResult:
        return await self.healing.roll_and_heal(character, dice_count)

    async def restore_slot(self, character: CharacterStore, entry_id: str, level: int) -> SlotRestoreResult:
        return await self.spell_slots.restore_slot(character, entry_id, level)

    async def rest(self, character: CharacterStore, tier: RestTier | str) -> RestResult:
        return await self.rests.perform(character, tier)

    async def replenish(self, character: CharacterStore, *, is_gm: bool) -> ReplenishResult | None:
        """Manually refill a character's pool.

        Returns None, after warning, when the caller is not allowed to.
        """
        if self.settings.require_gm_for_replenish and not is_gm:
            self.notifier.warn(MSG_REPLENISH_GM_ONLY)
            return None
        result = await self.pool.replenish(character)
        self.notifier.info(
            MSG_REPLENISHED.format(
                name=character.data.name,
                replenished=result.replenished,
                total=result.total,
            )
        )
        return result

    async def on_host_rest(self, character: CharacterStore) -> ReplenishResult | None:
        """Handler for the host's own rest-for-the-night hook.

        The host rest restores everything except the Hit Dice pool. NPCs
        have no pool and are ignored.
        """
        if not character.data.is_player_character:
            logger.debug("Ignoring host rest for non-player actor", actor=character.data.name)
            return None
        result = await self.pool.replenish(character)
        if result.replenished > 0:
            self.notifier.info(f"{character.data.name}: {result.replenished} Hit Dice regained!")
        return result


def setup(
    settings: Settings | None = None,
    *,
    roll_engine: RollEngine | None = None,
    notifier: Notifier | None = None,
    full_rest: FullRestProcedure | None = None,
    on_short_rest: ShortRestHandler | None = None,
) -> HitDiceHealing:
    """Configure logging and build the facade.

    Args:
        settings: Application settings. Defaults to get_settings().
        roll_engine: Formula evaluator. Defaults to D20RollEngine.
        notifier: Notification channel. Defaults to a NotificationLog.
        full_rest: Host complete-rest procedure, if available.
        on_short_rest: Presentation hook run on a Short Rest.
    """
    settings = settings or get_settings()
    configure_logging(
        level=settings.log_level,
        json_format=settings.json_logs,
        app_name=settings.app_name,
    )
    logger.info("Hit Dice Healing ready", version=settings.app_version)
    return HitDiceHealing(
        settings=settings,
        roll_engine=roll_engine,
        notifier=notifier,
        full_rest=full_rest,
        on_short_rest=on_short_rest,
    )


__all__ = [
    "HitDiceHealing",
    "setup",
]
