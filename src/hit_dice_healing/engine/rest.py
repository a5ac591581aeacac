"""Three-tier rest orchestration.

Short Rest (10 minutes)
    No automatic recovery. The character may spend Hit Dice on healing
    or on spell slots through HealingEngine and SpellSlotRecovery.

Long Rest (8 hours)
    Restores Hit Dice and Focus Points, decays conditions and refreshes
    daily resources. Does NOT restore HP or spell slots.

Full Rest (24 hours)
    Runs the host ruleset's complete rest (HP, slots, conditions) and
    then refills the Hit Dice pool, which the host knows nothing about.

Each call runs one tier to completion. A PersistenceError stops the
sequence where it happened; earlier steps stay applied.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any, assert_never

from hit_dice_healing.core.constants import (
    DAILY_PREPARATION_KEY,
    DOOMED,
    DRAINED,
    FATIGUED,
    HOST_NAMESPACE,
    MSG_AWAKENS,
    MSG_CONDITION_REDUCED,
    MSG_CONDITION_REMOVED,
    MSG_DAILY_RESOURCES_RESET,
    MSG_FOCUS_ALREADY_FULL,
    MSG_FOCUS_RESTORED,
    MSG_HIT_DICE_ALREADY_FULL,
    MSG_HIT_DICE_RESTORED,
    MSG_HP_UNCHANGED,
    MSG_LONG_REST_COMPLETE,
    MSG_REAGENTS_RESTORED,
    MSG_SHORT_REST_AVAILABLE,
    MSG_SHORT_REST_SLOTS,
    MSG_SPELL_SLOTS_UNCHANGED,
    MSG_TEMPORARY_ITEMS_EXPIRED,
    MSG_WOUNDS_NOT_HEALED,
    WOUNDED,
)
from hit_dice_healing.core.logging import bound_context, get_logger
from hit_dice_healing.host.protocols import ChatMessage
from hit_dice_healing.models.enums import FrequencyPeriod


if TYPE_CHECKING:
    from hit_dice_healing.engine.hit_dice import HitDicePool
    from hit_dice_healing.engine.spell_slots import SpellSlotRecovery
    from hit_dice_healing.host.protocols import (
        CharacterStore,
        FullRestProcedure,
        Notifier,
        ShortRestHandler,
    )


logger = get_logger(__name__)


class RestTier(StrEnum):
    """The three rest tiers."""

    SHORT = "short"
    LONG = "long"
    FULL = "full"


@dataclass
class RestResult:
    """Summary of one rest.

    Attributes:
        tier: The tier that was performed.
        messages: Ordered, human-readable status lines.
        hit_dice_replenished: Dice added to the pool.
        hit_dice_total: Pool maximum at the end of the rest.
        conditions_removed: Slugs of conditions removed.
        conditions_reduced: Slugs of conditions lowered by one.
        items_refreshed: Items whose frequency charges were reset.
        items_deleted: Temporary items deleted.
        full_rest_delegated: True when the host full-rest procedure ran.
    """

    tier: RestTier
    messages: list[str] = field(default_factory=list)
    hit_dice_replenished: int = 0
    hit_dice_total: int = 0
    conditions_removed: list[str] = field(default_factory=list)
    conditions_reduced: list[str] = field(default_factory=list)
    items_refreshed: int = 0
    items_deleted: int = 0
    full_rest_delegated: bool = False


class RestController:
    """Runs a rest tier against one character.

    Args:
        pool: Hit Dice pool adapter.
        spell_slots: Used to report restorable slots on a Short Rest.
        notifier: Receives the rest summary and notices.
        full_rest: Host complete-rest procedure, if the host has one.
        on_short_rest: Presentation hook that opens the spending dialog.
    """

    def __init__(
        self,
        pool: HitDicePool,
        spell_slots: SpellSlotRecovery,
        notifier: Notifier,
        *,
        full_rest: FullRestProcedure | None = None,
        on_short_rest: ShortRestHandler | None = None,
    ) -> None:
        self._pool = pool
        self._spell_slots = spell_slots
        self._notifier = notifier
        self._full_rest = full_rest
        self._on_short_rest = on_short_rest

    async def perform(self, character: CharacterStore, tier: RestTier | str) -> RestResult:
        """Perform a rest of the given tier.

        Raises:
            ValueError: If ``tier`` is not a known rest tier.
            PersistenceError: If the store rejects a write mid-sequence.
        """
        tier = RestTier(tier)
        with bound_context(character=character.data.name, rest=tier.value):
            logger.info("Rest started")
            match tier:
                case RestTier.SHORT:
                    return await self.short_rest(character)
                case RestTier.LONG:
                    return await self.long_rest(character)
                case RestTier.FULL:
                    return await self.full_rest(character)
                case _:
                    assert_never(tier)

    # =========================================================================
    # Short Rest
    # =========================================================================

    async def short_rest(self, character: CharacterStore) -> RestResult:
        """Make Hit Dice spending available; nothing is changed here."""
        info = self._pool.get_info(character)
        result = RestResult(tier=RestTier.SHORT, hit_dice_total=info.max)
        result.messages.append(
            MSG_SHORT_REST_AVAILABLE.format(name=character.data.name, current=info.current, max=info.max)
        )
        depleted = self._spell_slots.get_depleted_slots(character)
        if depleted:
            result.messages.append(MSG_SHORT_REST_SLOTS.format(count=len(depleted)))

        if self._on_short_rest is not None:
            await self._on_short_rest(character)
        return result

    # =========================================================================
    # Long Rest
    # =========================================================================

    async def long_rest(self, character: CharacterStore) -> RestResult:
        """Long Rest: dice, focus, conditions, daily resources. Never HP or slots."""
        result = RestResult(tier=RestTier.LONG)
        updates: dict[str, Any] = {}

        # 1. Hit Dice
        replenish = await self._pool.replenish(character)
        result.hit_dice_replenished = replenish.replenished
        result.hit_dice_total = replenish.total
        if replenish.replenished > 0:
            result.messages.append(MSG_HIT_DICE_RESTORED.format(count=replenish.replenished))
        else:
            result.messages.append(MSG_HIT_DICE_ALREADY_FULL)

        # 2. Focus Points
        focus = character.data.focus
        if focus is not None and focus.max > 0:
            if not focus.is_full:
                updates["focus.value"] = focus.max
                result.messages.append(MSG_FOCUS_RESTORED)
            else:
                result.messages.append(MSG_FOCUS_ALREADY_FULL)

        # 3. Conditions
        await self._decay_conditions(character, result)

        # 4. Daily resources
        await self._refresh_daily_resources(character, result, updates)

        # 5. HP and spell slots are left alone
        result.messages.append(MSG_HP_UNCHANGED)
        result.messages.append(MSG_SPELL_SLOTS_UNCHANGED)

        # 6. One batched write, one summary, one redraw
        if updates:
            await character.update_fields(updates, suppress_refresh=True)

        await self._notifier.post_message(
            ChatMessage(
                content=self._format_summary(character, result),
                speaker=character.data.name,
            )
        )
        await character.refresh()

        logger.info(
            "Long rest complete",
            replenished=result.hit_dice_replenished,
            removed=result.conditions_removed,
            reduced=result.conditions_reduced,
            items_refreshed=result.items_refreshed,
            items_deleted=result.items_deleted,
        )
        return result

    async def _decay_conditions(self, character: CharacterStore, result: RestResult) -> None:
        data = character.data

        if data.has_condition(FATIGUED):
            await character.decrease_condition(FATIGUED, force_remove=True)
            self._record_removed(result, FATIGUED)

        for slug in (DOOMED, DRAINED):
            condition = data.get_condition(slug)
            if condition is None:
                continue
            if condition.value is None or condition.value <= 1:
                await character.decrease_condition(slug, force_remove=True)
                self._record_removed(result, slug)
            else:
                await character.decrease_condition(slug)
                result.conditions_reduced.append(slug)
                result.messages.append(MSG_CONDITION_REDUCED.format(condition=slug.title()))

        if data.has_condition(WOUNDED):
            hp = character.data.hp
            if hp.missing == 0:
                await character.decrease_condition(WOUNDED, force_remove=True)
                self._record_removed(result, WOUNDED)
            else:
                result.messages.append(MSG_WOUNDS_NOT_HEALED)

    @staticmethod
    def _record_removed(result: RestResult, slug: str) -> None:
        result.conditions_removed.append(slug)
        result.messages.append(MSG_CONDITION_REMOVED.format(condition=slug.title()))

    async def _refresh_daily_resources(
        self,
        character: CharacterStore,
        result: RestResult,
        updates: dict[str, Any],
    ) -> None:
        data = character.data

        # Wand overcharge tracking
        for wand in [item for item in data.items if item.is_wand and item.frequency is not None]:
            await character.update_item(
                wand.id,
                {"frequency.value": wand.frequency.max},
                suppress_refresh=True,
            )
            result.items_refreshed += 1

        reagents = data.infused_reagents
        if reagents is not None and not reagents.is_full:
            updates["infused_reagents.value"] = reagents.max
            result.messages.append(MSG_REAGENTS_RESTORED)

        if character.get_value(HOST_NAMESPACE, DAILY_PREPARATION_KEY):
            await character.set_value(HOST_NAMESPACE, DAILY_PREPARATION_KEY, False)

        for item in list(data.items):
            frequency = item.frequency
            if frequency is None or frequency.per != FrequencyPeriod.DAY:
                continue
            if frequency.value < frequency.max:
                await character.update_item(
                    item.id,
                    {"frequency.value": frequency.max},
                    suppress_refresh=True,
                )
                result.items_refreshed += 1

        temporary_ids = [item.id for item in data.items if item.temporary]
        if temporary_ids:
            await character.delete_items(temporary_ids, suppress_refresh=True)
            result.items_deleted = len(temporary_ids)
            result.messages.append(MSG_TEMPORARY_ITEMS_EXPIRED)

        if result.items_refreshed:
            result.messages.append(MSG_DAILY_RESOURCES_RESET)

    @staticmethod
    def _format_summary(character: CharacterStore, result: RestResult) -> str:
        lines = [MSG_LONG_REST_COMPLETE, MSG_AWAKENS.format(name=character.data.name)]
        lines.extend(f"- {message}" for message in result.messages)
        return "\n".join(lines)

    # =========================================================================
    # Full Rest
    # =========================================================================

    async def full_rest(self, character: CharacterStore) -> RestResult:
        """Full Rest: host complete rest, then the Hit Dice pool."""
        result = RestResult(tier=RestTier.FULL)

        if self._full_rest is not None:
            await self._full_rest(character=character, skip_confirmation=True)
            result.full_rest_delegated = True
        else:
            logger.debug("Host full rest unavailable, restoring Hit Dice only")

        replenish = await self._pool.replenish(character)
        result.hit_dice_replenished = replenish.replenished
        result.hit_dice_total = replenish.total

        if replenish.replenished > 0:
            message = MSG_HIT_DICE_RESTORED.format(count=replenish.replenished)
            result.messages.append(message)
            self._notifier.info(f"{character.data.name}: {message}")
        return result


__all__ = [
    "RestTier",
    "RestResult",
    "RestController",
]
