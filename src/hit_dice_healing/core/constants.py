"""Rules constants and user-facing message templates.

The class to die-size table is fixed by the ruleset and is
not part of the runtime settings.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final


# =============================================================================
# Hit Dice Rules
# =============================================================================

CLASS_DIE_TYPES: Final[Mapping[str, int]] = MappingProxyType(
    {
        # d6
        "psychic": 6,
        "sorcerer": 6,
        "witch": 6,
        "wizard": 6,
        # d8
        "alchemist": 8,
        "animist": 8,
        "bard": 8,
        "cleric": 8,
        "commander": 8,
        "druid": 8,
        "gunslinger": 8,
        "investigator": 8,
        "inventor": 8,
        "kineticist": 8,
        "oracle": 8,
        "rogue": 8,
        "runesmith": 8,
        "thaumaturge": 8,
        # d10
        "champion": 10,
        "exemplar": 10,
        "fighter": 10,
        "guardian": 10,
        "magus": 10,
        "monk": 10,
        "ranger": 10,
        "summoner": 10,
        "swashbuckler": 10,
        # d12
        "barbarian": 12,
    }
)
"""Hit die size by lowercased class name."""

DEFAULT_DIE_TYPE: Final = 8
"""Die size used when the class is missing from CLASS_DIE_TYPES."""

MIN_DICE_PER_ROLL: Final = 1
"""A healing roll must spend at least one die."""

# =============================================================================
# Spell Slots
# =============================================================================

MIN_SLOT_LEVEL: Final = 1
MAX_SLOT_LEVEL: Final = 10
SLOT_LEVELS: Final = tuple(range(MIN_SLOT_LEVEL, MAX_SLOT_LEVEL + 1))

# =============================================================================
# Host Keys
# =============================================================================

HOST_NAMESPACE: Final = "pf2e"
"""Flag namespace owned by the host ruleset."""

DAILY_PREPARATION_KEY: Final = "dailyCraftingComplete"
"""Host flag marking that daily preparations were already made."""

# =============================================================================
# Condition Slugs
# =============================================================================

FATIGUED: Final = "fatigued"
DOOMED: Final = "doomed"
DRAINED: Final = "drained"
WOUNDED: Final = "wounded"

# =============================================================================
# Message Templates
# =============================================================================

MSG_NOT_ENOUGH_DICE: Final = "{name} does not have enough Hit Dice ({available} available, {required} needed)."
MSG_MINIMUM_ONE_DIE: Final = "You must spend at least one Hit Die."
MSG_NOT_ENOUGH_DICE_FOR_SLOT: Final = (
    "Restoring this spell slot costs {cost} Hit Dice, but only {current} are available."
)
MSG_ENTRY_NOT_FOUND: Final = "Spellcasting entry not found!"
MSG_SLOT_ALREADY_FULL: Final = "This spell slot is already full."

MSG_HIT_DICE_RESTORED: Final = "{count} Hit Dice restored"
MSG_HIT_DICE_ALREADY_FULL: Final = "Hit Dice already full"
MSG_FOCUS_RESTORED: Final = "Focus Points restored"
MSG_FOCUS_ALREADY_FULL: Final = "Focus Points already full"
MSG_CONDITION_REMOVED: Final = "{condition} removed"
MSG_CONDITION_REDUCED: Final = "{condition} reduced by 1"
MSG_WOUNDS_NOT_HEALED: Final = "Wounded remains: HP must be at maximum to recover"
MSG_REAGENTS_RESTORED: Final = "Infused reagents restored"
MSG_TEMPORARY_ITEMS_EXPIRED: Final = "Temporary items expired"
MSG_DAILY_RESOURCES_RESET: Final = "Daily resources reset"
MSG_HP_UNCHANGED: Final = "HP unchanged (Long Rest does not restore HP)"
MSG_SPELL_SLOTS_UNCHANGED: Final = "Spell slots unchanged (Long Rest does not restore spell slots)"

MSG_LONG_REST_COMPLETE: Final = "Long Rest Complete"
MSG_AWAKENS: Final = "{name} awakens after eight hours of rest."
MSG_SHORT_REST_AVAILABLE: Final = "{name} takes a short rest: {current}/{max} Hit Dice available to spend."
MSG_SHORT_REST_SLOTS: Final = "{count} depleted spell slot(s) can be restored with Hit Dice."

MSG_REPLENISH_GM_ONLY: Final = "Only the GM can replenish Hit Dice manually."
MSG_REPLENISHED: Final = "{name}: {replenished} Hit Dice replenished ({total}/{total})"
