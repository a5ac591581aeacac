"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        HitDiceHealingError: Base exception for all application errors.
        RestValidationError: Rejected spend/restore requests.
        PersistenceError: Character store write failures.

    Configuration:
        Settings: Application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from hit_dice_healing.core.config import (
    Settings,
    clear_settings_cache,
    get_settings,
)
from hit_dice_healing.core.exceptions import (
    BelowMinimumDiceCountError,
    ConfigurationError,
    DiceRollError,
    EntryNotFoundError,
    HitDiceHealingError,
    InsufficientDiceError,
    PersistenceError,
    RestValidationError,
    SlotFullError,
)
from hit_dice_healing.core.logging import (
    bind_context,
    bound_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "HitDiceHealingError",
    "RestValidationError",
    "InsufficientDiceError",
    "BelowMinimumDiceCountError",
    "EntryNotFoundError",
    "SlotFullError",
    "PersistenceError",
    "DiceRollError",
    "ConfigurationError",
    # Configuration
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    "bound_context",
]
