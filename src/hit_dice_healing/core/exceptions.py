"""Custom exception hierarchy for Hit Dice Healing.

All exceptions inherit from HitDiceHealingError so a host can catch the
whole family at its boundary while still getting domain-specific context
through the ``details`` mapping.

Validation errors are always raised *before* any mutation of the
character, so catching one guarantees the character is unchanged.

Example:
    >>> from hit_dice_healing.core.exceptions import InsufficientDiceError
    >>> raise InsufficientDiceError("Not enough Hit Dice", required=3, available=1)
"""

from __future__ import annotations

from typing import Any


class HitDiceHealingError(Exception):
    """Base exception for all Hit Dice Healing errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Validation Exceptions
# =============================================================================


class RestValidationError(HitDiceHealingError):
    """Base exception for rejected spend/restore requests.

    Raised before any state is touched. The engines also surface the
    message to the user as a warning before raising.
    """


class InsufficientDiceError(RestValidationError):
    """Raised when an operation costs more Hit Dice than are available."""

    def __init__(
        self,
        message: str,
        *,
        required: int | None = None,
        available: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the requested and available dice counts.

        Args:
            message: Human-readable error description.
            required: Hit Dice the operation would cost.
            available: Hit Dice currently in the pool.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if required is not None:
            combined_details["required"] = required
        if available is not None:
            combined_details["available"] = available
        super().__init__(message, details=combined_details)


class BelowMinimumDiceCountError(RestValidationError):
    """Raised when fewer than one Hit Die is requested."""

    def __init__(
        self,
        message: str,
        *,
        requested: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if requested is not None:
            combined_details["requested"] = requested
        super().__init__(message, details=combined_details)


class EntryNotFoundError(RestValidationError):
    """Raised when a spellcasting entry id does not resolve on the character."""

    def __init__(
        self,
        message: str,
        *,
        entry_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if entry_id:
            combined_details["entry_id"] = entry_id
        super().__init__(message, details=combined_details)


class SlotFullError(RestValidationError):
    """Raised when restoring a spell slot that is already at its maximum.

    Levels the entry does not have (max of zero) also count as full.
    """

    def __init__(
        self,
        message: str,
        *,
        entry_id: str | None = None,
        level: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if entry_id:
            combined_details["entry_id"] = entry_id
        if level is not None:
            combined_details["level"] = level
        super().__init__(message, details=combined_details)


# =============================================================================
# Host Interaction Exceptions
# =============================================================================


class PersistenceError(HitDiceHealingError):
    """Raised by a character store when a write cannot be applied.

    Propagates out of the current roll or rest sequence unchanged. Steps
    that were already applied are not rolled back.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize persistence error with the failing field path.

        Args:
            message: Human-readable error description.
            path: Dotted field path (or flag key) that failed to persist.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if path:
            combined_details["path"] = path
        super().__init__(message, details=combined_details)


class DiceRollError(HitDiceHealingError):
    """Raised when the roll engine cannot evaluate a formula."""

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if expression:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(HitDiceHealingError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


__all__ = [
    "HitDiceHealingError",
    # Validation
    "RestValidationError",
    "InsufficientDiceError",
    "BelowMinimumDiceCountError",
    "EntryNotFoundError",
    "SlotFullError",
    # Host interaction
    "PersistenceError",
    "DiceRollError",
    # Configuration
    "ConfigurationError",
]
