"""Configuration management for Hit Dice Healing.

Settings are loaded with pydantic-settings from environment variables
and an optional ``.env`` file.

Example:
    >>> from hit_dice_healing.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.flag_namespace)
    'hit-dice-healing'

Environment Variables:
    HIT_DICE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    HIT_DICE_JSON_LOGS: Emit JSON log lines instead of console output
    HIT_DICE_FLAG_NAMESPACE: Character flag namespace for the pool counter
    HIT_DICE_FLAG_KEY: Character flag key for the pool counter
    HIT_DICE_REQUIRE_GM_FOR_REPLENISH: Restrict manual replenishment to GMs
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hit_dice_healing.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Main application settings.

    Attributes:
        app_name: Application name, attached to every log entry.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Render logs as JSON lines.
        flag_namespace: Namespace of the character flag holding the pool counter.
        flag_key: Key of the character flag holding the pool counter.
        require_gm_for_replenish: Only GMs may replenish Hit Dice outside of a rest.
    """

    model_config = SettingsConfigDict(
        env_prefix="HIT_DICE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(
        default="hit_dice_healing",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON",
    )
    flag_namespace: str = Field(
        default="hit-dice-healing",
        description="Character flag namespace for the Hit Dice counter",
    )
    flag_key: str = Field(
        default="current",
        description="Character flag key for the Hit Dice counter",
    )
    require_gm_for_replenish: bool = Field(
        default=True,
        description="Restrict manual replenishment to the GM",
    )

    @field_validator("flag_namespace", "flag_key", mode="after")
    @classmethod
    def ensure_not_blank(cls, value: str) -> str:
        """Reject empty flag identifiers.

        Raises:
            ConfigurationError: If the value is blank.
        """
        if not value.strip():
            raise ConfigurationError(
                "Flag namespace and key must not be blank",
                config_key="flag_namespace/flag_key",
            )
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    Example:
        >>> clear_settings_cache()
        >>> settings = get_settings()  # Reloads from environment
    """
    get_settings.cache_clear()


__all__ = [
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
