"""Host runtime boundary: collaborator protocols and in-memory implementations."""

from __future__ import annotations

from hit_dice_healing.host.memory import (
    InMemoryCharacterStore,
    NotificationLog,
    assign_path,
)
from hit_dice_healing.host.protocols import (
    CharacterStore,
    ChatMessage,
    FullRestProcedure,
    Notifier,
    RollEngine,
    ShortRestHandler,
)


__all__ = [
    # Protocols
    "CharacterStore",
    "ChatMessage",
    "FullRestProcedure",
    "Notifier",
    "RollEngine",
    "ShortRestHandler",
    # In-memory
    "InMemoryCharacterStore",
    "NotificationLog",
    "assign_path",
]
