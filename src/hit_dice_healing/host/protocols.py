"""Interfaces of the host runtime collaborators.

The engines never talk to the host directly; they depend on these
protocols. A host adapter implements them on top of its own documents,
and ``hit_dice_healing.host.memory`` ships an in-memory implementation.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable


if TYPE_CHECKING:
    from hit_dice_healing.engine.dice import RollOutcome
    from hit_dice_healing.models.character import Character


@runtime_checkable
class CharacterStore(Protocol):
    """Read/write access to one character document.

    Reads are synchronous against the current snapshot. Writes are
    awaited and raise PersistenceError when the host rejects them.
    """

    @property
    def data(self) -> Character:
        """Typed snapshot of the character."""
        ...

    def get_value(self, namespace: str, key: str) -> Any | None:
        """Read a namespaced flag, None when unset."""
        ...

    async def set_value(self, namespace: str, key: str, value: Any) -> None:
        """Write a namespaced flag."""
        ...

    async def update_fields(
        self,
        updates: Mapping[str, Any],
        *,
        suppress_refresh: bool = False,
    ) -> None:
        """Write several dotted field paths in one call."""
        ...

    async def update_item(
        self,
        item_id: str,
        updates: Mapping[str, Any],
        *,
        suppress_refresh: bool = False,
    ) -> None:
        """Write dotted field paths on one embedded item."""
        ...

    async def delete_items(
        self,
        item_ids: Iterable[str],
        *,
        suppress_refresh: bool = False,
    ) -> None:
        """Delete embedded items by id."""
        ...

    async def decrease_condition(self, slug: str, *, force_remove: bool = False) -> None:
        """Lower a condition's value by one, or remove it entirely."""
        ...

    async def refresh(self) -> None:
        """Ask the presentation layer to redraw the character."""
        ...


@runtime_checkable
class RollEngine(Protocol):
    """Evaluates dice formulas such as ``3d8+6``."""

    async def evaluate(self, formula: str) -> RollOutcome:
        ...


@dataclass(frozen=True)
class ChatMessage:
    """A message posted to the game log.

    Attributes:
        content: Plain-text body.
        speaker: Name of the speaking character.
        roll: Roll attached to the message, if any.
    """

    content: str
    speaker: str
    roll: RollOutcome | None = None


@runtime_checkable
class Notifier(Protocol):
    """Toast notifications and the chat log."""

    def warn(self, text: str) -> None:
        ...

    def info(self, text: str) -> None:
        ...

    def error(self, text: str) -> None:
        ...

    async def post_message(self, message: ChatMessage) -> None:
        ...


class FullRestProcedure(Protocol):
    """The host ruleset's own complete-rest routine."""

    def __call__(self, *, character: CharacterStore, skip_confirmation: bool) -> Awaitable[None]:
        ...


ShortRestHandler = Callable[[CharacterStore], Awaitable[None]]
"""Presentation hook that opens the Hit Dice spending dialog."""


__all__ = [
    "CharacterStore",
    "RollEngine",
    "ChatMessage",
    "Notifier",
    "FullRestProcedure",
    "ShortRestHandler",
]
