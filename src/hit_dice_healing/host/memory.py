"""In-memory host implementations.

InMemoryCharacterStore applies writes directly to a Character model and
NotificationLog records what would have been shown to the user. Both are
used by the test suite and are a reference for host adapters.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from hit_dice_healing.core.exceptions import PersistenceError
from hit_dice_healing.core.logging import get_logger
from hit_dice_healing.host.protocols import ChatMessage
from hit_dice_healing.models.character import Character, ConditionState, Item


logger = get_logger(__name__)


# =============================================================================
# Dotted Path Helpers
# =============================================================================


def _resolve_key(mapping: dict[Any, Any], part: str) -> Any:
    if part in mapping:
        return part
    if part.isdigit() and int(part) in mapping:
        return int(part)
    return part


def _step(node: Any, part: str) -> Any:
    if isinstance(node, dict):
        return node[_resolve_key(node, part)]
    if isinstance(node, BaseModel) and part in type(node).model_fields:
        child = getattr(node, part)
        if child is None:
            raise KeyError(part)
        return child
    raise KeyError(part)


def assign_path(target: BaseModel, path: str, value: Any) -> None:
    """Assign ``value`` at a dotted path such as ``hp.value``.

    Raises:
        KeyError: If an intermediate segment does not exist.
        ValueError: If the model rejects the value.
    """
    *parents, leaf = path.split(".")
    node: Any = target
    for part in parents:
        node = _step(node, part)
    if isinstance(node, dict):
        node[_resolve_key(node, leaf)] = value
    elif isinstance(node, BaseModel) and leaf in type(node).model_fields:
        setattr(node, leaf, value)
    else:
        raise KeyError(leaf)


# =============================================================================
# Character Store
# =============================================================================


class InMemoryCharacterStore:
    """CharacterStore backed by a Character instance.

    Attributes:
        render_count: Redraws the host would have performed. Every write
            without ``suppress_refresh`` and every explicit refresh counts.
        batches: Field maps passed to update_fields, in call order.
    """

    def __init__(self, character: Character) -> None:
        self._character = character
        self.render_count = 0
        self.batches: list[dict[str, Any]] = []

    @property
    def data(self) -> Character:
        return self._character

    def get_value(self, namespace: str, key: str) -> Any | None:
        return self._character.flags.get(namespace, {}).get(key)

    async def set_value(self, namespace: str, key: str, value: Any) -> None:
        self._character.flags.setdefault(namespace, {})[key] = value
        self._signal(suppress_refresh=False)

    async def update_fields(
        self,
        updates: Mapping[str, Any],
        *,
        suppress_refresh: bool = False,
    ) -> None:
        self.batches.append(dict(updates))
        for path, value in updates.items():
            self._assign(self._character, path, value)
        self._signal(suppress_refresh=suppress_refresh)

    async def update_item(
        self,
        item_id: str,
        updates: Mapping[str, Any],
        *,
        suppress_refresh: bool = False,
    ) -> None:
        item = self._require_item(item_id)
        for path, value in updates.items():
            self._assign(item, path, value, prefix=f"items.{item_id}")
        self._signal(suppress_refresh=suppress_refresh)

    async def delete_items(
        self,
        item_ids: Iterable[str],
        *,
        suppress_refresh: bool = False,
    ) -> None:
        doomed_ids = set(item_ids)
        for item_id in doomed_ids:
            self._require_item(item_id)
        self._character.items = [i for i in self._character.items if i.id not in doomed_ids]
        self._signal(suppress_refresh=suppress_refresh)

    async def decrease_condition(self, slug: str, *, force_remove: bool = False) -> None:
        condition = self._character.get_condition(slug)
        if condition is None:
            return
        if force_remove or condition.value is None or condition.value <= 1:
            self._character.conditions = [c for c in self._character.conditions if c.slug != slug]
        else:
            condition.value -= 1
        self._signal(suppress_refresh=False)

    async def refresh(self) -> None:
        self.render_count += 1

    def add_condition(self, slug: str, value: int | None = None) -> None:
        """Test/host convenience: add or overwrite a condition synchronously."""
        self._character.conditions = [c for c in self._character.conditions if c.slug != slug]
        self._character.conditions.append(ConditionState(slug=slug, value=value))

    def _require_item(self, item_id: str) -> Item:
        item = self._character.get_item(item_id)
        if item is None:
            raise PersistenceError("Item does not exist on character", path=f"items.{item_id}")
        return item

    @staticmethod
    def _assign(target: BaseModel, path: str, value: Any, *, prefix: str | None = None) -> None:
        full_path = f"{prefix}.{path}" if prefix else path
        try:
            assign_path(target, path, value)
        except (KeyError, ValueError) as exc:
            raise PersistenceError(f"Cannot write field: {exc}", path=full_path) from exc

    def _signal(self, *, suppress_refresh: bool) -> None:
        if not suppress_refresh:
            self.render_count += 1


# =============================================================================
# Notifications
# =============================================================================


@dataclass
class NotificationLog:
    """Notifier that logs and keeps everything it was asked to show."""

    warnings: list[str] = field(default_factory=list)
    infos: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    messages: list[ChatMessage] = field(default_factory=list)

    def warn(self, text: str) -> None:
        logger.warning("Notification", text=text)
        self.warnings.append(text)

    def info(self, text: str) -> None:
        logger.info("Notification", text=text)
        self.infos.append(text)

    def error(self, text: str) -> None:
        logger.error("Notification", text=text)
        self.errors.append(text)

    async def post_message(self, message: ChatMessage) -> None:
        logger.info("Chat message", speaker=message.speaker, has_roll=message.roll is not None)
        self.messages.append(message)


__all__ = [
    "assign_path",
    "InMemoryCharacterStore",
    "NotificationLog",
]
