"""Tests for the in-memory host implementations."""

from __future__ import annotations

import pytest

from hit_dice_healing.core.exceptions import PersistenceError
from hit_dice_healing.host import CharacterStore, ChatMessage
from hit_dice_healing.host.memory import InMemoryCharacterStore, NotificationLog, assign_path
from hit_dice_healing.models import Character, Frequency, HitPoints, Item, Spellcasting, SpellSlot


@pytest.fixture
def character() -> Character:
    return Character(
        name="Amiri",
        level=2,
        hp=HitPoints(value=10, max=30),
        items=[
            Item(id="sword", name="Bastard Sword", frequency=Frequency(value=0, max=1)),
            Item(
                id="entry",
                name="Occult Spells",
                spellcasting=Spellcasting(slots={1: SpellSlot(value=0, max=2)}),
            ),
        ],
    )


@pytest.fixture
def store(character: Character) -> InMemoryCharacterStore:
    return InMemoryCharacterStore(character)


class TestAssignPath:
    """Tests for dotted path assignment."""

    def test_model_field(self, character: Character) -> None:
        """Test a nested model field."""
        assign_path(character, "hp.value", 25)

        assert character.hp.value == 25

    def test_integer_dict_key(self, character: Character) -> None:
        """Test numeric segments resolve to integer keys."""
        entry = character.get_item("entry")

        assign_path(entry, "spellcasting.slots.1.value", 2)

        assert entry.spellcasting.slots[1].value == 2

    def test_missing_segment(self, character: Character) -> None:
        """Test unknown segments raise KeyError."""
        with pytest.raises(KeyError):
            assign_path(character, "hp.temporary", 5)

    def test_unset_parent(self, character: Character) -> None:
        """Test writing below an unset optional component raises KeyError."""
        with pytest.raises(KeyError):
            assign_path(character, "focus.value", 1)

    def test_invalid_value(self, character: Character) -> None:
        """Test model validation errors surface as ValueError."""
        with pytest.raises(ValueError):
            assign_path(character, "hp.value", -3)


class TestInMemoryCharacterStore:
    """Tests for InMemoryCharacterStore."""

    def test_satisfies_protocol(self, store: InMemoryCharacterStore) -> None:
        """Test the store implements CharacterStore."""
        assert isinstance(store, CharacterStore)

    async def test_flags(self, store: InMemoryCharacterStore) -> None:
        """Test namespaced flags round through set and get."""
        assert store.get_value("hit-dice-healing", "current") is None

        await store.set_value("hit-dice-healing", "current", 2)

        assert store.get_value("hit-dice-healing", "current") == 2
        assert store.render_count == 1

    async def test_update_fields_batches(self, store: InMemoryCharacterStore) -> None:
        """Test a batch is recorded and suppressed refreshes do not render."""
        await store.update_fields({"hp.value": 30, "level": 3}, suppress_refresh=True)

        assert store.data.hp.value == 30
        assert store.data.level == 3
        assert store.batches == [{"hp.value": 30, "level": 3}]
        assert store.render_count == 0

    async def test_update_fields_rejected(self, store: InMemoryCharacterStore) -> None:
        """Test invalid writes become PersistenceError with the path."""
        with pytest.raises(PersistenceError) as exc_info:
            await store.update_fields({"hp.value": -1})

        assert exc_info.value.details["path"] == "hp.value"

    async def test_update_item(self, store: InMemoryCharacterStore) -> None:
        """Test item writes land on the embedded item."""
        await store.update_item("sword", {"frequency.value": 1})

        assert store.data.get_item("sword").frequency.value == 1
        assert store.render_count == 1

    async def test_update_missing_item(self, store: InMemoryCharacterStore) -> None:
        """Test writing to a missing item fails."""
        with pytest.raises(PersistenceError) as exc_info:
            await store.update_item("axe", {"frequency.value": 1})

        assert exc_info.value.details["path"] == "items.axe"

    async def test_delete_items_all_or_nothing(self, store: InMemoryCharacterStore) -> None:
        """Test one unknown id prevents any deletion."""
        with pytest.raises(PersistenceError):
            await store.delete_items(["sword", "axe"])

        assert store.data.get_item("sword") is not None

        await store.delete_items(["sword"])

        assert store.data.get_item("sword") is None

    async def test_decrease_condition(self, store: InMemoryCharacterStore) -> None:
        """Test valued conditions step down and then disappear."""
        store.add_condition("drained", 2)

        await store.decrease_condition("drained")
        assert store.data.get_condition("drained").value == 1

        await store.decrease_condition("drained")
        assert not store.data.has_condition("drained")

    async def test_force_remove_condition(self, store: InMemoryCharacterStore) -> None:
        """Test force removal ignores the value."""
        store.add_condition("doomed", 3)

        await store.decrease_condition("doomed", force_remove=True)

        assert not store.data.has_condition("doomed")

    async def test_decrease_absent_condition(self, store: InMemoryCharacterStore) -> None:
        """Test decreasing an absent condition is a no-op."""
        await store.decrease_condition("fatigued")

        assert store.render_count == 0

    async def test_refresh(self, store: InMemoryCharacterStore) -> None:
        """Test an explicit refresh always renders."""
        await store.refresh()

        assert store.render_count == 1


class TestNotificationLog:
    """Tests for NotificationLog."""

    async def test_records_everything(self) -> None:
        """Test every channel is kept in order."""
        log = NotificationLog()

        log.warn("careful")
        log.info("done")
        log.error("broken")
        await log.post_message(ChatMessage(content="hello", speaker="Amiri"))

        assert log.warnings == ["careful"]
        assert log.infos == ["done"]
        assert log.errors == ["broken"]
        assert log.messages == [ChatMessage(content="hello", speaker="Amiri")]
