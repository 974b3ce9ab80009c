"""Unit tests for PropertyStore behavior."""

import pytest

from expando import ChangeType, PropertyStore, ValueKind


@pytest.mark.unit
@pytest.mark.store
def test_store_get_returns_value_and_found_after_set():
    """set(k, v) followed by get(k) yields (v, True)"""
    # Arrange
    store = PropertyStore()

    # Act
    store.set("name", "Alice")

    # Assert
    assert store.get("name") == ("Alice", True)


@pytest.mark.unit
@pytest.mark.store
def test_store_get_missing_key_reports_not_found():
    """get on an absent name never raises and reports found=False"""
    store = PropertyStore()

    assert store.get("missing") == (None, False)


@pytest.mark.unit
@pytest.mark.store
def test_store_set_overwrites_existing_value():
    """set on an existing name replaces the value without adding a key"""
    store = PropertyStore()
    store.set("count", 1)

    store.set("count", 2)

    assert store.get("count") == (2, True)
    assert store.count() == 1


@pytest.mark.unit
@pytest.mark.store
def test_store_set_recomputes_type_tag():
    """Each assignment re-derives the entry's type tag"""
    store = PropertyStore()
    store.set("x", 1)
    assert store.entry("x").value_type.python_type is int

    store.set("x", "one")

    assert store.entry("x").value_type.python_type is str
    assert store.entry("x").value_type.kind is ValueKind.STRING


@pytest.mark.unit
@pytest.mark.store
def test_store_remove_reports_whether_key_existed():
    """remove returns True iff the key was present"""
    store = PropertyStore()
    store.set("a", 1)

    assert store.remove("a") is True
    assert store.remove("a") is False
    assert store.get("a") == (None, False)
    assert not store.contains_key("a")


@pytest.mark.unit
@pytest.mark.store
def test_store_preserves_insertion_order():
    """entries(), names() and values() follow insertion order"""
    store = PropertyStore()
    store.set("b", 2)
    store.set("a", 1)
    store.set("c", 3)
    store.set("a", 10)

    assert store.names() == ["b", "a", "c"]
    assert store.values() == [2, 10, 3]
    assert store.entries() == [("b", 2), ("a", 10), ("c", 3)]


@pytest.mark.unit
@pytest.mark.store
def test_store_entries_is_a_snapshot():
    """entries() is not affected by later mutation"""
    store = PropertyStore()
    store.set("a", 1)

    snapshot = store.entries()
    store.set("b", 2)
    store.remove("a")

    assert snapshot == [("a", 1)]


@pytest.mark.unit
@pytest.mark.store
def test_store_clear_removes_everything():
    """clear empties the store"""
    store = PropertyStore()
    store.set("a", 1)
    store.set("b", 2)

    store.clear()

    assert store.count() == 0
    assert len(store) == 0
    assert list(store) == []


@pytest.mark.unit
@pytest.mark.store
def test_store_rejects_non_string_names():
    """Only str names are accepted"""
    store = PropertyStore()

    with pytest.raises(TypeError):
        store.set(1, "value")


@pytest.mark.unit
@pytest.mark.store
def test_store_publishes_add_then_update_events(store, notifier, recorder):
    """New names publish ADD, existing names publish UPDATE with old value"""
    notifier.subscribe(recorder)

    store.set("a", 1)
    store.set("a", 2)

    assert [e.change_type for e in recorder.events] == [
        ChangeType.ADD,
        ChangeType.UPDATE,
    ]
    assert recorder.events[1].old_value == 1
    assert recorder.events[1].new_value == 2


@pytest.mark.unit
@pytest.mark.store
def test_store_missing_remove_publishes_nothing(store, notifier, recorder):
    """Removing an absent name publishes no event"""
    notifier.subscribe(recorder)

    store.remove("ghost")

    assert recorder.events == []


@pytest.mark.unit
@pytest.mark.store
def test_store_clear_publishes_per_key_after_emptying(store, notifier):
    """clear notifies a then b, and handlers already see an empty store"""
    seen = []
    notifier.subscribe(lambda event: seen.append((event.name, store.count())))
    store.set("a", 1)
    store.set("b", 2)
    seen.clear()

    store.clear()

    assert seen == [("a", 0), ("b", 0)]


@pytest.mark.unit
@pytest.mark.store
def test_store_without_collaborators_reports_itself_as_sender():
    """A standalone store is the sender of its own events"""
    store = PropertyStore()

    assert store.sender is store


@pytest.mark.unit
@pytest.mark.store
@pytest.mark.parametrize("name", [["x"], {"x": 1}, 1, None])
def test_store_lookups_with_non_string_names_report_absent(name):
    """Soft lookups never raise, even for unhashable names"""
    store = PropertyStore()
    store.set("x", 1)

    assert store.get(name) == (None, False)
    assert store.entry(name) is None
    assert store.contains_key(name) is False
    assert (name in store) is False
    assert store.remove(name) is False
    assert store.count() == 1
