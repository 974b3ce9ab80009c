"""Unit tests for CollectionView strict semantics."""

import numpy as np
import pytest

from expando import (
    CapacityError,
    CollectionView,
    DuplicateKeyError,
    KeyNotFoundError,
    PropertyStore,
)


@pytest.mark.unit
@pytest.mark.collection
def test_index_get_missing_raises_key_not_found(view):
    """index_get on an absent name raises KeyNotFoundError"""
    with pytest.raises(KeyNotFoundError):
        view.index_get("missing")

    with pytest.raises(KeyError):
        view["missing"]


@pytest.mark.unit
@pytest.mark.collection
def test_index_set_creates_and_overwrites(view):
    """index_set never fails and overwrites existing values"""
    view.index_set("a", 1)
    view["a"] = 2

    assert view.index_get("a") == 2
    assert view.count() == 1


@pytest.mark.unit
@pytest.mark.collection
def test_add_existing_raises_duplicate_key(view):
    """add refuses to overwrite"""
    view.add("a", 1)

    with pytest.raises(DuplicateKeyError):
        view.add("a", 2)
    assert view["a"] == 1


@pytest.mark.unit
@pytest.mark.collection
def test_contains_pair_compares_value(view):
    """contains_pair requires both the key and an equal value"""
    view["a"] = [1, 2]

    assert view.contains_pair("a", [1, 2])
    assert not view.contains_pair("a", [2, 1])
    assert not view.contains_pair("b", [1, 2])


@pytest.mark.unit
@pytest.mark.collection
def test_contains_pair_with_numpy_array(view):
    """Arrays compare element-wise"""
    view["weights"] = np.array([0.5, 1.5])

    assert view.contains_pair("weights", np.array([0.5, 1.5]))
    assert not view.contains_pair("weights", np.array([0.5, 2.0]))
    assert not view.contains_pair("weights", np.array([0.5]))


@pytest.mark.unit
@pytest.mark.collection
def test_copy_into_writes_pairs_at_offset(view):
    """copy_into writes (name, value) tuples from offset onwards"""
    view["a"] = 1
    view["b"] = 2
    buffer = [None] * 4

    view.copy_into(buffer, 1)

    assert buffer == [None, ("a", 1), ("b", 2), None]


@pytest.mark.unit
@pytest.mark.collection
def test_copy_into_insufficient_capacity(view):
    """copy_into raises CapacityError when the buffer is too small"""
    view["a"] = 1
    view["b"] = 2
    buffer = [None] * 2

    with pytest.raises(CapacityError) as excinfo:
        view.copy_into(buffer, 1)

    assert excinfo.value.required == 2
    assert excinfo.value.available == 1
    assert buffer == [None, None]


@pytest.mark.unit
@pytest.mark.collection
def test_copy_into_negative_offset(view):
    """A negative offset is rejected"""
    with pytest.raises(ValueError):
        view.copy_into([None], -1)


@pytest.mark.unit
@pytest.mark.collection
def test_copy_into_empty_view_accepts_offset_at_end(view):
    """An empty view fits in any buffer"""
    buffer = [None]

    view.copy_into(buffer, 1)

    assert buffer == [None]


@pytest.mark.unit
@pytest.mark.collection
def test_remove_and_delitem(view):
    """remove returns a flag, del raises on absence"""
    view["a"] = 1
    view["b"] = 2

    assert view.remove("a") is True
    assert view.remove("a") is False
    del view["b"]
    with pytest.raises(KeyNotFoundError):
        del view["b"]


@pytest.mark.unit
@pytest.mark.collection
def test_remove_pair_only_on_match(view):
    """remove_pair removes only when the value matches"""
    view["a"] = 1

    assert view.remove_pair("a", 2) is False
    assert "a" in view
    assert view.remove_pair("a", 1) is True
    assert "a" not in view


@pytest.mark.unit
@pytest.mark.collection
def test_bulk_enumeration(view):
    """keys, values, enumerate and iteration follow insertion order"""
    view["x"] = 1
    view["y"] = 2

    assert view.keys() == ["x", "y"]
    assert view.values() == [1, 2]
    assert view.enumerate() == [("x", 1), ("y", 2)]
    assert list(view) == ["x", "y"]
    assert len(view) == 2


@pytest.mark.unit
@pytest.mark.collection
def test_try_get_value_is_soft():
    """try_get_value never raises"""
    view = CollectionView(PropertyStore())

    assert view.try_get_value("missing") == (None, False)
    assert view.is_read_only is False


@pytest.mark.unit
@pytest.mark.collection
def test_clear(view):
    view["a"] = 1

    view.clear()

    assert view.count() == 0
