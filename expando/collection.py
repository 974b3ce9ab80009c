"""
Collection View
===============

Strict dictionary-style façade over a property store. Unlike the member
resolver, a missing name raises ``KeyNotFoundError`` and ``add`` refuses to
overwrite.

Usage:
    view = CollectionView(PropertyStore())
    view["a"] = 1          # create or update
    view.add("b", 2)       # DuplicateKeyError if "b" exists
    view["missing"]        # KeyNotFoundError
"""

from typing import Any, Iterator, List, MutableSequence, Tuple

from .exceptions import CapacityError, DuplicateKeyError, KeyNotFoundError
from .kv_store import PropertyStore
from .types import values_equal


class CollectionView:
    """Dictionary-style access with exception-based missing-key semantics."""

    is_read_only = False

    def __init__(self, store: PropertyStore):
        self._store = store

    def index_get(self, name: str) -> Any:
        """Get value for name, raises KeyNotFoundError if not found."""
        value, found = self._store.get(name)
        if not found:
            raise KeyNotFoundError(name)
        return value

    def index_set(self, name: str, value: Any) -> None:
        """Create or update ``name``."""
        self._store.set(name, value)

    def add(self, name: str, value: Any) -> None:
        """Create ``name``, raises DuplicateKeyError if it already exists."""
        if self._store.contains_key(name):
            raise DuplicateKeyError(name)
        self._store.set(name, value)

    def try_get_value(self, name: str) -> Tuple[Any, bool]:
        return self._store.get(name)

    def contains_key(self, name: str) -> bool:
        return self._store.contains_key(name)

    def contains_pair(self, name: str, value: Any) -> bool:
        """True iff ``name`` is present and its value equals ``value``."""
        current, found = self._store.get(name)
        return found and values_equal(current, value)

    def copy_into(self, buffer: MutableSequence, offset: int = 0) -> None:
        """
        Write every (name, value) pair into ``buffer`` starting at ``offset``.

        Raises:
            ValueError: If ``offset`` is negative
            CapacityError: If ``buffer`` has fewer than ``count()`` slots
                from ``offset`` onwards
        """
        if offset < 0:
            raise ValueError(f"offset must be non-negative, got {offset}")

        pairs = self._store.entries()
        available = max(len(buffer) - offset, 0)
        if available < len(pairs):
            raise CapacityError(len(pairs), available)

        for index, pair in enumerate(pairs, start=offset):
            buffer[index] = pair

    def remove(self, name: str) -> bool:
        return self._store.remove(name)

    def remove_pair(self, name: str, value: Any) -> bool:
        """Remove ``name`` only if it currently holds ``value``."""
        if not self.contains_pair(name, value):
            return False
        return self._store.remove(name)

    def clear(self) -> None:
        self._store.clear()

    def count(self) -> int:
        return self._store.count()

    def keys(self) -> List[str]:
        return self._store.names()

    def values(self) -> List[Any]:
        return self._store.values()

    def enumerate(self) -> List[Tuple[str, Any]]:
        """Return a snapshot of all (name, value) pairs."""
        return self._store.entries()

    def __getitem__(self, name: str) -> Any:
        return self.index_get(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self.index_set(name, value)

    def __delitem__(self, name: str) -> None:
        """Delete name, raises KeyNotFoundError if not found."""
        if not self._store.remove(name):
            raise KeyNotFoundError(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._store)

    def __len__(self) -> int:
        return self._store.count()

    def __contains__(self, name: Any) -> bool:
        return self._store.contains_key(name)
