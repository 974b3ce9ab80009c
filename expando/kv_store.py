"""
Property Store
==============

Authoritative, insertion-ordered name -> value mapping underlying the
container. Every mutating primitive keeps the metadata projector in step and
then publishes one change event per affected name.

Usage:
    store = PropertyStore()
    store.set("name", "Alice")
    value, found = store.get("name")   # ("Alice", True)
    store.remove("name")               # True
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Tuple

from .notifier import ChangeEvent, ChangeType
from .types import TypeTag, type_tag

if TYPE_CHECKING:
    from .descriptors import MetadataProjector
    from .notifier import ChangeNotifier


@dataclass
class PropertyEntry:
    """
    One stored property.

    Attributes:
        name: Property name
        value: The stored value (opaque)
        value_type: Tag derived from ``value`` when it was assigned
    """

    name: str
    value: Any
    value_type: TypeTag


class PropertyStore:
    """
    Ordered property mapping with synchronous fan-out.

    Structural changes (a new name, a removal, a clear) update the projector
    before any subscriber runs, so a handler never sees a name without its
    descriptor. A value-only update refreshes the descriptor's declared type
    and publishes an UPDATE event.
    """

    # Sentinel object for "key not found"
    _MISSING = object()

    def __init__(
        self,
        notifier: Optional["ChangeNotifier"] = None,
        projector: Optional["MetadataProjector"] = None,
        owner: Any = None,
    ):
        """
        Initialize the store.

        Args:
            notifier: Receives one event per affected name
            projector: Kept in lockstep with the key set
            owner: Reported as the event sender (defaults to the store)
        """
        self._entries: Dict[str, PropertyEntry] = {}
        self._notifier = notifier
        self._projector = projector
        self._owner = owner

    @property
    def sender(self) -> Any:
        return self if self._owner is None else self._owner

    @staticmethod
    def _check_name(name: Any) -> None:
        if not isinstance(name, str):
            raise TypeError(
                f"Property names must be str, not {type(name).__name__}"
            )

    def _lookup(self, name: Any) -> Any:
        # Only str names can be stored, so anything else is simply absent
        if not isinstance(name, str):
            return self._MISSING
        return self._entries.get(name, self._MISSING)

    def get(self, name: str) -> Tuple[Any, bool]:
        """
        Look up a property. Never raises.

        Returns:
            ``(value, True)`` when present, ``(None, False)`` otherwise
        """
        entry = self._lookup(name)
        if entry is self._MISSING:
            return None, False
        return entry.value, True

    def entry(self, name: str) -> Optional[PropertyEntry]:
        """Return the entry for ``name`` or None."""
        entry = self._lookup(name)
        return None if entry is self._MISSING else entry

    def set(self, name: str, value: Any) -> None:
        """Insert ``name`` or overwrite its value, recomputing its type tag."""
        self._check_name(name)
        tag = type_tag(value)
        existing = self._entries.get(name)

        if existing is None:
            self._entries[name] = PropertyEntry(name, value, tag)
            if self._projector is not None:
                self._projector.on_added(name, tag)
            logging.debug(f"Property '{name}' added as {tag.name}")
            self._publish(ChangeEvent(self.sender, name, ChangeType.ADD, None, value))
            return

        old_value = existing.value
        existing.value = value
        existing.value_type = tag
        if self._projector is not None:
            self._projector.on_updated(name, tag)
        self._publish(
            ChangeEvent(self.sender, name, ChangeType.UPDATE, old_value, value)
        )

    def remove(self, name: str) -> bool:
        """
        Remove a property.

        Returns:
            True if ``name`` existed, False otherwise
        """
        if self._lookup(name) is self._MISSING:
            return False
        entry = self._entries.pop(name)

        if self._projector is not None:
            self._projector.on_removed(name)
        logging.debug(f"Property '{name}' removed")
        self._publish(
            ChangeEvent(self.sender, name, ChangeType.DELETE, entry.value, None)
        )
        return True

    def clear(self) -> None:
        """
        Remove every property.

        Events are published after the store is empty, one per removed name
        in pre-clear order.
        """
        removed = list(self._entries.values())
        self._entries.clear()
        if self._projector is not None:
            for entry in removed:
                self._projector.on_removed(entry.name)

        if removed:
            logging.debug(f"Store cleared ({len(removed)} properties)")
        for entry in removed:
            self._publish(
                ChangeEvent(self.sender, entry.name, ChangeType.CLEAR, entry.value, None)
            )

    def contains_key(self, name: str) -> bool:
        return self._lookup(name) is not self._MISSING

    def count(self) -> int:
        return len(self._entries)

    def names(self) -> List[str]:
        """Return all names in insertion order."""
        return list(self._entries)

    def values(self) -> List[Any]:
        """Return all values in insertion order."""
        return [entry.value for entry in self._entries.values()]

    def entries(self) -> List[Tuple[str, Any]]:
        """Return a snapshot of all (name, value) pairs."""
        return [(name, entry.value) for name, entry in self._entries.items()]

    def _publish(self, event: ChangeEvent) -> None:
        if self._notifier is not None:
            self._notifier.notify(event)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: Any) -> bool:
        return self.contains_key(name)

    def __iter__(self) -> Iterator[str]:
        # Iterate a snapshot so handlers may mutate while callers iterate
        return iter(list(self._entries))

    def __repr__(self) -> str:
        return f"PropertyStore({self.entries()!r})"
