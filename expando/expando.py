"""
Expando - Dynamically Extensible Property Container
===================================================

``Expando`` is an object whose members are added and removed at runtime. It
composes the property store with its four facets and speaks both of Python's
access protocols:

- attribute access (``obj.name``) goes through the member resolver and
  raises ``AttributeError`` for missing members, like any Python object;
- item access (``obj["name"]``) goes through the strict collection view and
  raises ``KeyNotFoundError``.

Basic Usage
-----------

```python
from expando import Expando

person = Expando()
person.name = "Alice"
person.greet = lambda other: f"Hello {other}, I'm {person.name}"

person.greet("Bob")                 # "Hello Bob, I'm Alice"
person["name"]                      # "Alice"
[d.name for d in person.descriptors()]   # ["name", "greet"]

sub = person.subscribe(lambda event: print(event.name, event.change_type))
del person.name                     # prints: name ChangeType.DELETE
person.unsubscribe(sub)
```

Member names that start with an underscore are ordinary instance attributes
and are never stored. Names shared with the container's own methods
(``keys``, ``subscribe``...) can still be stored but are only readable by
index.

Calling a stored callable as a method (``obj.f(1, 2)``) is a plain Python
call on the value, so an argument mismatch raises the callable's own
``TypeError``. ``try_invoke_member`` checks the arguments against the
signature first and raises ``InvocationError`` instead.
"""

from typing import (
    Any,
    Iterable,
    Iterator,
    List,
    Mapping,
    MutableSequence,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from .collection import CollectionView
from .descriptors import MetadataProjector, PropertyDescriptor
from .kv_store import PropertyStore
from .notifier import ChangeHandler, ChangeNotifier, Subscription
from .resolver import MemberResolver


class Expando:
    """
    Container with a runtime-defined member set.

    Args:
        isolate_handler_errors: Log failing change handlers and keep
            delivering instead of raising to the mutating caller
        check_signatures: Raise ``InvocationError`` when invocation
            arguments do not fit a stored callable's signature
    """

    def __init__(
        self, *, isolate_handler_errors: bool = False, check_signatures: bool = True
    ):
        self._notifier = ChangeNotifier(isolate_handler_errors=isolate_handler_errors)
        self._metadata = MetadataProjector()
        self._store = PropertyStore(self._notifier, self._metadata, owner=self)
        self._resolver = MemberResolver(self._store, check_signatures=check_signatures)
        self._view = CollectionView(self._store)

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    @property
    def store(self) -> PropertyStore:
        return self._store

    @property
    def resolver(self) -> MemberResolver:
        return self._resolver

    @property
    def notifier(self) -> ChangeNotifier:
        return self._notifier

    @property
    def metadata(self) -> MetadataProjector:
        return self._metadata

    @property
    def view(self) -> CollectionView:
        return self._view

    # ------------------------------------------------------------------
    # Attribute protocol
    # ------------------------------------------------------------------

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails
        if name.startswith("_"):
            raise AttributeError(name)
        value, found = self._resolver.dynamic_get(name)
        if not found:
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute '{name}'"
            )
        return value

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            super().__setattr__(name, value)
        else:
            self._resolver.dynamic_set(name, value)

    def __delattr__(self, name: str) -> None:
        if name.startswith("_"):
            super().__delattr__(name)
        elif not self._resolver.dynamic_delete(name):
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute '{name}'"
            )

    def __dir__(self) -> Iterable[str]:
        return sorted(set(super().__dir__()) | set(self._store.names()))

    def try_get_member(self, name: str) -> Tuple[Any, bool]:
        return self._resolver.dynamic_get(name)

    def try_set_member(self, name: str, value: Any) -> bool:
        self._resolver.dynamic_set(name, value)
        return True

    def try_invoke_member(
        self,
        name: str,
        args: Sequence[Any] = (),
        kwargs: Optional[Mapping[str, Any]] = None,
    ) -> Tuple[Any, bool]:
        return self._resolver.dynamic_invoke(name, args, kwargs)

    def get_dynamic_member_names(self) -> List[str]:
        return self._resolver.member_names()

    # ------------------------------------------------------------------
    # Mapping protocol
    # ------------------------------------------------------------------

    def __getitem__(self, name: str) -> Any:
        return self._view.index_get(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self._view.index_set(name, value)

    def __delitem__(self, name: str) -> None:
        del self._view[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._view)

    def __len__(self) -> int:
        return len(self._view)

    def __contains__(self, name: Any) -> bool:
        return name in self._view

    def add(self, name: str, value: Any) -> None:
        self._view.add(name, value)

    def remove(self, name: str) -> bool:
        return self._view.remove(name)

    def clear(self) -> None:
        self._view.clear()

    def keys(self) -> List[str]:
        return self._view.keys()

    def values(self) -> List[Any]:
        return self._view.values()

    def items(self) -> List[Tuple[str, Any]]:
        return self._view.enumerate()

    def contains_pair(self, name: str, value: Any) -> bool:
        return self._view.contains_pair(name, value)

    def copy_into(self, buffer: MutableSequence, offset: int = 0) -> None:
        self._view.copy_into(buffer, offset)

    def try_get_value(self, name: str) -> Tuple[Any, bool]:
        return self._view.try_get_value(name)

    # ------------------------------------------------------------------
    # Change notification and metadata
    # ------------------------------------------------------------------

    def subscribe(
        self, handler: ChangeHandler, names: Optional[Iterable[str]] = None
    ) -> Subscription:
        """Subscribe ``handler`` to every change (or changes to ``names``)."""
        return self._notifier.subscribe(handler, names)

    def unsubscribe(self, subscription: Union[Subscription, int]) -> bool:
        return self._notifier.unsubscribe(subscription)

    def descriptors(self) -> List[PropertyDescriptor]:
        return self._metadata.descriptors()

    def describe(self, name: str) -> Tuple[Optional[PropertyDescriptor], bool]:
        return self._metadata.describe(name)

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={value!r}" for name, value in self._store.entries())
        return f"{type(self).__name__}({fields})"


def create_expando(
    isolate_handler_errors: bool = False,
    check_signatures: bool = True,
    initial: Optional[Mapping[str, Any]] = None,
) -> Expando:
    """
    Create a container with specified settings.

    Args:
        isolate_handler_errors: Whether failing change handlers are logged
            instead of raised
        check_signatures: Whether invocation arguments are checked against
            the stored callable's signature
        initial: Optional properties to add, in mapping order

    Returns:
        Configured Expando instance
    """
    expando = Expando(
        isolate_handler_errors=isolate_handler_errors,
        check_signatures=check_signatures,
    )
    for name, value in (initial or {}).items():
        expando.add(name, value)
    return expando
