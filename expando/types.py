"""
Type Tags
=========

Runtime type tags for stored values. A tag is derived from the value's type on
every assignment and is shared by the property entry (``value_type``) and its
metadata descriptor (``declared_type``).

Tags are memoised per Python type with a cachetools LRU cache, so deriving a
tag for a hot type is a single cache lookup.
"""

from dataclasses import dataclass
from enum import Enum
from numbers import Number
from typing import Any

import numpy as np
from cachetools import LRUCache, cached

TYPE_TAG_CACHE_SIZE = 1024


class ValueKind(Enum):
    """Coarse classification of a stored value."""

    NONE = "none"
    BOOLEAN = "boolean"
    NUMERIC = "numeric"
    STRING = "string"
    BYTES = "bytes"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    SET = "set"
    ARRAY = "array"
    CALLABLE = "callable"
    OPAQUE = "opaque"


@dataclass(frozen=True)
class TypeTag:
    """
    Runtime type identifier of a stored value.

    Attributes:
        python_type: The value's Python type (``object`` for ``None``)
        name: Qualified type name, e.g. ``"str"`` or ``"numpy.ndarray"``
        kind: Coarse value classification
        is_callable: Whether values of this type can be invoked
    """

    python_type: type
    name: str
    kind: ValueKind
    is_callable: bool

    def __repr__(self) -> str:
        return f"TypeTag({self.name}, {self.kind.value})"


def _classify(tp: type) -> ValueKind:
    if issubclass(tp, (bool, np.bool_)):
        return ValueKind.BOOLEAN
    if issubclass(tp, np.ndarray):
        return ValueKind.ARRAY
    if issubclass(tp, (Number, np.number)):
        return ValueKind.NUMERIC
    if issubclass(tp, str):
        return ValueKind.STRING
    if issubclass(tp, (bytes, bytearray, memoryview)):
        return ValueKind.BYTES
    if issubclass(tp, dict):
        return ValueKind.MAPPING
    if issubclass(tp, (set, frozenset)):
        return ValueKind.SET
    if issubclass(tp, (list, tuple, range)):
        return ValueKind.SEQUENCE
    if _instances_callable(tp):
        return ValueKind.CALLABLE
    return ValueKind.OPAQUE


def _instances_callable(tp: type) -> bool:
    # Classes are callable through their metaclass; only count types whose
    # instances define ``__call__``.
    return any("__call__" in vars(base) for base in tp.__mro__)


def _qualified_name(tp: type) -> str:
    module = tp.__module__
    if module in ("builtins", None):
        return tp.__qualname__
    return f"{module}.{tp.__qualname__}"


@cached(cache=LRUCache(maxsize=TYPE_TAG_CACHE_SIZE))
def tag_for_type(tp: type) -> TypeTag:
    """Build (or fetch the memoised) tag for a Python type."""
    # A callable dict or str subclass keeps its data kind but stays invocable
    return TypeTag(
        python_type=tp,
        name=_qualified_name(tp),
        kind=_classify(tp),
        is_callable=_instances_callable(tp),
    )


_NONE_TAG = TypeTag(object, "object", ValueKind.NONE, False)


def type_tag(value: Any) -> TypeTag:
    """Derive the tag of a value from its runtime type."""
    if value is None:
        return _NONE_TAG
    return tag_for_type(type(value))


def is_invocable(value: Any) -> bool:
    """Whether a stored value can be invoked with an argument list."""
    return value is not None and type_tag(value).is_callable


def values_equal(left: Any, right: Any) -> bool:
    """
    Compare two stored values.

    Identity wins; numpy arrays compare element-wise with ``array_equal``;
    everything else uses ``==``. A comparison that raises or produces an
    ambiguous truth value counts as unequal.
    """
    if left is right:
        return True
    if isinstance(left, np.ndarray) or isinstance(right, np.ndarray):
        try:
            return bool(np.array_equal(left, right))
        except (TypeError, ValueError):
            return False
    try:
        return bool(left == right)
    except Exception:
        return False
