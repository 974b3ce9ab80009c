"""
Expando - Dynamically Extensible Property Containers

An object whose members are added, updated and removed at runtime, with
late-bound access and invocation by name, synchronous change notifications,
and live property metadata for inspector and binding tooling.
"""

from .collection import CollectionView
from .descriptors import MetadataProjector, PropertyDescriptor
from .exceptions import (
    CapacityError,
    DuplicateKeyError,
    ExpandoError,
    InvocationError,
    KeyNotFoundError,
)
from .expando import Expando, create_expando
from .kv_store import PropertyEntry, PropertyStore
from .notifier import ChangeEvent, ChangeNotifier, ChangeType, Subscription
from .resolver import MemberResolver
from .types import TypeTag, ValueKind, type_tag, values_equal

__all__ = [
    # Container
    "Expando",
    "create_expando",
    # Components
    "PropertyStore",
    "PropertyEntry",
    "MemberResolver",
    "ChangeNotifier",
    "MetadataProjector",
    "CollectionView",
    # Events and metadata
    "ChangeEvent",
    "ChangeType",
    "Subscription",
    "PropertyDescriptor",
    # Type tags
    "TypeTag",
    "ValueKind",
    "type_tag",
    "values_equal",
    # Exceptions
    "ExpandoError",
    "KeyNotFoundError",
    "DuplicateKeyError",
    "InvocationError",
    "CapacityError",
]
