"""
Expando Descriptors - Metadata for dynamic properties.

This module provides the property descriptor records read by inspector and
binding tooling, and the projector that keeps one descriptor per stored name.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Tuple, Type

from .types import TypeTag


@dataclass(frozen=True)
class PropertyDescriptor:
    """
    Describes one dynamic property of a container.

    Dynamic properties are always writable, cannot be reset and are always
    serialized, so those flags are fixed.
    """

    name: str
    declared_type: TypeTag
    read_only: bool = False
    can_reset: bool = False
    should_serialize: bool = True

    @property
    def property_type(self) -> type:
        """The Python type of the property's current value."""
        return self.declared_type.python_type

    @property
    def component_type(self) -> Type:
        """The container type this descriptor applies to."""
        # Import here to avoid circular import
        from .expando import Expando

        return Expando

    def get_value(self, component: Any) -> Any:
        """Read this property from ``component``, None when it is absent."""
        value, found = component.try_get_member(self.name)
        return value if found else None

    def set_value(self, component: Any, value: Any) -> None:
        """Write this property on ``component``."""
        component.try_set_member(self.name, value)

    def reset_value(self, component: Any) -> None:
        """Dynamic properties have no default to reset to."""
        pass


class MetadataProjector:
    """
    One descriptor per property, in property store order.

    The store drives the projector through ``on_added``, ``on_updated`` and
    ``on_removed`` inside each mutating call, before any change event is
    delivered.
    """

    def __init__(self) -> None:
        self._descriptors: Dict[str, PropertyDescriptor] = {}

    def descriptors(self) -> List[PropertyDescriptor]:
        """Return a snapshot of all descriptors."""
        return list(self._descriptors.values())

    def describe(self, name: str) -> Tuple[Optional[PropertyDescriptor], bool]:
        if not isinstance(name, str):
            return None, False
        descriptor = self._descriptors.get(name)
        return descriptor, descriptor is not None

    def names(self) -> List[str]:
        return list(self._descriptors)

    def on_added(self, name: str, declared_type: TypeTag) -> None:
        self._descriptors[name] = PropertyDescriptor(name, declared_type)

    def on_updated(self, name: str, declared_type: TypeTag) -> None:
        descriptor = self._descriptors.get(name)
        if descriptor is None:
            self.on_added(name, declared_type)
        elif descriptor.declared_type != declared_type:
            self._descriptors[name] = replace(descriptor, declared_type=declared_type)

    def on_removed(self, name: str) -> None:
        self._descriptors.pop(name, None)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, name: Any) -> bool:
        return self.describe(name)[1]
