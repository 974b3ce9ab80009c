"""
Expando Exceptions
==================

Every error raised by the container derives from ``ExpandoError`` and from the
built-in exception a Python caller would expect for the same situation, so
``except KeyError`` keeps working around the strict indexer.
"""


class ExpandoError(Exception):
    """Base class for all container errors."""

    pass


class KeyNotFoundError(ExpandoError, KeyError):
    """Raised by the strict indexer when a property name is absent."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Key '{self.name}' not found."


class DuplicateKeyError(ExpandoError, KeyError):
    """Raised by ``add`` when the property name already exists."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"An item with the key '{self.name}' has already been added."


class InvocationError(ExpandoError, TypeError):
    """Raised when arguments cannot be bound to a stored callable."""

    def __init__(self, name: str, message: str):
        super().__init__(f"Cannot invoke '{name}': {message}")
        self.name = name


class CapacityError(ExpandoError, ValueError):
    """Raised when a destination buffer is too small for ``copy_into``."""

    def __init__(self, required: int, available: int):
        super().__init__(
            f"Destination has room for {available} items but {required} are required"
        )
        self.required = required
        self.available = available
