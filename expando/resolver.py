"""
Member Resolver
===============

Late-bound get/set/invoke by name with soft-fail semantics: a missing member
is reported through a ``found``/``handled`` flag rather than an exception.
"""

import inspect
import logging
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from .exceptions import InvocationError
from .kv_store import PropertyStore
from .types import is_invocable


class MemberResolver:
    """
    Dynamic member access over a property store.

    ``dynamic_invoke`` reports ``handled=False`` only when the member is
    missing or not callable. Failures of the call itself reach the caller:
    arguments that do not fit the callable's signature raise
    ``InvocationError``, and anything the callable raises propagates as is.
    """

    def __init__(self, store: PropertyStore, check_signatures: bool = True):
        self._store = store
        self.check_signatures = check_signatures

    def dynamic_get(self, name: str) -> Tuple[Any, bool]:
        return self._store.get(name)

    def dynamic_set(self, name: str, value: Any) -> None:
        self._store.set(name, value)

    def dynamic_delete(self, name: str) -> bool:
        return self._store.remove(name)

    def dynamic_invoke(
        self,
        name: str,
        args: Sequence[Any] = (),
        kwargs: Optional[Mapping[str, Any]] = None,
    ) -> Tuple[Any, bool]:
        """
        Invoke the member stored under ``name``.

        Args:
            name: Member name
            args: Positional arguments, in order
            kwargs: Optional keyword arguments

        Returns:
            ``(result, True)`` when a callable member was invoked,
            ``(None, False)`` when the member is missing or not callable
        """
        member, found = self._store.get(name)
        if not found or not is_invocable(member):
            return None, False

        args = tuple(args)
        kwargs = dict(kwargs or {})
        if self.check_signatures:
            self._bind(name, member, args, kwargs)

        logging.debug(f"Invoking member '{name}' with {len(args)} positional args")
        return member(*args, **kwargs), True

    def member_names(self) -> List[str]:
        """Names of all dynamic members, in store order."""
        return self._store.names()

    @staticmethod
    def _bind(name: str, member: Any, args: tuple, kwargs: dict) -> None:
        try:
            signature = inspect.signature(member)
        except (TypeError, ValueError):
            # Some builtins expose no signature; let the call decide
            return

        try:
            signature.bind(*args, **kwargs)
        except TypeError as e:
            raise InvocationError(name, str(e)) from e
