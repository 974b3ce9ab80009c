"""
Change Notifier
===============

Synchronous publish/subscribe over property store mutations. Handlers run
inline on the mutating caller's thread, in subscription order.
"""

import logging
import weakref
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Iterable, Optional, Union


class ChangeType(Enum):
    """Types of changes that can occur in the store."""

    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"
    CLEAR = "clear"


@dataclass(frozen=True)
class ChangeEvent:
    """
    Represents a change to one property.

    Attributes:
        sender: The container that changed
        name: The property that changed
        change_type: Type of change (ADD, UPDATE, DELETE, CLEAR)
        old_value: Previous value (None if new key)
        new_value: New value (None if removed)
    """

    sender: Any
    name: str
    change_type: ChangeType
    old_value: Any = None
    new_value: Any = None

    @property
    def property_name(self) -> str:
        return self.name

    def __repr__(self):
        if self.change_type in (ChangeType.ADD, ChangeType.UPDATE):
            return (
                f"ChangeEvent({self.change_type.name} {self.name}: "
                f"{self.old_value!r} -> {self.new_value!r})"
            )
        return f"ChangeEvent({self.change_type.name} {self.name}: {self.old_value!r})"


ChangeHandler = Callable[[ChangeEvent], None]


class Subscription:
    """
    Represents a subscription to store changes.

    Provides methods to pause, resume, and unsubscribe.
    """

    def __init__(
        self,
        subscription_id: int,
        handler: ChangeHandler,
        notifier: "ChangeNotifier",
        names: Optional[FrozenSet[str]] = None,
    ):
        self.id = subscription_id
        self.handler = handler
        self._notifier_ref = weakref.ref(notifier)
        self.names = names  # None means every property
        self.active = True

    def pause(self):
        """Pause this subscription (stop receiving notifications)."""
        self.active = False

    def resume(self):
        """Resume this subscription (start receiving notifications again)."""
        self.active = True

    def unsubscribe(self) -> bool:
        """Unsubscribe from all notifications."""
        notifier = self._notifier_ref()
        if notifier is None:
            return False
        return notifier.unsubscribe(self.id)

    def matches(self, name: str) -> bool:
        """Check if this subscription is interested in the given property."""
        return self.names is None or name in self.names

    def __repr__(self) -> str:
        state = "active" if self.active else "paused"
        return f"Subscription(id={self.id}, {state})"


class ChangeNotifier:
    """
    Ordered subscriber list with inline delivery.

    Usage:
        notifier = ChangeNotifier()
        sub = notifier.subscribe(lambda event: print(event.name))
        notifier.notify(ChangeEvent(owner, "name", ChangeType.ADD, None, "Alice"))
        notifier.unsubscribe(sub)
    """

    def __init__(self, isolate_handler_errors: bool = False):
        """
        Args:
            isolate_handler_errors: Log a failing handler and keep delivering
                instead of propagating its exception to the mutating caller
        """
        # Dicts preserve insertion order, which is the delivery order
        self._subscriptions: Dict[int, Subscription] = {}
        self._next_id = 0
        self.isolate_handler_errors = isolate_handler_errors

    def subscribe(
        self, handler: ChangeHandler, names: Optional[Iterable[str]] = None
    ) -> Subscription:
        """
        Subscribe to change events.

        Args:
            handler: Called with a ``ChangeEvent`` for every change
            names: Optional property names to watch; None watches all

        Returns:
            Subscription whose ``id`` can be passed to ``unsubscribe``
        """
        if not callable(handler):
            raise TypeError("handler must be callable")

        if isinstance(names, str):
            names = (names,)

        subscription_id = self._next_id
        self._next_id += 1
        watched = frozenset(names) if names is not None else None
        subscription = Subscription(subscription_id, handler, self, watched)
        self._subscriptions[subscription_id] = subscription
        return subscription

    def unsubscribe(self, subscription: Union[Subscription, int]) -> bool:
        """
        Remove a subscription.

        Returns:
            True if the subscription was removed, False if not found
        """
        subscription_id = (
            subscription.id if isinstance(subscription, Subscription) else subscription
        )
        return self._subscriptions.pop(subscription_id, None) is not None

    def notify(self, event: ChangeEvent) -> None:
        """
        Deliver ``event`` to every current subscriber in registration order.

        Subscriptions added during delivery start with the next event;
        subscriptions removed during delivery are skipped.
        """
        for subscription_id, subscription in list(self._subscriptions.items()):
            if subscription_id not in self._subscriptions:
                continue
            if not subscription.active or not subscription.matches(event.name):
                continue

            if not self.isolate_handler_errors:
                subscription.handler(event)
                continue

            try:
                subscription.handler(event)
            except Exception as e:
                logging.error(
                    f"Error in subscription {subscription_id} handling {event!r}: {e}"
                )

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def __len__(self) -> int:
        return len(self._subscriptions)
