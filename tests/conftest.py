"""
Shared pytest fixtures and configuration for Expando tests.
"""

import pytest

from expando import (
    ChangeNotifier,
    CollectionView,
    Expando,
    MemberResolver,
    MetadataProjector,
    PropertyStore,
)


@pytest.fixture
def expando():
    """Provide a fresh, empty Expando."""
    return Expando()


@pytest.fixture
def notifier():
    return ChangeNotifier()


@pytest.fixture
def projector():
    return MetadataProjector()


@pytest.fixture
def store(notifier, projector):
    """Provide a PropertyStore wired to a notifier and projector."""
    return PropertyStore(notifier, projector)


@pytest.fixture
def resolver(store):
    return MemberResolver(store)


@pytest.fixture
def view(store):
    return CollectionView(store)


@pytest.fixture
def recorder():
    """A change handler that records every event it receives."""

    class Recorder:
        def __init__(self):
            self.events = []

        def __call__(self, event):
            self.events.append(event)

        @property
        def names(self):
            return [event.name for event in self.events]

    return Recorder()
