"""Pytest fixtures for EventHub tests."""

import pytest

from eventhub import EventHub


class CallRecorder:
    """Hands out named callbacks that record (name, data, context) when called.

    The same name always returns the same function, so callbacks can be
    registered twice or removed again.
    """

    def __init__(self):
        self.calls = []
        self._callbacks = {}

    def __getitem__(self, name):
        if name not in self._callbacks:

            def callback(data=None, context=None):
                self.calls.append((name, data, context))

            callback.__name__ = name
            self._callbacks[name] = callback
        return self._callbacks[name]

    @property
    def names(self):
        return [name for name, _, _ in self.calls]

    @property
    def contexts(self):
        return [context for _, _, context in self.calls]


@pytest.fixture
def hub():
    """A fresh hub accepting duplicate registrations."""
    return EventHub()


@pytest.fixture
def cbs():
    """Recorder of named callbacks: cbs["cb1"], cbs["cb2"], ..."""
    return CallRecorder()
