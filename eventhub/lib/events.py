"""Namespaced event hub with capturing and bubbling phases."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from eventhub.constants import DEFAULT_ALLOW_MULTIPLE, UNIQUE_EVENT_PREFIX, Phase
from eventhub.lib.dispatcher import (
    CallbackDispatcher,
    NullDispatcher,
    propagate,
    remove_callbacks,
)
from eventhub.lib.namespace_tree import NamespaceTree, Registration, is_valid_name

if TYPE_CHECKING:
    from eventhub.lib.settings import HubSettings


def _to_phase(phase: Phase | str | None) -> Phase | None:
    """Accept Phase members or their string values ("capture", "bubble", "both").

    Raises:
        ValueError: For anything else.
    """
    return None if phase is None else Phase(phase)


class EventHub:
    """Synchronous event dispatcher with dot-separated namespaces.

    Callbacks are called synchronously as callback(data, context); exceptions
    bubble up normally. Instances share nothing.

    Example:
        hub = EventHub()
        hub.on("ui.update", render)
        hub.on("ui", log_ui, phase=Phase.BUBBLING)
        hub.trigger("ui.update", {"id": 1})  # render, then log_ui
    """

    PHASES = Phase

    def __init__(self, allow_multiple: bool | None = None) -> None:
        """Create an empty hub.

        Args:
            allow_multiple: Accept the same callback more than once for the same
                event and phase. Defaults to True.
        """
        self.allow_multiple = (
            allow_multiple if isinstance(allow_multiple, bool) else DEFAULT_ALLOW_MULTIPLE
        )
        self._event_name_index = 0
        self._dispatcher = CallbackDispatcher()
        self._null_dispatcher = NullDispatcher()
        self.reset()

    @classmethod
    def from_settings(cls, settings: HubSettings) -> EventHub:
        """Build a hub configured from a settings file."""
        return cls(allow_multiple=settings.allow_multiple)

    def reset(self) -> EventHub:
        """Drop every namespace and callback. Keeps allow_multiple and the unique name counter."""
        self._tree = NamespaceTree()
        return self

    @property
    def fake(self) -> FakeEventHub:
        """Dry-run view: on/one/off/trigger report what would happen without doing it."""
        return FakeEventHub(self)

    def generate_unique_event_name(self) -> str:
        """Return a name not handed out before by this hub: --eh--0, --eh--1, ..."""
        name = f"{UNIQUE_EVENT_PREFIX}{self._event_name_index}"
        self._event_name_index += 1
        return name

    def set_allow_multiple(self, state: bool) -> EventHub:
        self.allow_multiple = state
        return self

    def on(
        self,
        name: str,
        callback: Callable[[Any, Any], Any],
        *,
        phase: Phase | str | None = None,
        prepend: bool = False,
        is_one: bool = False,
    ) -> bool:
        """Register a callback for an event.

        Callbacks run in the order they were registered; prepend puts this one in
        front of those already registered. A callback with a phase only runs while
        a nested event is captured or bubbles through this namespace, never when
        this namespace itself is triggered. Phase.BOTH registers it for both.

        Returns:
            True if the callback was registered. False for a duplicate (see
            allow_multiple) or an invalid name, callback or phase, which is logged.
        """
        return self._add(name, callback, phase, prepend, is_one)

    def one(
        self,
        name: str,
        callback: Callable[[Any, Any], Any],
        *,
        phase: Phase | str | None = None,
        prepend: bool = False,
    ) -> bool:
        """Same as on(), but the callback is removed after it has been called once."""
        return self._add(name, callback, phase, prepend, True)

    def off(
        self,
        name: str,
        callback: Callable | None = None,
        *,
        phase: Phase | str | None = None,
        is_one: bool | None = None,
        traverse: bool = False,
    ) -> int:
        """Remove callbacks from an event.

        A callback registered with a phase is only removed when that phase is
        given. Without a callback every callback of the event (with that phase)
        is removed.

        Args:
            name: Name of the event.
            callback: Callback to remove, None for all of them.
            phase: Phase the callback was registered with.
            is_one: Only remove callbacks registered with (True) or without
                (False) one(). None removes both.
            traverse: Also remove from nested events.

        Returns:
            The number of removed callbacks, 0 for an unknown phase.
        """
        return self._remove(name, callback, phase, is_one, traverse)

    def trigger(
        self,
        name: str | None = None,
        data: Any = None,
        *,
        phase: Phase | str | None = None,
        traverse: bool = False,
    ) -> int:
        """Trigger an event.

        Args:
            name: Name of the event, None for the root namespace.
            data: Passed as first argument to every callback.
            phase: Only run the capturing (or bubbling) pass. Phase.BOTH and None
                run both.
            traverse: Also call the phase-less callbacks of all nested events.

        Returns:
            The number of callbacks called, 0 for an unknown phase.
        """
        return self._trigger(name, data, phase, traverse, self._dispatcher)

    def can_trigger(self, name: str | None = None) -> bool:
        """An event can be triggered if it exists and is enabled."""
        node = self._tree.resolve(name)
        return node is not None and not node.stack.disabled

    def enable(self, name: str | None, *, traverse: bool = False) -> EventHub:
        """Enable a disabled event, and with traverse all nested events."""
        return self._set_disabled(name, False, traverse)

    def disable(self, name: str | None, *, traverse: bool = False) -> EventHub:
        """Disable an event, meaning triggers of it are ignored.

        Its capturing and bubbling callbacks still run for nested events that
        are triggered. With traverse all nested events are disabled too.
        """
        return self._set_disabled(name, True, traverse)

    def is_disabled(self, name: str | None) -> bool:
        """False for events that don't exist."""
        node = self._tree.resolve(name)
        return node.stack.disabled if node is not None else False

    def get_triggers_for(self, name: str | None = None, *, traverse: bool = False) -> int:
        """How many times an event was triggered, including nested events with traverse."""
        node = self._tree.resolve(name)
        if node is None:
            return 0
        nodes = node.depth_first() if traverse else [node]
        return sum(current.stack.trigger_count for current in nodes)

    def _add(
        self,
        name: str,
        callback: Callable,
        phase: Phase | str | None,
        prepend: bool,
        is_one: bool,
        simulate: bool = False,
    ) -> bool:
        if not is_valid_name(name) or not callable(callback):
            logging.warning(
                f"Cannot bind the callback to the event (name={name!r}, callback={callback!r})"
            )
            return False

        try:
            phase = _to_phase(phase)
        except ValueError:
            logging.warning(f"Cannot bind the callback to << {name} >>: unknown phase {phase!r}")
            return False

        phases = [Phase.CAPTURING, Phase.BUBBLING] if phase is Phase.BOTH else [phase]
        node = self._tree.resolve(name)
        existing = node.stack.callbacks if node is not None else []

        if not all(self._can_add(existing, callback, p) for p in phases):
            logging.debug(f"Callback already registered for << {name} >> (phase={phase})")
            return False

        if simulate:
            return True

        callbacks = self._tree.ensure(name).stack.callbacks
        for p in phases:
            registration = Registration(callback=callback, phase=p, is_one=is_one)
            # Walked back to front on trigger
            if prepend:
                callbacks.append(registration)
            else:
                callbacks.insert(0, registration)
        return True

    def _can_add(
        self, callbacks: list[Registration], callback: Callable, phase: Phase | None
    ) -> bool:
        if self.allow_multiple:
            return True
        return not any(r.callback == callback and r.phase == phase for r in callbacks)

    def _remove(
        self,
        name: str,
        callback: Callable | None,
        phase: Phase | str | None,
        is_one: bool | None,
        traverse: bool,
        simulate: bool = False,
    ) -> int:
        try:
            phase = _to_phase(phase)
        except ValueError:
            logging.warning(f"Cannot remove callbacks from << {name} >>: unknown phase {phase!r}")
            return 0

        node = self._tree.resolve(name)
        if node is None:
            return 0
        return remove_callbacks(node, callback, phase, is_one, traverse, simulate)

    def _trigger(
        self,
        name: str | None,
        data: Any,
        phase: Phase | str | None,
        traverse: bool,
        dispatcher: CallbackDispatcher,
    ) -> int:
        try:
            phase = _to_phase(phase)
        except ValueError:
            logging.warning(f"Cannot trigger << {name} >>: unknown phase {phase!r}")
            return 0
        if phase is Phase.BOTH:
            phase = None

        target = self._tree.resolve(name)
        if target is None:
            return 0
        if target.stack.disabled:
            logging.debug(f"Event << {name} >> is disabled, trigger ignored")
            return 0

        return propagate(target, name, data, dispatcher, phase, traverse)

    def _set_disabled(self, name: str | None, state: bool, traverse: bool) -> EventHub:
        node = self._tree.resolve(name)
        if node is not None:
            for current in node.depth_first() if traverse else [node]:
                current.stack.disabled = state
        return self


class FakeEventHub:
    """Simulates on, one, off and trigger of an EventHub.

    Nothing is registered or removed and no callback is called, but trigger()
    still counts towards get_triggers_for().
    """

    def __init__(self, hub: EventHub) -> None:
        self._hub = hub

    def on(
        self,
        name: str,
        callback: Callable[[Any, Any], Any],
        *,
        phase: Phase | str | None = None,
        prepend: bool = False,
        is_one: bool = False,
    ) -> bool:
        """True if EventHub.on() would register the callback."""
        return self._hub._add(name, callback, phase, prepend, is_one, simulate=True)

    def one(
        self,
        name: str,
        callback: Callable[[Any, Any], Any],
        *,
        phase: Phase | str | None = None,
        prepend: bool = False,
    ) -> bool:
        """True if EventHub.one() would register the callback."""
        return self._hub._add(name, callback, phase, prepend, True, simulate=True)

    def off(
        self,
        name: str,
        callback: Callable | None = None,
        *,
        phase: Phase | str | None = None,
        is_one: bool | None = None,
        traverse: bool = False,
    ) -> int:
        """The number of callbacks EventHub.off() would remove."""
        return self._hub._remove(name, callback, phase, is_one, traverse, simulate=True)

    def trigger(
        self,
        name: str | None = None,
        data: Any = None,
        *,
        phase: Phase | str | None = None,
        traverse: bool = False,
    ) -> int:
        """The number of callbacks EventHub.trigger() would call. The trigger is counted."""
        return self._hub._trigger(name, data, phase, traverse, self._hub._null_dispatcher)
