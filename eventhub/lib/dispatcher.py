"""Propagation of a triggered event through the namespace tree.

A trigger runs three passes, in this order:

1. capture: from the first segment down to the target's parent, firing
   callbacks registered for Phase.CAPTURING
2. target: the target itself (and its enabled descendants when traversing),
   firing callbacks registered without a phase
3. bubble: from the target's parent up to the first segment, firing callbacks
   registered for Phase.BUBBLING

The actual invocation is delegated to a dispatcher object so the same walk can
run for real or as a dry run.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Callable

from eventhub.constants import Phase
from eventhub.lib.namespace_tree import Node, Registration


@dataclass(frozen=True)
class EventContext:
    """Second argument of every callback."""

    phase: Phase | None  # None during the target pass
    event: str  # namespace currently visited
    trigger: str | None  # name passed to trigger()


class CallbackDispatcher:
    """Invokes callbacks as callback(data, context)."""

    consumes_one_shots = True

    def __call__(self, registration: Registration, data: Any, context: EventContext) -> None:
        registration.callback(data, context)


class NullDispatcher(CallbackDispatcher):
    """Calls nothing and leaves one-shot registrations in place."""

    consumes_one_shots = False

    def __call__(self, registration: Registration, data: Any, context: EventContext) -> None:
        pass


def call_callbacks(
    node: Node,
    trigger: str | None,
    data: Any,
    phase: Phase | None,
    dispatcher: CallbackDispatcher,
) -> int:
    """Fire the callbacks of one namespace registered for `phase`.

    The list is walked back to front over a snapshot. Registrations removed
    while walking are skipped, the ones added while walking wait for the next
    trigger. Returns the number of callbacks fired.
    """
    callbacks = node.stack.callbacks
    context = EventContext(phase=phase, event=node.name, trigger=trigger)
    count = 0

    for registration in reversed(list(callbacks)):
        if registration.phase != phase or registration not in callbacks:
            continue

        count += 1
        dispatcher(registration, data, context)

        if registration.is_one and dispatcher.consumes_one_shots and registration in callbacks:
            callbacks.remove(registration)

    return count


def capture(target: Node, trigger: str | None, data: Any, dispatcher: CallbackDispatcher) -> int:
    ancestors = reversed(list(target.ancestors()))
    return sum(call_callbacks(node, trigger, data, Phase.CAPTURING, dispatcher) for node in ancestors)


def bubble(target: Node, trigger: str | None, data: Any, dispatcher: CallbackDispatcher) -> int:
    return sum(
        call_callbacks(node, trigger, data, Phase.BUBBLING, dispatcher)
        for node in target.ancestors()
    )


def at_target(
    target: Node,
    trigger: str | None,
    data: Any,
    dispatcher: CallbackDispatcher,
    traverse: bool = False,
) -> int:
    nodes: Iterable[Node] = target.depth_first(skip_disabled=True) if traverse else [target]
    return sum(call_callbacks(node, trigger, data, None, dispatcher) for node in nodes)


def propagate(
    target: Node,
    trigger: str | None,
    data: Any,
    dispatcher: CallbackDispatcher,
    phase: Phase | None = None,
    traverse: bool = False,
) -> int:
    """Run capture, target and bubble passes for an enabled target and count the trigger.

    phase=CAPTURING skips the bubble pass, phase=BUBBLING skips the capture
    pass, None runs both. The target pass always runs.
    """
    count = 0
    if phase in (None, Phase.CAPTURING):
        count += capture(target, trigger, data, dispatcher)
    count += at_target(target, trigger, data, dispatcher, traverse)
    if phase in (None, Phase.BUBBLING):
        count += bubble(target, trigger, data, dispatcher)

    if not target.is_root:
        target.stack.trigger_count += 1

    return count


def matches(
    registration: Registration,
    callback: Callable | None,
    phase: Phase | None,
    is_one: bool | None,
) -> bool:
    """Removal filter. The phase must match exactly, None only matches target-only callbacks."""
    if callback is not None and registration.callback != callback:
        return False
    if phase is Phase.BOTH:
        if registration.phase not in (Phase.CAPTURING, Phase.BUBBLING):
            return False
    elif registration.phase != phase:
        return False
    return is_one is None or registration.is_one == is_one


def remove_callbacks(
    node: Node,
    callback: Callable | None = None,
    phase: Phase | None = None,
    is_one: bool | None = None,
    traverse: bool = False,
    simulate: bool = False,
) -> int:
    """Remove matching registrations from `node` (and its subtree when traversing).

    With simulate, only counts what would be removed.
    """
    removed = 0
    nodes: Iterable[Node] = node.depth_first() if traverse else [node]

    for current in nodes:
        callbacks = current.stack.callbacks
        for index in range(len(callbacks) - 1, -1, -1):
            if matches(callbacks[index], callback, phase, is_one):
                if not simulate:
                    del callbacks[index]
                removed += 1

    return removed
