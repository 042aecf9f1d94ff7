import enum

# Prefix of the names handed out by EventHub.generate_unique_event_name
UNIQUE_EVENT_PREFIX = "--eh--"

NAMESPACE_SEPARATOR = "."


class Phase(str, enum.Enum):
    """Event propagation phases.

    If ``bar.foo`` is triggered, callbacks registered on ``bar`` for CAPTURING
    run before the ones on ``bar.foo`` (root to target), callbacks registered on
    ``bar`` for BUBBLING run after them (target to root)::

        hub.on("bar.foo", func1)
        hub.on("bar", func2, phase=Phase.CAPTURING)
        hub.on("bar", func3, phase=Phase.BUBBLING)
        hub.on("bar", func4, phase=Phase.BOTH)
        hub.trigger("bar.foo")  # func2, func4, func1, func3, func4

    BOTH is never stored as such: it registers the callback once per phase.
    """

    CAPTURING = "capture"
    BUBBLING = "bubble"
    BOTH = "both"


# Same callback may be registered more than once for the same event and phase
DEFAULT_ALLOW_MULTIPLE = True

# Log level of configure_logger and of settings files that don't set one
DEFAULT_LOG_LEVEL = "WARNING"
