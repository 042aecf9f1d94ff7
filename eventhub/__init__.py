from eventhub.constants import Phase
from eventhub.lib.dispatcher import EventContext
from eventhub.lib.events import EventHub
from eventhub.version import __version__

PACKAGE = __package__
VERSION = __version__

__all__ = [
    "VERSION",
    "PACKAGE",
    EventHub.__name__,
    EventContext.__name__,
    Phase.__name__,
]
