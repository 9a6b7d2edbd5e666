"""Infrastructure event system - centralized event dispatcher.

Usage:

    from infrastructure.events import Event, register_event_handler, dispatch_event

    @register_event_handler("group_editor.closed")
    def handle_closed(event: Event) -> None:
        ...

    dispatch_event(
        Event(event_type="group_editor.closed", metadata={"reason": "reverted"})
    )
"""

from infrastructure.events.dispatcher import (
    clear_handlers,
    dispatch_event,
    register_event_handler,
)
from infrastructure.events.models import Event

__all__ = [
    "Event",
    "clear_handlers",
    "dispatch_event",
    "register_event_handler",
]
