"""Lifecycle events emitted by the group editor.

Events are dispatched synchronously through infrastructure.events; handler
failures are logged by the dispatcher and never reach the editor.
"""

from enum import Enum
from typing import Any

from infrastructure.events import Event, dispatch_event, register_event_handler
from infrastructure.logging import get_module_logger
from modules.group_editor.domain.models import EditorSession

logger = get_module_logger()

SAVE_REQUESTED = "group_editor.save_requested"
CLOSED = "group_editor.closed"


class CloseReason(str, Enum):
    """Why an editor session reached CLOSING."""

    SAVE_DISPATCHED = "save_dispatched"
    NO_CHANGES = "no_changes"
    SAVE_FAILED = "save_failed"
    REVERTED = "reverted"
    INVALID_COMMIT = "invalid_commit"
    GROUP_NOT_FOUND = "group_not_found"
    ACCOUNTS_NOT_FOUND = "accounts_not_found"
    ACCOUNT_SELECTION_CANCELLED = "account_selection_cancelled"


def emit(event_type: str, session_id: str, session: EditorSession, **metadata: Any) -> Event:
    """Dispatch an editor event describing ``session``."""
    event = Event(
        event_type=event_type,
        session_id=session_id,
        metadata={
            "action": session.action.value,
            "group_ref": session.group_ref,
            **metadata,
        },
    )
    dispatch_event(event)
    return event


@register_event_handler(CLOSED)
def log_session_closed(event: Event) -> None:
    """Audit log entry for every closed session."""
    logger.info(
        "group_editor_session_closed",
        session_id=event.session_id,
        correlation_id=str(event.correlation_id),
        **event.metadata,
    )
