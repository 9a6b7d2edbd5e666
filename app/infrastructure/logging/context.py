"""Session context binding for structured logging.

Binds editor-session metadata to structlog contextvars so every log entry
written while an editor event is processed carries it.

Usage:
    from infrastructure.logging import bind_session_context

    with bind_session_context(session_id="abc", action="edit", group_ref="7"):
        logger.info("member_staged_for_add")
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_session_context(
    session_id: Optional[str] = None,
    action: Optional[str] = None,
    group_ref: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind session-scoped context to all logs within the block.

    Args:
        session_id: Editor session identifier. Auto-generated if not provided.
        action: Editor action ("create" or "edit").
        group_ref: Reference of the group being edited, if any.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        None - context is bound to structlog's context vars.
    """
    context: dict[str, Any] = {"session_id": session_id or str(uuid.uuid4())}

    if action is not None:
        context["action"] = action

    if group_ref is not None:
        context["group_ref"] = group_ref

    context.update(extra_context)

    # Keep whatever an outer block bound so nested events restore it
    previous = structlog.contextvars.get_contextvars()
    structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())
        restored = {k: v for k, v in previous.items() if k in context}
        if restored:
            structlog.contextvars.bind_contextvars(**restored)
