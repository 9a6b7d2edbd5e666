"""Structured logging infrastructure.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_module_logger(): Get a logger for the calling module
    - bind_session_context(): Context manager for session-scoped logging

Example:
    from infrastructure.logging import get_module_logger, bind_session_context

    logger = get_module_logger()

    with bind_session_context(session_id="abc"):
        logger.info("editor_started")
"""

from infrastructure.logging.setup import (
    configure_logging,
    get_module_logger,
)
from infrastructure.logging.context import (
    bind_session_context,
)

__all__ = [
    "configure_logging",
    "get_module_logger",
    "bind_session_context",
]
