"""Ticket tracking for the editor's asynchronous loads.

There is no way to cancel a fetch once it has been handed to a data source.
Each fetch is issued with a ticket instead; a result is applied only when
its ticket is still the current one for that kind of load. Issuing a new
ticket supersedes the previous one, and cancelling invalidates all of them.
"""

import itertools
import threading
from enum import Enum
from typing import Dict

from infrastructure.logging import get_module_logger

logger = get_module_logger()


class LoadKind(str, Enum):
    """Asynchronous loads issued by the editor."""

    METADATA = "metadata"
    MEMBERS = "members"
    CONTACT = "contact"


class LoadTracker:
    """Hands out load tickets and answers whether one is still current."""

    def __init__(self):
        self._counter = itertools.count(1)
        self._current: Dict[LoadKind, int] = {}
        self._lock = threading.Lock()

    def issue(self, kind: LoadKind) -> int:
        """Issue a new ticket for ``kind``, superseding any previous one."""
        with self._lock:
            ticket = next(self._counter)
            superseded = self._current.get(kind)
            self._current[kind] = ticket
        if superseded is not None:
            logger.debug(
                "load_superseded",
                kind=kind.value,
                superseded_ticket=superseded,
                ticket=ticket,
            )
        return ticket

    def complete(self, kind: LoadKind, ticket: int) -> bool:
        """Retire ``ticket`` if it is current.

        Returns:
            True when the ticket was current and its result may be applied.
        """
        with self._lock:
            if self._current.get(kind) != ticket:
                return False
            del self._current[kind]
            return True

    def cancel_all(self) -> None:
        """Invalidate every outstanding ticket."""
        with self._lock:
            pending = sorted(kind.value for kind in self._current)
            self._current.clear()
        if pending:
            logger.debug("loads_cancelled", kinds=pending)
