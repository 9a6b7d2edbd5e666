"""Fixtures for infrastructure event system tests."""

import pytest
from datetime import datetime
from uuid import uuid4
from unittest.mock import MagicMock

from infrastructure.events.models import Event
from infrastructure.events.dispatcher import clear_handlers


@pytest.fixture
def event_factory():
    """Factory for creating test events."""

    def _factory(
        event_type: str = "test.event",
        timestamp: datetime = None,
        correlation_id=None,
        session_id: str = "session-1",
        metadata: dict = None,
    ):
        return Event(
            event_type=event_type,
            timestamp=timestamp or datetime.now(),
            correlation_id=correlation_id or uuid4(),
            session_id=session_id,
            metadata=metadata or {},
        )

    return _factory


@pytest.fixture(autouse=True)
def clear_event_handlers():
    """Clear event handlers before and after each test."""
    clear_handlers()
    yield
    clear_handlers()


@pytest.fixture
def mock_event_handler():
    """Mock event handler function."""
    return MagicMock()
