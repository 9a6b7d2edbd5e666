"""Unit tests for infrastructure event models."""

import pytest
from datetime import datetime
from uuid import uuid4

from infrastructure.events.models import Event

pytestmark = pytest.mark.unit


class TestEvent:
    """Tests for Event base class."""

    def test_event_creation_with_all_fields(self, event_factory):
        event = event_factory(
            event_type="group_editor.closed",
            session_id="abc",
            metadata={"reason": "reverted"},
        )

        assert event.event_type == "group_editor.closed"
        assert event.session_id == "abc"
        assert event.metadata == {"reason": "reverted"}
        assert isinstance(event.timestamp, datetime)

    def test_event_creation_with_defaults(self):
        event = Event(event_type="test.event")

        assert event.session_id == ""
        assert event.metadata == {}
        assert event.correlation_id is not None

    def test_event_to_dict_serialization(self, event_factory):
        event = event_factory()
        event_dict = event.to_dict()

        assert event_dict["session_id"] == "session-1"
        assert isinstance(event_dict["timestamp"], str)
        assert isinstance(event_dict["correlation_id"], str)

    def test_event_hash_uses_correlation_id_and_timestamp(self):
        correlation_id = uuid4()
        timestamp = datetime(2024, 1, 1, 12, 0)

        first = Event(event_type="a", timestamp=timestamp, correlation_id=correlation_id)
        second = Event(event_type="b", timestamp=timestamp, correlation_id=correlation_id)

        assert hash(first) == hash(second)
