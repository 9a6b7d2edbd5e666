"""Shared fixtures for group editor tests.

The fake data sources record the callbacks they are given instead of
calling them, so each test decides when (and whether) a result arrives.
"""

from typing import List, Optional
from unittest.mock import MagicMock

import pytest

from infrastructure.events import clear_handlers, register_event_handler
from modules.group_editor import events as editor_events
from modules.group_editor.domain.models import AccountIdentity, GroupMetadata, Member
from modules.group_editor.state_machine import EditorCollaborators, GroupEditor


class RecordingMetadataSource:
    def __init__(self):
        self.calls = []

    def fetch_group_metadata(self, group_ref, callback):
        self.calls.append((group_ref, callback))

    def deliver(self, metadata: Optional[GroupMetadata], index: int = -1):
        self.calls[index][1](metadata)


class RecordingMembersSource:
    def __init__(self):
        self.calls = []

    def fetch_existing_members(self, group_ref, callback):
        self.calls.append((group_ref, callback))

    def deliver(self, members: List[Member], index: int = -1):
        self.calls[index][1](members)


class RecordingContactLookup:
    def __init__(self):
        self.calls = []

    def resolve_contact(self, raw_member_id, person_ref, callback):
        self.calls.append((raw_member_id, person_ref, callback))

    def deliver(self, member: Optional[Member], index: int = -1):
        self.calls[index][2](member)


class RecordingSaveService:
    def __init__(self):
        self.requests = []

    def submit(self, request):
        self.requests.append(request)


class StaticCapabilities:
    def __init__(self, editable: bool = True):
        self.editable = editable

    def is_membership_editable(self, account):
        return account is not None and self.editable


class StaticAccountDirectory:
    def __init__(self, accounts: List[AccountIdentity]):
        self.accounts = accounts

    def list_writable_accounts(self):
        return list(self.accounts)


@pytest.fixture
def member_factory():
    """Factory for Member test instances.

    Usage:
        alice = member_factory(1)
        alice_again = member_factory(1, raw_member_id=99)
    """

    def _factory(
        contact_id: int,
        raw_member_id: Optional[int] = None,
        lookup_key: Optional[str] = None,
        display_name: Optional[str] = None,
        photo_ref: Optional[str] = None,
    ) -> Member:
        return Member(
            raw_member_id=raw_member_id if raw_member_id is not None else contact_id * 10,
            contact_id=contact_id,
            lookup_key=lookup_key or f"key-{contact_id}",
            display_name=display_name or f"Person {contact_id}",
            photo_ref=photo_ref,
        )

    return _factory


@pytest.fixture
def account():
    return AccountIdentity(name="user@example.com", type="com.google")


@pytest.fixture
def metadata(account):
    return GroupMetadata(name="Family", account=account, read_only=False)


@pytest.fixture
def listener():
    return MagicMock()


@pytest.fixture
def metadata_source():
    return RecordingMetadataSource()


@pytest.fixture
def members_source():
    return RecordingMembersSource()


@pytest.fixture
def contact_lookup():
    return RecordingContactLookup()


@pytest.fixture
def save_service():
    return RecordingSaveService()


@pytest.fixture
def confirm_discard():
    return MagicMock(return_value=True)


@pytest.fixture
def collaborators(
    listener, metadata_source, members_source, contact_lookup, save_service, confirm_discard
):
    return EditorCollaborators(
        listener=listener,
        metadata_source=metadata_source,
        members_source=members_source,
        save_service=save_service,
        contact_lookup=contact_lookup,
        account_capabilities=StaticCapabilities(editable=True),
        account_directory=StaticAccountDirectory([]),
        account_chooser=MagicMock(),
        confirm_discard=confirm_discard,
    )


@pytest.fixture
def create_editor(collaborators, account):
    """A CREATE editor with a supplied account, already EDITING."""
    editor = GroupEditor.for_create(collaborators, account=account)
    editor.start()
    return editor


@pytest.fixture
def edit_editor_factory(collaborators, metadata_source, members_source, metadata):
    """Build an EDIT editor driven to EDITING with the given existing members.

    Pass ``existing=None`` to leave the members load in flight.
    """

    def _factory(existing: Optional[List[Member]] = None, group_ref: str = "content://com.android.contacts/groups/7"):
        editor = GroupEditor.for_edit(group_ref, collaborators)
        editor.start()
        metadata_source.deliver(metadata)
        if existing is not None:
            members_source.deliver(existing)
        return editor

    return _factory


@pytest.fixture
def recorded_events():
    """Collect editor events dispatched during a test."""
    clear_handlers()
    received = []
    register_event_handler(editor_events.SAVE_REQUESTED)(received.append)
    register_event_handler(editor_events.CLOSED)(received.append)
    yield received
    clear_handlers()
    register_event_handler(editor_events.CLOSED)(editor_events.log_session_closed)
