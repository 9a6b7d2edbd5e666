"""Data models for the group editor.

Lightweight dataclasses (not Pydantic) used by the editor core. The
serializable forms used for suspend/resume and for the mutation requests
live in schemas.py.

Key distinctions:
  - models.py: Internal structures (dataclasses, no validation)
  - schemas.py: Persisted snapshot and request contracts (Pydantic)
  - types.py: Collaborator protocols (typing.Protocol)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class EditorAction(str, Enum):
    """What the editor was opened to do."""

    CREATE = "create"
    EDIT = "edit"


class Status(str, Enum):
    """Lifecycle status of an editor session."""

    SELECTING_ACCOUNT = "selecting_account"  # waiting for the user to pick an account
    LOADING = "loading"  # group metadata fetch in flight
    EDITING = "editing"  # waiting for user input
    SAVING = "saving"  # mutation request being dispatched
    CLOSING = "closing"  # terminal, no more saves


@dataclass(frozen=True, eq=False)
class Member:
    """A person who is, or will be, a member of the group.

    Two members are equal when their stable lookup reference is equal, so the
    same person sourced from different raw membership records is a
    duplicate.

    Attributes:
        raw_member_id: Identifies the membership record to add or remove.
        contact_id: Identifies the underlying person.
        lookup_key: Stable lookup key of the person.
        display_name: Name shown in the member list.
        photo_ref: Optional reference to the person's photo.
    """

    raw_member_id: int
    contact_id: int
    lookup_key: str
    display_name: Optional[str] = None
    photo_ref: Optional[str] = None

    @property
    def lookup_ref(self) -> str:
        """Stable reference derived from the lookup key and contact id."""
        return f"{self.lookup_key}/{self.contact_id}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Member):
            return NotImplemented
        return self.lookup_ref == other.lookup_ref

    def __hash__(self) -> int:
        return hash(self.lookup_ref)


@dataclass(frozen=True)
class AccountIdentity:
    """Account that owns the group.

    Attributes:
        name: Account name (e.g. an email address).
        type: Account type (e.g. "com.google").
        data_set: Optional data set within the account type.
    """

    name: str
    type: str
    data_set: Optional[str] = None


@dataclass(frozen=True)
class GroupMetadata:
    """Metadata of an existing group as returned by the metadata source."""

    name: str
    account: AccountIdentity
    read_only: bool = False


@dataclass
class EditorSession:
    """Mutable working set of one editor session.

    Owned exclusively by the GroupEditor. The reconciler and the save
    coordinator only read it for the duration of a single call.

    Attributes:
        action: CREATE or EDIT.
        group_ref: Group being edited; None for CREATE.
        account: Owning account, once known.
        status: Current lifecycle status.
        pending_adds: Members staged for addition, in staging order.
        pending_removes: Members staged for removal, in staging order.
        display_list: Members currently shown; derived by the reconciler.
        existing_members: Last loaded existing members; None until loaded.
        original_name: Name loaded at session start ("" for CREATE).
        name: Current name input.
        name_read_only: Whether the group name may be edited.
    """

    action: EditorAction
    group_ref: Optional[str] = None
    account: Optional[AccountIdentity] = None
    status: Optional[Status] = None
    pending_adds: List[Member] = field(default_factory=list)
    pending_removes: List[Member] = field(default_factory=list)
    display_list: List[Member] = field(default_factory=list)
    existing_members: Optional[List[Member]] = None
    original_name: str = ""
    name: str = ""
    name_read_only: bool = False

    def submitted_name(self) -> str:
        """The name as it is sent to the save service."""
        return self.name.strip()

    def has_name_change(self) -> bool:
        return self.submitted_name() != self.original_name

    def has_membership_change(self) -> bool:
        return bool(self.pending_adds) or bool(self.pending_removes)

    def has_valid_name(self) -> bool:
        return bool(self.submitted_name())

    def updated_name(self) -> Optional[str]:
        """Return the new name, or None when it matches the original."""
        if not self.has_name_change():
            return None
        return self.submitted_name()
