"""Collaborator protocols for the group editor.

The editor core talks to its surroundings only through these narrow
interfaces. Asynchronous collaborators deliver their result later by
invoking the callback they were given; they may also invoke it before
returning.
"""

from typing import Callable, List, Optional, Protocol, Sequence

from modules.group_editor.domain.models import AccountIdentity, GroupMetadata, Member


MetadataCallback = Callable[[Optional[GroupMetadata]], None]
MembersCallback = Callable[[List[Member]], None]
ContactCallback = Callable[[Optional[Member]], None]
ConfirmDiscard = Callable[[], bool]


class MetadataSource(Protocol):
    """Supplies group metadata; None means the group is absent or deleted."""

    def fetch_group_metadata(self, group_ref: str, callback: MetadataCallback) -> None:
        ...


class MembersSource(Protocol):
    """Supplies the existing members of a group (an empty list is valid)."""

    def fetch_existing_members(self, group_ref: str, callback: MembersCallback) -> None:
        ...


class ContactLookup(Protocol):
    """Resolves a picked suggestion to a Member, or None when not found."""

    def resolve_contact(
        self, raw_member_id: int, person_ref: str, callback: ContactCallback
    ) -> None:
        ...


class SaveService(Protocol):
    """Durably applies a mutation request.

    The outcome is reported out of band to whatever opened the editor.
    """

    def submit(self, request) -> None:
        ...


class AccountCapabilities(Protocol):
    """Answers whether group membership can be edited for an account."""

    def is_membership_editable(self, account: Optional[AccountIdentity]) -> bool:
        ...


class AccountDirectory(Protocol):
    """Lists the accounts a new group can be written to."""

    def list_writable_accounts(self) -> List[AccountIdentity]:
        ...


class AccountChooser(Protocol):
    """Presents an account choice to the user.

    The answer comes back through GroupEditor.choose_account() or
    GroupEditor.cancel_account_selection().
    """

    def choose(self, accounts: Sequence[AccountIdentity]) -> None:
        ...


class EditorListener(Protocol):
    """Receives the single terminal report of an editor session."""

    def on_group_not_found(self) -> None:
        ...

    def on_accounts_not_found(self) -> None:
        ...

    def on_account_selection_cancelled(self) -> None:
        ...

    def on_reverted(self) -> None:
        ...

    def on_save_finished(self, result) -> None:
        ...
