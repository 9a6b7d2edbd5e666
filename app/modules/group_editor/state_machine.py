"""The group editor state machine.

GroupEditor owns one EditorSession and applies the events that change it:
entry, account selection, asynchronous load results, staged member edits,
name edits, commit and revert. Every event runs to completion under the
editor's lock before the next one is accepted, so hosts that deliver events
from several threads stay serialized. The lock is re-entrant because data
sources may invoke their callback before returning.

Status transitions:

    SELECTING_ACCOUNT -> EDITING | CLOSING
    LOADING           -> EDITING | CLOSING
    EDITING           -> SAVING  | CLOSING
    SAVING            -> CLOSING
"""

import functools
import threading
import uuid
from dataclasses import dataclass
from typing import List, Optional, Set, Union

from infrastructure.logging import bind_session_context, get_module_logger
from modules.group_editor import events, reconciler
from modules.group_editor.capabilities import ConfiguredAccountCapabilities
from modules.group_editor.domain.errors import GroupEditorError, InvalidActionError
from modules.group_editor.domain.models import (
    AccountIdentity,
    EditorAction,
    EditorSession,
    GroupMetadata,
    Member,
    Status,
)
from modules.group_editor.domain.types import (
    AccountCapabilities,
    AccountChooser,
    AccountDirectory,
    ConfirmDiscard,
    ContactLookup,
    EditorListener,
    MembersSource,
    MetadataSource,
    SaveService,
)
from modules.group_editor.events import CloseReason
from modules.group_editor.loaders import LoadKind, LoadTracker
from modules.group_editor.results import SaveResult, build_save_result
from modules.group_editor.save_coordinator import SaveCoordinator
from modules.group_editor.schemas import SessionSnapshot

logger = get_module_logger()


@dataclass
class EditorCollaborators:
    """External collaborators an editor talks to.

    Attributes:
        listener: Receives the terminal report of the session.
        metadata_source: Supplies group metadata (EDIT sessions).
        members_source: Supplies existing members (EDIT sessions).
        save_service: Receives the mutation request on commit.
        contact_lookup: Resolves picked suggestions to members.
        account_capabilities: Answers whether membership is editable.
        account_directory: Lists writable accounts (CREATE without account).
        account_chooser: Presents a choice between several accounts.
        confirm_discard: Asks the user to confirm discarding changes.
    """

    listener: EditorListener
    metadata_source: Optional[MetadataSource] = None
    members_source: Optional[MembersSource] = None
    save_service: Optional[SaveService] = None
    contact_lookup: Optional[ContactLookup] = None
    account_capabilities: Optional[AccountCapabilities] = None
    account_directory: Optional[AccountDirectory] = None
    account_chooser: Optional[AccountChooser] = None
    confirm_discard: Optional[ConfirmDiscard] = None


def session_event(func):
    """Run an editor event under the session lock and logging context."""

    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            with bind_session_context(
                session_id=self.session_id,
                action=self._session.action.value,
                group_ref=self._session.group_ref,
            ):
                return func(self, *args, **kwargs)

    return wrapper


class GroupEditor:
    """State machine for creating or editing one group and its members."""

    def __init__(
        self,
        session: EditorSession,
        collaborators: EditorCollaborators,
        session_id: Optional[str] = None,
    ):
        if session.action not in (EditorAction.CREATE, EditorAction.EDIT):
            raise InvalidActionError(session.action)
        if session.action == EditorAction.EDIT and not session.group_ref:
            raise GroupEditorError("Editing a group requires a group_ref")

        self.session_id = session_id or str(uuid.uuid4())
        self._session = session
        self._collaborators = collaborators
        self._capabilities = (
            collaborators.account_capabilities or ConfiguredAccountCapabilities()
        )
        self._loads = LoadTracker()
        self._lock = threading.RLock()

    @classmethod
    def for_create(
        cls,
        collaborators: EditorCollaborators,
        account: Optional[AccountIdentity] = None,
        session_id: Optional[str] = None,
    ) -> "GroupEditor":
        """Editor for a new group, optionally under a caller-supplied account."""
        session = EditorSession(action=EditorAction.CREATE, account=account)
        return cls(session, collaborators, session_id=session_id)

    @classmethod
    def for_edit(
        cls,
        group_ref: str,
        collaborators: EditorCollaborators,
        session_id: Optional[str] = None,
    ) -> "GroupEditor":
        """Editor for an existing group."""
        session = EditorSession(action=EditorAction.EDIT, group_ref=group_ref)
        return cls(session, collaborators, session_id=session_id)

    @classmethod
    def resume(
        cls,
        snapshot: Union[SessionSnapshot, str, bytes],
        collaborators: EditorCollaborators,
        session_id: Optional[str] = None,
    ) -> "GroupEditor":
        """Rebuild an editor from a persisted snapshot.

        A LOADING session re-issues the metadata fetch. An EDITING session
        rebuilds its display list from the persisted lists without fetching.
        Other statuses are restored as they were.

        Raises:
            SnapshotError: If a serialized snapshot is invalid.
        """
        if not isinstance(snapshot, SessionSnapshot):
            snapshot = SessionSnapshot.from_json(snapshot)
        editor = cls(snapshot.to_session(), collaborators, session_id=session_id)
        editor._resume()
        return editor

    # ------------------------------------------------------------------
    # Read access

    @property
    def status(self) -> Optional[Status]:
        return self._session.status

    @property
    def action(self) -> EditorAction:
        return self._session.action

    @property
    def group_ref(self) -> Optional[str]:
        return self._session.group_ref

    @property
    def account(self) -> Optional[AccountIdentity]:
        return self._session.account

    @property
    def name(self) -> str:
        return self._session.name

    @property
    def name_read_only(self) -> bool:
        return self._session.name_read_only

    @property
    def display_list(self) -> List[Member]:
        return list(self._session.display_list)

    @property
    def pending_adds(self) -> List[Member]:
        return list(self._session.pending_adds)

    @property
    def pending_removes(self) -> List[Member]:
        return list(self._session.pending_removes)

    @property
    def existing_members(self) -> Optional[List[Member]]:
        existing = self._session.existing_members
        return None if existing is None else list(existing)

    def has_name_change(self) -> bool:
        return self._session.has_name_change()

    def has_membership_change(self) -> bool:
        return self._session.has_membership_change()

    def has_valid_name(self) -> bool:
        return self._session.has_valid_name()

    def updated_name(self) -> Optional[str]:
        return self._session.updated_name()

    def is_membership_editable(self) -> bool:
        return self._capabilities.is_membership_editable(self._session.account)

    def suggestion_exclusions(self) -> Set[int]:
        """Contact ids that must not be suggested for addition."""
        return reconciler.suggestion_exclusions(self._session.display_list)

    def snapshot(self) -> SessionSnapshot:
        """Capture the session for suspend/resume."""
        with self._lock:
            if self._session.status is None:
                raise GroupEditorError("Cannot snapshot an editor that was not started")
            return SessionSnapshot.from_session(self._session)

    # ------------------------------------------------------------------
    # Entry

    @session_event
    def start(self) -> None:
        """Enter the initial status for the session's action."""
        if self._session.status is not None:
            logger.debug("editor_already_started", status=self._session.status.value)
            return

        logger.info("group_editor_started")
        if self._session.action == EditorAction.EDIT:
            self._start_metadata_load()
        elif self._session.account is not None:
            self._setup_editor_for_account()
        else:
            self._select_account()

    @session_event
    def _resume(self) -> None:
        status = self._session.status
        logger.info("group_editor_resumed", status=status.value)
        if status == Status.LOADING:
            self._start_metadata_load()
        elif status == Status.EDITING:
            self._refresh_display()

    def _select_account(self) -> None:
        directory = self._collaborators.account_directory
        accounts = directory.list_writable_accounts() if directory else []

        if not accounts:
            logger.error("no_writable_accounts_found")
            self._close(CloseReason.ACCOUNTS_NOT_FOUND)
            self._collaborators.listener.on_accounts_not_found()
            return

        if len(accounts) == 1:
            # Single writable account: no need to ask
            self._session.account = accounts[0]
            self._setup_editor_for_account()
            return

        chooser = self._collaborators.account_chooser
        if chooser is None:
            raise GroupEditorError(
                "Several writable accounts but no account chooser was provided"
            )
        self._session.status = Status.SELECTING_ACCOUNT
        logger.info("account_selection_requested", account_count=len(accounts))
        chooser.choose(accounts)

    @session_event
    def choose_account(self, account: AccountIdentity) -> bool:
        """Apply the account the user picked."""
        if self._session.status != Status.SELECTING_ACCOUNT:
            logger.debug("account_choice_ignored", status=self._status_value())
            return False
        self._session.account = account
        self._setup_editor_for_account()
        return True

    @session_event
    def cancel_account_selection(self) -> bool:
        """Close the session; a group cannot be created without an account."""
        if self._session.status != Status.SELECTING_ACCOUNT:
            logger.debug("account_cancel_ignored", status=self._status_value())
            return False
        self._close(CloseReason.ACCOUNT_SELECTION_CANCELLED)
        self._collaborators.listener.on_account_selection_cancelled()
        return True

    def _setup_editor_for_account(self) -> None:
        self._session.status = Status.EDITING
        self._refresh_display()
        logger.info(
            "editor_ready",
            account_type=self._session.account.type if self._session.account else None,
            membership_editable=self.is_membership_editable(),
        )

    # ------------------------------------------------------------------
    # Asynchronous loads

    def _start_metadata_load(self) -> None:
        self._session.status = Status.LOADING
        ticket = self._loads.issue(LoadKind.METADATA)
        logger.debug("metadata_load_issued", ticket=ticket)
        self._collaborators.metadata_source.fetch_group_metadata(
            self._session.group_ref,
            functools.partial(self._on_metadata_loaded, ticket),
        )

    @session_event
    def _on_metadata_loaded(self, ticket: int, metadata: Optional[GroupMetadata]) -> None:
        if (
            not self._loads.complete(LoadKind.METADATA, ticket)
            or self._session.status != Status.LOADING
        ):
            self._drop_stale(LoadKind.METADATA, ticket)
            return

        if metadata is None:
            logger.warning("group_not_found")
            self._close(CloseReason.GROUP_NOT_FOUND)
            self._collaborators.listener.on_group_not_found()
            return

        self._session.original_name = metadata.name
        self._session.name = metadata.name
        self._session.account = metadata.account
        self._session.name_read_only = metadata.read_only
        self._setup_editor_for_account()
        # Members are only fetched once the group is known to exist
        self._start_members_load()

    def _start_members_load(self) -> None:
        ticket = self._loads.issue(LoadKind.MEMBERS)
        logger.debug("members_load_issued", ticket=ticket)
        self._collaborators.members_source.fetch_existing_members(
            self._session.group_ref,
            functools.partial(self._on_members_loaded, ticket),
        )

    @session_event
    def _on_members_loaded(self, ticket: int, members: List[Member]) -> None:
        if (
            not self._loads.complete(LoadKind.MEMBERS, ticket)
            or self._session.status != Status.EDITING
        ):
            self._drop_stale(LoadKind.MEMBERS, ticket)
            return

        self._session.existing_members = list(members)
        self._refresh_display()
        logger.info(
            "existing_members_loaded",
            member_count=len(members),
            display_count=len(self._session.display_list),
        )

    @session_event
    def add_member_from_suggestion(self, raw_member_id: int, person_ref: str) -> bool:
        """Resolve a picked suggestion and add it once it arrives.

        A newer pick supersedes any lookup still in flight.
        """
        if self._session.status != Status.EDITING:
            logger.debug("suggestion_ignored", status=self._status_value())
            return False
        ticket = self._loads.issue(LoadKind.CONTACT)
        logger.debug("contact_lookup_issued", ticket=ticket, raw_member_id=raw_member_id)
        self._collaborators.contact_lookup.resolve_contact(
            raw_member_id,
            person_ref,
            functools.partial(self._on_contact_resolved, ticket),
        )
        return True

    @session_event
    def _on_contact_resolved(self, ticket: int, member: Optional[Member]) -> None:
        if (
            not self._loads.complete(LoadKind.CONTACT, ticket)
            or self._session.status != Status.EDITING
        ):
            self._drop_stale(LoadKind.CONTACT, ticket)
            return
        if member is None:
            logger.info("suggested_contact_not_found", ticket=ticket)
            return
        self.add_member(member)

    def _drop_stale(self, kind: LoadKind, ticket: int) -> None:
        logger.debug(
            "stale_load_result_dropped",
            kind=kind.value,
            ticket=ticket,
            status=self._status_value(),
        )

    # ------------------------------------------------------------------
    # Staged edits

    @session_event
    def add_member(self, member: Member) -> bool:
        """Stage ``member`` for addition.

        Returns:
            True if the session changed; False for a duplicate or when the
            editor is not accepting edits.
        """
        session = self._session
        if session.status != Status.EDITING:
            logger.debug("add_member_ignored", status=self._status_value())
            return False
        if member in session.display_list:
            logger.debug("duplicate_member_ignored", lookup_ref=member.lookup_ref)
            return False

        if member in session.pending_removes:
            # Undo of a pending removal: it is already an existing member
            session.pending_removes.remove(member)
            logger.info("member_removal_undone", lookup_ref=member.lookup_ref)
        elif member not in session.pending_adds:
            session.pending_adds.append(member)
            logger.info("member_staged_for_add", lookup_ref=member.lookup_ref)

        self._refresh_display()
        return True

    @session_event
    def remove_member(self, member: Member) -> bool:
        """Stage ``member`` for removal.

        Returns:
            True if the session changed; False when the member is not present
            or the editor is not accepting edits.
        """
        session = self._session
        if session.status != Status.EDITING:
            logger.debug("remove_member_ignored", status=self._status_value())
            return False

        existing = session.existing_members or []
        changed = False
        if member in session.pending_adds:
            # Never persisted: dropping the staged add is enough
            session.pending_adds.remove(member)
            changed = True
            logger.info("member_add_unstaged", lookup_ref=member.lookup_ref)
        if member in existing and member not in session.pending_removes:
            session.pending_removes.append(member)
            changed = True
            logger.info("member_staged_for_removal", lookup_ref=member.lookup_ref)

        if not changed:
            logger.debug("absent_member_ignored", lookup_ref=member.lookup_ref)
            return False
        self._refresh_display()
        return True

    @session_event
    def set_name(self, name: str) -> bool:
        """Update the group name input."""
        if self._session.status != Status.EDITING:
            logger.debug("name_change_ignored", status=self._status_value())
            return False
        if self._session.name_read_only:
            logger.debug("read_only_name_change_ignored")
            return False
        self._session.name = name
        return True

    def _refresh_display(self) -> None:
        session = self._session
        session.display_list = reconciler.reconcile(
            session.existing_members, session.pending_adds, session.pending_removes
        )

    # ------------------------------------------------------------------
    # Commit and revert

    @session_event
    def request_commit(self) -> bool:
        """Commit the session.

        Returns:
            True when the session closed as saved (including the no-change
            case); False when the commit was rejected or could not be handed
            to the save service.
        """
        session = self._session
        if session.status in (Status.SAVING, Status.CLOSING):
            logger.debug("commit_ignored", status=self._status_value())
            return False
        if session.status != Status.EDITING or not session.has_valid_name():
            logger.info(
                "commit_rejected",
                status=self._status_value(),
                valid_name=session.has_valid_name(),
            )
            self._close(CloseReason.INVALID_COMMIT)
            self._collaborators.listener.on_reverted()
            return False

        # Loads still in flight would only refresh a closing editor
        self._loads.cancel_all()

        if not session.has_name_change() and not session.has_membership_change():
            self._close(CloseReason.NO_CHANGES)
            self._collaborators.listener.on_save_finished(
                build_save_result(False, session.group_ref)
            )
            return True

        session.status = Status.SAVING
        events.emit(
            events.SAVE_REQUESTED,
            self.session_id,
            session,
            members_to_add=len(session.pending_adds),
            members_to_remove=len(session.pending_removes),
            name_changed=session.has_name_change(),
        )
        coordinator = SaveCoordinator(self._collaborators.save_service)
        try:
            coordinator.commit(session)
        except GroupEditorError:
            self._close(CloseReason.SAVE_FAILED)
            raise
        except Exception as e:
            logger.exception("save_dispatch_failed", error=str(e))
            self._close(CloseReason.SAVE_FAILED)
            self._collaborators.listener.on_save_finished(
                SaveResult(
                    success=False,
                    group_ref=None,
                    had_changes=True,
                    message=f"save could not be dispatched: {e}",
                )
            )
            return False

        self._close(CloseReason.SAVE_DISPATCHED)
        return True

    @session_event
    def request_done(self) -> bool:
        """Handle the "done" action.

        Commits when the account allows membership edits; otherwise there is
        nothing that could be saved and the session is reverted.
        """
        if not self.is_membership_editable():
            if self._session.status in (Status.SAVING, Status.CLOSING):
                return False
            self._revert_now()
            return True
        return self.request_commit()

    @session_event
    def request_revert(self) -> bool:
        """Discard the session, asking for confirmation if anything changed.

        Returns:
            True if the session closed.
        """
        session = self._session
        if session.status in (Status.SAVING, Status.CLOSING):
            logger.debug("revert_ignored", status=self._status_value())
            return False

        if session.has_name_change() or session.has_membership_change():
            confirm = self._collaborators.confirm_discard
            if confirm is None or not confirm():
                logger.info("revert_not_confirmed")
                return False

        self._revert_now()
        return True

    def _revert_now(self) -> None:
        self._close(CloseReason.REVERTED)
        self._collaborators.listener.on_reverted()

    def _close(self, reason: CloseReason) -> None:
        self._loads.cancel_all()
        self._session.status = Status.CLOSING
        logger.info("group_editor_closing", reason=reason.value)
        events.emit(events.CLOSED, self.session_id, self._session, reason=reason.value)

    def _status_value(self) -> Optional[str]:
        status = self._session.status
        return status.value if status else None
