"""Group editor module.

Lets a user create or edit a named group and stage membership additions and
removals before committing them as one mutation request.

Features:
- Editor state machine with suspend/resume snapshots
- Reconciliation of asynchronously loaded members with staged edits
- Single create/update request per commit, dispatched fire-and-forget
- Stale asynchronous results dropped once the editor has moved on
"""

from modules.group_editor.domain import (
    AccountIdentity,
    EditorAction,
    EditorSession,
    GroupEditorError,
    GroupMetadata,
    InvalidActionError,
    Member,
    SnapshotError,
    Status,
)
from modules.group_editor.reconciler import reconcile
from modules.group_editor.results import SaveResult, save_result_from_operation
from modules.group_editor.save_coordinator import SaveCoordinator, build_request
from modules.group_editor.schemas import (
    CreateGroupRequest,
    SessionSnapshot,
    UpdateGroupRequest,
)
from modules.group_editor.state_machine import EditorCollaborators, GroupEditor

__all__ = [
    # Editor
    "GroupEditor",
    "EditorCollaborators",
    # Domain
    "AccountIdentity",
    "EditorAction",
    "EditorSession",
    "GroupMetadata",
    "Member",
    "Status",
    # Errors
    "GroupEditorError",
    "InvalidActionError",
    "SnapshotError",
    # Reconciliation and saving
    "reconcile",
    "build_request",
    "SaveCoordinator",
    "SaveResult",
    "save_result_from_operation",
    # Contracts
    "CreateGroupRequest",
    "UpdateGroupRequest",
    "SessionSnapshot",
]
