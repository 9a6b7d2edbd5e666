"""Domain layer - data models, collaborator protocols, and errors."""

from modules.group_editor.domain.errors import (
    GroupEditorError,
    InvalidActionError,
    SnapshotError,
)
from modules.group_editor.domain.models import (
    AccountIdentity,
    EditorAction,
    EditorSession,
    GroupMetadata,
    Member,
    Status,
)

__all__ = [
    "AccountIdentity",
    "EditorAction",
    "EditorSession",
    "GroupMetadata",
    "Member",
    "Status",
    "GroupEditorError",
    "InvalidActionError",
    "SnapshotError",
]
