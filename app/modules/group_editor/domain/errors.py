"""Errors for the group editor module."""

from typing import Any


class GroupEditorError(Exception):
    """Base class for group editor errors."""


class InvalidActionError(GroupEditorError, ValueError):
    """Raised when a session carries an action the editor cannot handle.

    Attributes:
        action: the offending action value
    """

    def __init__(self, action: Any):
        super().__init__(f"Invalid editor action: {action!r}")
        self.action = action


class SnapshotError(GroupEditorError):
    """Raised when a persisted session snapshot cannot be restored.

    Attributes:
        message: human-friendly message
        errors: validation errors reported while parsing the snapshot
    """

    def __init__(self, message: str, errors: Any = None):
        super().__init__(message)
        self.errors = errors
