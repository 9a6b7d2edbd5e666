"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.group_editor import GroupEditorSettings

__all__ = [
    "GroupEditorSettings",
]
