"""Flags of the read-only group detail view.

The detail view offers "edit" and "delete" actions depending on the loaded
group and its account type, and refreshes its options menu when those flags
change.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GroupDetailFlags:
    """What the detail view may offer for the loaded group.

    Attributes:
        group_ref: Loaded group, or None when nothing is loaded.
        read_only: The group itself is read-only.
        membership_editable: The account type allows editing membership.
    """

    group_ref: Optional[str]
    read_only: bool = False
    membership_editable: bool = False

    @property
    def is_deletable(self) -> bool:
        return self.group_ref is not None and not self.read_only

    @property
    def is_editable_and_present(self) -> bool:
        return self.group_ref is not None and self.membership_editable


@dataclass(frozen=True)
class OptionsMenuState:
    """Flags the options menu was last built with."""

    deletable: bool
    editable: bool

    @classmethod
    def from_flags(cls, flags: GroupDetailFlags, visible: bool = True) -> "OptionsMenuState":
        return cls(
            deletable=flags.is_deletable and visible,
            editable=flags.is_editable_and_present and visible,
        )


def options_menu_changed(previous: OptionsMenuState, flags: GroupDetailFlags) -> bool:
    """Return True when either menu flag differs from the last built menu."""
    return (
        previous.deletable != flags.is_deletable
        or previous.editable != flags.is_editable_and_present
    )
