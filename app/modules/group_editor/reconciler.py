"""Merge of the existing members with the staged local edits.

Pure functions: no state is kept between calls and the inputs are never
mutated, so calling them repeatedly with the same inputs yields the same
list.
"""

from typing import Iterable, List, Optional, Sequence, Set

from modules.group_editor.domain.models import Member


def _unique(members: Iterable[Member]) -> List[Member]:
    seen: Set[Member] = set()
    result = []
    for member in members:
        if member in seen:
            continue
        seen.add(member)
        result.append(member)
    return result


def reconcile(
    existing: Optional[Sequence[Member]],
    pending_adds: Sequence[Member],
    pending_removes: Sequence[Member],
) -> List[Member]:
    """Build the list of members shown to the user.

    Args:
        existing: Last loaded existing members, or None when not loaded yet.
        pending_adds: Members staged for addition, in staging order.
        pending_removes: Members staged for removal.

    Returns:
        Existing members in load order followed by pending adds in staging
        order, without the pending removes and without duplicates. When
        ``existing`` is None only the pending adds are returned.
    """
    if existing is None:
        return _unique(pending_adds)

    removed = set(pending_removes)
    return [
        member
        for member in _unique(list(existing) + list(pending_adds))
        if member not in removed
    ]


def suggestion_exclusions(display_list: Iterable[Member]) -> Set[int]:
    """Return the contact ids that must not be offered as suggestions."""
    return {member.contact_id for member in display_list}
