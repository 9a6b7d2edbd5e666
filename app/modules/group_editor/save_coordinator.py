"""Translation of a committed session into one mutation request.

The coordinator holds no session state: build_request() reads the session
it is given, and dispatch() hands the request to the save service and
returns without waiting for the outcome.
"""

from typing import List, Sequence, Union

from infrastructure.logging import get_module_logger
from modules.group_editor.domain.errors import GroupEditorError, InvalidActionError
from modules.group_editor.domain.models import EditorAction, EditorSession, Member
from modules.group_editor.domain.types import SaveService
from modules.group_editor.schemas import (
    AccountSchema,
    CreateGroupRequest,
    UpdateGroupRequest,
)

logger = get_module_logger()


def raw_member_ids(members: Sequence[Member]) -> List[int]:
    return [member.raw_member_id for member in members]


def build_request(
    session: EditorSession,
) -> Union[CreateGroupRequest, UpdateGroupRequest]:
    """Build the mutation request for a committed session.

    Args:
        session: The session being committed.

    Returns:
        CreateGroupRequest for CREATE, UpdateGroupRequest for EDIT.

    Raises:
        InvalidActionError: If the session carries any other action.
        GroupEditorError: If a CREATE session has no account.
    """
    if session.action == EditorAction.CREATE:
        if session.account is None:
            raise GroupEditorError("Cannot create a group without an account")
        return CreateGroupRequest(
            account=AccountSchema.from_account(session.account),
            name=session.submitted_name(),
            members_to_add=raw_member_ids(session.pending_adds),
        )
    if session.action == EditorAction.EDIT:
        return UpdateGroupRequest(
            group_ref=session.group_ref,
            updated_name=session.updated_name(),
            members_to_add=raw_member_ids(session.pending_adds),
            members_to_remove=raw_member_ids(session.pending_removes),
        )
    raise InvalidActionError(session.action)


class SaveCoordinator:
    """Builds and dispatches mutation requests to a save service."""

    def __init__(self, save_service: SaveService):
        self._save_service = save_service

    def dispatch(
        self, request: Union[CreateGroupRequest, UpdateGroupRequest]
    ) -> None:
        """Hand ``request`` to the save service (fire-and-forget)."""
        logger.info(
            "mutation_request_dispatched",
            kind=request.kind,
            members_to_add=len(request.members_to_add),
            members_to_remove=len(getattr(request, "members_to_remove", [])),
        )
        self._save_service.submit(request)

    def commit(
        self, session: EditorSession
    ) -> Union[CreateGroupRequest, UpdateGroupRequest]:
        """Build the request for ``session`` and dispatch it."""
        request = build_request(session)
        self.dispatch(request)
        return request
