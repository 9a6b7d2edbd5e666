"""Pydantic contracts for the group editor.

- SessionSnapshot: the serializable memento used to suspend and resume an
  editor session. It must round-trip exactly through to_json()/from_json().
- CreateGroupRequest / UpdateGroupRequest: the single mutation request handed
  to the save service on commit.
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from modules.group_editor.domain.errors import SnapshotError
from modules.group_editor.domain.models import (
    AccountIdentity,
    EditorAction,
    EditorSession,
    Member,
    Status,
)


class MemberSchema(BaseModel):
    """Serialized form of a Member."""

    model_config = ConfigDict(frozen=True)

    raw_member_id: int
    contact_id: int
    lookup_key: Annotated[str, Field(..., min_length=1)]
    display_name: Optional[str] = None
    photo_ref: Optional[str] = None

    @classmethod
    def from_member(cls, member: Member) -> "MemberSchema":
        return cls(
            raw_member_id=member.raw_member_id,
            contact_id=member.contact_id,
            lookup_key=member.lookup_key,
            display_name=member.display_name,
            photo_ref=member.photo_ref,
        )

    def to_member(self) -> Member:
        return Member(
            raw_member_id=self.raw_member_id,
            contact_id=self.contact_id,
            lookup_key=self.lookup_key,
            display_name=self.display_name,
            photo_ref=self.photo_ref,
        )


class AccountSchema(BaseModel):
    """Serialized form of an AccountIdentity."""

    model_config = ConfigDict(frozen=True)

    name: Annotated[
        str,
        Field(..., description="Account name", json_schema_extra={"example": "user@example.com"}),
    ]
    type: Annotated[
        str,
        Field(..., description="Account type", json_schema_extra={"example": "com.google"}),
    ]
    data_set: Optional[str] = None

    @classmethod
    def from_account(cls, account: AccountIdentity) -> "AccountSchema":
        return cls(name=account.name, type=account.type, data_set=account.data_set)

    def to_account(self) -> AccountIdentity:
        return AccountIdentity(name=self.name, type=self.type, data_set=self.data_set)


def _members(schemas: Optional[List[MemberSchema]]) -> Optional[List[Member]]:
    if schemas is None:
        return None
    return [schema.to_member() for schema in schemas]


def _schemas(members: Optional[List[Member]]) -> Optional[List[MemberSchema]]:
    if members is None:
        return None
    return [MemberSchema.from_member(member) for member in members]


class SessionSnapshot(BaseModel):
    """Serializable snapshot of an editor session."""

    action: EditorAction
    status: Status
    group_ref: Optional[str] = None
    account: Optional[AccountSchema] = None
    pending_adds: List[MemberSchema] = Field(default_factory=list)
    pending_removes: List[MemberSchema] = Field(default_factory=list)
    display_list: List[MemberSchema] = Field(default_factory=list)
    existing_members: Optional[List[MemberSchema]] = None
    original_name: str = ""
    name: str = ""
    name_read_only: bool = False

    @model_validator(mode="after")
    def _check_consistency(self):
        if self.action == EditorAction.EDIT and not self.group_ref:
            raise ValueError("an edit session requires a group_ref")
        if (
            self.action == EditorAction.CREATE
            and self.status in (Status.EDITING, Status.SAVING)
            and self.account is None
        ):
            raise ValueError("a create session past account selection requires an account")
        adds = {m.to_member() for m in self.pending_adds}
        if adds.intersection(m.to_member() for m in self.pending_removes):
            raise ValueError("a member cannot be staged for addition and removal")
        return self

    @classmethod
    def from_session(cls, session: EditorSession) -> "SessionSnapshot":
        return cls(
            action=session.action,
            status=session.status,
            group_ref=session.group_ref,
            account=(
                AccountSchema.from_account(session.account) if session.account else None
            ),
            pending_adds=_schemas(session.pending_adds),
            pending_removes=_schemas(session.pending_removes),
            display_list=_schemas(session.display_list),
            existing_members=_schemas(session.existing_members),
            original_name=session.original_name,
            name=session.name,
            name_read_only=session.name_read_only,
        )

    def to_session(self) -> EditorSession:
        return EditorSession(
            action=self.action,
            status=self.status,
            group_ref=self.group_ref,
            account=self.account.to_account() if self.account else None,
            pending_adds=_members(self.pending_adds),
            pending_removes=_members(self.pending_removes),
            display_list=_members(self.display_list),
            existing_members=_members(self.existing_members),
            original_name=self.original_name,
            name=self.name,
            name_read_only=self.name_read_only,
        )

    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_json(cls, raw: Union[str, bytes]) -> "SessionSnapshot":
        """Parse a persisted snapshot.

        Raises:
            SnapshotError: If the payload is not a valid snapshot.
        """
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            raise SnapshotError("Invalid session snapshot", errors=e.errors()) from e


class CreateGroupRequest(BaseModel):
    """Create a group under an account with its initial members."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["create"] = "create"
    account: AccountSchema
    name: Annotated[
        str,
        Field(..., min_length=1, description="Group name", json_schema_extra={"example": "Family"}),
    ]
    members_to_add: List[int] = Field(
        default_factory=list, description="Raw member ids to add"
    )


class UpdateGroupRequest(BaseModel):
    """Update an existing group's name and membership in one request."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["update"] = "update"
    group_ref: Annotated[str, Field(..., min_length=1, description="Target group")]
    updated_name: Annotated[
        Optional[str],
        Field(min_length=1, description="New name, None keeps the current one"),
    ] = None
    members_to_add: List[int] = Field(
        default_factory=list, description="Raw member ids to add"
    )
    members_to_remove: List[int] = Field(
        default_factory=list, description="Raw member ids to remove"
    )


MutationRequest = Annotated[
    Union[CreateGroupRequest, UpdateGroupRequest], Field(discriminator="kind")
]
