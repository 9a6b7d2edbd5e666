"""Group editor feature settings."""

import json
from typing import Annotated, Any, Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import NoDecode
import structlog

from infrastructure.configuration.base import FeatureSettings

logger = structlog.stdlib.get_logger().bind(component="config.group_editor")


class GroupEditorSettings(FeatureSettings):
    """Configuration for the group editor.

    Environment Variables:
        GROUP_EDITOR_ACCOUNT_TYPES: JSON dict of per-account-type overrides
        DEFAULT_MEMBERSHIP_EDITABLE: Membership editability for account types
            without an override
        LEGACY_CONTACTS_AUTHORITY: Authority of group references that must be
            rewritten to the legacy groups URI in save results
        LEGACY_GROUPS_URI: Base URI used for rewritten legacy references

    Account Types Configuration (GROUP_EDITOR_ACCOUNT_TYPES):
        Schema:
            {
                "com.google": {"membership_editable": true},
                "com.example.exchange": {"membership_editable": false}
            }

    Example:
        ```python
        from infrastructure.configuration import settings

        overrides = settings.group_editor.account_types.get("com.google", {})
        ```
    """

    # NoDecode hands the raw env string to _parse_account_types
    account_types: Annotated[dict[str, Any], NoDecode] = Field(
        default_factory=dict,
        alias="GROUP_EDITOR_ACCOUNT_TYPES",
        description="Per-account-type capability overrides",
    )

    default_membership_editable: bool = Field(
        default=True,
        alias="DEFAULT_MEMBERSHIP_EDITABLE",
        description="Membership editability when an account type has no override",
    )

    legacy_contacts_authority: str = Field(
        default="contacts",
        alias="LEGACY_CONTACTS_AUTHORITY",
        description="Authority that marks a group reference as legacy",
    )

    legacy_groups_uri: str = Field(
        default="content://contacts/groups",
        alias="LEGACY_GROUPS_URI",
        description="Base URI for rewritten legacy group references",
    )

    @field_validator("account_types", mode="before")
    @classmethod
    def _parse_account_types(cls, v: Optional[Any]) -> Any:
        """Parse GROUP_EDITOR_ACCOUNT_TYPES from JSON string or dict."""
        if v is None:
            return {}
        if isinstance(v, dict):
            return v
        if isinstance(v, str):
            s = v.strip()
            if (s.startswith("'") and s.endswith("'")) or (
                s.startswith('"') and s.endswith('"')
            ):
                s = s[1:-1]
            try:
                return json.loads(s) if s else {}
            except (json.JSONDecodeError, ValueError) as e:
                raise ValueError(
                    f"Invalid GROUP_EDITOR_ACCOUNT_TYPES JSON: {e} (value: {s[:80]}...)"
                ) from e
        raise ValueError("GROUP_EDITOR_ACCOUNT_TYPES must be a JSON string or a mapping")

    @field_validator("account_types", mode="after")
    @classmethod
    def _drop_malformed_entries(cls, v: Dict[str, Any]) -> Dict[str, dict]:
        """Drop entries whose override is not a mapping."""
        valid = {}
        for account_type, cfg in v.items():
            if not isinstance(cfg, dict):
                logger.warning(
                    "ignored_account_type_override",
                    account_type=account_type,
                    value_type=type(cfg).__name__,
                )
                continue
            valid[account_type] = cfg
        return valid
