"""Account capability lookup with config-driven overrides.

Only one capability matters to the editor: whether group membership can be
edited for an account's type. Account types are editable unless
``settings.group_editor.account_types`` says otherwise.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from infrastructure.configuration import GroupEditorSettings, settings
from infrastructure.logging import get_module_logger
from modules.group_editor.domain.models import AccountIdentity

logger = get_module_logger()


@dataclass(frozen=True)
class AccountTypeCapabilities:
    """Capability flags of an account type.

    Attributes:
        membership_editable: Members can be added to and removed from groups.
    """

    membership_editable: bool = True


def load_capabilities(
    account_type: str, config: Optional[GroupEditorSettings] = None
) -> AccountTypeCapabilities:
    """Load the capabilities of ``account_type`` with config overrides applied.

    Args:
        account_type: The account type (e.g. "com.google").
        config: Settings to read; defaults to settings.group_editor.

    Returns:
        AccountTypeCapabilities with overrides merged over the defaults.
    """
    cfg = config if config is not None else settings.group_editor
    base: Dict[str, Any] = {"membership_editable": cfg.default_membership_editable}

    override = cfg.account_types.get(account_type, {})
    unknown = sorted(set(override) - set(base))
    if unknown:
        logger.warning(
            "unknown_capability_override",
            account_type=account_type,
            keys=unknown,
        )
    for key in base:
        if key in override:
            base[key] = bool(override[key])

    return AccountTypeCapabilities(**base)


class ConfiguredAccountCapabilities:
    """AccountCapabilities backed by the group editor settings."""

    def __init__(self, config: Optional[GroupEditorSettings] = None):
        self._config = config

    def is_membership_editable(self, account: Optional[AccountIdentity]) -> bool:
        """Return whether membership is editable; False while no account is set."""
        if account is None or not account.type:
            return False
        return load_capabilities(account.type, self._config).membership_editable
