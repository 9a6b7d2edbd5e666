"""Save results reported back to whatever opened the editor.

A save either completes without touching the store (nothing changed), or is
reported later by the save service. Both end up as a SaveResult. Group
references under the legacy contacts authority are rewritten to the legacy
groups URI so old callers get back the form they asked for.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

from infrastructure.configuration import GroupEditorSettings, settings
from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult

logger = get_module_logger()


@dataclass(frozen=True)
class SaveResult:
    """Outcome of a commit.

    Attributes:
        success: Whether the group was saved (or needed no save).
        group_ref: Reference of the saved group, rewritten for legacy callers.
        had_changes: Whether a mutation was requested at all.
        message: Human-friendly detail for logs.
    """

    success: bool
    group_ref: Optional[str]
    had_changes: bool
    message: str = ""


def legacy_group_ref(
    group_ref: str, config: Optional[GroupEditorSettings] = None
) -> str:
    """Rewrite ``group_ref`` to the legacy groups URI when it uses the legacy authority.

    The last path segment of the reference is taken as the group id.
    """
    cfg = config if config is not None else settings.group_editor
    parsed = urlparse(group_ref)
    if parsed.netloc != cfg.legacy_contacts_authority:
        return group_ref
    group_id = parsed.path.rstrip("/").rsplit("/", 1)[-1]
    return f"{cfg.legacy_groups_uri.rstrip('/')}/{group_id}"


def build_save_result(
    had_changes: bool,
    group_ref: Optional[str],
    config: Optional[GroupEditorSettings] = None,
) -> SaveResult:
    """Build the result of a save.

    Args:
        had_changes: Whether a mutation was requested.
        group_ref: Resulting group reference; None means the save failed.
        config: Settings to read; defaults to settings.group_editor.
    """
    if not group_ref:
        logger.info("group_save_failed", had_changes=had_changes)
        return SaveResult(
            success=False,
            group_ref=None,
            had_changes=had_changes,
            message="group could not be saved",
        )
    return SaveResult(
        success=True,
        group_ref=legacy_group_ref(group_ref, config),
        had_changes=had_changes,
        message="saved" if had_changes else "no changes",
    )


def save_result_from_operation(
    result: OperationResult, config: Optional[GroupEditorSettings] = None
) -> SaveResult:
    """Map the save service's OperationResult to a SaveResult.

    A successful result carries the resulting group reference in ``data``,
    either directly or under the "group_ref" key.
    """
    if not result.is_success:
        logger.warning(
            "save_service_reported_failure",
            status=result.status.value,
            error_code=result.error_code,
            message=result.message,
        )
        return SaveResult(
            success=False, group_ref=None, had_changes=True, message=result.message
        )

    data = result.data
    group_ref = data.get("group_ref") if isinstance(data, dict) else data
    return build_save_result(True, group_ref, config)
