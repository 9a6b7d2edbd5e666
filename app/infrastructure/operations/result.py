"""Outcome reported by a save service once a mutation request is handled.

The editor dispatches its request fire-and-forget; the save service reports
back later with an OperationResult, which the caller maps to a SaveResult
(see modules.group_editor.results.save_result_from_operation).
"""

from dataclasses import dataclass
from typing import Any, Optional

from infrastructure.operations.status import OperationStatus


@dataclass(frozen=True)
class OperationResult:
    """Result of a mutation handled by the save service.

    Attributes:
        status: Outcome category.
        message: Detail for logs.
        data: The resulting group reference, bare or under a "group_ref" key.
        error_code: Machine-readable code of a failure, if the service has one.
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status == OperationStatus.SUCCESS

    @classmethod
    def success(
        cls, data: Optional[Any] = None, message: str = "ok"
    ) -> "OperationResult":
        return cls(status=OperationStatus.SUCCESS, message=message, data=data)

    @classmethod
    def error(
        cls,
        status: OperationStatus,
        message: str,
        error_code: Optional[str] = None,
    ) -> "OperationResult":
        """Failed result; ``status`` must not be SUCCESS."""
        if status == OperationStatus.SUCCESS:
            raise ValueError("An error result cannot carry a SUCCESS status")
        return cls(status=status, message=message, error_code=error_code)
