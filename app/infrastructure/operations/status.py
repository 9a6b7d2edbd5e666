"""Operation status enumeration.

Status codes for operation results, used to classify the outcome reported
by external collaborators such as the save service.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        TRANSIENT_ERROR: Retryable error (network, timeout, busy store)
        PERMANENT_ERROR: Non-retryable error (validation, conflict)
        NOT_FOUND: Target resource not found (e.g. group deleted meanwhile)
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    NOT_FOUND = "not_found"
