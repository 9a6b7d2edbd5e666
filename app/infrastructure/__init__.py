"""Infrastructure modules for the group editor.

Centralized infrastructure components:
- configuration: Settings management (settings, GroupEditorSettings)
- logging: Structured logging and session context (get_module_logger)
- events: In-process event dispatcher
- operations: Operation results reported by collaborators
"""

# Configuration
from infrastructure.configuration import settings

# Logging
from infrastructure.logging import get_module_logger

# Operations
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    # Configuration
    "settings",
    # Logging
    "get_module_logger",
    # Operations
    "OperationResult",
    "OperationStatus",
]
