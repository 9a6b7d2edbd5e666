"""Infrastructure configuration module - public API.

Centralized configuration using Pydantic BaseSettings with domain-based
organization.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    GroupEditorSettings: Group editor feature settings class

Example:
    ```python
    from infrastructure.configuration import settings

    log_level = settings.LOG_LEVEL
    authority = settings.group_editor.legacy_contacts_authority
    ```
"""

from infrastructure.configuration.features import GroupEditorSettings
from infrastructure.configuration.settings import Settings, settings

__all__ = ["Settings", "GroupEditorSettings", "settings"]
