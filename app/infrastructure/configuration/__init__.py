"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the
application using Pydantic BaseSettings with domain-based organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Locale resolution and catalog settings class

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    # Access settings
    default_locale = settings.i18n.default_locale
    header_name = settings.i18n.header_name

    # Check environment
    if settings.is_production:
        # Production-specific logic...
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.infrastructure.i18n import I18nSettings

__all__ = ["Settings", "I18nSettings"]
