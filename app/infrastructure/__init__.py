"""Infrastructure modules for the application.

Centralized infrastructure components:
- configuration: Settings management (Settings, I18nSettings)
- logging: Structured logging and request context binding
- i18n: Locale resolution and message lookup
- services: Dependency injection providers (get_settings, MessageServiceDep)
"""
