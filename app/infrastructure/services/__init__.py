"""
Dependency injection services.

Provides type aliases and provider functions for FastAPI dependency injection.
"""

from infrastructure.services.dependencies import (
    SettingsDep,
    LocaleResolverDep,
    MessageServiceDep,
    RequestLocaleDep,
    get_request_locale,
)
from infrastructure.services.providers import (
    get_settings,
    get_locale_resolver,
    get_message_catalog,
    get_message_service,
)

__all__ = [
    "SettingsDep",
    "LocaleResolverDep",
    "MessageServiceDep",
    "RequestLocaleDep",
    "get_request_locale",
    "get_settings",
    "get_locale_resolver",
    "get_message_catalog",
    "get_message_service",
]
