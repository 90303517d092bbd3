"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache

from infrastructure.configuration import Settings
from infrastructure.i18n.catalog import MessageCatalog
from infrastructure.i18n.errors import I18nNotConfiguredError
from infrastructure.i18n.factory import create_message_catalog, create_message_service
from infrastructure.i18n.resolvers import RequestLocaleResolver
from infrastructure.i18n.service import MessageResolutionService


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    This is the single source of truth for settings across the entire application.
    The @lru_cache decorator ensures only ONE instance is created per process.

    Application code should use the DI type alias for testability:
        from infrastructure.services import SettingsDep
        @router.get("/config")
        def get_config(settings: SettingsDep):
            return settings.i18n.model_dump()

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_locale_resolver() -> RequestLocaleResolver:
    """
    Get application-scoped request locale resolver singleton.

    Returns:
        RequestLocaleResolver: Resolver built from settings.i18n.
    """
    return RequestLocaleResolver.from_settings(get_settings().i18n)


@lru_cache
def get_message_catalog() -> MessageCatalog:
    """
    Get application-scoped message catalog singleton.

    Returns:
        MessageCatalog: YAML catalog built from settings.i18n.
    """
    return create_message_catalog(get_settings().i18n)


@lru_cache
def get_message_service() -> MessageResolutionService:
    """
    Get application-scoped message resolution service singleton.

    Returns:
        MessageResolutionService: Service sharing the resolver and catalog
        singletons.

    Raises:
        I18nNotConfiguredError: If i18n is disabled (I18N_ENABLED=false).

    Usage:
        @router.get("/greeting")
        def greeting(messages: MessageServiceDep):
            return {"message": messages.get_message("greeting.hello", ["Ada"])}
    """
    settings = get_settings()
    if not settings.i18n.enabled:
        raise I18nNotConfiguredError("i18n is disabled (I18N_ENABLED=false)")

    return create_message_service(
        settings.i18n,
        catalog=get_message_catalog(),
        resolver=get_locale_resolver(),
    )
