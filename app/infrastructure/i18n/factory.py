"""Factory functions for creating i18n components.

Provides convenience functions for building the catalog, resolver and
message service from application settings.
"""

from pathlib import Path
from typing import Optional

from infrastructure.configuration import I18nSettings
from infrastructure.i18n.catalog import MessageCatalog
from infrastructure.i18n.loader import YAMLTranslationLoader
from infrastructure.i18n.resolvers import RequestLocaleResolver
from infrastructure.i18n.service import MessageResolutionService
from infrastructure.logging import get_module_logger

logger = get_module_logger()


def default_catalog_dir() -> Path:
    """Application root, which holds the bundled locales/ directory."""
    # This file is at .../app/infrastructure/i18n/factory.py
    return Path(__file__).resolve().parents[2]


def create_message_catalog(
    settings: I18nSettings,
    root_dir: Optional[Path] = None,
) -> MessageCatalog:
    """Create a YAML-backed MessageCatalog.

    Args:
        settings: i18n settings (base names, encoding, cache duration).
        root_dir: Directory the base names are relative to. Defaults to
            settings.catalog_dir, then the application root.

    Returns:
        MessageCatalog: Configured catalog. Bundles load lazily.

    Raises:
        ValueError: If the catalog directory does not exist.
    """
    if root_dir is None:
        root_dir = Path(settings.catalog_dir) if settings.catalog_dir else default_catalog_dir()

    loader = YAMLTranslationLoader(
        root_dir=root_dir,
        base_names=settings.base_names,
        encoding=settings.encoding,
    )
    return MessageCatalog(loader=loader, cache_duration=settings.cache_duration)


def create_message_service(
    settings: I18nSettings,
    catalog: Optional[MessageCatalog] = None,
    resolver: Optional[RequestLocaleResolver] = None,
) -> MessageResolutionService:
    """Create a MessageResolutionService.

    Args:
        settings: i18n settings.
        catalog: Pre-built catalog; created from settings when omitted.
        resolver: Pre-built resolver; created from settings when omitted.

    Returns:
        MessageResolutionService: Configured service.
    """
    catalog = catalog or create_message_catalog(settings)
    resolver = resolver or RequestLocaleResolver.from_settings(settings)

    logger.info(
        "message_service_created",
        default_locale=resolver.default_locale.tag,
        supported_locales=sorted(resolver.policy.supported),
        use_code_as_default_message=settings.use_code_as_default_message,
    )
    return MessageResolutionService(catalog=catalog, resolver=resolver, settings=settings)
