import pytest
import structlog

from infrastructure.i18n import facade
from infrastructure.i18n.context import clear_current_locale
from infrastructure.i18n.factory import create_message_service, default_catalog_dir
from infrastructure.services import providers
from tests.factories import make_i18n_settings, make_resolver


@pytest.fixture(autouse=True)
def reset_i18n_state():
    """Start and end every test with no ambient locale and no bound facade."""
    clear_current_locale()
    facade.reset_service()
    structlog.contextvars.clear_contextvars()
    yield
    clear_current_locale()
    facade.reset_service()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def clear_provider_caches():
    """Clear the lru_cache singletons so providers re-read the environment."""
    caches = [
        providers.get_settings,
        providers.get_locale_resolver,
        providers.get_message_catalog,
        providers.get_message_service,
    ]
    for provider in caches:
        provider.cache_clear()
    yield
    for provider in caches:
        provider.cache_clear()


@pytest.fixture
def api_resolver():
    """Resolver accepting en-US, fr and zh-CN with en-US as default."""
    return make_resolver(supported=["en-US", "fr", "zh-CN"], default_locale="en-US")


@pytest.fixture
def api_message_service(api_resolver):
    """Message service over the bundled catalogs."""
    settings = make_i18n_settings(
        supported_locales=["en-US", "fr", "zh-CN"],
        catalog_dir=str(default_catalog_dir() / "locales"),
    )
    return create_message_service(settings, resolver=api_resolver)
