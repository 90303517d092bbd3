"""
Unit tests for dependency injection providers.

Tests cover:
- Provider caching behavior
- i18n providers built from settings
- Dependency type aliases with FastAPI dependency injection
- Dependency override pattern for testing
"""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from infrastructure.configuration import Settings
from infrastructure.i18n import (
    I18nNotConfiguredError,
    MessageCatalog,
    MessageResolutionService,
    RequestLocaleMiddleware,
    RequestLocaleResolver,
)
from infrastructure.services.dependencies import (
    LocaleResolverDep,
    MessageServiceDep,
    RequestLocaleDep,
    SettingsDep,
)
from infrastructure.services.providers import (
    get_locale_resolver,
    get_message_catalog,
    get_message_service,
    get_settings,
)
from tests.factories import make_locale, make_resolver


@pytest.mark.usefixtures("clear_provider_caches")
class TestProviders:
    """Tests for the provider functions."""

    def test_get_settings_cached(self):
        """get_settings() returns the same instance (caching)."""
        assert isinstance(get_settings(), Settings)
        assert get_settings() is get_settings()

    def test_get_settings_cache_can_be_cleared(self):
        """get_settings() cache can be cleared for testing."""
        instance1 = get_settings()
        get_settings.cache_clear()
        assert get_settings() is not instance1

    def test_get_locale_resolver_from_settings(self, monkeypatch):
        """The resolver reflects the i18n environment."""
        monkeypatch.setenv("I18N_SUPPORTED_LOCALES", "fr,zh-CN")
        monkeypatch.setenv("I18N_DEFAULT_LOCALE", "fr_FR")

        resolver = get_locale_resolver()

        assert isinstance(resolver, RequestLocaleResolver)
        assert resolver.default_locale == make_locale("fr-FR")
        assert resolver.policy.supported == frozenset({"fr", "zh-cn"})
        assert get_locale_resolver() is resolver

    def test_get_message_catalog_uses_bundled_catalog(self):
        """The default catalog reads the bundled locales directory."""
        catalog = get_message_catalog()

        assert isinstance(catalog, MessageCatalog)
        assert catalog.lookup("greeting.welcome", None, make_locale("fr")) == "Bienvenue"

    def test_get_message_service_shares_singletons(self):
        """The service is built from the resolver and catalog singletons."""
        service = get_message_service()

        assert isinstance(service, MessageResolutionService)
        assert service.resolver is get_locale_resolver()
        assert service.catalog is get_message_catalog()
        assert get_message_service() is service

    def test_get_message_service_resolves_bundled_messages(self):
        """The default service resolves against the bundled catalog."""
        service = get_message_service()
        text = service.get_message("error.not_found", ["user/42"], locale=make_locale("zh-CN"))
        assert text == "未找到资源 user/42"

    def test_get_message_service_disabled(self, monkeypatch):
        """A disabled i18n configuration raises I18nNotConfiguredError."""
        monkeypatch.setenv("I18N_ENABLED", "false")

        with pytest.raises(I18nNotConfiguredError):
            get_message_service()

    def test_custom_catalog_dir(self, monkeypatch, tmp_path):
        """I18N_CATALOG_DIR and I18N_BASE_NAMES point the catalog elsewhere."""
        (tmp_path / "app.yml").write_text("title: Custom\n", encoding="utf-8")
        monkeypatch.setenv("I18N_CATALOG_DIR", str(tmp_path))
        monkeypatch.setenv("I18N_BASE_NAMES", "app")

        assert get_message_catalog().lookup("title") == "Custom"


class TestDependencyOverridePattern:
    """Tests for FastAPI dependency override pattern."""

    def test_settings_dep_with_dependency_override(self):
        """SettingsDep can be overridden in FastAPI app."""
        app = FastAPI()

        @app.get("/config")
        def get_config(settings: SettingsDep) -> dict:
            return {"is_settings_instance": isinstance(settings, Settings)}

        app.dependency_overrides[get_settings] = lambda: MagicMock(spec=Settings)

        with TestClient(app) as client:
            response = client.get("/config")

        assert response.status_code == 200
        assert response.json()["is_settings_instance"] is True
        app.dependency_overrides.clear()

    def test_message_service_dep_override(self):
        """MessageServiceDep can be replaced by a mock."""
        app = FastAPI()

        @app.get("/greeting")
        def greeting(messages: MessageServiceDep) -> dict:
            return {"text": messages.get_message("greeting.hello", ["Ada"])}

        service = MagicMock(spec=MessageResolutionService)
        service.get_message.return_value = "Hi Ada"
        app.dependency_overrides[get_message_service] = lambda: service

        with TestClient(app) as client:
            response = client.get("/greeting")

        assert response.json() == {"text": "Hi Ada"}
        service.get_message.assert_called_once_with("greeting.hello", ["Ada"])


class TestRequestLocaleDep:
    """Tests for the request locale dependency."""

    @pytest.fixture
    def app(self):
        app = FastAPI()

        @app.get("/locale")
        def locale(locale: RequestLocaleDep, resolver: LocaleResolverDep) -> dict:
            return {"tag": locale.tag, "default": resolver.default_locale.tag}

        app.dependency_overrides[get_locale_resolver] = lambda: make_resolver(
            supported=["fr", "zh-CN"], default_locale="en-US"
        )
        return app

    def test_resolves_without_middleware(self, app):
        """Without the middleware the locale is resolved on demand."""
        with TestClient(app) as client:
            response = client.get("/locale", headers={"Accept-Language": "zh-CN"})

        assert response.json() == {"tag": "zh-CN", "default": "en-US"}

    def test_uses_middleware_locale(self, app):
        """With the middleware the bound request locale is reused."""
        app.add_middleware(
            RequestLocaleMiddleware,
            resolver=make_resolver(supported=["fr"], default_locale="fr"),
        )

        with TestClient(app) as client:
            response = client.get("/locale", headers={"Accept-Language": "zh-CN"})

        assert response.json()["tag"] == "fr"
