"""Feature-level fixtures for i18n system tests.

Provides a temporary YAML catalog and the components built on top of it.
"""

import pytest
import yaml

from infrastructure.i18n import (
    MessageCatalog,
    MessageResolutionService,
    YAMLTranslationLoader,
)
from tests.factories import make_i18n_settings, make_resolver


def _write(path, data):
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, allow_unicode=True)


@pytest.fixture
def temp_catalog_dir(tmp_path):
    """Create a temporary directory with sample YAML message bundles.

    Returns a directory structure like:
    - errors.yml, errors.fr.yml, errors.zh-CN.yml
    - messages.yml, messages.fr.yml, messages.zh.yml, messages.zh-CN.yml
    """
    _write(
        tmp_path / "errors.yml",
        {
            "error": {
                "not_found": "Resource {0} not found",
                "forbidden": "Access denied",
            }
        },
    )
    _write(tmp_path / "errors.fr.yml", {"error": {"not_found": "Ressource {0} introuvable"}})
    _write(tmp_path / "errors.zh-CN.yml", {"error": {"not_found": "未找到资源 {0}"}})

    _write(
        tmp_path / "messages.yml",
        {
            "greeting": {"hello": "Hello, {0}!", "welcome": "Welcome"},
            "user": {"title": "User"},
        },
    )
    _write(
        tmp_path / "messages.fr.yml",
        {"greeting": {"hello": "Bonjour, {0} !", "welcome": "Bienvenue"}},
    )
    _write(tmp_path / "messages.zh.yml", {"greeting": {"welcome": "欢迎"}})
    _write(tmp_path / "messages.zh-CN.yml", {"greeting": {"hello": "你好，{0}！"}})

    return tmp_path


@pytest.fixture
def yaml_loader(temp_catalog_dir):
    """YAMLTranslationLoader over the temporary catalog."""
    return YAMLTranslationLoader(temp_catalog_dir, ["errors", "messages"])


@pytest.fixture
def message_catalog(yaml_loader):
    """MessageCatalog over the temporary catalog."""
    return MessageCatalog(yaml_loader)


@pytest.fixture
def i18n_settings(temp_catalog_dir):
    """I18nSettings pointing at the temporary catalog."""
    return make_i18n_settings(
        supported_locales=["en-US", "fr", "zh-CN"],
        catalog_dir=str(temp_catalog_dir),
    )


@pytest.fixture
def locale_resolver():
    """Resolver accepting en-US, fr and zh-CN with en-US as default."""
    return make_resolver(supported=["en-US", "fr", "zh-CN"])


@pytest.fixture
def message_service(message_catalog, locale_resolver, i18n_settings):
    """MessageResolutionService over the temporary catalog."""
    return MessageResolutionService(message_catalog, locale_resolver, i18n_settings)
