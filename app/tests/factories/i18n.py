"""Test data factories for i18n system testing.

Provides deterministic test data builders for:
- LocaleIdentifier
- ResolutionPolicy / RequestLocaleResolver
- I18nSettings
"""

from typing import Optional

from infrastructure.configuration import I18nSettings
from infrastructure.i18n import LocaleIdentifier, RequestLocaleResolver, ResolutionPolicy


def make_locale(tag: str = "en-US") -> LocaleIdentifier:
    """Create a LocaleIdentifier from a tag.

    Args:
        tag: Locale tag (e.g., "zh-CN", "en").

    Returns:
        LocaleIdentifier instance.
    """
    return LocaleIdentifier.from_tag(tag)


def make_policy(
    supported: Optional[list[str]] = None,
    default_locale: str = "en-US",
    header_name: str = "Accept-Language",
    param_name: str = "lang",
) -> ResolutionPolicy:
    """Create a ResolutionPolicy.

    Args:
        supported: Supported locale tags; empty accepts every locale.
        default_locale: Default locale tag.
        header_name: Request header name.
        param_name: Query parameter name.

    Returns:
        ResolutionPolicy instance.
    """
    return ResolutionPolicy(
        header_name=header_name,
        param_name=param_name,
        supported=frozenset(tag.lower() for tag in (supported or [])),
        default_locale=make_locale(default_locale),
    )


def make_resolver(
    supported: Optional[list[str]] = None,
    default_locale: str = "en-US",
) -> RequestLocaleResolver:
    """Create a RequestLocaleResolver with a policy from make_policy()."""
    return RequestLocaleResolver(
        make_policy(supported=supported, default_locale=default_locale)
    )


def make_i18n_settings(
    supported_locales: Optional[list[str]] = None,
    default_locale: str = "en_US",
    base_names: Optional[list[str]] = None,
    catalog_dir: Optional[str] = None,
    use_code_as_default_message: bool = True,
    cache_duration: int = 1800,
    enabled: bool = True,
) -> I18nSettings:
    """Create I18nSettings without reading the environment for these fields.

    Returns:
        I18nSettings instance.
    """
    return I18nSettings(
        I18N_ENABLED=enabled,
        I18N_DEFAULT_LOCALE=default_locale,
        I18N_SUPPORTED_LOCALES=supported_locales or [],
        I18N_BASE_NAMES=base_names or ["errors", "messages"],
        I18N_CATALOG_DIR=catalog_dir,
        I18N_USE_CODE_AS_DEFAULT_MESSAGE=use_code_as_default_message,
        I18N_CACHE_DURATION=cache_duration,
    )
