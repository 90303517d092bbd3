"""i18n system - request locale resolution and message lookup.

Resolves the locale that governs each request and serves translated
messages keyed by code, with deterministic fallback when a translation
or locale preference is missing.

Main components:
- models: LocaleIdentifier, ResolvedMessage, MessageDisposition
- parser: parse_locale, parse_locale_safely (never raise)
- resolvers: ResolutionPolicy and RequestLocaleResolver
- context: ambient current locale (ContextVar)
- middleware: RequestLocaleContext and RequestLocaleMiddleware
- loader / catalog: YAML message bundles with locale fallback
- service: MessageResolutionService
- facade: module-level access for call sites without injection
"""

from infrastructure.i18n.catalog import MessageCatalog
from infrastructure.i18n.context import (
    clear_current_locale,
    get_current_locale,
    locale_scope,
    set_current_locale,
)
from infrastructure.i18n.errors import (
    CatalogError,
    I18nNotConfiguredError,
    MessageNotFoundError,
)
from infrastructure.i18n.loader import TranslationLoader, YAMLTranslationLoader
from infrastructure.i18n.middleware import (
    RequestLocaleContext,
    RequestLocaleMiddleware,
)
from infrastructure.i18n.models import (
    LocaleIdentifier,
    MessageDisposition,
    ResolvedMessage,
)
from infrastructure.i18n.parser import (
    parse_locale,
    parse_locale_safely,
    platform_default_locale,
    try_parse_locale,
)
from infrastructure.i18n.resolvers import RequestLocaleResolver, ResolutionPolicy
from infrastructure.i18n.service import MessageResolutionService

__all__ = [
    "LocaleIdentifier",
    "MessageDisposition",
    "ResolvedMessage",
    "CatalogError",
    "I18nNotConfiguredError",
    "MessageNotFoundError",
    "parse_locale",
    "parse_locale_safely",
    "platform_default_locale",
    "try_parse_locale",
    "ResolutionPolicy",
    "RequestLocaleResolver",
    "get_current_locale",
    "set_current_locale",
    "clear_current_locale",
    "locale_scope",
    "RequestLocaleContext",
    "RequestLocaleMiddleware",
    "TranslationLoader",
    "YAMLTranslationLoader",
    "MessageCatalog",
    "MessageResolutionService",
]
