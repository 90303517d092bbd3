"""
Type aliases for FastAPI dependency injection.

Provides annotated type hints for common infrastructure dependencies.
"""

from typing import Annotated

from fastapi import Depends, Request

from infrastructure.configuration import Settings
from infrastructure.i18n.models import LocaleIdentifier
from infrastructure.i18n.resolvers import RequestLocaleResolver
from infrastructure.i18n.service import MessageResolutionService
from infrastructure.services.providers import (
    get_settings,
    get_locale_resolver,
    get_message_service,
)


def get_request_locale(
    request: Request,
    resolver: Annotated[RequestLocaleResolver, Depends(get_locale_resolver)],
) -> LocaleIdentifier:
    """Locale bound by the request locale middleware, resolved on demand otherwise."""
    locale = getattr(request.state, "locale", None)
    if isinstance(locale, LocaleIdentifier):
        return locale
    return resolver.resolve_request(request)


# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Request locale resolver dependency
LocaleResolverDep = Annotated[RequestLocaleResolver, Depends(get_locale_resolver)]

# Message resolution service dependency
MessageServiceDep = Annotated[MessageResolutionService, Depends(get_message_service)]

# Effective locale of the current request
RequestLocaleDep = Annotated[LocaleIdentifier, Depends(get_request_locale)]

__all__ = [
    "SettingsDep",
    "LocaleResolverDep",
    "MessageServiceDep",
    "RequestLocaleDep",
    "get_request_locale",
]
