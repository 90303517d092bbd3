"""Request-scoped locale binding.

RequestLocaleContext installs the resolved locale into the ambient context
and the request attributes at the start of a request, and removes both when
the request ends, whatever the outcome. RequestLocaleMiddleware applies it
to every HTTP request and announces the locale in the Content-Language
response header.

Usage:
    from infrastructure.i18n.middleware import RequestLocaleMiddleware

    app.add_middleware(RequestLocaleMiddleware, resolver=resolver)

    @app.get("/hello")
    def hello(request: Request):
        return {"lang": request.state.lang}
"""

from contextlib import contextmanager
from typing import Any, Generator, Mapping, MutableMapping, Optional

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from infrastructure.i18n.context import clear_current_locale, set_current_locale
from infrastructure.i18n.models import LocaleIdentifier
from infrastructure.i18n.resolvers import RequestLocaleResolver
from infrastructure.logging import get_module_logger

logger = get_module_logger()

LOCALE_ATTRIBUTE = "locale"
LANG_ATTRIBUTE = "lang"
CONTENT_LANGUAGE_HEADER = "Content-Language"


class RequestLocaleContext:
    """Binds the resolved locale to a single request.

    Two states: unbound and bound. bind() always ends in the bound state,
    falling back to the default locale if resolution fails; unbind() always
    returns to the unbound state. activate() pairs them so unbinding runs
    exactly once on every exit path.
    """

    def __init__(self, resolver: RequestLocaleResolver):
        self.resolver = resolver

    def bind(
        self,
        headers: Optional[Mapping[str, str]],
        params: Optional[Mapping[str, str]],
        attributes: Optional[MutableMapping[str, Any]] = None,
    ) -> LocaleIdentifier:
        """Resolve the request locale and install it.

        Args:
            headers: Request headers.
            params: Request query or form parameters.
            attributes: Request-scoped attribute store. Receives the
                identifier under "locale" and its tag under "lang".

        Returns:
            The installed locale.
        """
        try:
            locale = self.resolver.resolve(headers, params)
        except Exception as e:  # pylint: disable=broad-except
            logger.error("locale_resolution_failed", error=str(e))
            locale = self.resolver.default_locale

        set_current_locale(locale)
        structlog.contextvars.bind_contextvars(locale=locale.tag)

        if attributes is not None:
            attributes[LOCALE_ATTRIBUTE] = locale
            attributes[LANG_ATTRIBUTE] = locale.tag

        return locale

    def unbind(self, attributes: Optional[MutableMapping[str, Any]] = None) -> None:
        """Clear the ambient locale and remove the request attributes."""
        clear_current_locale()
        structlog.contextvars.unbind_contextvars("locale")

        if attributes is not None:
            attributes.pop(LOCALE_ATTRIBUTE, None)
            attributes.pop(LANG_ATTRIBUTE, None)

    @staticmethod
    def announce(
        response_headers: MutableMapping[str, str], locale: LocaleIdentifier
    ) -> None:
        """Write the locale to the Content-Language response header."""
        response_headers[CONTENT_LANGUAGE_HEADER] = locale.tag

    @contextmanager
    def activate(
        self,
        headers: Optional[Mapping[str, str]],
        params: Optional[Mapping[str, str]],
        attributes: Optional[MutableMapping[str, Any]] = None,
    ) -> Generator[LocaleIdentifier, None, None]:
        """Bind the request locale for the duration of the block."""
        locale = self.bind(headers, params, attributes)
        try:
            yield locale
        finally:
            self.unbind(attributes)


class RequestLocaleMiddleware(BaseHTTPMiddleware):
    """Applies RequestLocaleContext to every HTTP request.

    The locale attributes are stored in the request state, so handlers read
    them as request.state.locale and request.state.lang.

    Content-Language is written only on responses returned by call_next.
    When the handler raises, the 500 is built by ServerErrorMiddleware
    outside this middleware and goes out without the header; the locale is
    still unbound.
    """

    def __init__(self, app: ASGIApp, resolver: RequestLocaleResolver):
        super().__init__(app)
        self.context = RequestLocaleContext(resolver)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # Backing dict of request.state, shared with downstream Request objects
        attributes = request.scope.setdefault("state", {})

        with self.context.activate(
            request.headers, request.query_params, attributes
        ) as locale:
            response = await call_next(request)
            self.context.announce(response.headers, locale)
            return response
