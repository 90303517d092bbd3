"""Locale resolution for inbound requests.

Determines the effective locale of a request from its headers and query
parameters, constrained to the operator-declared supported locales.

Resolution order:
1. Configured header (default Accept-Language), weighted lists allowed
2. Configured query parameter (default lang)
3. Default locale, when neither produced a supported locale
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Mapping, MutableMapping, Optional

from starlette.requests import Request

from infrastructure.i18n.models import LocaleIdentifier
from infrastructure.i18n.parser import (
    FALLBACK_PLATFORM_LOCALE,
    parse_locale,
    try_parse_locale,
)
from infrastructure.logging import get_module_logger

if TYPE_CHECKING:
    from infrastructure.configuration import I18nSettings

logger = get_module_logger()


@dataclass(frozen=True)
class ResolutionPolicy:
    """Read-only inputs of locale resolution.

    Attributes:
        header_name: Request header read first.
        param_name: Query parameter read when the header gives nothing.
        supported: Lowercase dash-form tags accepted from requests. Empty
            means every locale is accepted.
        default_locale: Returned when no supported locale was found. It is
            never checked against `supported`.
    """

    header_name: str = "Accept-Language"
    param_name: str = "lang"
    supported: frozenset[str] = field(default_factory=frozenset)
    default_locale: LocaleIdentifier = FALLBACK_PLATFORM_LOCALE

    @classmethod
    def from_settings(cls, settings: "I18nSettings") -> "ResolutionPolicy":
        """Build a policy from i18n settings."""
        return cls(
            header_name=settings.header_name,
            param_name=settings.param_name,
            supported=settings.supported_locale_set,
            default_locale=parse_locale(settings.default_locale),
        )


def _read(values: Optional[Mapping[str, str]], name: str) -> Optional[str]:
    """Read a value by name, falling back to a case-insensitive match."""
    if not values or not name:
        return None

    value = values.get(name)
    if value is not None:
        return value

    lowered = name.lower()
    for key, candidate in values.items():
        if key.lower() == lowered:
            return candidate
    return None


class RequestLocaleResolver:
    """Resolves the effective locale of a request.

    Holds no mutable state and is safe for concurrent use.

    Attributes:
        policy: ResolutionPolicy the resolver was built with.
    """

    def __init__(self, policy: Optional[ResolutionPolicy] = None):
        """Initialize the resolver.

        Args:
            policy: Resolution policy. Defaults to Accept-Language/lang with
                every locale accepted and en-US as default.
        """
        self.policy = policy or ResolutionPolicy()
        self.log = logger.bind(default_locale=self.policy.default_locale.tag)

    @classmethod
    def from_settings(cls, settings: "I18nSettings") -> "RequestLocaleResolver":
        return cls(ResolutionPolicy.from_settings(settings))

    @property
    def default_locale(self) -> LocaleIdentifier:
        return self.policy.default_locale

    def resolve(
        self,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, str]] = None,
    ) -> LocaleIdentifier:
        """Resolve the effective locale from request headers and parameters.

        The header wins over the parameter. The chosen candidate must pass
        the supported-locale check, otherwise the default locale is returned.

        Args:
            headers: Request headers (any mapping; lookup falls back to a
                case-insensitive match).
            params: Query or form parameters.

        Returns:
            Resolved LocaleIdentifier. Never None.
        """
        locale = self.resolve_from_header(headers)
        source = "header"

        if locale is None:
            locale = self.resolve_from_parameter(params)
            source = "parameter"

        if locale is not None and self.is_supported(locale):
            self.log.debug("locale_resolved", locale=locale.tag, source=source)
            return locale

        if locale is not None:
            self.log.debug("locale_not_supported", locale=locale.tag, source=source)

        return self.policy.default_locale

    def resolve_request(self, request: Request) -> LocaleIdentifier:
        """Resolve the effective locale of a Starlette request."""
        return self.resolve(request.headers, request.query_params)

    def resolve_from_header(
        self, headers: Optional[Mapping[str, str]]
    ) -> Optional[LocaleIdentifier]:
        """Parse the configured header, or None when absent or unusable."""
        return try_parse_locale(_read(headers, self.policy.header_name))

    def resolve_from_parameter(
        self, params: Optional[Mapping[str, str]]
    ) -> Optional[LocaleIdentifier]:
        """Parse the configured parameter, or None when absent or unusable."""
        return try_parse_locale(_read(params, self.policy.param_name))

    def is_supported(self, locale: Optional[LocaleIdentifier]) -> bool:
        """Check a locale against the supported set.

        Accepted when the set is empty, or holds the full tag or the
        language-only prefix (case-insensitive).
        """
        if locale is None:
            return False
        if not self.policy.supported:
            return True
        return locale.is_in(self.policy.supported)

    def set_locale(
        self,
        response_headers: Optional[MutableMapping[str, str]],
        locale: Optional[LocaleIdentifier],
    ) -> None:
        """Announce an explicitly chosen locale on a response.

        For collaborators that manage their own request lifecycle: no
        ambient context is bound. The locale is written to the configured
        header name only when it is supported.
        """
        if response_headers is None or locale is None:
            return

        if self.is_supported(locale):
            response_headers[self.policy.header_name] = locale.tag
        else:
            self.log.debug("locale_announce_skipped", locale=locale.tag)
