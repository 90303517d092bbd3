"""Message resolution service for dependency injection.

Resolves message codes to text for the current request locale, with a
fallback chain that never lets a message lookup abort request handling.

Usage:
    # Via dependency injection
    from infrastructure.services import MessageServiceDep

    @router.get("/greeting")
    def greeting(messages: MessageServiceDep):
        return {"message": messages.get_message("greeting.hello", ["Ada"])}

    # Direct instantiation
    service = MessageResolutionService(catalog, resolver, settings.i18n)
    service.get_message("user.not_found", ["42"], default="Unknown user")
"""

from typing import Any, Iterable, Optional, Sequence

from starlette.requests import Request

from infrastructure.configuration import I18nSettings
from infrastructure.i18n.catalog import MessageCatalog
from infrastructure.i18n.context import get_current_locale
from infrastructure.i18n.errors import MessageNotFoundError
from infrastructure.i18n.models import (
    LocaleIdentifier,
    MessageDisposition,
    ResolvedMessage,
)
from infrastructure.i18n.parser import (
    parse_locale,
    platform_default_locale,
    try_parse_locale,
)
from infrastructure.i18n.resolvers import RequestLocaleResolver
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class MessageResolutionService:
    """Resolves message codes against a message catalog.

    Fallback chain for a code:
    1. Catalog hit: the formatted message
    2. Missing message: the explicit default, else the code itself when
       use_code_as_default_message is set, else an empty string
    3. Any other catalog failure: the explicit default, else the code

    A blank code never reaches the catalog. When no locale is given, the
    ambient request locale is used, then the platform default.

    Attributes:
        catalog: Message catalog collaborator.
        resolver: Request locale resolver, used for explicit requests.
        settings: i18n settings (supported locales, default locale and
            the code echo flag).
    """

    def __init__(
        self,
        catalog: MessageCatalog,
        resolver: RequestLocaleResolver,
        settings: I18nSettings,
    ):
        self.catalog = catalog
        self.resolver = resolver
        self.settings = settings

    @property
    def use_code_as_default_message(self) -> bool:
        return self.settings.use_code_as_default_message

    def resolve(
        self,
        code: Optional[str],
        args: Optional[Sequence[Any]] = None,
        default: Optional[str] = None,
        locale: Optional[LocaleIdentifier] = None,
    ) -> ResolvedMessage:
        """Resolve a code and report which fallback branch produced the text.

        Args:
            code: Message code.
            args: Positional arguments for the message template.
            default: Text returned when the message is missing or the
                catalog fails.
            locale: Explicit locale; the current locale when None.

        Returns:
            ResolvedMessage with text and disposition. Never raises.
        """
        if code is None or not code.strip():
            return ResolvedMessage(
                text=default if default is not None else "",
                disposition=MessageDisposition.BLANK_CODE,
                code=code,
            )

        final_locale = locale or self.get_current_locale()

        try:
            text = self.catalog.lookup(code, args, final_locale)
            return ResolvedMessage(
                text=text,
                disposition=MessageDisposition.CATALOG_HIT,
                code=code,
                locale=final_locale,
            )
        except MessageNotFoundError:
            logger.debug("message_not_found", code=code, locale=final_locale.tag)
            if default is not None:
                text, disposition = default, MessageDisposition.DEFAULT_SUPPLIED
            elif self.use_code_as_default_message:
                text, disposition = code, MessageDisposition.CODE_ECHOED
            else:
                text, disposition = "", MessageDisposition.EMPTY
        except Exception as e:  # pylint: disable=broad-except
            logger.error(
                "message_lookup_failed",
                code=code,
                locale=final_locale.tag,
                error=str(e),
            )
            text = default if default is not None else code
            disposition = MessageDisposition.ERROR_SUBSTITUTED

        return ResolvedMessage(
            text=text, disposition=disposition, code=code, locale=final_locale
        )

    def get_message(
        self,
        code: Optional[str],
        args: Optional[Sequence[Any]] = None,
        default: Optional[str] = None,
        locale: Optional[LocaleIdentifier] = None,
    ) -> str:
        """Resolve a code to text. See resolve() for the fallback chain."""
        return self.resolve(code, args, default, locale).text

    def has_message(
        self, code: Optional[str], locale: Optional[LocaleIdentifier] = None
    ) -> bool:
        """Check whether the catalog holds a message for the code.

        Blank codes are never found. Catalog failures count as not found.
        """
        if code is None or not code.strip():
            return False

        final_locale = locale or self.get_current_locale()

        try:
            return self.catalog.has(code, final_locale)
        except Exception as e:  # pylint: disable=broad-except
            logger.error(
                "message_check_failed",
                code=code,
                locale=final_locale.tag,
                error=str(e),
            )
            return False

    exists = has_message

    def get_messages(
        self,
        codes: Optional[Iterable[str]],
        locale: Optional[LocaleIdentifier] = None,
    ) -> dict[str, str]:
        """Resolve several codes at once.

        Duplicate codes are resolved once; the result keeps first-seen order.
        Each code is resolved without arguments or default.

        Args:
            codes: Message codes. None or empty gives an empty mapping.
            locale: Explicit locale; the current locale when None.

        Returns:
            Ordered mapping of code to text.
        """
        if not codes:
            return {}

        final_locale = locale or self.get_current_locale()
        return {
            code: self.get_message(code, locale=final_locale)
            for code in dict.fromkeys(codes)
        }

    resolve_batch = get_messages

    def get_current_locale(
        self, request: Optional[Request] = None
    ) -> LocaleIdentifier:
        """Locale of the given request, or of the current context.

        Without a request, the ambient locale bound by the request locale
        middleware is returned, or the platform default when none is bound.
        """
        if request is not None:
            return self.resolver.resolve_request(request)

        current = get_current_locale()
        return current if current is not None else platform_default_locale()

    def get_supported_locales(self) -> list[LocaleIdentifier]:
        """Configured supported locales, parsed and de-duplicated.

        Unparsable entries are dropped. With no configured locales, the
        result holds only the parsed default locale.
        """
        tags = self.settings.supported_locales
        if not tags:
            return [parse_locale(self.settings.default_locale)]

        locales: list[LocaleIdentifier] = []
        for tag in tags:
            parsed = try_parse_locale(tag)
            if parsed is not None and parsed not in locales:
                locales.append(parsed)
        return locales

    def get_available_locales(self) -> list[LocaleIdentifier]:
        """Locales that have at least one catalog bundle."""
        return self.catalog.available_locales()
