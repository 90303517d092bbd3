"""Module-level access to the message resolution service.

For call sites that cannot receive MessageResolutionService through
dependency injection (model validators, exception constructors, scripts).
Everywhere else, inject MessageServiceDep instead.

The service is located through the dependency providers on first use and
reused for the life of the process. If it cannot be located, the first call
to any function raises I18nNotConfiguredError, blank codes included. Blank
codes are then answered by the service without a catalog lookup.

Usage:
    from infrastructure.i18n import facade

    facade.get("user.not_found", ["42"])
    facade.get_or_default("user.title", "User")
    facade.exists("user.not_found")

    from infrastructure.i18n.facade import _
    _("greeting.hello", ["Ada"])
"""

import threading
from typing import Any, Callable, Iterable, Optional, Sequence

from infrastructure.i18n.errors import I18nNotConfiguredError
from infrastructure.i18n.models import LocaleIdentifier
from infrastructure.i18n.service import MessageResolutionService
from infrastructure.logging import get_module_logger

logger = get_module_logger()

ServiceLocator = Callable[[], Optional[MessageResolutionService]]


class LazyServiceHandle:
    """Process-wide handle to a service, located once on first use.

    Location runs at most once under a lock, even when several workers
    make their first call concurrently. After that, reads take no lock.
    """

    def __init__(self, locator: ServiceLocator):
        self._locator = locator
        self._service: Optional[MessageResolutionService] = None
        self._lock = threading.Lock()

    @property
    def is_bound(self) -> bool:
        return self._service is not None

    def get(self) -> MessageResolutionService:
        """Return the bound service, locating it on first use.

        Raises:
            I18nNotConfiguredError: If the locator fails or finds nothing.
        """
        service = self._service
        if service is not None:
            return service

        with self._lock:
            if self._service is None:
                self._service = self._locate()
            return self._service

    def bind(self, service: MessageResolutionService) -> None:
        """Bind an explicit service instance."""
        with self._lock:
            self._service = service

    def reset(self) -> None:
        """Unbind the service; the next call locates it again."""
        with self._lock:
            self._service = None

    def _locate(self) -> MessageResolutionService:
        try:
            service = self._locator()
        except I18nNotConfiguredError:
            logger.error("message_service_unavailable")
            raise
        except Exception as e:
            logger.error("message_service_unavailable", error=str(e))
            raise I18nNotConfiguredError(
                "MessageResolutionService not available. "
                "Please ensure i18n is properly configured."
            ) from e

        if service is None:
            logger.error("message_service_unavailable")
            raise I18nNotConfiguredError(
                "MessageResolutionService not available. "
                "Please ensure i18n is properly configured."
            )

        logger.info("message_service_bound")
        return service


def _locate_from_providers() -> MessageResolutionService:
    # Imported here: the providers module imports this package
    from infrastructure.services.providers import get_message_service

    return get_message_service()


_handle = LazyServiceHandle(_locate_from_providers)


def bind_service(service: MessageResolutionService) -> None:
    """Bind an explicit service instead of locating it through providers."""
    _handle.bind(service)


def reset_service() -> None:
    """Unbind the service. Intended for tests."""
    _handle.reset()


def get(
    code: Optional[str],
    args: Optional[Sequence[Any]] = None,
    locale: Optional[LocaleIdentifier] = None,
) -> str:
    """Message text for a code, or "" for a blank code."""
    return _handle.get().get_message(code, args, locale=locale)


def get_or_default(
    code: Optional[str],
    default: str,
    args: Optional[Sequence[Any]] = None,
    locale: Optional[LocaleIdentifier] = None,
) -> str:
    """Message text for a code, or `default` when there is no message."""
    return _handle.get().get_message(code, args, default=default, locale=locale)


def exists(code: Optional[str], locale: Optional[LocaleIdentifier] = None) -> bool:
    return _handle.get().has_message(code, locale)


def get_batch(
    codes: Optional[Iterable[str]],
    locale: Optional[LocaleIdentifier] = None,
) -> dict[str, str]:
    return _handle.get().get_messages(codes, locale)


def current_locale() -> LocaleIdentifier:
    return _handle.get().get_current_locale()


_ = get
