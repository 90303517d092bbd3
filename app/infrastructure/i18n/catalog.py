"""Message catalog with locale fallback and time-based reloading.

Looks up message templates by code across the bundle chain of a locale and
applies positional arguments. Distinguishes a missing message
(MessageNotFoundError) from any other failure (CatalogError), which the
message resolution service relies on.
"""

import threading
import time
from typing import Any, Callable, Dict, Optional, Sequence

from infrastructure.i18n.errors import CatalogError, MessageNotFoundError
from infrastructure.i18n.loader import ROOT_BUNDLE, TranslationLoader
from infrastructure.i18n.models import LocaleIdentifier
from infrastructure.i18n.parser import try_parse_locale
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class MessageCatalog:
    """Catalog of message templates backed by a TranslationLoader.

    Bundles are loaded lazily on first use and cached. A cached bundle older
    than cache_duration seconds is re-read on its next use; a duration of
    zero or less keeps bundles for the life of the catalog.

    For "zh-CN" the bundle chain is "zh-CN", then "zh", then the root
    bundle. The first bundle defining the code wins.

    Attributes:
        loader: TranslationLoader for reading bundles.
        cache_duration: Seconds before a cached bundle is reloaded.
    """

    def __init__(
        self,
        loader: TranslationLoader,
        cache_duration: float = 1800,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.loader = loader
        self.cache_duration = cache_duration
        self._clock = clock
        self._bundles: Dict[str, tuple[float, Optional[Dict[str, str]]]] = {}
        self._lock = threading.RLock()
        logger.info("initialized_message_catalog", cache_duration=cache_duration)

    @staticmethod
    def bundle_chain(locale: LocaleIdentifier) -> list[str]:
        """Bundle keys consulted for a locale, most specific first."""
        chain = [locale.tag]
        if locale.region:
            chain.append(locale.language_only().tag)
        chain.append(ROOT_BUNDLE)
        return chain

    def lookup(
        self,
        code: str,
        args: Optional[Sequence[Any]] = None,
        locale: Optional[LocaleIdentifier] = None,
    ) -> str:
        """Resolve a code to formatted text.

        Args:
            code: Message code.
            args: Positional arguments for "{0}"-style placeholders. The
                template is returned untouched when no args are given.
            locale: Locale whose bundle chain is searched. None searches the
                root bundle only.

        Returns:
            Formatted message text.

        Raises:
            MessageNotFoundError: If no bundle in the chain defines the code.
            CatalogError: If a bundle cannot be read or formatting fails.
        """
        template = self._find(code, locale)
        if template is None:
            raise MessageNotFoundError(code, locale.tag if locale else "root")

        if not args:
            return template

        try:
            return template.format(*args)
        except (IndexError, KeyError, ValueError) as e:
            raise CatalogError(f"Failed to format message '{code}': {e}") from e

    def has(self, code: str, locale: Optional[LocaleIdentifier] = None) -> bool:
        """Check whether any bundle in the chain defines the code."""
        return self._find(code, locale) is not None

    def available_locales(self) -> list[LocaleIdentifier]:
        """Locales with at least one bundle source, in discovery order."""
        locales: list[LocaleIdentifier] = []
        for key in self.loader.available_bundles():
            parsed = try_parse_locale(key)
            if parsed is not None and parsed not in locales:
                locales.append(parsed)
        return locales

    def _find(self, code: str, locale: Optional[LocaleIdentifier]) -> Optional[str]:
        keys = self.bundle_chain(locale) if locale is not None else [ROOT_BUNDLE]
        for key in keys:
            bundle = self._get_bundle(key)
            if bundle and code in bundle:
                return bundle[code]
        return None

    def _get_bundle(self, key: str) -> Optional[Dict[str, str]]:
        now = self._clock()
        cached = self._bundles.get(key)
        if cached is not None and not self._is_expired(cached[0], now):
            return cached[1]

        with self._lock:
            cached = self._bundles.get(key)
            if cached is not None and not self._is_expired(cached[0], now):
                return cached[1]

            bundle = self.loader.load(key)
            self._bundles[key] = (now, bundle)
            return bundle

    def _is_expired(self, loaded_at: float, now: float) -> bool:
        return self.cache_duration > 0 and now - loaded_at >= self.cache_duration
