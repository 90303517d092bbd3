"""Locale tag parsing.

Turns locale-bearing strings from headers, query parameters and
configuration into LocaleIdentifier values. Supported inputs:

- simple tags: "zh_CN", "zh-CN", "en", "en-US"
- weighted Accept-Language lists: "zh-CN,zh;q=0.9,en;q=0.8"
- plain comma-separated lists: "zh-CN,en-US,ja-JP"

Only the first candidate of a list is used and its weight is ignored.
None of the public functions raise; malformed input resolves to a
fallback locale and is logged at debug level.
"""

import locale as pylocale
import re
from functools import lru_cache
from typing import Optional

from infrastructure.i18n.models import LocaleIdentifier
from infrastructure.logging import get_module_logger

logger = get_module_logger()

LOCALE_PATTERN = re.compile(r"^[a-z]{2}(-[A-Z]{2})?$")
LANGUAGE_ONLY_PATTERN = re.compile(r"^[a-z]{2}$")

QUALITY_VALUE_SEPARATOR = ";"
LOCALE_SEPARATOR = ","
UNDERSCORE = "_"
DASH = "-"

FALLBACK_PLATFORM_LOCALE = LocaleIdentifier(language="en", region="US")


@lru_cache(maxsize=1)
def platform_default_locale() -> LocaleIdentifier:
    """Process-wide default locale taken from the interpreter environment.

    Falls back to en-US when the environment is unset, "C" or "POSIX".
    """
    try:
        env_locale = pylocale.getlocale()[0]
    except ValueError:
        env_locale = None

    if env_locale and env_locale.upper() not in ("C", "POSIX"):
        try:
            return LocaleIdentifier.from_tag(env_locale.split(".")[0])
        except ValueError:
            logger.debug("platform_locale_unparsable", env_locale=env_locale)

    return FALLBACK_PLATFORM_LOCALE


def extract_first_locale(raw: str) -> str:
    """Return the first candidate of a list, without its quality weight."""
    candidate = raw.strip()

    if LOCALE_SEPARATOR in candidate:
        candidate = candidate[: candidate.index(LOCALE_SEPARATOR)].strip()

    if QUALITY_VALUE_SEPARATOR in candidate:
        candidate = candidate[: candidate.index(QUALITY_VALUE_SEPARATOR)].strip()

    return candidate


def normalize_locale_string(raw: str) -> str:
    """Replace underscores with dashes and strip surrounding whitespace."""
    return raw.replace(UNDERSCORE, DASH).strip()


def is_valid_locale_format(tag: Optional[str]) -> bool:
    """Check a normalized tag against the canonical language[-REGION] shape.

    A bare two-letter lowercase code is valid as-is. A two-part tag is
    re-cased to lower-UPPER before matching, so "zh-cn" is valid too.
    """
    if not tag:
        return False

    if LANGUAGE_ONLY_PATTERN.match(tag):
        return True

    parts = tag.split(DASH)
    if len(parts) == 2:
        normalized = f"{parts[0].lower()}{DASH}{parts[1].upper()}"
        return bool(LOCALE_PATTERN.match(normalized))

    return False


def _parse(raw: str) -> LocaleIdentifier:
    normalized = normalize_locale_string(extract_first_locale(raw))

    # The shape check does not gate construction: tags outside the canonical
    # shape (e.g. "fil-PH", "es-419") are still accepted when buildable.
    if not is_valid_locale_format(normalized):
        logger.debug("locale_format_not_canonical", raw=raw, normalized=normalized)

    return LocaleIdentifier.from_tag(normalized)


def try_parse_locale(raw: Optional[str]) -> Optional[LocaleIdentifier]:
    """Parse a locale string, returning None for blank or malformed input."""
    if raw is None or not str(raw).strip():
        return None

    try:
        return _parse(str(raw))
    except Exception as e:  # pylint: disable=broad-except
        logger.debug("locale_parse_failed", raw=raw, error=str(e))
        return None


def parse_locale(raw: Optional[str]) -> LocaleIdentifier:
    """Parse a locale string, never raising.

    Args:
        raw: Locale-bearing string (tag, or weighted list).

    Returns:
        Parsed LocaleIdentifier, or the platform default when the input is
        blank or cannot be parsed.
    """
    parsed = try_parse_locale(raw)
    return parsed if parsed is not None else platform_default_locale()


def parse_locale_safely(
    raw: Optional[str],
    fallback: Optional[LocaleIdentifier] = None,
) -> LocaleIdentifier:
    """Parse a locale string, substituting an explicit fallback on failure.

    Args:
        raw: Locale-bearing string.
        fallback: Locale returned for blank or malformed input. None means
            the platform default.

    Returns:
        Parsed LocaleIdentifier or the fallback.
    """
    if fallback is None:
        fallback = platform_default_locale()

    parsed = try_parse_locale(raw)
    return parsed if parsed is not None else fallback
