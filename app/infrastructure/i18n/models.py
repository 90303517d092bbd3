"""Value types for the i18n system.

Defines the locale identifier and the result of a message lookup.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, Optional

_LANGUAGE_SUBTAG = re.compile(r"^[A-Za-z]{2,8}$")
_SCRIPT_SUBTAG = re.compile(r"^[A-Za-z]{4}$")
_REGION_SUBTAG = re.compile(r"^(?:[A-Za-z]{2}|[0-9]{3})$")
_SUBTAG = re.compile(r"^[A-Za-z0-9]{1,8}$")


@dataclass(frozen=True)
class LocaleIdentifier:
    """A language with an optional region.

    Canonical form is a lowercase language joined to an uppercase region by
    a dash (e.g., "en", "zh-CN"). Casing is normalized on construction, so
    equality and hashing are case-insensitive.

    Attributes:
        language: Language subtag (e.g., "zh").
        region: Region subtag (e.g., "CN"), empty when absent.
    """

    language: str
    region: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "language", self.language.lower())
        object.__setattr__(self, "region", (self.region or "").upper())

    @classmethod
    def from_tag(cls, tag: str) -> "LocaleIdentifier":
        """Build an identifier from a dash or underscore separated tag.

        A four-letter script subtag after the language is skipped, so
        "zh-Hant-TW" gives "zh-TW". The region is the next subtag when it is
        two letters or three digits ("es-419"). Variants and extensions are
        ignored.

        Args:
            tag: Locale tag (e.g., "zh-CN", "zh_cn", "sr-Latn-RS", "en").

        Returns:
            LocaleIdentifier instance.

        Raises:
            ValueError: If the language subtag is malformed or any other
                subtag is not 1-8 alphanumeric characters.
        """
        parts = tag.strip().replace("_", "-").split("-")
        language = parts[0]
        if not _LANGUAGE_SUBTAG.match(language):
            raise ValueError(f"Invalid language subtag in locale tag: {tag!r}")

        subtags = [part for part in parts[1:] if part]
        for subtag in subtags:
            if not _SUBTAG.match(subtag):
                raise ValueError(f"Invalid subtag {subtag!r} in locale tag: {tag!r}")

        if subtags and _SCRIPT_SUBTAG.match(subtags[0]):
            subtags = subtags[1:]

        region = subtags[0] if subtags and _REGION_SUBTAG.match(subtags[0]) else ""
        return cls(language=language, region=region)

    @property
    def tag(self) -> str:
        """Canonical dash form (e.g., "zh-CN")."""
        return f"{self.language}-{self.region}" if self.region else self.language

    def language_only(self) -> "LocaleIdentifier":
        """Identifier with the region dropped."""
        return LocaleIdentifier(language=self.language)

    def is_in(self, tags: AbstractSet[str]) -> bool:
        """Check membership in a set of lowercase tags.

        Matches on the full tag or on the language-only prefix.
        """
        return self.tag.lower() in tags or self.language in tags

    def __str__(self) -> str:
        return self.tag


class MessageDisposition(str, Enum):
    """How a message lookup produced its text."""

    CATALOG_HIT = "catalog_hit"
    DEFAULT_SUPPLIED = "default_supplied"
    CODE_ECHOED = "code_echoed"
    EMPTY = "empty"
    ERROR_SUBSTITUTED = "error_substituted"
    BLANK_CODE = "blank_code"


@dataclass(frozen=True)
class ResolvedMessage:
    """Result of resolving a message code.

    Attributes:
        text: Message text returned to the caller.
        disposition: Which branch of the fallback chain produced the text.
        code: The requested code.
        locale: Locale the lookup ran against. None when the catalog was
            never consulted (blank code).
    """

    text: str
    disposition: MessageDisposition
    code: Optional[str] = None
    locale: Optional[LocaleIdentifier] = None

    @property
    def is_hit(self) -> bool:
        return self.disposition is MessageDisposition.CATALOG_HIT

    def __str__(self) -> str:
        return self.text
