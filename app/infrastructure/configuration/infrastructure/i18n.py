"""Internationalization (i18n) infrastructure settings."""

import json
from typing import Annotated, Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import NoDecode

from infrastructure.configuration.base import InfrastructureSettings


def _parse_string_list(v: Optional[Any], field_name: str) -> list[str]:
    """Accept a JSON array (possibly quoted), a comma-separated string or a list."""
    if v is None:
        return []

    if isinstance(v, (list, tuple, set)):
        return [str(item).strip() for item in v if str(item).strip()]

    if isinstance(v, str):
        s = v.strip()
        if (s.startswith("'") and s.endswith("'")) or (
            s.startswith('"') and s.endswith('"')
        ):
            s = s[1:-1].strip()
        if not s:
            return []
        if s.startswith("["):
            try:
                parsed = json.loads(s)
            except (json.JSONDecodeError, ValueError) as e:
                raise ValueError(
                    f"Invalid {field_name} JSON: {e} (value: {s[:80]}...)"
                ) from e
            if not isinstance(parsed, list):
                raise ValueError(f"{field_name} JSON must be an array")
            return [str(item).strip() for item in parsed if str(item).strip()]
        return [part.strip() for part in s.split(",") if part.strip()]

    raise ValueError(f"{field_name} must be a JSON array, a CSV string or a list")


class I18nSettings(InfrastructureSettings):
    """Locale resolution and message catalog configuration.

    All values are read once at startup and are immutable afterwards.

    Environment Variables:
        I18N_ENABLED: Register the request locale middleware (default: True)
        I18N_DEFAULT_LOCALE: Locale used when a request carries no usable or
            supported locale (default: en_US). Never checked against the
            supported list.
        I18N_SUPPORTED_LOCALES: JSON array or comma-separated list of locale
            tags accepted from requests. Empty means every locale is accepted.
        I18N_HEADER_NAME: Request header read first (default: Accept-Language)
        I18N_PARAM_NAME: Query parameter read when the header is absent
            (default: lang)
        I18N_BASE_NAMES: Catalog base names, relative to I18N_CATALOG_DIR.
            Later names override earlier ones for the same code.
        I18N_CATALOG_DIR: Directory holding the YAML catalogs
            (default: the application root)
        I18N_ENCODING: Catalog file encoding (default: utf-8)
        I18N_CACHE_DURATION: Seconds before a loaded bundle is re-read from
            disk. Zero or negative disables reloading (default: 1800)
        I18N_USE_CODE_AS_DEFAULT_MESSAGE: Return the code itself when a
            message is missing and no default was given (default: True)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        if settings.i18n.enabled:
            header = settings.i18n.header_name
            supported = settings.i18n.supported_locales
        ```
    """

    enabled: bool = Field(
        default=True,
        alias="I18N_ENABLED",
        description="Enable request locale resolution",
    )
    default_locale: str = Field(
        default="en_US",
        alias="I18N_DEFAULT_LOCALE",
        description="Fallback locale tag",
    )
    supported_locales: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        alias="I18N_SUPPORTED_LOCALES",
        description="Locale tags accepted from requests (empty = all)",
    )
    header_name: str = Field(
        default="Accept-Language",
        alias="I18N_HEADER_NAME",
        description="Request header carrying the locale",
    )
    param_name: str = Field(
        default="lang",
        alias="I18N_PARAM_NAME",
        description="Query parameter carrying the locale",
    )
    base_names: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["locales/errors", "locales/messages"],
        alias="I18N_BASE_NAMES",
        description="Catalog base names",
    )
    catalog_dir: Optional[str] = Field(
        default=None,
        alias="I18N_CATALOG_DIR",
        description="Directory holding the catalog files",
    )
    encoding: str = Field(
        default="utf-8",
        alias="I18N_ENCODING",
        description="Catalog file encoding",
    )
    cache_duration: int = Field(
        default=1800,
        alias="I18N_CACHE_DURATION",
        description="Seconds before a cached bundle is reloaded",
    )
    use_code_as_default_message: bool = Field(
        default=True,
        alias="I18N_USE_CODE_AS_DEFAULT_MESSAGE",
        description="Echo the code when a message is missing",
    )

    @field_validator("supported_locales", mode="before")
    @classmethod
    def _parse_supported_locales(cls, v: Optional[Any]) -> list[str]:
        return _parse_string_list(v, "I18N_SUPPORTED_LOCALES")

    @field_validator("base_names", mode="before")
    @classmethod
    def _parse_base_names(cls, v: Optional[Any]) -> list[str]:
        return _parse_string_list(v, "I18N_BASE_NAMES")

    @property
    def supported_locale_set(self) -> frozenset[str]:
        """Lower-cased supported tags, normalized to dash form."""
        return frozenset(
            tag.replace("_", "-").lower() for tag in self.supported_locales
        )
