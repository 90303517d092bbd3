from typing import Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel

from infrastructure.i18n.models import LocaleIdentifier
from infrastructure.services import MessageServiceDep, RequestLocaleDep

router = APIRouter(prefix="/i18n", tags=["i18n"])


class LocaleResponse(BaseModel):
    """LocaleResponse describes a single locale identifier."""

    tag: str
    language: str
    region: Optional[str] = None

    @classmethod
    def from_locale(cls, locale: LocaleIdentifier) -> "LocaleResponse":
        return cls(tag=locale.tag, language=locale.language, region=locale.region or None)


class MessageResponse(BaseModel):
    """MessageResponse is the text of one message and how it was produced."""

    code: str
    locale: str
    text: str
    disposition: str
    found: bool


# Effective locale of this request, as bound by the locale middleware.
@router.get("/locale")
def get_locale(locale: RequestLocaleDep) -> LocaleResponse:
    return LocaleResponse.from_locale(locale)


@router.get("/locales")
def get_supported_locales(messages: MessageServiceDep) -> list[LocaleResponse]:
    return [LocaleResponse.from_locale(loc) for loc in messages.get_supported_locales()]


# Locales that ship at least one catalog bundle
@router.get("/locales/available")
def get_available_locales(messages: MessageServiceDep) -> list[LocaleResponse]:
    return [LocaleResponse.from_locale(loc) for loc in messages.get_available_locales()]


# Batch lookup: /api/v1/i18n/messages?codes=a&codes=b
@router.get("/messages")
def get_messages(
    messages: MessageServiceDep,
    locale: RequestLocaleDep,
    codes: list[str] = Query(default=[]),
) -> dict[str, str]:
    return messages.get_messages(codes, locale)


@router.get("/messages/{code}")
def get_message(
    code: str,
    messages: MessageServiceDep,
    locale: RequestLocaleDep,
    default: Optional[str] = None,
    args: list[str] = Query(default=[]),
) -> MessageResponse:
    resolved = messages.resolve(code, args or None, default, locale)
    return MessageResponse(
        code=code,
        locale=locale.tag,
        text=resolved.text,
        disposition=resolved.disposition.value,
        found=resolved.is_hit,
    )
