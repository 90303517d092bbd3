"""Ambient current locale for the in-flight request or task.

The locale is held in a ContextVar, so every thread and every asyncio task
sees its own value and a request never observes the locale of another
request running concurrently. Binding and clearing must happen on the task
that reads the value.

Usage:
    from infrastructure.i18n.context import locale_scope, get_current_locale

    with locale_scope(LocaleIdentifier("fr", "FR")):
        get_current_locale()  # LocaleIdentifier(language="fr", region="FR")
    get_current_locale()  # None
"""

from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Generator, Optional

import structlog

from infrastructure.i18n.models import LocaleIdentifier

_current_locale: ContextVar[Optional[LocaleIdentifier]] = ContextVar(
    "current_locale", default=None
)


def get_current_locale() -> Optional[LocaleIdentifier]:
    """Locale bound to the current request/task, or None when unbound."""
    return _current_locale.get()


def set_current_locale(locale: Optional[LocaleIdentifier]) -> Token:
    """Bind a locale to the current context.

    Returns:
        Token accepted by reset_current_locale() to restore the previous value.
    """
    return _current_locale.set(locale)


def reset_current_locale(token: Token) -> None:
    """Restore the value that was current before the matching set call."""
    _current_locale.reset(token)


def clear_current_locale() -> None:
    """Unbind the locale from the current context."""
    _current_locale.set(None)


@contextmanager
def locale_scope(locale: LocaleIdentifier) -> Generator[LocaleIdentifier, None, None]:
    """Bind a locale for the duration of the block.

    The locale is also bound into the structlog context, so log entries
    emitted inside the block carry it.
    """
    token = _current_locale.set(locale)
    structlog.contextvars.bind_contextvars(locale=locale.tag)
    try:
        yield locale
    finally:
        structlog.contextvars.unbind_contextvars("locale")
        _current_locale.reset(token)
