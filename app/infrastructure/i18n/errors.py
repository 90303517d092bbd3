"""Exceptions raised by the i18n subsystem.

Only `I18nNotConfiguredError` is expected to escape to callers; the other
types are raised by catalog collaborators and recovered by the message
resolution service.
"""


class MessageNotFoundError(LookupError):
    """No message exists for a code in any bundle of the requested locale."""

    def __init__(self, code: str, locale_tag: str):
        self.code = code
        self.locale_tag = locale_tag
        super().__init__(f"No message found for code '{code}' in locale '{locale_tag}'")


class CatalogError(Exception):
    """The catalog failed for a reason other than a missing message."""


class I18nNotConfiguredError(RuntimeError):
    """The message service could not be located or i18n is disabled."""
