"""Custom exceptions for the i18n runtime.

All errors derive from I18nError so callers can handle the runtime's
failures in one place.
"""

from typing import Optional, Sequence


class I18nError(Exception):
    """Base exception for all i18n runtime errors.

    Example:
        try:
            await loader.load("de-DE")
        except I18nError as e:
            logger.error("i18n_error", error=str(e))
    """

    pass


class CatalogLoadError(I18nError):
    """Raised when the backing source fails or returns a non-success result.

    Example:
        >>> await loader.load("xx-YY")
        Traceback (most recent call last):
        ...
        CatalogLoadError: Failed to load catalog for xx-YY: ...
    """

    def __init__(self, locale: str, reason: str):
        self.locale = locale
        self.reason = reason
        super().__init__(f"Failed to load catalog for {locale}: {reason}")


class LocaleUnavailableError(I18nError):
    """Raised when a requested or resolved locale is not in the available set."""

    def __init__(self, locale: str, available: Optional[Sequence[str]] = None):
        self.locale = locale
        self.available = list(available or [])
        super().__init__(f"Locale not available: {locale}")


class MalformedPersistedValueError(I18nError):
    """Raised when the stored locale value cannot be parsed.

    Recovered inside LocaleSessionController.initialize, never surfaced to
    callers of the controller.
    """

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Malformed persisted locale value: {value!r}")
