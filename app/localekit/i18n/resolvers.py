"""Locale resolution logic.

Provides the regional-variant lookup used when a bare language is requested
and the negotiation of client-reported locales against the available set.
"""

from typing import List, Optional, Sequence, Tuple

from localekit.i18n.models import base_language
from localekit.logging import get_module_logger

logger = get_module_logger()


class RegionalVariantResolver:
    """Finds the concrete regional catalog for a bare language code."""

    @staticmethod
    def resolve(base_lang: str, available: Sequence[str]) -> Optional[str]:
        """Resolve a bare language to the best regional variant.

        1. The doubled form ("nl" -> "nl-NL") if available.
        2. Otherwise the first code in ``available`` starting with "<lang>-",
           in the order supplied by the caller.
        3. None when nothing matches.

        Args:
            base_lang: Bare language code (e.g. "de").
            available: Available locale codes in a stable order.

        Returns:
            Regional locale code or None.
        """
        doubled = f"{base_lang}-{base_lang.upper()}"
        if doubled in available:
            return doubled

        prefix = f"{base_lang}-"
        for code in available:
            if code.startswith(prefix):
                return code

        return None


def parse_accept_language(header: Optional[str]) -> List[str]:
    """Parse an Accept-Language header into language ranges by quality.

    "en-US,en;q=0.9,fr;q=0.8" -> ["en-US", "en", "fr"]. Wildcards are
    dropped; invalid quality values count as 1.0.

    Args:
        header: Accept-Language header value.

    Returns:
        Language ranges ordered by descending quality (stable for ties).
    """
    if not header:
        return []

    preferences: List[Tuple[str, float]] = []
    for part in header.split(","):
        lang_range = part.split(";")[0].strip()
        if not lang_range or lang_range == "*":
            continue
        quality = 1.0
        if ";" in part and "q=" in part:
            try:
                quality = float(part.split("q=")[1])
            except ValueError:
                quality = 1.0
        preferences.append((lang_range, quality))

    return [lang for lang, _ in sorted(preferences, key=lambda x: x[1], reverse=True)]


class LocaleNegotiator:
    """Matches client-reported locales against available catalogs."""

    def __init__(self, available: Sequence[str]):
        self.available = list(available)
        self.log = logger.bind(available_count=len(self.available))

    def match(self, requested: str) -> Optional[str]:
        """Match one client locale: exact, then bare language, then regional variant.

        Args:
            requested: Client locale (e.g. "de-LU", "pt_BR").

        Returns:
            Available locale code or None.
        """
        candidate = requested.strip().replace("_", "-")
        if not candidate:
            return None
        # strip encodings such as "de_DE.UTF-8"
        candidate = candidate.split(".", 1)[0]

        if candidate in self.available:
            return candidate

        language = base_language(candidate).lower()
        if language in self.available:
            return language

        return RegionalVariantResolver.resolve(language, self.available)

    def best_match(self, requested: Sequence[str]) -> Optional[str]:
        """Return the first match for locales in preference order."""
        for locale in requested:
            matched = self.match(locale)
            if matched:
                self.log.debug("negotiated_locale", requested=locale, locale=matched)
                return matched
        return None

    def from_header(self, accept_language: Optional[str]) -> Optional[str]:
        """Resolve a locale from an Accept-Language header value."""
        return self.best_match(parse_accept_language(accept_language))
