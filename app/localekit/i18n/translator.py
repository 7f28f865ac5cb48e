"""Key lookup through the fallback chain, with parameter interpolation."""

import re
from typing import Any, Mapping, Optional, Union

from localekit.i18n.models import SessionState, base_language, has_region
from localekit.i18n.store import CatalogStore
from localekit.logging import get_module_logger

logger = get_module_logger()

PLACEHOLDER_PATTERN = re.compile(r"\{(\w+)\}")

TranslationParams = Mapping[str, Any]


def interpolate(text: str, params: Optional[TranslationParams]) -> str:
    """Replace {name} placeholders with values from params.

    Placeholders whose name is absent from params are left verbatim.
    """
    if not params:
        return text

    def _replace(match: "re.Match[str]") -> str:
        name = match.group(1)
        if name in params and params[name] is not None:
            return str(params[name])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_replace, text)


class LookupEngine:
    """Resolves keys for the session's current locale.

    Lookup order, stopping at the first non-empty string:
    1. current locale
    2. bare base language of the current locale, if loaded
    3. fallback locale, if different from the current locale

    Attributes:
        store: CatalogStore to read from (never written here).
        state: Session state providing current and fallback locales.
    """

    def __init__(self, store: CatalogStore, state: SessionState):
        self.store = store
        self.state = state

    def _lookup(self, locale: str, key: str) -> Optional[str]:
        catalog = self.store.get(locale)
        if catalog is None:
            return None
        value = catalog.get(key)
        if isinstance(value, str) and value:
            return value
        return None

    def resolve(self, key: str) -> Optional[str]:
        """Return the raw (uninterpolated) value for key, or None."""
        current = self.state.current_locale

        value = self._lookup(current, key)
        if value is not None:
            return value

        if has_region(current):
            value = self._lookup(base_language(current), key)
            if value is not None:
                return value

        fallback = self.state.fallback_locale
        if fallback != current:
            value = self._lookup(fallback, key)
            if value is not None:
                return value

        return None

    def has_key(self, key: str) -> bool:
        return self.resolve(key) is not None

    def t(self, key: Any, params: Union[TranslationParams, str, None] = None) -> str:
        """Translate key with optional parameters.

        Never raises. When the key cannot be resolved the key itself is
        returned, or ``params`` when it is a string (legacy explicit
        fallback text).

        Args:
            key: Dotted translation key.
            params: Placeholder values, or a fallback string.

        Returns:
            Display-safe string.
        """
        key_str = key if isinstance(key, str) else str(key)

        value = self.resolve(key_str)
        if value is None:
            logger.warning(
                "translation_missing",
                key=key_str,
                locale=self.state.current_locale,
                loaded_locales=self.store.locales(),
            )
            if isinstance(params, str):
                return params
            return key_str

        if isinstance(params, str):
            return value

        try:
            return interpolate(value, params)
        except Exception as e:
            logger.error("interpolation_failed", key=key_str, error=str(e))
            return value
