"""Translation models for the i18n runtime.

Defines locale code helpers, the flat catalog type and the session state
exposed by the LocaleSessionController.
"""

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

# Flat key -> string translation table for one locale
Catalog = Dict[str, str]

# Nested key segments -> full dotted key string
KeyPathIndex = Dict[str, Any]

LOCALE_CODE_PATTERN = re.compile(r"^[A-Za-z]{2,3}(-[A-Za-z0-9]{2,8})?$")


def is_locale_code(value: Any) -> bool:
    """Check whether value looks like ``lang`` or ``lang-REGION``.

    Args:
        value: Candidate locale code.

    Returns:
        True if value is a string of the form "en" or "en-GB".
    """
    return isinstance(value, str) and bool(LOCALE_CODE_PATTERN.match(value))


def has_region(locale: str) -> bool:
    """Return True if the locale code carries a region ("de-AT")."""
    return "-" in locale


def base_language(locale: str) -> str:
    """Get the bare-language part of a locale code ("de" from "de-AT")."""
    return locale.split("-", 1)[0]


def flatten_catalog(data: Mapping[str, Any], prefix: str = "") -> Catalog:
    """Flatten a nested translation mapping into dotted keys.

    Sources may deliver sections as nested mappings; the runtime always
    works on flat catalogs. Non-string leaves are dropped.

    Args:
        data: Flat or nested mapping of translation values.
        prefix: Key prefix used during recursion.

    Returns:
        Flat catalog.
    """
    flat: Catalog = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten_catalog(value, full_key))
        elif isinstance(value, str):
            flat[full_key] = value
    return flat


class SessionStatus(str, Enum):
    """Lifecycle states of a locale session."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass
class SessionState:
    """Observable state of a LocaleSessionController.

    Attributes:
        current_locale: Locale used for lookups.
        fallback_locale: Last-resort locale for lookups.
        is_loading: True while the load for the latest transition is outstanding.
        last_error: Message of the last failed transition, cleared on each set_locale.
        categories: Key sections kept after loading (empty keeps all).
        status: Current lifecycle state.
    """

    current_locale: str = "en"
    fallback_locale: str = "en"
    is_loading: bool = False
    last_error: Optional[str] = None
    categories: List[str] = field(default_factory=list)
    status: SessionStatus = SessionStatus.UNINITIALIZED

    @property
    def is_ready(self) -> bool:
        return self.status in (SessionStatus.READY, SessionStatus.ERROR) and not self.is_loading

    def snapshot(self) -> "SessionState":
        """Return an independent copy for subscribers."""
        return replace(self, categories=list(self.categories))


@dataclass
class InitializeOptions:
    """Options accepted by LocaleSessionController.initialize.

    Attributes:
        fallback_locale: Last-resort locale (default "en").
        persist_locale: Read/write the chosen locale from storage.
        storage_key: Key under which the locale is stored.
        categories: Key sections to keep (empty keeps all).
        preferred_languages: Client-reported locales in preference order
            (e.g. from an Accept-Language header or the OS).
    """

    fallback_locale: str = "en"
    persist_locale: bool = True
    storage_key: str = "localekit:locale"
    categories: List[str] = field(default_factory=list)
    preferred_languages: List[str] = field(default_factory=list)
