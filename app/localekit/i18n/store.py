"""In-memory catalog store owned by a LocaleSessionController."""

from typing import Dict, List, Optional, Tuple

from localekit.i18n.models import Catalog, KeyPathIndex


class CatalogStore:
    """Maps locale codes to complete catalogs and their key indexes.

    Entries are inserted only once fully merged, filtered and indexed, so a
    reader sees either a complete catalog or nothing.
    """

    def __init__(self) -> None:
        self._catalogs: Dict[str, Catalog] = {}
        self._indexes: Dict[str, KeyPathIndex] = {}

    def get(self, locale: str) -> Optional[Catalog]:
        return self._catalogs.get(locale)

    def get_index(self, locale: str) -> Optional[KeyPathIndex]:
        return self._indexes.get(locale)

    def entry(self, locale: str) -> Optional[Tuple[Catalog, KeyPathIndex]]:
        """Return (catalog, index) for a locale, or None if absent."""
        if locale not in self._catalogs:
            return None
        return self._catalogs[locale], self._indexes.get(locale, {})

    def put(self, locale: str, catalog: Catalog, index: Optional[KeyPathIndex] = None) -> None:
        self._catalogs[locale] = catalog
        self._indexes[locale] = index if index is not None else {}

    def evict(self, locale: str) -> bool:
        """Remove a locale; returns True if it was present."""
        self._indexes.pop(locale, None)
        return self._catalogs.pop(locale, None) is not None

    def clear(self) -> None:
        self._catalogs.clear()
        self._indexes.clear()

    def locales(self) -> List[str]:
        return list(self._catalogs.keys())

    def __contains__(self, locale: object) -> bool:
        return locale in self._catalogs

    def __len__(self) -> int:
        return len(self._catalogs)
