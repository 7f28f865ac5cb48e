"""i18n runtime - locale resolution, catalog merging and key lookup.

Main components:
- models: locale code helpers, Catalog, SessionState
- sources: CatalogSource and its static/file/http bindings
- loader: CatalogLoader (regional over base merge)
- filters: CategoryFilter and per-app section config
- keys: KeyPathIndexer
- translator: LookupEngine with fallback chain and interpolation
- controller: LocaleSessionController
"""

from localekit.i18n.controller import LocaleSessionController
from localekit.i18n.exceptions import (
    CatalogLoadError,
    I18nError,
    LocaleUnavailableError,
    MalformedPersistedValueError,
)
from localekit.i18n.filters import APP_SECTION_CONFIG, CategoryFilter, filter_for_app
from localekit.i18n.keys import KeyPathIndexer, find_key_conflicts
from localekit.i18n.loader import CatalogLoader, merge_catalogs
from localekit.i18n.models import (
    Catalog,
    InitializeOptions,
    KeyPathIndex,
    SessionState,
    SessionStatus,
)
from localekit.i18n.persistence import (
    InMemoryLocaleStorage,
    JsonFileLocaleStorage,
    LocaleStorage,
)
from localekit.i18n.resolvers import LocaleNegotiator, RegionalVariantResolver
from localekit.i18n.sources import (
    CatalogSource,
    FileCatalogSource,
    HttpCatalogSource,
    StaticCatalogSource,
)
from localekit.i18n.store import CatalogStore
from localekit.i18n.translator import LookupEngine

__all__ = [
    "Catalog",
    "KeyPathIndex",
    "SessionState",
    "SessionStatus",
    "InitializeOptions",
    "I18nError",
    "CatalogLoadError",
    "LocaleUnavailableError",
    "MalformedPersistedValueError",
    "CatalogSource",
    "StaticCatalogSource",
    "FileCatalogSource",
    "HttpCatalogSource",
    "CatalogLoader",
    "merge_catalogs",
    "CategoryFilter",
    "APP_SECTION_CONFIG",
    "filter_for_app",
    "KeyPathIndexer",
    "find_key_conflicts",
    "CatalogStore",
    "LookupEngine",
    "LocaleStorage",
    "InMemoryLocaleStorage",
    "JsonFileLocaleStorage",
    "RegionalVariantResolver",
    "LocaleNegotiator",
    "LocaleSessionController",
]
