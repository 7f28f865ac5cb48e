"""Locale session orchestration.

The LocaleSessionController owns the CatalogStore and the SessionState and
is the only component that mutates them. It drives the load pipeline on
every locale change:

    set_locale(code)
        -> RegionalVariantResolver (bare codes)
        -> CatalogLoader.load
        -> app section filter / CategoryFilter
        -> KeyPathIndexer
        -> CatalogStore.put
        -> persist

Overlapping set_locale calls are tagged with increasing tickets; a load
that completes after a newer call started is discarded.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from localekit.i18n.exceptions import (
    CatalogLoadError,
    LocaleUnavailableError,
    MalformedPersistedValueError,
)
from localekit.i18n.filters import CategoryFilter, filter_for_app
from localekit.i18n.keys import KeyPathIndexer
from localekit.i18n.loader import CatalogLoader
from localekit.i18n.models import (
    Catalog,
    InitializeOptions,
    KeyPathIndex,
    SessionState,
    SessionStatus,
    has_region,
)
from localekit.i18n.persistence import (
    InMemoryLocaleStorage,
    LocaleStorage,
    read_persisted_locale,
)
from localekit.i18n.resolvers import LocaleNegotiator, RegionalVariantResolver
from localekit.i18n.store import CatalogStore
from localekit.i18n.translator import LookupEngine, TranslationParams
from localekit.logging import get_module_logger

logger = get_module_logger()

StateCallback = Callable[[SessionState], None]


class LocaleSessionController:
    """Orchestrates locale resolution, loading and lookup for one app.

    One instance per application; several instances sharing storage race
    each other and are not coordinated here.

    Attributes:
        loader: CatalogLoader used for every load.
        storage: Where the chosen locale is persisted.
        app_name: Application identifier for section filtering (optional).
    """

    def __init__(
        self,
        loader: CatalogLoader,
        storage: Optional[LocaleStorage] = None,
        default_locale: str = "en",
        app_name: Optional[str] = None,
    ):
        self.loader = loader
        self.storage = storage or InMemoryLocaleStorage()
        self.app_name = app_name
        self._store = CatalogStore()
        self._state = SessionState(
            current_locale=default_locale, fallback_locale=default_locale
        )
        self._engine = LookupEngine(self._store, self._state)
        self._available: List[str] = []
        self._initialized = False
        self._persist_locale = True
        self._storage_key = InitializeOptions().storage_key
        self._ticket = 0
        self._subscribers: List[StateCallback] = []

    # State access

    @property
    def state(self) -> SessionState:
        """Snapshot of the session state."""
        return self._state.snapshot()

    @property
    def current_locale(self) -> str:
        return self._state.current_locale

    @property
    def fallback_locale(self) -> str:
        return self._state.fallback_locale

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def is_ready(self) -> bool:
        return self._state.is_ready

    @property
    def last_error(self) -> Optional[str]:
        return self._state.last_error

    @property
    def available_locales(self) -> List[str]:
        return list(self._available)

    @property
    def loaded_locales(self) -> List[str]:
        return self._store.locales()

    @property
    def keys(self) -> KeyPathIndex:
        """KeyPathIndex of the current locale (empty if not loaded)."""
        return self._store.get_index(self._state.current_locale) or {}

    def get_catalog(self, locale: str) -> Optional[Catalog]:
        catalog = self._store.get(locale)
        return dict(catalog) if catalog is not None else None

    # Subscriptions

    def subscribe(self, callback: StateCallback) -> Callable[[], None]:
        """Register a callback for state changes.

        Returns:
            A function that removes the subscription.
        """
        if callback not in self._subscribers:
            self._subscribers.append(callback)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: StateCallback) -> None:
        self._subscribers = [cb for cb in self._subscribers if cb is not callback]

    def _notify(self) -> None:
        snapshot = self._state.snapshot()
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception as e:
                logger.error(
                    "state_subscriber_failed",
                    subscriber=getattr(callback, "__name__", "unknown"),
                    error=str(e),
                )

    # Lookup

    def t(self, key: Any, params: Union[TranslationParams, str, None] = None) -> str:
        """Translate key for the current locale. Never raises."""
        return self._engine.t(key, params)

    def has_key(self, key: str) -> bool:
        return self._engine.has_key(key)

    # Lifecycle

    async def initialize(self, options: Optional[InitializeOptions] = None) -> None:
        """Pick the initial locale and load it together with the fallback.

        Runs once per instance; later calls return immediately. The initial
        locale comes from, in order: the persisted value, the client's
        preferred languages, the fallback locale.
        A set_locale call made while the initial loads are outstanding
        takes precedence over the initial locale.

        Raises:
            CatalogLoadError: If the available locale list cannot be fetched
                (the controller stays uninitialized so a retry can re-enter).
            LocaleUnavailableError: If the fallback locale is not available.
        """
        if self._initialized:
            logger.debug("session_already_initialized")
            return
        self._initialized = True

        options = options or InitializeOptions()
        try:
            self._available = await self._fetch_available()
            if options.fallback_locale not in self._available:
                raise LocaleUnavailableError(options.fallback_locale, self._available)
        except Exception:
            self._initialized = False
            raise

        self._persist_locale = options.persist_locale
        self._storage_key = options.storage_key
        self._state.fallback_locale = options.fallback_locale
        self._state.categories = list(options.categories)

        initial = self._initial_locale(options)
        logger.info(
            "initializing_session",
            locale=initial,
            fallback_locale=options.fallback_locale,
            categories=options.categories,
        )

        self._ticket += 1
        ticket = self._ticket

        self._state.is_loading = True
        self._state.status = SessionStatus.LOADING
        self._notify()

        loaded = await self.load_locale(initial)
        fallback_loaded = loaded and initial == options.fallback_locale
        if initial != options.fallback_locale:
            fallback_loaded = await self.load_locale(options.fallback_locale)

        if ticket != self._ticket:
            logger.info(
                "initial_locale_superseded",
                locale=initial,
                current_locale=self._state.current_locale,
                loaded_locales=self._store.locales(),
            )
            return

        if loaded:
            self._state.current_locale = initial
        else:
            self._state.current_locale = options.fallback_locale

        self._state.is_loading = False
        if loaded and fallback_loaded:
            self._state.status = SessionStatus.READY
        else:
            self._state.status = SessionStatus.ERROR

        logger.info(
            "session_initialized",
            locale=self._state.current_locale,
            status=self._state.status.value,
            loaded_locales=self._store.locales(),
        )
        self._notify()

    async def set_locale(self, code: str) -> bool:
        """Switch the session to a locale.

        Bare codes are resolved to their best regional variant. Unknown
        locales are logged and ignored. The locale's cached catalog is
        always reloaded.

        Returns:
            True if the session switched to the locale.
        """
        self._state.last_error = None

        target = code
        if not has_region(code):
            variant = RegionalVariantResolver.resolve(code, self._available)
            if variant:
                logger.debug("resolved_regional_variant", requested=code, locale=variant)
                target = variant

        if target not in self._available:
            logger.warning(
                "locale_unavailable",
                requested=code,
                locale=target,
                available=self._available,
                initialized=self._initialized,
            )
            self._notify()
            return False

        self._ticket += 1
        ticket = self._ticket

        previous_entry = self._store.entry(target)
        self._store.evict(target)
        self._state.is_loading = True
        self._state.status = SessionStatus.LOADING
        self._notify()

        try:
            catalog, index = await self._prepare(target)
        except CatalogLoadError as e:
            if previous_entry is not None and target not in self._store:
                self._store.put(target, *previous_entry)
            if ticket != self._ticket:
                logger.info("discarded_stale_locale_result", locale=target, ticket=ticket)
                return False
            self._state.last_error = str(e)
            self._state.is_loading = False
            self._state.status = SessionStatus.ERROR
            logger.warning(
                "set_locale_failed",
                locale=target,
                current_locale=self._state.current_locale,
                error=str(e),
            )
            self._notify()
            return False

        if ticket != self._ticket:
            # the session may still point at target after a newer call failed
            if target not in self._store:
                if target == self._state.current_locale:
                    self._store.put(target, catalog, index)
                elif previous_entry is not None:
                    self._store.put(target, *previous_entry)
            logger.info("discarded_stale_locale_result", locale=target, ticket=ticket)
            return False

        self._store.put(target, catalog, index)
        self._state.current_locale = target
        self._state.is_loading = False
        self._state.status = SessionStatus.READY
        self._persist(target)

        logger.info("locale_set", locale=target, key_count=len(catalog))
        self._notify()
        return True

    async def load_locale(self, locale: str) -> bool:
        """Load a locale into the store without switching to it.

        Failures are recorded in ``last_error``.

        Returns:
            True if the locale was loaded.
        """
        if locale not in self._available:
            logger.warning("locale_unavailable", locale=locale, available=self._available)
            return False

        try:
            catalog, index = await self._prepare(locale)
        except CatalogLoadError as e:
            self._state.last_error = str(e)
            logger.warning("load_locale_failed", locale=locale, error=str(e))
            return False

        self._store.put(locale, catalog, index)
        return True

    def require_available(self, code: str) -> str:
        """Resolve a code like set_locale does, raising if it is unavailable.

        Raises:
            LocaleUnavailableError: If neither the code nor its regional
                variant is available.
        """
        target = code
        if not has_region(code):
            target = RegionalVariantResolver.resolve(code, self._available) or code
        if target not in self._available:
            raise LocaleUnavailableError(target, self._available)
        return target

    def debug_info(self) -> Dict[str, Any]:
        current = self._state.current_locale
        return {
            "current_locale": current,
            "available_locales": list(self._available),
            "loaded_locales": self._store.locales(),
            "total_keys": len(self._store.get(current) or {}),
            "fallback_locale": self._state.fallback_locale,
            "status": self._state.status.value,
            "is_ready": self._state.is_ready,
            "is_loading": self._state.is_loading,
            "last_error": self._state.last_error,
        }

    # Internals

    async def _fetch_available(self) -> List[str]:
        try:
            available = await self.loader.source.available_locales()
        except CatalogLoadError:
            raise
        except Exception as e:
            logger.error("available_locales_failed", error=str(e))
            raise CatalogLoadError("*", f"could not list available locales: {e}") from e
        return list(available)

    def _initial_locale(self, options: InitializeOptions) -> str:
        if options.persist_locale:
            try:
                stored = read_persisted_locale(self.storage, options.storage_key)
            except MalformedPersistedValueError as e:
                logger.warning("malformed_persisted_locale", error=str(e))
                stored = None
            if stored and stored in self._available:
                return stored
            if stored:
                logger.info("persisted_locale_unavailable", locale=stored)

        negotiated = LocaleNegotiator(self._available).best_match(options.preferred_languages)
        if negotiated:
            return negotiated

        return options.fallback_locale

    async def _prepare(self, locale: str) -> Tuple[Catalog, KeyPathIndex]:
        catalog = await self.loader.load(locale)
        if self.app_name:
            catalog = filter_for_app(catalog, self.app_name)
        filtered = CategoryFilter.filter(catalog, self._state.categories)
        if filtered is catalog:
            filtered = dict(catalog)
        logger.debug(
            "prepared_catalog",
            locale=locale,
            key_count=len(filtered),
            total_key_count=len(catalog),
        )
        return filtered, KeyPathIndexer.build_index(filtered)

    def _persist(self, locale: str) -> None:
        if not self._persist_locale:
            return
        try:
            self.storage.set(self._storage_key, locale)
        except OSError as e:
            logger.error("persist_locale_failed", locale=locale, error=str(e))
