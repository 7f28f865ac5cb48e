"""Factory functions for creating i18n components.

Builds sources, storage and the session controller from settings, and
wraps initialization in the deferred-initialization retry policy.
"""

from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

import httpx

from localekit.configuration import I18nSettings, RetrySettings, settings
from localekit.i18n.controller import LocaleSessionController
from localekit.i18n.exceptions import CatalogLoadError
from localekit.i18n.loader import CatalogLoader
from localekit.i18n.models import InitializeOptions
from localekit.i18n.persistence import (
    InMemoryLocaleStorage,
    JsonFileLocaleStorage,
    LocaleStorage,
)
from localekit.i18n.sources import (
    CatalogSource,
    FileCatalogSource,
    HttpCatalogSource,
    StaticCatalogSource,
)
from localekit.logging import get_module_logger
from localekit.resilience import RetryPolicy, retry_async

logger = get_module_logger()


def create_source(
    i18n_settings: Optional[I18nSettings] = None,
    catalogs: Optional[Mapping[str, Mapping[str, Any]]] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> CatalogSource:
    """Create the catalog source selected by ``backend``.

    Args:
        i18n_settings: Settings (default: global settings.i18n)
        catalogs: Catalog data for the 'memory' backend
        client: Optional pre-configured httpx client for the 'http' backend

    Returns:
        CatalogSource: Configured source

    Raises:
        ValueError: If the backend is misconfigured
    """
    i18n_settings = i18n_settings or settings.i18n

    if i18n_settings.backend == "memory":
        return StaticCatalogSource(catalogs or {})
    if i18n_settings.backend == "http":
        return HttpCatalogSource(
            base_url=i18n_settings.worker_base_url,
            app_name=i18n_settings.app_name,
            timeout=i18n_settings.http_timeout_seconds,
            client=client,
        )
    return FileCatalogSource(Path(i18n_settings.translations_dir))


def create_storage(i18n_settings: Optional[I18nSettings] = None) -> LocaleStorage:
    """Create locale storage: a JSON file when storage_path is set, else memory."""
    i18n_settings = i18n_settings or settings.i18n
    if i18n_settings.storage_path:
        return JsonFileLocaleStorage(Path(i18n_settings.storage_path))
    return InMemoryLocaleStorage()


def create_initialize_options(
    i18n_settings: Optional[I18nSettings] = None,
    preferred_languages: Optional[Sequence[str]] = None,
) -> InitializeOptions:
    i18n_settings = i18n_settings or settings.i18n
    return InitializeOptions(
        fallback_locale=i18n_settings.fallback_locale,
        persist_locale=i18n_settings.persist_locale,
        storage_key=i18n_settings.storage_key,
        categories=list(i18n_settings.categories),
        preferred_languages=list(preferred_languages or []),
    )


def create_session_controller(
    i18n_settings: Optional[I18nSettings] = None,
    source: Optional[CatalogSource] = None,
    storage: Optional[LocaleStorage] = None,
) -> LocaleSessionController:
    """Create a LocaleSessionController wired from settings.

    Usage:
        controller = create_session_controller()
        await controller.initialize(create_initialize_options())
        controller.t("common.save")
    """
    i18n_settings = i18n_settings or settings.i18n
    loader = CatalogLoader(
        source=source or create_source(i18n_settings),
        timeout=i18n_settings.load_timeout_seconds,
        strict_base=i18n_settings.strict_base_merge,
    )
    controller = LocaleSessionController(
        loader=loader,
        storage=storage or create_storage(i18n_settings),
        default_locale=i18n_settings.fallback_locale,
        app_name=i18n_settings.app_name,
    )
    logger.info(
        "session_controller_created",
        backend=i18n_settings.backend,
        app=i18n_settings.app_name,
        fallback_locale=i18n_settings.fallback_locale,
    )
    return controller


async def initialize_with_retry(
    controller: LocaleSessionController,
    options: Optional[InitializeOptions] = None,
    retry_settings: Optional[RetrySettings] = None,
    policy: Optional[RetryPolicy] = None,
    **retry_kwargs: Any,
) -> LocaleSessionController:
    """Initialize a controller, retrying while the catalog source is not ready.

    Only CatalogLoadError (source not reachable) is retried; configuration
    errors propagate immediately.
    """
    policy = policy or RetryPolicy.from_settings(retry_settings or settings.retry)
    await retry_async(
        lambda: controller.initialize(options),
        policy=policy,
        retry_on=(CatalogLoadError,),
        operation_name="i18n_initialize",
        **retry_kwargs,
    )
    return controller
