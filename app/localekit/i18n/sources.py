"""Backing catalog sources.

Defines the contract the CatalogLoader fetches from and provides the
bindings used by the applications:

- StaticCatalogSource: in-memory catalogs (embedded data, tests)
- FileCatalogSource: generated per-locale files (<locale>.json / .yml)
- HttpCatalogSource: translation data worker (GET /app/{app} or /all)
"""

import asyncio
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import httpx
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from localekit.i18n.exceptions import CatalogLoadError
from localekit.i18n.models import Catalog, flatten_catalog
from localekit.logging import get_module_logger

logger = get_module_logger()

INDEX_FILE = "index.json"
CATALOG_SUFFIXES = (".json", ".yml", ".yaml")


class CatalogSource(ABC):
    """Abstract base for catalog sources.

    Implementations fetch exactly one locale's catalog, without merging
    regional and base catalogs (the CatalogLoader does that).
    """

    @abstractmethod
    async def fetch_catalog(self, locale: str) -> Catalog:
        """Fetch the flat catalog for a single locale.

        Args:
            locale: Locale code (e.g. "de" or "de-AT").

        Returns:
            Flat key -> string catalog.

        Raises:
            CatalogLoadError, FileNotFoundError, ValueError or transport
            errors when the catalog cannot be produced.
        """
        pass

    @abstractmethod
    async def available_locales(self) -> List[str]:
        """List locale codes this source can serve, in a stable order."""
        pass


class StaticCatalogSource(CatalogSource):
    """Source backed by an in-memory mapping of locale -> catalog.

    Catalogs may be flat or nested; they are flattened on fetch. The order
    of ``available_locales()`` is the mapping's insertion order.
    """

    def __init__(self, catalogs: Mapping[str, Mapping[str, Any]]):
        self.catalogs: Dict[str, Mapping[str, Any]] = dict(catalogs)

    async def fetch_catalog(self, locale: str) -> Catalog:
        if locale not in self.catalogs:
            raise FileNotFoundError(f"No catalog registered for locale {locale}")
        return flatten_catalog(self.catalogs[locale])

    async def available_locales(self) -> List[str]:
        return list(self.catalogs.keys())


class FileCatalogSource(CatalogSource):
    """Source reading generated per-locale files from a directory.

    Expects files named <locale>.json, <locale>.yml or <locale>.yaml, each
    holding a flat or nested mapping. The available locale list comes from
    index.json ({"AVAILABLE_LANGUAGES": [...]}) when present, otherwise
    from the directory listing in sorted order.

    Attributes:
        translations_dir: Directory containing the generated files.
    """

    def __init__(self, translations_dir: Path):
        self.translations_dir = Path(translations_dir)

        if not self.translations_dir.exists():
            raise ValueError(
                f"Translations directory not found: {self.translations_dir}"
            )

        logger.info(
            "initialized_file_source",
            translations_dir=str(self.translations_dir),
        )

    async def fetch_catalog(self, locale: str) -> Catalog:
        return await asyncio.to_thread(self._read_catalog, locale)

    async def available_locales(self) -> List[str]:
        return await asyncio.to_thread(self._list_locales)

    def _find_file(self, locale: str) -> Path:
        for suffix in CATALOG_SUFFIXES:
            candidate = self.translations_dir / f"{locale}{suffix}"
            if candidate.is_file():
                return candidate
        raise FileNotFoundError(
            f"No translation file found for locale {locale} in {self.translations_dir}"
        )

    def _read_catalog(self, locale: str) -> Catalog:
        path = self._find_file(locale)
        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.suffix == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            logger.error("catalog_parse_error", file=str(path), error=str(e))
            raise ValueError(f"Failed to parse {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Catalog file {path} must contain a mapping")

        catalog = flatten_catalog(data)
        logger.debug("read_catalog_file", file=str(path), key_count=len(catalog))
        return catalog

    def _list_locales(self) -> List[str]:
        index_path = self.translations_dir / INDEX_FILE
        if index_path.is_file():
            with open(index_path, "r", encoding="utf-8") as f:
                index = json.load(f)
            languages = index.get("AVAILABLE_LANGUAGES") if isinstance(index, dict) else None
            if isinstance(languages, list):
                return [str(code) for code in languages]
            logger.warning("invalid_index_file", file=str(index_path))

        locales = {
            path.stem
            for path in self.translations_dir.iterdir()
            if path.suffix in CATALOG_SUFFIXES and path.name != INDEX_FILE
        }
        return sorted(locales)


class WorkerKey(BaseModel):
    """Translation key record returned by the worker."""

    model_config = ConfigDict(extra="ignore")

    key: str
    category: Optional[str] = None


class WorkerLanguage(BaseModel):
    """Language record returned by the worker."""

    model_config = ConfigDict(extra="ignore")

    code: str
    name: Optional[str] = None


class WorkerTranslationData(BaseModel):
    """``data`` section of the worker payload."""

    model_config = ConfigDict(extra="ignore")

    keys: List[WorkerKey] = Field(default_factory=list)
    languages: List[WorkerLanguage] = Field(default_factory=list)
    translations: Dict[str, Dict[str, str]] = Field(default_factory=dict)


class WorkerResponse(BaseModel):
    """Envelope returned by GET /app/{app} and GET /all."""

    model_config = ConfigDict(extra="ignore")

    success: bool
    data: Optional[WorkerTranslationData] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    error: Optional[str] = None


class HttpCatalogSource(CatalogSource):
    """Source backed by the translation data worker.

    Fetches the whole payload for the configured app (or all apps) once and
    serves every locale from it until ``clear_cache()`` is called.

    Attributes:
        base_url: Worker base URL (without trailing slash).
        app_name: Application identifier; None requests /all.
        use_cache: Whether to keep the payload between fetches.
    """

    def __init__(
        self,
        base_url: str,
        app_name: Optional[str] = None,
        timeout: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
        use_cache: bool = True,
    ):
        if not base_url:
            raise ValueError("Worker base URL is required for the http backend")
        self.base_url = base_url.rstrip("/")
        self.app_name = app_name
        self.use_cache = use_cache
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None
        self._payload: Optional[WorkerTranslationData] = None
        self._lock = asyncio.Lock()
        self.log = logger.bind(base_url=self.base_url, app=app_name or "all")

    @property
    def endpoint(self) -> str:
        if self.app_name:
            return f"{self.base_url}/app/{self.app_name}"
        return f"{self.base_url}/all"

    async def fetch_catalog(self, locale: str) -> Catalog:
        payload = await self._get_payload(locale)
        if locale not in payload.translations:
            raise CatalogLoadError(locale, "locale missing from worker payload")
        return dict(payload.translations[locale])

    async def available_locales(self) -> List[str]:
        payload = await self._get_payload("*")
        if payload.languages:
            return [language.code for language in payload.languages]
        return list(payload.translations.keys())

    async def keys(self) -> List[str]:
        """Translation keys known to the worker for this app."""
        payload = await self._get_payload("*")
        return [record.key for record in payload.keys]

    def clear_cache(self) -> None:
        """Drop the cached payload so the next fetch hits the worker."""
        self._payload = None
        self.log.info("cleared_worker_payload_cache")

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this source created it."""
        if self._owns_client:
            await self._client.aclose()

    async def _get_payload(self, locale: str) -> WorkerTranslationData:
        async with self._lock:
            if self.use_cache and self._payload is not None:
                return self._payload

            try:
                response = await self._client.get(self.endpoint)
                response.raise_for_status()
                envelope = WorkerResponse.model_validate(response.json())
            except httpx.HTTPError as e:
                self.log.error("worker_request_failed", error=str(e))
                raise CatalogLoadError(locale, f"worker request failed: {e}") from e
            except (ValueError, ValidationError) as e:
                self.log.error("worker_payload_invalid", error=str(e))
                raise CatalogLoadError(locale, f"invalid worker payload: {e}") from e

            if not envelope.success or envelope.data is None:
                reason = envelope.error or "worker reported failure"
                self.log.error("worker_returned_failure", error=reason)
                raise CatalogLoadError(locale, reason)

            self.log.info(
                "fetched_worker_payload",
                language_count=len(envelope.data.languages),
                key_count=len(envelope.data.keys),
            )
            if self.use_cache:
                self._payload = envelope.data
            return envelope.data
