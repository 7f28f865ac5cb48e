"""Translation runtime settings."""

from typing import Annotated, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import NoDecode

from localekit.configuration.base import FeatureSettings


class I18nSettings(FeatureSettings):
    """Configuration for catalog sources, locale persistence and lookup.

    Environment Variables:
        I18N_BACKEND: Catalog source - 'files', 'http' or 'memory'
        I18N_TRANSLATIONS_DIR: Directory with generated per-locale files
        I18N_WORKER_BASE_URL: Base URL of the translation data worker
        I18N_APP_NAME: Application identifier (selects /app/{name} and section config)
        I18N_FALLBACK_LOCALE: Last-resort locale for lookups (default: en)
        I18N_PERSIST_LOCALE: Persist the chosen locale (default: True)
        I18N_STORAGE_KEY: Key the chosen locale is stored under
        I18N_STORAGE_PATH: JSON file used for persistence (in-memory when unset)
        I18N_CATEGORIES: Comma-separated key sections to keep (empty keeps all)
        I18N_LOAD_TIMEOUT_SECONDS: Timeout for a single catalog fetch
        I18N_HTTP_TIMEOUT_SECONDS: Timeout for worker HTTP requests
        I18N_STRICT_BASE_MERGE: Fail regional loads when the base catalog fails

    Example:
        ```python
        from localekit.configuration import settings

        if settings.i18n.backend == "http":
            base_url = settings.i18n.worker_base_url
        ```
    """

    backend: str = Field(
        default="files",
        alias="I18N_BACKEND",
        description="Catalog source: 'files', 'http' or 'memory'",
    )
    translations_dir: str = Field(
        default="locales",
        alias="I18N_TRANSLATIONS_DIR",
        description="Directory containing generated per-locale catalog files",
    )
    worker_base_url: str = Field(
        default="",
        alias="I18N_WORKER_BASE_URL",
        description="Base URL of the translation data worker",
    )
    app_name: Optional[str] = Field(
        default=None,
        alias="I18N_APP_NAME",
        description="Application identifier used for /app/{name} and section filtering",
    )
    fallback_locale: str = Field(
        default="en",
        alias="I18N_FALLBACK_LOCALE",
        description="Locale used as last resort when a key is missing",
    )
    persist_locale: bool = Field(
        default=True,
        alias="I18N_PERSIST_LOCALE",
        description="Persist the chosen locale between sessions",
    )
    storage_key: str = Field(
        default="localekit:locale",
        alias="I18N_STORAGE_KEY",
        description="Key under which the chosen locale is stored",
    )
    storage_path: Optional[str] = Field(
        default=None,
        alias="I18N_STORAGE_PATH",
        description="JSON file for locale persistence (in-memory when unset)",
    )
    categories: Annotated[List[str], NoDecode] = Field(
        default_factory=list,
        alias="I18N_CATEGORIES",
        description="Key sections to keep after loading (empty keeps all)",
    )
    load_timeout_seconds: float = Field(
        default=10.0,
        alias="I18N_LOAD_TIMEOUT_SECONDS",
        description="Timeout for a single catalog fetch (seconds)",
    )
    http_timeout_seconds: float = Field(
        default=15.0,
        alias="I18N_HTTP_TIMEOUT_SECONDS",
        description="Timeout for worker HTTP requests (seconds)",
    )
    strict_base_merge: bool = Field(
        default=False,
        alias="I18N_STRICT_BASE_MERGE",
        description="Fail regional loads when the base-language catalog cannot be fetched",
    )

    @field_validator("categories", mode="before")
    @classmethod
    def _split_categories(cls, value):
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    @field_validator("backend")
    @classmethod
    def _check_backend(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in ("files", "http", "memory"):
            raise ValueError(f"Unsupported i18n backend: {value}")
        return value
