"""Catalog loading with regional/base merging.

The loader fetches one locale from a CatalogSource and, for regional
locales, merges the regional catalog over its base-language catalog.
It never touches the CatalogStore; the controller decides what is stored.
"""

import asyncio
from typing import Mapping, Optional

from localekit.i18n.exceptions import CatalogLoadError
from localekit.i18n.models import Catalog, base_language, has_region
from localekit.i18n.sources import CatalogSource
from localekit.logging import get_module_logger

logger = get_module_logger()


def merge_catalogs(base: Mapping[str, str], regional: Mapping[str, str]) -> Catalog:
    """Overlay a regional catalog on a copy of its base catalog.

    Catalogs are flat, so the merge is a per-key overwrite: a regional key
    always wins when present.
    """
    merged: Catalog = dict(base)
    merged.update(regional)
    return merged


class CatalogLoader:
    """Loads complete, ready-to-query catalogs from a source.

    Attributes:
        source: Backing CatalogSource.
        timeout: Seconds allowed for each individual fetch (None disables).
        strict_base: When True, a failed base-language fetch fails the
            regional load. When False the regional catalog is returned on
            its own and the failure is logged.
    """

    def __init__(
        self,
        source: CatalogSource,
        timeout: Optional[float] = 10.0,
        strict_base: bool = False,
    ):
        self.source = source
        self.timeout = timeout
        self.strict_base = strict_base

    async def load(self, locale: str) -> Catalog:
        """Load a locale, merging over its base language when regional.

        Callers must check availability first; the loader does not.

        Args:
            locale: Locale code ("de" or "de-AT").

        Returns:
            A new flat catalog.

        Raises:
            CatalogLoadError: If a required fetch fails or times out.
        """
        if not has_region(locale):
            catalog = await self._fetch(locale)
            logger.info("loaded_catalog", locale=locale, key_count=len(catalog))
            return dict(catalog)

        regional = await self._fetch(locale)

        base_locale = base_language(locale)
        try:
            base = await self._fetch(base_locale)
        except CatalogLoadError as e:
            if self.strict_base:
                logger.error(
                    "base_catalog_required",
                    locale=locale,
                    base_locale=base_locale,
                    error=str(e),
                )
                raise CatalogLoadError(
                    locale, f"base language {base_locale} unavailable: {e.reason}"
                ) from e
            logger.warning(
                "base_catalog_unavailable",
                locale=locale,
                base_locale=base_locale,
                error=str(e),
            )
            return dict(regional)

        merged = merge_catalogs(base, regional)
        logger.info(
            "merged_catalog",
            locale=locale,
            base_locale=base_locale,
            base_key_count=len(base),
            regional_key_count=len(regional),
            key_count=len(merged),
        )
        return merged

    async def _fetch(self, locale: str) -> Catalog:
        try:
            if self.timeout is None:
                catalog = await self.source.fetch_catalog(locale)
            else:
                catalog = await asyncio.wait_for(
                    self.source.fetch_catalog(locale), timeout=self.timeout
                )
        except CatalogLoadError:
            raise
        except asyncio.TimeoutError as e:
            logger.error("catalog_fetch_timeout", locale=locale, timeout=self.timeout)
            raise CatalogLoadError(locale, f"timed out after {self.timeout}s") from e
        except Exception as e:
            logger.error("catalog_fetch_failed", locale=locale, error=str(e))
            raise CatalogLoadError(locale, str(e)) from e

        if not isinstance(catalog, Mapping):
            raise CatalogLoadError(locale, "source returned a non-mapping catalog")
        return dict(catalog)
