"""Category filtering of loaded catalogs.

Restricts a catalog to the key sections an application needs. Matching is
a prefix match on the dot structure: "common" keeps "common.save" but not
"commonly.used".
"""

from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from localekit.i18n.models import Catalog
from localekit.logging import get_module_logger

logger = get_module_logger()


def _section_prefix(category: str) -> str:
    pattern = category[:-2] if category.endswith(".*") else category
    return pattern + "."


def _matches_any(key: str, categories: Sequence[str]) -> bool:
    return any(key.startswith(_section_prefix(c)) for c in categories)


class CategoryFilter:
    """Keeps or drops catalog keys by their dotted section prefix."""

    @staticmethod
    def filter(catalog: Catalog, categories: Sequence[str]) -> Catalog:
        """Keep only keys under one of ``categories``.

        A trailing ".*" on a category is ignored ("common.*" == "common").

        Args:
            catalog: Flat catalog.
            categories: Sections to keep. Empty keeps everything.

        Returns:
            The input catalog itself when ``categories`` is empty, otherwise
            a new filtered catalog.
        """
        if not categories:
            return catalog
        return {key: value for key, value in catalog.items() if _matches_any(key, categories)}

    @staticmethod
    def exclude(catalog: Catalog, categories: Sequence[str]) -> Catalog:
        """Drop keys under any of ``categories``; empty drops nothing."""
        if not categories:
            return catalog
        return {
            key: value for key, value in catalog.items() if not _matches_any(key, categories)
        }


class AppSectionConfig(BaseModel):
    """Sections shipped to one application."""

    included: Optional[List[str]] = None
    excluded: List[str] = Field(default_factory=list)


APP_SECTION_CONFIG: Dict[str, AppSectionConfig] = {
    "yes-no": AppSectionConfig(excluded=["admin", "deployment", "media", "content"]),
    "timer": AppSectionConfig(excluded=["admin", "deployment", "media", "content"]),
    "radio": AppSectionConfig(excluded=["admin", "deployment", "media", "content"]),
    "cards": AppSectionConfig(excluded=["admin", "deployment", "media", "content"]),
    "todo": AppSectionConfig(excluded=["admin", "deployment", "media", "content"]),
    "type": AppSectionConfig(excluded=["admin", "deployment", "media", "content"]),
    # admin ships everything
    "admin": AppSectionConfig(excluded=[]),
    "marketing": AppSectionConfig(excluded=["admin", "deployment"]),
    "ui-docs": AppSectionConfig(excluded=["admin", "deployment", "media", "content"]),
}


def filter_for_app(
    catalog: Catalog,
    app_name: Optional[str],
    config: Optional[Dict[str, AppSectionConfig]] = None,
) -> Catalog:
    """Apply an application's section configuration to a catalog.

    ``included`` is applied first, then ``excluded``. Unknown apps (or no
    app) keep the whole catalog.
    """
    config = APP_SECTION_CONFIG if config is None else config
    section_config = config.get(app_name) if app_name else None
    if section_config is None:
        return catalog

    filtered = catalog
    if section_config.included:
        filtered = CategoryFilter.filter(filtered, section_config.included)
    filtered = CategoryFilter.exclude(filtered, section_config.excluded)

    logger.debug(
        "filtered_catalog_for_app",
        app=app_name,
        key_count=len(filtered),
        total_key_count=len(catalog),
    )
    return filtered
