"""Configuration module - public API.

Centralized configuration using Pydantic BaseSettings with domain-based
organization.

Exports:
    settings: Singleton Settings instance
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Translation runtime settings
    RetrySettings: Deferred initialization retry settings
"""

from localekit.configuration.i18n import I18nSettings
from localekit.configuration.retry import RetrySettings
from localekit.configuration.settings import Settings, settings

__all__ = ["Settings", "settings", "I18nSettings", "RetrySettings"]
