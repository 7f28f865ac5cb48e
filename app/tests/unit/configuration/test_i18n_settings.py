"""Unit tests for localekit configuration settings."""

import pytest
from pydantic import ValidationError

from localekit.configuration import I18nSettings, RetrySettings, Settings


@pytest.mark.unit
class TestI18nSettings:
    """Test suite for I18nSettings."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in (
            "I18N_BACKEND",
            "I18N_CATEGORIES",
            "I18N_FALLBACK_LOCALE",
            "I18N_PERSIST_LOCALE",
            "I18N_APP_NAME",
        ):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        i18n = I18nSettings(_env_file=None)

        assert i18n.backend == "files"
        assert i18n.translations_dir == "locales"
        assert i18n.fallback_locale == "en"
        assert i18n.persist_locale is True
        assert i18n.storage_key == "localekit:locale"
        assert i18n.categories == []
        assert i18n.load_timeout_seconds == 10.0
        assert i18n.strict_base_merge is False

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("I18N_BACKEND", "HTTP")
        monkeypatch.setenv("I18N_APP_NAME", "timer")
        monkeypatch.setenv("I18N_FALLBACK_LOCALE", "de")
        monkeypatch.setenv("I18N_PERSIST_LOCALE", "false")

        i18n = I18nSettings(_env_file=None)

        assert i18n.backend == "http"
        assert i18n.app_name == "timer"
        assert i18n.fallback_locale == "de"
        assert i18n.persist_locale is False

    def test_categories_split_on_commas(self, monkeypatch):
        monkeypatch.setenv("I18N_CATEGORIES", "common, timer ,,admin")
        assert I18nSettings(_env_file=None).categories == ["common", "timer", "admin"]

    def test_categories_accept_list(self):
        assert I18nSettings(_env_file=None, categories=["common"]).categories == ["common"]

    def test_unsupported_backend_rejected(self):
        with pytest.raises(ValidationError):
            I18nSettings(_env_file=None, backend="ftp")


@pytest.mark.unit
class TestRetrySettings:
    """Test suite for RetrySettings."""

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("RETRY_MAX_ATTEMPTS", "7")
        monkeypatch.setenv("RETRY_BASE_DELAY_SECONDS", "0.25")

        retry = RetrySettings(_env_file=None)

        assert retry.max_attempts == 7
        assert retry.base_delay_seconds == 0.25


@pytest.mark.unit
class TestSettings:
    """Test suite for the Settings aggregator."""

    def test_builds_sections(self):
        settings = Settings(_env_file=None)
        assert isinstance(settings.i18n, I18nSettings)
        assert isinstance(settings.retry, RetrySettings)

    def test_accepts_section_overrides(self):
        i18n = I18nSettings(_env_file=None, fallback_locale="fr")
        settings = Settings(_env_file=None, i18n=i18n)
        assert settings.i18n.fallback_locale == "fr"

    def test_is_production(self, monkeypatch):
        monkeypatch.delenv("PREFIX", raising=False)
        assert Settings(_env_file=None).is_production is True
        assert Settings(_env_file=None, PREFIX="dev-").is_production is False
