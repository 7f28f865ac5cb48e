"""Shared fixtures for localekit tests.

The package root (app/) is put on sys.path by the pytest ``pythonpath``
setting in pyproject.toml.
"""

import pytest

from localekit.configuration import I18nSettings, RetrySettings


@pytest.fixture
def i18n_settings(tmp_path):
    """I18nSettings isolated from the environment and .env files."""
    return I18nSettings(
        _env_file=None,
        backend="files",
        translations_dir=str(tmp_path),
        fallback_locale="en",
        load_timeout_seconds=1.0,
    )


@pytest.fixture
def retry_settings():
    return RetrySettings(
        _env_file=None,
        max_attempts=3,
        base_delay_seconds=0.01,
        max_delay_seconds=0.04,
    )
