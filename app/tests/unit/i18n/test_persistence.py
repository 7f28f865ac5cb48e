"""Tests for localekit.i18n.persistence module."""

import json

import pytest

from localekit.i18n import MalformedPersistedValueError
from localekit.i18n.persistence import (
    InMemoryLocaleStorage,
    JsonFileLocaleStorage,
    read_persisted_locale,
)


class TestInMemoryLocaleStorage:
    """Tests for InMemoryLocaleStorage."""

    def test_get_set(self):
        storage = InMemoryLocaleStorage()
        assert storage.get("k") is None
        storage.set("k", "de-AT")
        assert storage.get("k") == "de-AT"

    def test_initial_data(self):
        storage = InMemoryLocaleStorage({"k": "nl"})
        assert storage.get("k") == "nl"


class TestJsonFileLocaleStorage:
    """Tests for JsonFileLocaleStorage."""

    def test_missing_file_reads_none(self, tmp_path):
        storage = JsonFileLocaleStorage(tmp_path / "prefs.json")
        assert storage.get("k") is None

    def test_set_creates_file_and_keeps_other_keys(self, tmp_path):
        path = tmp_path / "nested" / "prefs.json"
        path.parent.mkdir()
        path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")

        storage = JsonFileLocaleStorage(path)
        storage.set("k", "fr-CA")

        assert json.loads(path.read_text(encoding="utf-8")) == {"theme": "dark", "k": "fr-CA"}
        assert storage.get("k") == "fr-CA"

    def test_set_creates_parent_directory(self, tmp_path):
        storage = JsonFileLocaleStorage(tmp_path / "a" / "b" / "prefs.json")
        storage.set("k", "en")
        assert storage.get("k") == "en"

    def test_unreadable_file_is_malformed(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("{broken", encoding="utf-8")
        storage = JsonFileLocaleStorage(path)
        with pytest.raises(MalformedPersistedValueError):
            storage.get("k")

    def test_set_overwrites_malformed_file(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("[1, 2]", encoding="utf-8")
        storage = JsonFileLocaleStorage(path)
        storage.set("k", "de")
        assert storage.get("k") == "de"


class TestReadPersistedLocale:
    """Tests for read_persisted_locale."""

    def test_valid_value(self):
        assert read_persisted_locale(InMemoryLocaleStorage({"k": "de-AT"}), "k") == "de-AT"

    def test_missing_or_empty(self):
        assert read_persisted_locale(InMemoryLocaleStorage(), "k") is None
        assert read_persisted_locale(InMemoryLocaleStorage({"k": ""}), "k") is None

    @pytest.mark.parametrize("value", ["{\"locale\": \"de\"}", "not a locale", 12, ["en"]])
    def test_malformed_value_raises(self, value):
        with pytest.raises(MalformedPersistedValueError):
            read_persisted_locale(InMemoryLocaleStorage({"k": value}), "k")
