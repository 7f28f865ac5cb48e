"""Tests for localekit.i18n.translator module."""

from localekit.i18n.models import SessionState
from localekit.i18n.store import CatalogStore
from localekit.i18n.translator import LookupEngine, interpolate


def _engine(catalogs, current="en", fallback="en"):
    store = CatalogStore()
    for locale, catalog in catalogs.items():
        store.put(locale, dict(catalog))
    state = SessionState(current_locale=current, fallback_locale=fallback)
    return LookupEngine(store, state), state


class TestInterpolate:
    """Tests for interpolate."""

    def test_replaces_known_params(self):
        assert interpolate("Welcome {name}!", {"name": "Ana"}) == "Welcome Ana!"

    def test_leaves_unknown_params(self):
        assert interpolate("{a} and {b}", {"a": 1}) == "1 and {b}"

    def test_repeated_placeholder(self):
        assert interpolate("{x}-{x}", {"x": "y"}) == "y-y"

    def test_numbers_are_stringified(self):
        assert interpolate("{count} items", {"count": 3}) == "3 items"

    def test_no_params(self):
        assert interpolate("Welcome {name}!", None) == "Welcome {name}!"
        assert interpolate("Welcome {name}!", {}) == "Welcome {name}!"

    def test_non_word_placeholders_untouched(self):
        assert interpolate("{first name} {}", {"first name": "x"}) == "{first name} {}"


class TestLookupEngine:
    """Tests for LookupEngine fallback chain."""

    def test_exact_locale_first(self):
        engine, _ = _engine(
            {"de-AT": {"k": "regional"}, "de": {"k": "base"}, "en": {"k": "fallback"}},
            current="de-AT",
        )
        assert engine.t("k") == "regional"

    def test_base_language_second(self):
        engine, _ = _engine(
            {"de-AT": {}, "de": {"k": "base"}, "en": {"k": "fallback"}},
            current="de-AT",
        )
        assert engine.t("k") == "base"

    def test_base_language_skipped_when_not_loaded(self):
        engine, _ = _engine({"de-AT": {}, "en": {"k": "fallback"}}, current="de-AT")
        assert engine.t("k") == "fallback"

    def test_fallback_locale_third(self):
        engine, _ = _engine({"de": {}, "en": {"k": "fallback"}}, current="de")
        assert engine.t("k") == "fallback"

    def test_missing_everywhere_returns_key(self):
        engine, _ = _engine({"de": {}, "en": {}}, current="de")
        assert engine.t("missing.key") == "missing.key"

    def test_legacy_string_fallback_when_missing(self):
        engine, _ = _engine({"en": {}})
        assert engine.t("missing.key", "Default text") == "Default text"

    def test_legacy_string_ignored_when_found(self):
        engine, _ = _engine({"en": {"common.welcome": "Welcome {name}!"}})
        assert engine.t("common.welcome", "Default text") == "Welcome {name}!"

    def test_interpolation(self):
        engine, _ = _engine({"en": {"common.welcome": "Welcome {name}!"}})
        assert engine.t("common.welcome", {"name": "Ana"}) == "Welcome Ana!"
        assert engine.t("common.welcome") == "Welcome {name}!"

    def test_empty_value_is_a_miss(self):
        engine, _ = _engine({"de": {"k": ""}, "en": {"k": "fallback"}}, current="de")
        assert engine.t("k") == "fallback"

    def test_current_locale_not_loaded(self):
        engine, _ = _engine({"en": {"k": "fallback"}}, current="fr")
        assert engine.t("k") == "fallback"

    def test_reads_live_state(self):
        engine, state = _engine({"de": {"k": "de"}, "en": {"k": "en"}}, current="en")
        assert engine.t("k") == "en"
        state.current_locale = "de"
        assert engine.t("k") == "de"

    def test_non_string_key_never_raises(self):
        engine, _ = _engine({"en": {"42": "answer"}})
        assert engine.t(42) == "answer"
        assert engine.t(None) == "None"

    def test_bad_param_value_never_raises(self):
        class Unprintable:
            def __str__(self):
                raise RuntimeError("boom")

        engine, _ = _engine({"en": {"k": "value {x}"}})
        assert engine.t("k", {"x": Unprintable()}) == "value {x}"

    def test_non_string_value_is_a_miss(self):
        engine, _ = _engine({"de": {"k": 42}, "en": {"k": "fallback"}}, current="de")
        assert engine.t("k") == "fallback"

    def test_has_key(self):
        engine, _ = _engine({"de": {}, "en": {"k": "fallback"}}, current="de")
        assert engine.has_key("k")
        assert not engine.has_key("nope")
