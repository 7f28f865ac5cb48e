"""Tests for localekit.i18n.resolvers module."""

from localekit.i18n.resolvers import (
    LocaleNegotiator,
    RegionalVariantResolver,
    parse_accept_language,
)


class TestRegionalVariantResolver:
    """Tests for RegionalVariantResolver."""

    def test_doubled_form_wins_over_scan(self):
        """Doubled form is chosen even when another variant comes first."""
        assert RegionalVariantResolver.resolve("nl", ["en", "nl-NL", "nl-BE"]) == "nl-NL"
        assert RegionalVariantResolver.resolve("nl", ["en", "nl-BE", "nl-NL"]) == "nl-NL"

    def test_first_match_in_supplied_order(self):
        assert RegionalVariantResolver.resolve("fr", ["en", "fr-CA", "fr-BE"]) == "fr-CA"
        assert RegionalVariantResolver.resolve("fr", ["en", "fr-BE", "fr-CA"]) == "fr-BE"

    def test_no_match_returns_none(self):
        assert RegionalVariantResolver.resolve("it", ["en", "fr-CA"]) is None

    def test_bare_code_is_not_a_variant(self):
        assert RegionalVariantResolver.resolve("de", ["de"]) is None

    def test_prefix_requires_hyphen(self):
        """A code that merely starts with the letters is not a variant."""
        assert RegionalVariantResolver.resolve("e", ["en-GB"]) is None


class TestParseAcceptLanguage:
    """Tests for parse_accept_language."""

    def test_orders_by_quality(self):
        assert parse_accept_language("fr;q=0.5,en-US,de;q=0.8") == ["en-US", "de", "fr"]

    def test_drops_wildcard(self):
        assert parse_accept_language("en-US,en;q=0.9,*;q=0.8") == ["en-US", "en"]

    def test_invalid_quality_defaults_to_one(self):
        assert parse_accept_language("en;q=invalid,fr") == ["en", "fr"]

    def test_empty_header(self):
        assert parse_accept_language(None) == []
        assert parse_accept_language("") == []


class TestLocaleNegotiator:
    """Tests for LocaleNegotiator."""

    def test_exact_match(self):
        negotiator = LocaleNegotiator(["en", "de", "de-AT"])
        assert negotiator.match("de-AT") == "de-AT"

    def test_bare_language_match(self):
        negotiator = LocaleNegotiator(["en", "de", "de-AT"])
        assert negotiator.match("de-LU") == "de"

    def test_regional_variant_match(self):
        negotiator = LocaleNegotiator(["en", "fr-CA", "fr-BE"])
        assert negotiator.match("fr-CH") == "fr-CA"

    def test_os_style_locale(self):
        negotiator = LocaleNegotiator(["en", "pt-BR"])
        assert negotiator.match("pt_BR.UTF-8") == "pt-BR"

    def test_best_match_uses_preference_order(self):
        negotiator = LocaleNegotiator(["en", "nl-NL"])
        assert negotiator.best_match(["xx", "nl", "en"]) == "nl-NL"

    def test_best_match_none(self):
        negotiator = LocaleNegotiator(["en"])
        assert negotiator.best_match(["ja", "ko"]) is None

    def test_from_header(self):
        negotiator = LocaleNegotiator(["en", "de"])
        assert negotiator.from_header("fr-FR,de-DE;q=0.9,en;q=0.8") == "de"
