"""Tests for type-name pluralization."""

import pytest

from resource_normalizer.utils.inflection import Inflector, pluralize, singularize


class TestPluralize:
    """Singular type name -> plural wire key."""

    @pytest.mark.parametrize(
        "singular,plural",
        [
            ("tag", "tags"),
            ("article", "articles"),
            ("user", "users"),
            ("profile", "profiles"),
            ("comment", "comments"),
            ("category", "categories"),
        ],
    )
    def test_regular_plurals(self, singular, plural):
        assert pluralize(singular) == plural

    def test_empty_string_is_unchanged(self):
        assert pluralize("") == ""

    def test_irregular_override_wins(self):
        inflector = Inflector({"cactus": "cactuses"})
        assert inflector.pluralize("cactus") == "cactuses"

    def test_overrides_are_per_instance(self):
        Inflector({"tag": "tagz"})
        assert pluralize("tag") == "tags"


class TestSingularize:
    """Property name -> inferred singular type."""

    def test_plural_becomes_singular(self):
        assert singularize("comments") == "comment"
        assert singularize("tags") == "tag"

    def test_singular_word_is_unchanged(self):
        assert singularize("author") == "author"

    @pytest.mark.parametrize(
        "word",
        ["class", "address", "process", "business", "status", "campus", "bus", "alias"],
    )
    def test_singular_words_ending_in_s_are_unchanged(self, word):
        assert singularize(word) == word

    @pytest.mark.parametrize(
        "plural,singular",
        [
            ("classes", "class"),
            ("addresses", "address"),
            ("buses", "bus"),
            ("statuses", "status"),
            ("categories", "category"),
            ("users", "user"),
        ],
    )
    def test_plurals_of_sibilant_words(self, plural, singular):
        assert singularize(plural) == singular

    def test_registered_singular_is_unchanged(self):
        inflector = Inflector({"guru": "gurus", "thesis": "theses"})
        assert inflector.singularize("thesis") == "thesis"
        assert inflector.singularize("gurus") == "guru"

    def test_irregular_override_reverses(self):
        inflector = Inflector({"cactus": "cactuses"})
        assert inflector.singularize("cactuses") == "cactus"

    def test_round_trip_for_type_names(self):
        inflector = Inflector()
        for name in ("article", "comment", "tag", "category"):
            assert inflector.singularize(inflector.pluralize(name)) == name
