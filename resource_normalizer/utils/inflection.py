"""Pluralization utilities for mapping resource type names to wire keys.

Resource types are declared in the singular (``article``, ``tag``) while API
payloads key collections by the plural (``articles``, ``tags``). This module
wraps the ``inflect`` engine behind two pure string functions and lets callers
register irregular forms that the English heuristics get wrong for their API.
"""

from typing import Dict, Mapping, Optional

import inflect


class Inflector:
    """Deterministic singular/plural transforms for resource type names.

    Attributes:
        irregular_plurals: Explicit singular -> plural overrides, checked before
            the inflect heuristics (e.g. {"person": "people"})
    """

    def __init__(self, irregular_plurals: Optional[Mapping[str, str]] = None):
        """Initialize Inflector.

        Args:
            irregular_plurals: Optional singular -> plural overrides
        """
        self._engine = inflect.engine()
        self.irregular_plurals: Dict[str, str] = dict(irregular_plurals or {})
        self._irregular_singulars = {
            plural: singular for singular, plural in self.irregular_plurals.items()
        }

    def pluralize(self, word: str) -> str:
        """Return the plural wire key for a singular type name.

        Args:
            word: Singular noun (e.g. "category")

        Returns:
            Plural noun (e.g. "categories"). Empty input is returned unchanged.
        """
        if not word:
            return word
        if word in self.irregular_plurals:
            return self.irregular_plurals[word]
        return self._engine.plural_noun(word)

    def singularize(self, word: str) -> str:
        """Return the singular form of a property name.

        Words inflect already considers singular (e.g. "author", "class",
        "status") come back as-is, as do singulars registered in
        irregular_plurals.

        Args:
            word: Noun in plural or singular form

        Returns:
            Singular noun
        """
        if not word:
            return word
        if word in self._irregular_singulars:
            return self._irregular_singulars[word]
        if word in self.irregular_plurals or self._is_singular_sibilant(word):
            return word
        singular = self._engine.singular_noun(word)
        return singular if singular else word

    def _is_singular_sibilant(self, word: str) -> bool:
        # singular_noun strips the "s" of "class" or "bus"; inflect pluralizes
        # such singulars with "es" (or leaves them uninflected), never plain "s"
        return word.endswith("s") and self._engine.plural_noun(word) != f"{word}s"


_default_inflector = Inflector()


def get_inflector() -> Inflector:
    """Return the process-wide default Inflector."""
    return _default_inflector


def pluralize(word: str) -> str:
    """Pluralize with the default Inflector."""
    return _default_inflector.pluralize(word)


def singularize(word: str) -> str:
    """Singularize with the default Inflector."""
    return _default_inflector.singularize(word)
