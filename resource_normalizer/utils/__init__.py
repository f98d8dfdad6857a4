"""Utility functions shared by the schema and normalization layers."""

from .inflection import Inflector, get_inflector, pluralize, singularize

__all__ = [
    "Inflector",
    "get_inflector",
    "pluralize",
    "singularize",
]
