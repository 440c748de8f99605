"""Synonym and unit-of-measure dictionaries."""

from catalog_resolver.dictionary.base import LazyDictionary, load_table, normalize_key
from catalog_resolver.dictionary.synonyms import DEFAULT_MATERIAL_SYNONYMS, SynonymDictionary
from catalog_resolver.dictionary.units import UnitMatcher, generate_variations, is_close_match, summarize

__all__ = [
    "DEFAULT_MATERIAL_SYNONYMS",
    "LazyDictionary",
    "SynonymDictionary",
    "UnitMatcher",
    "generate_variations",
    "is_close_match",
    "load_table",
    "normalize_key",
    "summarize",
]
