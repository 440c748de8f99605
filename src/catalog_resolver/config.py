"""Configuration for the matching engine, dictionaries and catalog store."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass
class MatchConfig:
    """Matching engine settings.

    Scores are unbounded positive floats, so ``confidence_threshold`` is
    compared against ``final_score`` directly.
    """

    enabled: bool = True
    confidence_threshold: float = 0.0
    max_suggestions: int = 20
    catalog_table: str = "supplier_names"

    # Per-lookup caps
    exact_limit: int = 20
    block_limit: int = 10
    synonym_limit: int = 5
    fuzzy_limit: int = 5
    fallback_limit: int = 5

    # Per-generator deadline in seconds; None relies on the store timeout
    generator_timeout: float | None = None

    fuzzy_min_word_length: int = 4
    min_material_token_length: int = 2


@dataclass
class DictionaryConfig:
    """Where the unit and material synonym dictionaries are loaded from."""

    units_table: str = "units"
    unit_synonyms_table: str = "unit_synonyms"
    material_synonyms_table: str | None = None  # built-in synonyms only
    page_size: int = 1000


@dataclass
class StoreConfig:
    """Catalog store backend.

    ``memory`` serves rows from a JSON seed file; ``postgrest`` talks to a
    Supabase/PostgREST endpoint.
    """

    backend: str = "memory"
    base_url: str = "http://localhost:54321"
    api_key: str | None = None
    schema: str | None = None
    timeout: float = 10.0
    seed_path: Path | None = None
