"""Server configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

from catalog_resolver.config import DictionaryConfig, MatchConfig, StoreConfig


@dataclass
class ServerConfig:
    """Configuration for the catalog resolver server."""

    # Network
    host: str = "0.0.0.0"
    port: int = 8430

    match: MatchConfig = field(default_factory=MatchConfig)
    dictionary: DictionaryConfig = field(default_factory=DictionaryConfig)
    store: StoreConfig = field(default_factory=StoreConfig)

    # CORS
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
