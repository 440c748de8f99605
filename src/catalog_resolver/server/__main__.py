"""CLI entrypoint: python -m catalog_resolver.server"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from catalog_resolver.config import DictionaryConfig, MatchConfig, StoreConfig
from catalog_resolver.server.config import ServerConfig


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="catalog-resolver-server",
        description="Catalog Resolver: material and unit matching over REST",
    )
    p.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    p.add_argument("--port", type=int, default=8430, help="Bind port (default: 8430)")

    # Catalog store
    p.add_argument("--store", choices=["memory", "postgrest"], default="memory",
                    help="Catalog store backend (default: memory)")
    p.add_argument("--seed", type=Path, default=None,
                    help="JSON seed file for the memory backend")
    p.add_argument("--postgrest-url", default="http://localhost:54321",
                    help="Supabase/PostgREST base URL")
    p.add_argument("--api-key", default=None, help="Supabase API key")
    p.add_argument("--timeout", type=float, default=10.0,
                    help="Catalog request timeout in seconds (default: 10)")

    # Matching
    p.add_argument("--catalog-table", default="supplier_names",
                    help="Table searched for material names (default: supplier_names)")
    p.add_argument("--max-suggestions", type=int, default=20)
    p.add_argument("--threshold", type=float, default=0.0,
                    help="Drop results scoring below this (default: 0.0)")
    p.add_argument("--fallback-only", action="store_true",
                    help="Disable hybrid matching, use plain substring search")
    p.add_argument("--synonyms-table", default=None,
                    help="Optional table of (canonical, alias) material synonyms")

    # Logging
    p.add_argument("--log-level", default="INFO",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])

    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> ServerConfig:
    return ServerConfig(
        host=args.host,
        port=args.port,
        match=MatchConfig(
            enabled=not args.fallback_only,
            confidence_threshold=args.threshold,
            max_suggestions=args.max_suggestions,
            catalog_table=args.catalog_table,
        ),
        dictionary=DictionaryConfig(material_synonyms_table=args.synonyms_table),
        store=StoreConfig(
            backend=args.store,
            base_url=args.postgrest_url,
            api_key=args.api_key,
            timeout=args.timeout,
            seed_path=args.seed,
        ),
    )


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    config = build_config(args)

    import uvicorn

    from catalog_resolver.server.rest.app import create_app

    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    main()
