"""Basic usage example for Catalog Resolver."""

import asyncio

from catalog_resolver import (
    InMemoryCatalogStore,
    MatchEngine,
    SynonymDictionary,
    UnitMatcher,
)
from catalog_resolver.dictionary.units import summarize

CATALOG = {
    "supplier_names": [
        {"id": 1, "name": "Пеноплэкс Комфорт 50мм"},
        {"id": 2, "name": "Пенополистирол экструдированный 1200x600x50"},
        {"id": 7, "name": "Кран шаровой BVR-R DN32 065B8310R Ридан"},
        {"id": 8, "name": "Кран шаровой латунный DN20"},
        {"id": 9, "name": "Клапан обратный DN32"},
    ],
    "units": [
        {"id": "m2", "name": "м²"},
        {"id": "m3", "name": "м³"},
        {"id": "pcs", "name": "шт"},
    ],
    "unit_synonyms": [
        {"unit_id": "m2", "synonym": "кв.м"},
        {"unit_id": "m3", "synonym": "куб.м"},
    ],
}


async def main():
    store = InMemoryCatalogStore(CATALOG)
    engine = MatchEngine(store, synonyms=SynonymDictionary(), units=UnitMatcher(store))
    await engine.initialize()

    # =================================================================
    # MATERIAL NAMES
    # =================================================================

    for text in ["пеноплэкс", "Кран шаровой резьбовой BVR-R DN32 065B8310R Ридан"]:
        result = await engine.resolve(text)
        print(f"\n{text!r} → {result.archetype.value}")
        print(f"  blocks: {result.query.blocks.as_dict()}")
        for match in result[:3]:
            print(f"  {match.final_score:5.1f}  #{match.entry_id} {match.display_name}")
            for reason in match.reasons:
                print(f"         - {reason}")

    # =================================================================
    # UNITS OF MEASURE
    # =================================================================

    column = ["м2", "кв.м", "шт", "кубм", "рулон"]
    matches = await engine.resolve_units(column)
    print()
    for match in matches:
        name = match.unit.name if match.unit else "-"
        print(f"  {match.original_text!r:10} → {name:4} ({match.confidence.value})")
    print(f"  summary: {summarize(matches)}")

    # =================================================================
    # METRICS
    # =================================================================

    print(f"\nmetrics: {engine.stats()['metrics']}")


if __name__ == "__main__":
    asyncio.run(main())
