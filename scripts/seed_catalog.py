#!/usr/bin/env python3
"""
Seed the Supabase catalog tables from the static ingredient ontology.

Writes ingredient_categories, ingredients, cooking_methods and
ingredient_cooking_effects, in that order, using upserts so the script can
be re-run safely.

Usage:
    python scripts/seed_catalog.py [--path DIR] [--dry-run]
"""

import argparse
from pathlib import Path

from smaak.catalog.sources import catalog_to_rows, load_static_catalog
from smaak.db.client import upsert_rows
from smaak.observability import setup_logging


def seed_catalog(path: Path | None = None, dry_run: bool = False) -> dict[str, int]:
    """
    Upload the static catalog.

    Returns:
        Table name -> rows written (rows prepared, for dry runs)
    """
    data = load_static_catalog(path)
    tables = catalog_to_rows(data)

    print("Seeding catalog...")
    counts: dict[str, int] = {}
    for table, rows in tables.items():
        if dry_run:
            print(f"  {table}: would upsert {len(rows)} rows")
            counts[table] = len(rows)
            continue
        counts[table] = upsert_rows(table, rows)
        print(f"  {table}: upserted {counts[table]} rows")

    print("\nSeeding complete!")
    return counts


def main():
    parser = argparse.ArgumentParser(description="Seed the ingredient catalog into Supabase")
    parser.add_argument("--path", type=Path, default=None, help="Catalog directory (defaults to the packaged one)")
    parser.add_argument("--dry-run", action="store_true", help="Print what would be written")
    args = parser.parse_args()

    setup_logging("INFO")
    seed_catalog(path=args.path, dry_run=args.dry_run)


if __name__ == "__main__":
    main()
