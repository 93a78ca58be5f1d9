"""
Seed the character catalog into the configured durable store and preview
the daily challenges it produces.

SAFE to run multiple times: an existing catalog is never overwritten, and
already-generated daily challenges are left as they are.

Usage:
    python scripts/seed_catalog.py            # preview the next 7 days
    python scripts/seed_catalog.py --days 30
"""
import argparse
import os
import sys
from datetime import date, timedelta

# Add the parent directory to the path so we can import wision modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from wision.challenges.generator import index_for_date
from wision.characters.catalog import CharacterCatalog, load_catalog_data
from wision.core.config import KV_BACKEND
from wision.db.kv import build_store


def seed_catalog(days: int) -> bool:
    store = build_store(KV_BACKEND)
    catalog = CharacterCatalog(store, load_catalog_data())

    characters = catalog.initialize()
    if not characters:
        print("ERROR: catalog is empty, nothing to schedule.")
        return False

    print(f"Catalog holds {len(characters)} characters")
    print("-" * 50)
    start = date.today()
    for offset in range(days):
        day = (start + timedelta(days=offset)).isoformat()
        entry = characters[index_for_date(day, len(characters))]
        print(f"{day}  {entry['character']}  {entry['pronunciation']:<6}  {entry['meaning']}")
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--days", type=int, default=7)
    args = parser.parse_args()

    print("Seeding character catalog...")
    if not seed_catalog(args.days):
        sys.exit(1)
