"""
Character catalog: seeded once into the store, read-only afterwards.
"""
from __future__ import annotations

import json
import logging
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from wision.characters.data import DEFAULT_CHARACTERS, DEFAULT_SYNONYMS, DEFAULT_RADICAL_MEANINGS
from wision.characters.schemas import CatalogFile, Character
from wision.core.config import CATALOG_FILE
from wision.core.errors import InvalidState
from wision.db.kv import KVStore, CATALOG_KEY

logger = logging.getLogger(__name__)


@dataclass
class CatalogData:
    characters: list[dict] = field(default_factory=lambda: [dict(c) for c in DEFAULT_CHARACTERS])
    synonyms: dict[str, list[str]] = field(default_factory=lambda: dict(DEFAULT_SYNONYMS))
    radical_meanings: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_RADICAL_MEANINGS))

    def __post_init__(self):
        seen = set()
        for entry in self.characters:
            ch = entry["character"]
            if ch in seen:
                raise InvalidState(f"Duplicate character {ch!r} in catalog")
            seen.add(ch)


def load_catalog_data(path: Optional[str] = CATALOG_FILE) -> CatalogData:
    """Built-in tables, with any table present in the JSON file at *path* replacing its default."""
    if not path:
        return CatalogData()

    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        parsed = CatalogFile.model_validate(raw)
    except (OSError, ValueError, ValidationError) as exc:
        raise InvalidState(f"Could not load catalog file {path}: {exc}") from exc

    data = CatalogData(
        characters=(
            [c.model_dump() for c in parsed.characters]
            if parsed.characters is not None
            else [dict(c) for c in DEFAULT_CHARACTERS]
        ),
        synonyms=parsed.synonyms if parsed.synonyms is not None else dict(DEFAULT_SYNONYMS),
        radical_meanings=(
            parsed.radical_meanings if parsed.radical_meanings is not None else dict(DEFAULT_RADICAL_MEANINGS)
        ),
    )
    logger.info(f"[CATALOG] Loaded {len(data.characters)} characters from {path}")
    return data


class CharacterCatalog:
    def __init__(self, store: KVStore, data: Optional[CatalogData] = None, rng: Optional[random.Random] = None):
        self.store = store
        self.data = data or CatalogData()
        self.rng = rng or random.Random()

    def initialize(self) -> list[dict]:
        """Seed the catalog into the store on first access and return it."""
        characters = self.store.get(CATALOG_KEY)
        if characters is None:
            seed = [Character.model_validate(c).model_dump() for c in self.data.characters]
            if self.store.set_if_absent(CATALOG_KEY, seed):
                logger.info(f"[CATALOG] Seeded {len(seed)} characters")
            characters = self.store.get(CATALOG_KEY)
        return characters

    def list(self, category: Optional[str] = None, difficulty: Optional[int] = None) -> list[dict]:
        characters = self.initialize()
        if category:
            characters = [c for c in characters if c["category"] == category]
        if difficulty:
            characters = [c for c in characters if c["difficulty"] == difficulty]
        return characters

    def random_sample(
        self, n: int, difficulty: Optional[int] = None, category: Optional[str] = None
    ) -> list[dict]:
        """Shuffle the filtered set and take the first *n* (all of it if *n* is larger)."""
        pool = self.list(category=category, difficulty=difficulty)
        self.rng.shuffle(pool)
        return pool[:max(n, 0)]

    def find(self, character: str) -> Optional[dict]:
        for entry in self.initialize():
            if entry["character"] == character:
                return entry
        return None

    def synonyms_for(self, meaning: str) -> list[str]:
        return list(self.data.synonyms.get(meaning, []))

    def radical_meaning(self, radical: str) -> str:
        return self.data.radical_meanings.get(radical, "unknown")
