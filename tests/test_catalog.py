import json
import random

import pytest

from wision.characters.catalog import CatalogData, CharacterCatalog, load_catalog_data
from wision.core.errors import InvalidState
from wision.db.kv import CATALOG_KEY


def test_initialize_seeds_once(store, catalog):
    characters = catalog.initialize()
    assert len(characters) == 10
    assert characters[0]["character"] == "森"
    assert store.get(CATALOG_KEY) == characters

    # Later data changes do not reseed an existing catalog
    other = CharacterCatalog(store, CatalogData(characters=[characters[1]]))
    assert len(other.initialize()) == 10


def test_list_filters_by_category_and_difficulty(catalog):
    actions = catalog.list(category="actions")
    assert [c["character"] for c in actions] == ["看", "听", "跑"]

    hardest = catalog.list(difficulty=3)
    assert [c["character"] for c in hardest] == ["想"]

    assert [c["character"] for c in catalog.list(category="nature", difficulty=1)] == ["森", "炎"]
    assert catalog.list(category="animal") == []


def test_random_sample_draws_without_replacement(catalog):
    sample = catalog.random_sample(4)
    assert len(sample) == 4
    assert len({c["character"] for c in sample}) == 4


def test_random_sample_larger_than_pool_returns_everything(catalog):
    sample = catalog.random_sample(50, difficulty=1)
    assert sorted(c["character"] for c in sample) == sorted(["森", "炎"])
    assert len(catalog.random_sample(50)) == 10
    assert catalog.random_sample(0) == []


def test_random_sample_is_reproducible_with_seeded_rng(store):
    first = CharacterCatalog(store, rng=random.Random(3)).random_sample(3)
    second = CharacterCatalog(store, rng=random.Random(3)).random_sample(3)
    assert first == second


def test_find_and_lookup_tables(catalog):
    assert catalog.find("桌")["meaning"] == "table"
    assert catalog.find("龍") is None
    assert catalog.synonyms_for("look") == ["see", "watch"]
    assert catalog.synonyms_for("pour") == []
    assert catalog.radical_meaning("氵") == "water"
    assert catalog.radical_meaning("龍") == "unknown"


def test_duplicate_characters_are_rejected():
    entry = {
        "character": "森", "pronunciation": "sēn", "meaning": "forest",
        "radicals": ["木", "木", "木"], "story": "", "difficulty": 1, "category": "nature",
    }
    with pytest.raises(InvalidState):
        CatalogData(characters=[entry, dict(entry)])


def test_catalog_file_overrides_only_given_tables(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"synonyms": {"forest": ["woods", "grove"]}}), encoding="utf-8")

    data = load_catalog_data(str(path))
    assert len(data.characters) == 10
    assert data.synonyms == {"forest": ["woods", "grove"]}
    assert data.radical_meanings["木"] == "wood"


def test_unreadable_catalog_file_is_invalid_state(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(InvalidState):
        load_catalog_data(str(path))
