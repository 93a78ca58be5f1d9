"""
Daily challenge generation.

One character per calendar date, picked with a fixed linear-congruential
transform of the date's UTC-midnight timestamp so that every process (and
every restart) agrees on the same character for the same catalog order.
The first result for a date is persisted and returned unchanged afterwards.
"""
import logging
import re
from datetime import date as date_cls, datetime, timezone

from wision.characters.catalog import CharacterCatalog
from wision.core.errors import InvalidState
from wision.db.kv import KVStore, challenge_key

logger = logging.getLogger(__name__)

_LCG_MULTIPLIER = 9301
_LCG_INCREMENT = 49297
_LCG_MODULUS = 233280

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_challenge_date(value: str) -> date_cls:
    """Strict YYYY-MM-DD; raises ValueError otherwise."""
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise ValueError(f"Invalid challenge date {value!r}, expected YYYY-MM-DD")
    return date_cls.fromisoformat(value)


def date_timestamp_ms(value: str) -> int:
    d = parse_challenge_date(value)
    midnight = datetime(d.year, d.month, d.day, tzinfo=timezone.utc)
    return int(midnight.timestamp()) * 1000


def seed_for_date(value: str) -> int:
    return (date_timestamp_ms(value) * _LCG_MULTIPLIER + _LCG_INCREMENT) % _LCG_MODULUS


def index_for_date(value: str, catalog_size: int) -> int:
    """floor(seed / modulus * size), computed in integers."""
    if catalog_size <= 0:
        raise InvalidState("Cannot pick a daily challenge from an empty catalog")
    return seed_for_date(value) * catalog_size // _LCG_MODULUS


def build_challenge(value: str, entry: dict, catalog: CharacterCatalog) -> dict:
    return {
        "id": f"daily-{value}",
        "date": value,
        "character": entry["character"],
        "pronunciation": entry["pronunciation"],
        "meaning": entry["meaning"],
        "acceptableMeanings": [entry["meaning"], *catalog.synonyms_for(entry["meaning"])],
        "radicals": [
            {"character": radical, "meaning": catalog.radical_meaning(radical)}
            for radical in entry["radicals"]
        ],
        "hint": entry.get("story", ""),
        "points": entry["difficulty"] * 10,
    }


def get_challenge(store: KVStore, catalog: CharacterCatalog, value: str) -> dict:
    """Return the challenge for *value*, generating and persisting it on first request."""
    key = challenge_key(value)
    existing = store.get(key)
    if existing is not None:
        return existing

    characters = catalog.initialize()
    if not characters:
        logger.error(f"[DAILY] date={value} catalog is empty")
        raise InvalidState("Character catalog is empty")

    index = index_for_date(value, len(characters))
    challenge = build_challenge(value, characters[index], catalog)

    if store.set_if_absent(key, challenge):
        logger.info(f"[DAILY] date={value} generated index={index} character={challenge['character']}")
        return challenge

    # Another request generated it first; theirs is authoritative
    return store.get(key)
