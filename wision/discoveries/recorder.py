"""
Discoveries from the radical-combination activity.

Any combination counts, catalog character or not. Each character is
rewarded once per user, at 10 points per radical combined.
"""
import logging
from typing import Optional

from wision.characters.catalog import CharacterCatalog
from wision.core.clock import Clock, iso_now
from wision.core.config import POINTS_PER_RADICAL
from wision.db.kv import KVStore, discoveries_key
from wision.profiles.ledger import apply_score_delta, get_profile, learned_characters

logger = logging.getLogger(__name__)

DEFAULT_METHOD = "creative_lab"


def list_discoveries(store: KVStore, user_id: str) -> list[dict]:
    return store.get(discoveries_key(user_id)) or []


def _learned_record(character: str, radicals: list[str], catalog_entry: Optional[dict], day: str) -> dict:
    if catalog_entry is not None:
        return {
            "character": character,
            "pronunciation": catalog_entry["pronunciation"],
            "meaning": catalog_entry["meaning"],
            "datelearned": day,
            "difficulty": catalog_entry["difficulty"],
        }
    return {
        "character": character,
        "pronunciation": None,
        "meaning": None,
        "datelearned": day,
        "difficulty": len(radicals),
    }


def record_discovery(
    store: KVStore,
    catalog: CharacterCatalog,
    user_id: str,
    character: str,
    radicals: list[str],
    clock: Clock,
    method: Optional[str] = None,
) -> dict:
    key = discoveries_key(user_id)
    record = _learned_record(character, radicals, catalog.find(character), clock.today())

    def _add_learned(profile: dict) -> None:
        learned = learned_characters(profile)
        if not any(isinstance(c, dict) and c.get("character") == character for c in learned):
            learned.append(record)
        profile["learnedCharacters"] = learned

    with store.lock_for(key):
        discoveries = store.get(key) or []

        if any(d.get("character") == character for d in discoveries):
            return {"isNew": False, "pointsEarned": 0, "totalDiscoveries": len(discoveries)}

        get_profile(store, user_id)

        discovery = {
            "character": character,
            "radicals": list(radicals),
            "method": method or DEFAULT_METHOD,
            "discoveredAt": iso_now(clock),
            "points": len(radicals) * POINTS_PER_RADICAL,
        }
        previous = list(discoveries)
        discoveries.append(discovery)
        store.set(key, discoveries)

        # an entry stays in the log only if its points were credited
        try:
            apply_score_delta(store, user_id, discovery["points"], _add_learned)
        except Exception:
            store.set(key, previous)
            logger.error(f"[DISCOVERY] user={user_id} character={character} score update failed, entry rolled back")
            raise

    logger.info(
        f"[DISCOVERY] user={user_id} character={character} radicals={len(radicals)} "
        f"points={discovery['points']} total={len(discoveries)}"
    )
    return {"isNew": True, "pointsEarned": discovery["points"], "totalDiscoveries": len(discoveries)}
