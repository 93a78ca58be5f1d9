"""
Profile & score ledger.

Core rules:
  - score only moves through apply_score_delta(), by the exact delta the
    caller computed (daily submission or discovery); it is never recomputed
  - level = score // 100 + 1
  - score, dailyChallenges, currentStreak, userId and createdAt are owned by
    the server; a client profile replace cannot overwrite them
"""
import logging
from datetime import date, timedelta
from typing import Callable, Optional

from wision.core.clock import Clock, iso_now
from wision.core.config import POINTS_PER_LEVEL
from wision.core.errors import NotFound
from wision.db.kv import KVStore, profile_key

logger = logging.getLogger(__name__)

SERVER_OWNED_FIELDS = ("userId", "score", "dailyChallenges", "currentStreak", "createdAt")


# ---------------------------------------------------------------------------
# LEVELS / STREAKS
# ---------------------------------------------------------------------------

def level_for_score(score: int) -> int:
    return (score or 0) // POINTS_PER_LEVEL + 1


def points_to_next_level(score: int) -> int:
    return level_for_score(score) * POINTS_PER_LEVEL - (score or 0)


def compute_streak(daily_challenges: dict, as_of: date) -> int:
    """
    Consecutive days with a completed daily challenge, counting back from
    *as_of*. If *as_of* itself has no completion the streak may still be
    alive from yesterday.
    """
    completed = daily_challenges or {}
    day = as_of
    if day.isoformat() not in completed:
        day = as_of - timedelta(days=1)

    streak = 0
    while day.isoformat() in completed:
        streak += 1
        day -= timedelta(days=1)
    return streak


def learned_characters(profile: dict) -> list:
    """The profile's learned-character list; anything that is not a list reads as empty."""
    value = profile.get("learnedCharacters")
    return value if isinstance(value, list) else []


# ---------------------------------------------------------------------------
# GET / CREATE / REPLACE
# ---------------------------------------------------------------------------

def get_profile(store: KVStore, user_id: str) -> dict:
    profile = store.get(profile_key(user_id))
    if profile is None:
        raise NotFound("Profile not found")
    return profile


def create_profile(store: KVStore, user_id: str, fields: Optional[dict], clock: Clock) -> dict:
    now = iso_now(clock)
    profile = {
        "name": "",
        "age": None,
        "interests": [],
        "learnedCharacters": [],
        **(fields or {}),
    }
    profile.update({
        "userId": user_id,
        "score": 0,
        "dailyChallenges": {},
        "currentStreak": 0,
        "createdAt": now,
        "lastActive": now,
    })
    store.set(profile_key(user_id), profile)
    logger.info(f"[PROFILE] created user={user_id}")
    return profile


def replace_profile(store: KVStore, user_id: str, updated: dict, clock: Clock) -> dict:
    """Replace the client-editable part of a profile; server-owned fields survive."""
    key = profile_key(user_id)
    with store.lock_for(key):
        current = get_profile(store, user_id)
        profile = {k: v for k, v in (updated or {}).items() if k not in SERVER_OWNED_FIELDS}
        for name in SERVER_OWNED_FIELDS:
            if name in current:
                profile[name] = current[name]
        profile["updatedAt"] = iso_now(clock)
        store.set(key, profile)
    return profile


def touch_profile(store: KVStore, user_id: str, clock: Clock) -> None:
    key = profile_key(user_id)
    with store.lock_for(key):
        profile = store.get(key)
        if profile is not None:
            profile["lastActive"] = iso_now(clock)
            store.set(key, profile)


# ---------------------------------------------------------------------------
# SCORE
# ---------------------------------------------------------------------------

def apply_score_delta(
    store: KVStore,
    user_id: str,
    delta: int,
    mutate: Optional[Callable[[dict], None]] = None,
) -> dict:
    """
    Add *delta* to the user's score, let *mutate* adjust auxiliary fields
    (completion records, learned characters), and write the profile back.
    This is the only place score changes.
    """
    key = profile_key(user_id)
    with store.lock_for(key):
        profile = get_profile(store, user_id)
        old = profile.get("score") or 0
        profile["score"] = old + delta
        if mutate is not None:
            mutate(profile)
        store.set(key, profile)

    logger.info(f"[SCORE] user={user_id} {old} -> {profile['score']} (+{delta})")
    if level_for_score(profile["score"]) > level_for_score(old):
        logger.info(f"[LEVEL-UP] user={user_id} {level_for_score(old)} -> {level_for_score(profile['score'])}")
    return profile
