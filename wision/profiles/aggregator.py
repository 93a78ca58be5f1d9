"""
Leaderboard and progress analytics, computed from a prefix scan over
user_profile:* and the per-user discovery log.
"""
from datetime import datetime, timedelta, timezone

from wision.core.config import WEEKLY_WINDOW_DAYS
from wision.db.kv import KVStore, PROFILE_PREFIX, discoveries_key, profile_key
from wision.profiles.ledger import learned_characters, level_for_score, points_to_next_level

LEADERBOARD_TYPES = ("score", "discoveries", "streak")

_SORT_KEYS = {
    "score": lambda p: p.get("score") or 0,
    "discoveries": lambda p: len(learned_characters(p)),
    "streak": lambda p: p.get("currentStreak") or 0,
}


def get_leaderboard(store: KVStore, board_type: str = "score", limit: int = 10) -> list[dict]:
    """Top *limit* profiles, descending. Unknown types rank by score; ties keep scan order."""
    profiles = [entry["value"] for entry in store.get_by_prefix(PROFILE_PREFIX) if entry["value"]]
    sort_key = _SORT_KEYS.get(board_type, _SORT_KEYS["score"])
    ranked = sorted(profiles, key=sort_key, reverse=True)

    leaderboard = []
    for rank, profile in enumerate(ranked[:max(limit, 0)], start=1):
        score = profile.get("score") or 0
        leaderboard.append({
            "rank": rank,
            "name": profile.get("name"),
            "score": score,
            "discoveries": len(learned_characters(profile)),
            "streak": profile.get("currentStreak") or 0,
            "level": level_for_score(score),
        })
    return leaderboard


def _parse_timestamp(value: str):
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def get_progress(store: KVStore, user_id: str, now: datetime) -> dict:
    profile = store.get(profile_key(user_id)) or {}
    discoveries = store.get(discoveries_key(user_id)) or []
    score = profile.get("score") or 0

    week_ago = now - timedelta(days=WEEKLY_WINDOW_DAYS)
    weekly = 0
    for d in discoveries:
        found_at = _parse_timestamp(d.get("discoveredAt"))
        if found_at is not None and found_at > week_ago:
            weekly += 1

    return {
        "totalCharacters": len(learned_characters(profile)),
        "totalDiscoveries": len(discoveries),
        "currentLevel": level_for_score(score),
        "pointsToNextLevel": points_to_next_level(score),
        "weeklyActivity": weekly,
        "totalScore": score,
    }
