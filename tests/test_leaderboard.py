from datetime import datetime, timedelta, timezone

from wision.db.kv import discoveries_key, profile_key
from wision.profiles.aggregator import get_leaderboard, get_progress


def _profile(store, user_id, name, score=0, learned=0, streak=0):
    store.set(profile_key(user_id), {
        "userId": user_id,
        "name": name,
        "score": score,
        "learnedCharacters": [{"character": str(i)} for i in range(learned)],
        "currentStreak": streak,
    })


def test_score_leaderboard_ranks_descending(store):
    _profile(store, "a", "Ana", score=50)
    _profile(store, "b", "Bo", score=200)
    _profile(store, "c", "Cai", score=75)

    board = get_leaderboard(store, "score", 10)

    assert [e["rank"] for e in board] == [1, 2, 3]
    assert [e["name"] for e in board] == ["Bo", "Cai", "Ana"]
    assert [e["score"] for e in board] == [200, 75, 50]
    assert board[0] == {"rank": 1, "name": "Bo", "score": 200, "discoveries": 0, "streak": 0, "level": 3}


def test_limit_truncates(store):
    for i, score in enumerate([10, 40, 30, 20]):
        _profile(store, f"u{i}", f"User {i}", score=score)

    board = get_leaderboard(store, "score", 2)
    assert [e["score"] for e in board] == [40, 30]
    assert get_leaderboard(store, "score", 0) == []


def test_discoveries_and_streak_boards(store):
    _profile(store, "a", "Ana", score=500, learned=1, streak=7)
    _profile(store, "b", "Bo", score=10, learned=4, streak=2)

    assert [e["name"] for e in get_leaderboard(store, "discoveries", 10)] == ["Bo", "Ana"]
    assert [e["name"] for e in get_leaderboard(store, "streak", 10)] == ["Ana", "Bo"]


def test_unknown_type_ranks_by_score(store):
    _profile(store, "a", "Ana", score=5)
    _profile(store, "b", "Bo", score=10)
    assert [e["name"] for e in get_leaderboard(store, "bogus", 10)] == ["Bo", "Ana"]


def test_leaderboard_ignores_non_profile_keys(store):
    _profile(store, "a", "Ana", score=5)
    store.set(discoveries_key("a"), [{"character": "森"}])
    assert len(get_leaderboard(store)) == 1


def test_progress_aggregates_profile_and_discoveries(store):
    now = datetime(2024, 8, 1, 12, tzinfo=timezone.utc)
    _profile(store, "a", "Ana", score=150, learned=3)
    store.set(discoveries_key("a"), [
        {"character": "森", "discoveredAt": (now - timedelta(days=1)).isoformat()},
        {"character": "炎", "discoveredAt": (now - timedelta(days=6, hours=23)).isoformat()},
        {"character": "明", "discoveredAt": (now - timedelta(days=8)).isoformat()},
        {"character": "休", "discoveredAt": "2024-07-31T10:00:00Z"},
    ])

    assert get_progress(store, "a", now) == {
        "totalCharacters": 3,
        "totalDiscoveries": 4,
        "currentLevel": 2,
        "pointsToNextLevel": 50,
        "weeklyActivity": 3,
        "totalScore": 150,
    }


def test_progress_for_empty_user(store):
    progress = get_progress(store, "nobody", datetime(2024, 8, 1, tzinfo=timezone.utc))
    assert progress["currentLevel"] == 1
    assert progress["pointsToNextLevel"] == 100
    assert progress["weeklyActivity"] == 0


def test_malformed_learned_characters_count_as_zero(store):
    _profile(store, "a", "Ana", score=50, learned=2)
    _profile(store, "b", "Bo", score=80)
    broken = store.get(profile_key("b"))
    broken["learnedCharacters"] = 5
    store.set(profile_key("b"), broken)

    board = get_leaderboard(store, "discoveries", 10)

    assert [(e["name"], e["discoveries"]) for e in board] == [("Ana", 2), ("Bo", 0)]
    assert get_progress(store, "b", datetime(2024, 8, 1, tzinfo=timezone.utc))["totalCharacters"] == 0
