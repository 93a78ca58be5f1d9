import threading

import pytest

from wision.db.kv import MemoryKVStore, SqlKVStore


@pytest.fixture(params=["memory", "sql"])
def kv(request, tmp_path):
    if request.param == "memory":
        return MemoryKVStore()
    return SqlKVStore(f"sqlite:///{tmp_path / 'kv.db'}")


def test_get_missing_key_returns_none(kv):
    assert kv.get("nope") is None


def test_set_then_get_round_trips_json(kv):
    kv.set("user_profile:a", {"name": "A", "score": 5, "interests": ["art"]})
    assert kv.get("user_profile:a") == {"name": "A", "score": 5, "interests": ["art"]}

    kv.set("user_profile:a", {"name": "A", "score": 30})
    assert kv.get("user_profile:a")["score"] == 30


def test_returned_values_are_copies(kv):
    kv.set("discoveries:a", [{"character": "森"}])
    log = kv.get("discoveries:a")
    log.append({"character": "炎"})
    assert len(kv.get("discoveries:a")) == 1


def test_set_if_absent_only_writes_once(kv):
    assert kv.set_if_absent("challenge_submission:a:2024-08-01", {"answer": "rest"}) is True
    assert kv.set_if_absent("challenge_submission:a:2024-08-01", {"answer": "other"}) is False
    assert kv.get("challenge_submission:a:2024-08-01") == {"answer": "rest"}


def test_get_by_prefix_matches_literally_and_orders_by_key(kv):
    kv.set("user_profile:b", {"name": "B"})
    kv.set("user_profile:a", {"name": "A"})
    kv.set("userXprofile:c", {"name": "not a profile"})
    kv.set("discoveries:a", [])

    entries = kv.get_by_prefix("user_profile:")
    assert [e["key"] for e in entries] == ["user_profile:a", "user_profile:b"]
    assert entries[0]["value"] == {"name": "A"}


def test_delete(kv):
    kv.set("k", 1)
    kv.delete("k")
    kv.delete("k")
    assert kv.get("k") is None


def test_sql_store_persists_across_instances(tmp_path):
    url = f"sqlite:///{tmp_path / 'kv.db'}"
    SqlKVStore(url).set("daily_challenge:2024-08-01", {"character": "休"})
    assert SqlKVStore(url).get("daily_challenge:2024-08-01") == {"character": "休"}


def test_memory_set_if_absent_has_single_winner_under_threads():
    kv = MemoryKVStore()
    results = []

    def worker(n):
        results.append(kv.set_if_absent("slot", n))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count(True) == 1
