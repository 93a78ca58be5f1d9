from datetime import datetime, timezone

import pytest

from wision.challenges.generator import get_challenge
from wision.challenges.submissions import submit_answer
from wision.core.clock import FixedClock
from wision.core.errors import InvalidState, NotFound
from wision.db.kv import profile_key
from wision.discoveries import recorder
from wision.discoveries.recorder import list_discoveries, record_discovery
from wision.profiles.ledger import get_profile


def test_first_discovery_is_new_and_scored_by_radicals(store, catalog, clock, make_user):
    user = make_user()

    result = record_discovery(store, catalog, user, "森", ["木", "木", "木"], clock)

    assert result == {"isNew": True, "pointsEarned": 30, "totalDiscoveries": 1}
    [entry] = list_discoveries(store, user)
    assert entry["character"] == "森"
    assert entry["method"] == "creative_lab"
    assert entry["points"] == 30
    assert entry["discoveredAt"].startswith("2024-08-01T09:30")


def test_repeat_discovery_earns_nothing(store, catalog, clock, make_user):
    user = make_user()
    record_discovery(store, catalog, user, "森", ["木", "木", "木"], clock)

    again = record_discovery(store, catalog, user, "森", ["木", "木", "木"], clock, method="learning")

    assert again == {"isNew": False, "pointsEarned": 0, "totalDiscoveries": 1}
    assert len(list_discoveries(store, user)) == 1
    assert get_profile(store, user)["score"] == 30


def test_discovery_adds_learned_character_from_catalog(store, catalog, clock, make_user):
    user = make_user()
    record_discovery(store, catalog, user, "明", ["日", "月"], clock)

    [learned] = get_profile(store, user)["learnedCharacters"]
    assert learned == {
        "character": "明",
        "pronunciation": "míng",
        "meaning": "bright",
        "datelearned": "2024-08-01",
        "difficulty": 2,
    }


def test_invented_combinations_are_first_class(store, catalog, clock, make_user):
    user = make_user()
    result = record_discovery(store, catalog, user, "火木", ["火", "木"], clock)

    assert result["isNew"] is True
    assert result["pointsEarned"] == 20
    [learned] = get_profile(store, user)["learnedCharacters"]
    assert learned["meaning"] is None
    assert learned["difficulty"] == 2


def test_discoveries_are_per_user(store, catalog, clock, make_user):
    ana, bo = make_user("Ana"), make_user("Bo")
    record_discovery(store, catalog, ana, "炎", ["火", "火"], clock)
    assert record_discovery(store, catalog, bo, "炎", ["火", "火"], clock)["isNew"] is True


def test_unknown_user_cannot_record(store, catalog, clock):
    with pytest.raises(NotFound):
        record_discovery(store, catalog, "ghost", "炎", ["火", "火"], clock)
    assert list_discoveries(store, "ghost") == []


def test_score_is_the_sum_of_credited_points(store, catalog, clock, make_user):
    user = make_user()
    credited = 0

    for character, radicals in [("森", ["木", "木", "木"]), ("炎", ["火", "火"]), ("森", ["木", "木", "木"])]:
        credited += record_discovery(store, catalog, user, character, radicals, clock)["pointsEarned"]

    for day in ("2024-07-31", "2024-08-01"):
        challenge = get_challenge(store, catalog, day)
        when = FixedClock(datetime.fromisoformat(day).replace(hour=8, tzinfo=timezone.utc))
        credited += submit_answer(store, user, day, challenge["meaning"], when)["pointsEarned"]

    assert credited == 30 + 20 + 0 + 25 + 25
    assert get_profile(store, user)["score"] == credited


def test_failed_score_update_leaves_no_log_entry(store, catalog, clock, make_user, monkeypatch):
    user = make_user()

    def _fail(*args, **kwargs):
        raise InvalidState("profile write failed")

    monkeypatch.setattr(recorder, "apply_score_delta", _fail)
    with pytest.raises(InvalidState):
        record_discovery(store, catalog, user, "森", ["木", "木", "木"], clock)

    assert list_discoveries(store, user) == []
    assert get_profile(store, user)["score"] == 0

    monkeypatch.undo()
    retry = record_discovery(store, catalog, user, "森", ["木", "木", "木"], clock)
    assert retry == {"isNew": True, "pointsEarned": 30, "totalDiscoveries": 1}
    assert get_profile(store, user)["score"] == 30


def test_malformed_learned_characters_are_replaced(store, catalog, clock, make_user):
    user = make_user()
    profile = get_profile(store, user)
    profile["learnedCharacters"] = "abc"
    store.set(profile_key(user), profile)

    result = record_discovery(store, catalog, user, "森", ["木", "木", "木"], clock)

    assert result["isNew"] is True
    profile = get_profile(store, user)
    assert profile["score"] == 30
    assert [c["character"] for c in profile["learnedCharacters"]] == ["森"]
