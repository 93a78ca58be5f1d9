"""
Daily challenge submission: one graded answer per user per date.

The submission record is written with an atomic insert-if-absent on
challenge_submission:{user_id}:{date}; only the request that wins that
insert credits any points.
"""
import logging
from typing import Optional

from wision.challenges.generator import parse_challenge_date
from wision.challenges.grading import explain, grade_answer, points_for
from wision.core.clock import Clock, iso_now
from wision.core.errors import AlreadySubmitted, NotFound
from wision.db.kv import KVStore, challenge_key, submission_key
from wision.profiles.ledger import apply_score_delta, compute_streak, get_profile

logger = logging.getLogger(__name__)


def get_submission(store: KVStore, user_id: str, date: str) -> Optional[dict]:
    return store.get(submission_key(user_id, date))


def submit_answer(
    store: KVStore,
    user_id: str,
    date: str,
    answer: str,
    clock: Clock,
    challenge_id: Optional[str] = None,
) -> dict:
    challenge = store.get(challenge_key(date))
    if challenge is None:
        raise NotFound("Challenge not found")

    key = submission_key(user_id, date)
    if store.get(key) is not None:
        logger.info(f"[SUBMIT] user={user_id} date={date} rejected: already submitted")
        raise AlreadySubmitted()

    # Profile must exist before anything is written
    get_profile(store, user_id)

    is_correct = grade_answer(challenge, answer)
    points_earned = points_for(is_correct)
    submitted_at = iso_now(clock)

    record = {
        "challengeId": challenge_id or challenge["id"],
        "answer": answer,
        "isCorrect": is_correct,
        "pointsEarned": points_earned,
        "submittedAt": submitted_at,
    }
    if not store.set_if_absent(key, record):
        logger.info(f"[SUBMIT] user={user_id} date={date} lost race to a concurrent submission")
        raise AlreadySubmitted()

    completion = {
        "character": challenge["character"],
        "answer": answer.strip(),
        "isCorrect": is_correct,
        "pointsEarned": points_earned,
        "completedAt": submitted_at,
    }

    def _record_completion(profile: dict) -> None:
        completed = profile.setdefault("dailyChallenges", {})
        completed[date] = completion
        profile["currentStreak"] = compute_streak(completed, parse_challenge_date(date))

    apply_score_delta(store, user_id, points_earned, _record_completion)
    logger.info(f"[SUBMIT] user={user_id} date={date} correct={is_correct} points={points_earned}")

    return {
        "isCorrect": is_correct,
        "pointsEarned": points_earned,
        "correctAnswer": challenge["meaning"],
        "explanation": explain(challenge, is_correct),
    }
