"""
Answer grading for the daily challenge.

Used by the server-side grader and by the client's offline fallback, so both
paths always agree on what counts as correct and what it is worth.
"""
from wision.core.config import CORRECT_ANSWER_POINTS, WRONG_ANSWER_POINTS


def normalize_answer(text: str) -> str:
    if text is None:
        return ""
    return str(text).strip().casefold()


def grade_answer(challenge: dict, answer: str) -> bool:
    """Exact match against any acceptable meaning, ignoring case and surrounding whitespace."""
    given = normalize_answer(answer)
    return any(given == str(m).casefold() for m in challenge.get("acceptableMeanings") or [])


def points_for(is_correct: bool) -> int:
    return CORRECT_ANSWER_POINTS if is_correct else WRONG_ANSWER_POINTS


def explain(challenge: dict, is_correct: bool) -> str:
    gloss = f'{challenge["character"]} ({challenge["pronunciation"]}) means "{challenge["meaning"]}"'
    if is_correct:
        return f"Correct! {gloss}"
    return f'The correct answer is "{challenge["meaning"]}". {gloss}'
