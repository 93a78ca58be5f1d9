"""
HTTP client for the Wision API.

Degraded mode: when the backend cannot be reached (connection error,
timeout or 5xx), get_todays_challenge() and submit_todays_challenge() fall
back to generating the challenge from the embedded catalog and grading it
with the same functions the server uses. Results produced this way carry
"offline": True and are not recorded anywhere. Every fallback is logged.
"""
import logging
from typing import Any, Optional

import requests

from wision.challenges.generator import get_challenge
from wision.challenges.grading import explain, grade_answer, points_for
from wision.characters.catalog import CatalogData, CharacterCatalog
from wision.core.clock import Clock
from wision.core.config import API_BASE
from wision.core.errors import (
    AlreadySubmitted,
    Conflict,
    NotFound,
    Unauthorized,
    UpstreamUnavailable,
    WisionError,
)
from wision.db.kv import MemoryKVStore

logger = logging.getLogger(__name__)


def _extract_error(r: requests.Response, fallback: str) -> str:
    """Pull the backend's error message out of a failed response."""
    try:
        j = r.json()
        if isinstance(j, dict):
            return j.get("error") or j.get("detail") or j.get("message") or fallback
    except ValueError:
        pass
    return fallback


def _error_for(status_code: int, message: str) -> WisionError:
    if status_code == 401:
        return Unauthorized(message)
    if status_code == 404:
        return NotFound(message)
    if status_code == 400:
        if message == AlreadySubmitted.message:
            return AlreadySubmitted(message)
        return Conflict(message)
    err = WisionError(message)
    err.status_code = status_code
    return err


class WisionClient:
    def __init__(
        self,
        base_url: str = API_BASE,
        token: Optional[str] = None,
        timeout: float = 10,
        session: Optional[requests.Session] = None,
        catalog_data: Optional[CatalogData] = None,
        clock: Optional[Clock] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()
        self.clock = clock or Clock()
        self._offline_store = MemoryKVStore()
        self._offline_catalog = CharacterCatalog(self._offline_store, catalog_data)

    # ------------------------------------------------------------------
    # transport
    # ------------------------------------------------------------------

    def _request(self, method: str, endpoint: str, **kwargs) -> Any:
        url = f"{self.base_url}{endpoint}"
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            r = self.session.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.warning(f"[CLIENT] {method} {endpoint} network error: {exc!r}")
            raise UpstreamUnavailable(f"Backend unreachable: {exc}") from exc

        if r.status_code >= 500:
            message = _extract_error(r, f"HTTP {r.status_code}")
            logger.warning(f"[CLIENT] {method} {endpoint} FAILED status={r.status_code}: {message}")
            raise UpstreamUnavailable(message)

        if not (200 <= r.status_code < 300):
            message = _extract_error(r, f"HTTP {r.status_code}")
            logger.info(f"[CLIENT] {method} {endpoint} status={r.status_code}: {message}")
            raise _error_for(r.status_code, message)

        return r.json()

    # ------------------------------------------------------------------
    # authentication
    # ------------------------------------------------------------------

    def register(self, email: str, password: str, profile: Optional[dict] = None) -> dict:
        response = self._request(
            "POST", "/users/register", json={"email": email, "password": password, "profile": profile or {}}
        )
        if response.get("token"):
            self.token = response["token"]
        return response

    def login(self, email: str, password: str) -> dict:
        response = self._request("POST", "/users/login", json={"email": email, "password": password})
        token = (response.get("session") or {}).get("access_token")
        if token:
            self.token = token
        return response

    def logout(self) -> None:
        self.token = None

    def is_authenticated(self) -> bool:
        return bool(self.token)

    # ------------------------------------------------------------------
    # endpoints
    # ------------------------------------------------------------------

    def health_check(self) -> dict:
        return self._request("GET", "/health")

    def get_profile(self) -> dict:
        return self._request("GET", "/users/profile")

    def update_profile(self, profile: dict) -> dict:
        return self._request("PUT", "/users/profile", json=profile)

    def get_characters(self, category: Optional[str] = None, difficulty: Optional[int] = None) -> dict:
        params = {}
        if category:
            params["category"] = category
        if difficulty:
            params["difficulty"] = difficulty
        return self._request("GET", "/characters", params=params)

    def get_random_characters(self, count: int = 1, difficulty: Optional[int] = None) -> dict:
        params = {"count": count}
        if difficulty:
            params["difficulty"] = difficulty
        return self._request("GET", "/characters/random", params=params)

    def get_daily_challenge(self) -> dict:
        return self._request("GET", "/challenges/daily")

    def submit_challenge(self, challenge_id: str, answer: str, challenge_date: str) -> dict:
        return self._request(
            "POST",
            "/challenges/submit",
            json={"challengeId": challenge_id, "answer": answer, "challengeDate": challenge_date},
        )

    def record_discovery(self, character: str, radicals: list[str], method: str = "creative_lab") -> dict:
        return self._request(
            "POST", "/discoveries", json={"character": character, "radicals": radicals, "method": method}
        )

    def get_discoveries(self) -> dict:
        return self._request("GET", "/discoveries")

    def get_leaderboard(self, board_type: str = "score", limit: int = 10) -> dict:
        return self._request("GET", "/leaderboard", params={"type": board_type, "limit": limit})

    def get_progress_analytics(self) -> dict:
        return self._request("GET", "/analytics/progress")

    # ------------------------------------------------------------------
    # degraded mode helpers
    # ------------------------------------------------------------------

    def local_challenge(self, date: Optional[str] = None) -> dict:
        challenge = get_challenge(self._offline_store, self._offline_catalog, date or self.clock.today())
        return {**challenge, "offline": True}

    def get_todays_challenge(self) -> dict:
        try:
            return self.get_daily_challenge()["challenge"]
        except UpstreamUnavailable as exc:
            logger.warning(f"[CLIENT] Backend unavailable, using local challenge: {exc.message}")
            return self.local_challenge()

    def submit_todays_challenge(self, answer: str) -> dict:
        challenge = self.get_todays_challenge()
        if not challenge.get("offline"):
            try:
                return self.submit_challenge(challenge["id"], answer, challenge["date"])
            except UpstreamUnavailable as exc:
                logger.warning(f"[CLIENT] Submission failed, grading locally: {exc.message}")
        return self.grade_locally(challenge, answer)

    @staticmethod
    def grade_locally(challenge: dict, answer: str) -> dict:
        is_correct = grade_answer(challenge, answer)
        return {
            "success": True,
            "isCorrect": is_correct,
            "pointsEarned": points_for(is_correct),
            "correctAnswer": challenge["meaning"],
            "explanation": explain(challenge, is_correct),
            "offline": True,
        }
