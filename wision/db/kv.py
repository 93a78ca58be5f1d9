"""
String-keyed JSON store used by every stateful component.

Key layout:
    user_profile:{user_id}
    user_account:{email}
    characters_database
    daily_challenge:{date}
    challenge_submission:{user_id}:{date}
    discoveries:{user_id}

Two interchangeable backends: MemoryKVStore (process-local dict) and
SqlKVStore (the kv_store table through SQLAlchemy). Both return copies, so
callers must write changes back with set().
"""
import copy
import logging
import threading
from typing import Any

from sqlalchemy.exc import IntegrityError

from wision.db.base import Base, make_engine, make_session_factory, log_engine_diagnostics
from wision.db.models import KVEntry

logger = logging.getLogger(__name__)


def profile_key(user_id: str) -> str:
    return f"user_profile:{user_id}"


def account_key(email: str) -> str:
    return f"user_account:{email.strip().lower()}"


def challenge_key(date: str) -> str:
    return f"daily_challenge:{date}"


def submission_key(user_id: str, date: str) -> str:
    return f"challenge_submission:{user_id}:{date}"


def discoveries_key(user_id: str) -> str:
    return f"discoveries:{user_id}"


CATALOG_KEY = "characters_database"
PROFILE_PREFIX = "user_profile:"


class KVStore:
    """Interface shared by the backends."""

    def __init__(self):
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def get(self, key: str) -> Any:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def set_if_absent(self, key: str, value: Any) -> bool:
        """Atomically insert *value* unless *key* exists. Returns True if written."""
        raise NotImplementedError

    def get_by_prefix(self, prefix: str) -> list[dict]:
        """Return [{"key": ..., "value": ...}] for every key starting with *prefix*, ordered by key."""
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError

    def lock_for(self, key: str) -> threading.Lock:
        """Per-key mutex for read-modify-write sequences within this process."""
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock


class MemoryKVStore(KVStore):
    def __init__(self):
        super().__init__()
        self._data: dict[str, Any] = {}
        self._guard = threading.Lock()

    def get(self, key: str) -> Any:
        with self._guard:
            return copy.deepcopy(self._data.get(key))

    def set(self, key: str, value: Any) -> None:
        with self._guard:
            self._data[key] = copy.deepcopy(value)

    def set_if_absent(self, key: str, value: Any) -> bool:
        with self._guard:
            if key in self._data:
                return False
            self._data[key] = copy.deepcopy(value)
            return True

    def get_by_prefix(self, prefix: str) -> list[dict]:
        with self._guard:
            return [
                {"key": k, "value": copy.deepcopy(v)}
                for k, v in sorted(self._data.items())
                if k.startswith(prefix)
            ]

    def delete(self, key: str) -> None:
        with self._guard:
            self._data.pop(key, None)

    def keys(self) -> list[str]:
        with self._guard:
            return sorted(self._data)


class SqlKVStore(KVStore):
    def __init__(self, url: str | None = None, engine=None, create_tables: bool = True):
        super().__init__()
        if engine is None:
            engine = make_engine(url) if url else make_engine()
        self.engine = engine
        self.SessionLocal = make_session_factory(engine)
        log_engine_diagnostics(engine)
        if create_tables:
            # Still useful in dev; in production prefer Alembic
            Base.metadata.create_all(bind=engine)

    def get(self, key: str) -> Any:
        with self.SessionLocal() as db:
            entry = db.get(KVEntry, key)
            return entry.value if entry else None

    def set(self, key: str, value: Any) -> None:
        with self.SessionLocal() as db:
            entry = db.get(KVEntry, key)
            if entry is None:
                db.add(KVEntry(key=key, value=value))
            else:
                entry.value = value
            try:
                db.commit()
            except IntegrityError:
                # Inserted concurrently between our read and commit; overwrite
                db.rollback()
                db.query(KVEntry).filter(KVEntry.key == key).update({"value": value})
                db.commit()

    def set_if_absent(self, key: str, value: Any) -> bool:
        with self.SessionLocal() as db:
            db.add(KVEntry(key=key, value=value))
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                return False
            return True

    def get_by_prefix(self, prefix: str) -> list[dict]:
        with self.SessionLocal() as db:
            rows = (
                db.query(KVEntry)
                .filter(KVEntry.key.startswith(prefix, autoescape=True))
                .order_by(KVEntry.key.asc())
                .all()
            )
            return [{"key": r.key, "value": r.value} for r in rows]

    def delete(self, key: str) -> None:
        with self.SessionLocal() as db:
            db.query(KVEntry).filter(KVEntry.key == key).delete()
            db.commit()


def build_store(backend: str, url: str | None = None) -> KVStore:
    if backend == "memory":
        logger.info("[DB] Using in-memory key-value store")
        return MemoryKVStore()
    if backend == "sql":
        return SqlKVStore(url)
    raise ValueError(f"Unknown KV_BACKEND {backend!r} (expected 'memory' or 'sql')")
