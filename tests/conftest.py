import os
import random
from datetime import datetime, timezone

import pytest

# Ensure SECRET_KEY is set before the security module is imported.
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("KV_BACKEND", "memory")

from fastapi.testclient import TestClient  # noqa: E402

from wision.auth.accounts import register_user  # noqa: E402
from wision.characters.catalog import CharacterCatalog  # noqa: E402
from wision.core.clock import FixedClock  # noqa: E402
from wision.core.security import create_access_token  # noqa: E402
from wision.db.kv import MemoryKVStore  # noqa: E402
from wision.main import create_app  # noqa: E402


@pytest.fixture
def store():
    return MemoryKVStore()


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 8, 1, 9, 30, tzinfo=timezone.utc))


@pytest.fixture
def catalog(store):
    return CharacterCatalog(store, rng=random.Random(7))


@pytest.fixture
def make_user(store, clock):
    def _make_user(name: str = "Mei", email: str | None = None, **profile):
        account = register_user(
            store, email or f"{name.lower()}@example.com", "secret123", {"name": name, **profile}, clock
        )
        return account["id"]
    return _make_user


@pytest.fixture
def app(store, clock):
    return create_app(store=store, clock=clock)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth_headers():
    def _auth_headers(user_id: str) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}
    return _auth_headers
