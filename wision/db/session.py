import threading

from fastapi import Request

from wision.core.config import KV_BACKEND
from wision.db.kv import KVStore, build_store

_build_lock = threading.Lock()


def get_store(request: Request) -> KVStore:
    """The store injected by create_app(), opened from configuration on first use if none was given."""
    state = request.app.state
    if state.store is None:
        with _build_lock:
            if state.store is None:
                state.store = build_store(KV_BACKEND)
    return state.store
