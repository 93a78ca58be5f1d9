from pathlib import Path

from fastapi import APIRouter, Depends

from wision.db.kv import KVStore, MemoryKVStore, SqlKVStore
from wision.db.session import get_store

router = APIRouter(prefix="/debug", tags=["debug"])


@router.get("/store")
def debug_store(prefix: str = "", store: KVStore = Depends(get_store)):
    """Keys currently held by the store; account records are never listed."""
    return [
        entry["key"]
        for entry in store.get_by_prefix(prefix)
        if not entry["key"].startswith("user_account:")
    ]


@router.get("/diagnostics/db")
def db_diagnostics(store: KVStore = Depends(get_store)):
    """
    Lightweight storage diagnostics for debugging deployments.

    This endpoint is meant to be exposed only when ENABLE_DEBUG_ROUTES=1.
    It intentionally avoids leaking secrets while still being useful.
    """
    if isinstance(store, MemoryKVStore):
        return {"backend": "memory", "keys": len(store.keys())}

    if not isinstance(store, SqlKVStore):
        return {"backend": type(store).__name__}

    url = store.engine.url
    backend = url.get_backend_name()
    info = {
        "backend": backend,
        "url": url.render_as_string(hide_password=True),
    }

    if backend == "sqlite":
        db_path = Path(url.database or "").resolve()
        exists = db_path.exists()
        size = db_path.stat().st_size if exists else 0
        info.update(
            {
                "sqlite_path": str(db_path),
                "sqlite_exists": exists,
                "sqlite_size_bytes": size,
            }
        )
    else:
        info.update(
            {
                "database": url.database,
                "host": url.host,
                "port": url.port,
                "drivername": url.drivername,
            }
        )

    return info
