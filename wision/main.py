import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wision.characters.catalog import CatalogData, load_catalog_data
from wision.core.clock import Clock
from wision.core.config import API_PREFIX, ENABLE_DEBUG_ROUTES
from wision.core.errors import WisionError
from wision.core.logging import configure_logging
from wision.db.kv import KVStore

from wision.api.routes import router as api_router
from wision.api.debug_routes import router as debug_router
from wision.auth.routes import router as users_router
from wision.characters.routes import router as characters_router
from wision.challenges.routes import router as challenges_router
from wision.discoveries.routes import router as discoveries_router

logger = logging.getLogger(__name__)


def create_app(
    store: Optional[KVStore] = None,
    clock: Optional[Clock] = None,
    catalog_data: Optional[CatalogData] = None,
    enable_debug_routes: bool = ENABLE_DEBUG_ROUTES,
) -> FastAPI:
    """
    Build the application around an explicit store. When *store* is None the
    configured backend (KV_BACKEND) is opened on the first request.
    """
    configure_logging()

    app = FastAPI(title="Wision", version="0.1.0")
    app.state.store = store
    app.state.clock = clock or Clock()
    app.state.catalog_data = catalog_data or load_catalog_data()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=600,
    )

    @app.exception_handler(WisionError)
    async def wision_error_handler(request: Request, exc: WisionError):
        log = logger.error if exc.status_code >= 500 else logger.info
        log(f"[API] {request.method} {request.url.path} -> {exc.status_code} {type(exc).__name__}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    # Only expose debug routes when explicitly enabled.
    if enable_debug_routes:
        app.include_router(debug_router, prefix=API_PREFIX)

    # Include routers
    app.include_router(api_router, prefix=API_PREFIX)
    app.include_router(users_router, prefix=API_PREFIX)
    app.include_router(characters_router, prefix=API_PREFIX)
    app.include_router(challenges_router, prefix=API_PREFIX)
    app.include_router(discoveries_router, prefix=API_PREFIX)

    return app


app = create_app()
