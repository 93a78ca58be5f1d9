import logging

from fastapi import Depends, Request

from wision.characters.catalog import CharacterCatalog
from wision.core.clock import Clock
from wision.core.errors import Unauthorized
from wision.core.security import decode_access_token
from wision.db.kv import KVStore, profile_key
from wision.db.session import get_store

logger = logging.getLogger(__name__)


def get_clock(request: Request) -> Clock:
    return request.app.state.clock


def get_current_user_id(
    request: Request,
    store: KVStore = Depends(get_store),
) -> str:
    auth_header = request.headers.get("authorization")

    if not auth_header:
        logger.info(f"[AUTH] reject reason=missing_header path={request.url.path}")
        raise Unauthorized("Authorization required")

    scheme, _, token = auth_header.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        logger.info(f"[AUTH] reject reason=bad_scheme path={request.url.path}")
        raise Unauthorized("Invalid token")

    user_id = decode_access_token(token)
    if not user_id:
        logger.info(f"[AUTH] reject reason=invalid_token path={request.url.path}")
        raise Unauthorized("Invalid token")

    if store.get(profile_key(user_id)) is None:
        logger.info(f"[AUTH] reject reason=user_not_found user={user_id} path={request.url.path}")
        raise Unauthorized("Invalid token")

    return user_id


def get_catalog(
    request: Request,
    store: KVStore = Depends(get_store),
) -> CharacterCatalog:
    return CharacterCatalog(store, request.app.state.catalog_data)
