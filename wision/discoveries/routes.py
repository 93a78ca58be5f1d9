from fastapi import APIRouter, Depends

from wision.characters.catalog import CharacterCatalog
from wision.core.clock import Clock
from wision.core.deps import get_catalog, get_clock, get_current_user_id
from wision.db.kv import KVStore
from wision.db.session import get_store
from wision.discoveries.recorder import list_discoveries, record_discovery
from wision.discoveries.schemas import DiscoveryRequest

router = APIRouter(prefix="/discoveries", tags=["discoveries"])


@router.post("")
def create_discovery(
    body: DiscoveryRequest,
    user_id: str = Depends(get_current_user_id),
    store: KVStore = Depends(get_store),
    catalog: CharacterCatalog = Depends(get_catalog),
    clock: Clock = Depends(get_clock),
):
    result = record_discovery(
        store, catalog, user_id, body.character, body.radicals, clock, method=body.method
    )
    return {"success": True, **result}


@router.get("")
def read_discoveries(
    user_id: str = Depends(get_current_user_id),
    store: KVStore = Depends(get_store),
):
    return {"discoveries": list_discoveries(store, user_id)}
