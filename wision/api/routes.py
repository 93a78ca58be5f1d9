"""
API routes for health, leaderboard and progress analytics.
"""
from fastapi import APIRouter, Depends, Query

from wision.core.clock import Clock, iso_now
from wision.core.deps import get_clock, get_current_user_id
from wision.db.kv import KVStore
from wision.db.session import get_store
from wision.profiles.aggregator import get_leaderboard, get_progress

router = APIRouter(tags=["api"])


@router.get("/health")
def health(clock: Clock = Depends(get_clock)):
    return {"status": "ok", "timestamp": iso_now(clock)}


@router.get("/leaderboard")
def leaderboard(
    type: str = Query("score"),
    limit: int = Query(10, ge=0),
    store: KVStore = Depends(get_store),
):
    return {"leaderboard": get_leaderboard(store, type, limit), "type": type}


@router.get("/analytics/progress")
def progress(
    user_id: str = Depends(get_current_user_id),
    store: KVStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
):
    """
    Return level, points to next level and weekly discovery activity for the caller.
    """
    return {"progress": get_progress(store, user_id, clock.now())}
