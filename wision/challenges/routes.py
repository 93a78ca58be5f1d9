from fastapi import APIRouter, Depends, HTTPException

from wision.challenges.generator import get_challenge, parse_challenge_date
from wision.challenges.schemas import SubmitRequest
from wision.challenges.submissions import submit_answer
from wision.characters.catalog import CharacterCatalog
from wision.core.clock import Clock
from wision.core.deps import get_catalog, get_clock, get_current_user_id
from wision.db.kv import KVStore
from wision.db.session import get_store

router = APIRouter(prefix="/challenges", tags=["challenges"])


# ======================================================
# TODAY'S CHALLENGE
# ======================================================
@router.get("/daily")
def daily_challenge(
    store: KVStore = Depends(get_store),
    catalog: CharacterCatalog = Depends(get_catalog),
    clock: Clock = Depends(get_clock),
):
    return {"challenge": get_challenge(store, catalog, clock.today())}


@router.get("/daily/{challenge_date}")
def challenge_for_date(
    challenge_date: str,
    store: KVStore = Depends(get_store),
    catalog: CharacterCatalog = Depends(get_catalog),
):
    try:
        parse_challenge_date(challenge_date)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return {"challenge": get_challenge(store, catalog, challenge_date)}


# ======================================================
# SUBMIT ANSWER
# ======================================================
@router.post("/submit")
def submit_challenge(
    body: SubmitRequest,
    user_id: str = Depends(get_current_user_id),
    store: KVStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
):
    result = submit_answer(
        store,
        user_id,
        body.challengeDate,
        body.answer,
        clock,
        challenge_id=body.challengeId,
    )
    return {"success": True, **result}
