
from fastapi import APIRouter, Depends

from wision.auth.accounts import authenticate, public_user, register_user
from wision.auth.schemas import LoginRequest, ProfileUpdate, RegisterRequest
from wision.core.clock import Clock
from wision.core.deps import get_clock, get_current_user_id
from wision.core.security import create_access_token
from wision.db.kv import KVStore
from wision.db.session import get_store
from wision.profiles.ledger import get_profile, replace_profile

router = APIRouter(prefix="/users", tags=["users"])


# =========================
# REGISTER
# =========================
@router.post("/register")
def register(
    body: RegisterRequest,
    store: KVStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
):
    profile = body.profile.model_dump(exclude_unset=True) if body.profile else None
    account = register_user(store, body.email, body.password, profile, clock)
    return {
        "success": True,
        "user": public_user(account),
        "token": create_access_token(account["id"]),
        "message": "User registered successfully",
    }


# =========================
# LOGIN
# =========================
@router.post("/login")
def login(
    body: LoginRequest,
    store: KVStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
):
    account = authenticate(store, body.email, body.password, clock)
    return {
        "success": True,
        "session": {"access_token": create_access_token(account["id"]), "token_type": "bearer"},
        "user": public_user(account),
    }


# =========================
# PROFILE
# =========================
@router.get("/profile")
def read_profile(
    user_id: str = Depends(get_current_user_id),
    store: KVStore = Depends(get_store),
):
    return {"profile": get_profile(store, user_id)}


@router.put("/profile")
def update_profile(
    body: ProfileUpdate,
    user_id: str = Depends(get_current_user_id),
    store: KVStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
):
    replace_profile(store, user_id, body.model_dump(exclude_unset=True), clock)
    return {"success": True, "message": "Profile updated successfully"}
