"""
Accounts live next to profiles in the key-value store:
user_account:{email} -> {id, email, passwordHash, createdAt}.
"""
import logging
import uuid
from typing import Optional

from wision.core.clock import Clock, iso_now
from wision.core.errors import Conflict, Unauthorized
from wision.core.security import hash_password, verify_password
from wision.db.kv import KVStore, account_key
from wision.profiles.ledger import create_profile, touch_profile

logger = logging.getLogger(__name__)


def public_user(account: dict) -> dict:
    return {"id": account["id"], "email": account["email"]}


def register_user(
    store: KVStore, email: str, password: str, profile: Optional[dict], clock: Clock
) -> dict:
    account = {
        "id": str(uuid.uuid4()),
        "email": email.strip().lower(),
        "passwordHash": hash_password(password),
        "createdAt": iso_now(clock),
    }
    if not store.set_if_absent(account_key(email), account):
        logger.info(f"[AUTH] register rejected, already exists: {account['email']}")
        raise Conflict("User already exists")

    create_profile(store, account["id"], profile, clock)
    logger.info(f"[AUTH] registered user={account['id']}")
    return account


def authenticate(store: KVStore, email: str, password: str, clock: Clock) -> dict:
    account = store.get(account_key(email))
    if not account or not verify_password(password, account.get("passwordHash", "")):
        logger.info(f"[AUTH] Invalid credentials for: {email}")
        raise Unauthorized("Invalid credentials")

    touch_profile(store, account["id"], clock)
    logger.info(f"[AUTH] Login successful for: {account['id']}")
    return account
