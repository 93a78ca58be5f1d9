from sqlalchemy import Column, String, JSON, DateTime
from sqlalchemy.sql import func

from wision.db.base import Base


class KVEntry(Base):
    """
    Durable backing table for the key-value store.

    Keys follow the layout documented in wision.db.kv, e.g.
    user_profile:{user_id} or daily_challenge:{date}.
    """
    __tablename__ = "kv_store"

    key = Column(String(512), primary_key=True)
    value = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
