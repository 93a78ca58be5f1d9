from typing import Optional

from pydantic import BaseModel, Field


class SubmitRequest(BaseModel):
    challengeId: Optional[str] = None
    answer: str
    challengeDate: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
