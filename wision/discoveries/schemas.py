from typing import List, Optional

from pydantic import BaseModel, Field


class DiscoveryRequest(BaseModel):
    character: str = Field(..., min_length=1)
    radicals: List[str] = Field(default_factory=list)
    method: Optional[str] = None
