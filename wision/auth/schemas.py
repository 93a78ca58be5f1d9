from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProfileUpdate(BaseModel):
    """Client-editable profile; unknown keys are kept as sent."""
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    age: Optional[int] = None
    interests: List[str] = Field(default_factory=list)
    learnedCharacters: List[dict[str, Any]] = Field(default_factory=list)


class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)
    profile: Optional[ProfileUpdate] = None


class LoginRequest(BaseModel):
    email: str
    password: str
