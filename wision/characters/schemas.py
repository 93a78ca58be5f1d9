from typing import List, Optional

from pydantic import BaseModel, Field


class Character(BaseModel):
    character: str = Field(..., min_length=1)
    pronunciation: str
    meaning: str
    radicals: List[str]
    story: str = ""
    difficulty: int = Field(1, ge=1)
    category: str = "nature"


class CatalogFile(BaseModel):
    """Shape of the optional CATALOG_FILE override."""
    characters: Optional[List[Character]] = None
    synonyms: Optional[dict[str, List[str]]] = None
    radical_meanings: Optional[dict[str, str]] = None
