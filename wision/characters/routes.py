from typing import Optional

from fastapi import APIRouter, Depends, Query

from wision.characters.catalog import CharacterCatalog
from wision.core.deps import get_catalog

router = APIRouter(prefix="/characters", tags=["characters"])


@router.get("")
def list_characters(
    category: Optional[str] = Query(None),
    difficulty: Optional[int] = Query(None, ge=1),
    catalog: CharacterCatalog = Depends(get_catalog),
):
    return {"characters": catalog.list(category=category, difficulty=difficulty)}


@router.get("/random")
def random_characters(
    count: int = Query(1, ge=0),
    difficulty: Optional[int] = Query(None, ge=1),
    catalog: CharacterCatalog = Depends(get_catalog),
):
    return {"characters": catalog.random_sample(count, difficulty=difficulty)}
