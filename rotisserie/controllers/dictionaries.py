"""
Dictionaries Controller

Read-only listings of the shared tag, ingredient and unit dictionaries,
used to populate selection widgets (tag filters, ingredient and unit
comboboxes) in the web UI.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rotisserie.database import get_db
from rotisserie.models import IngredientResponse, TagResponse, UnitResponse
from rotisserie.models.repositories import DictionaryRepository

router = APIRouter(tags=["dictionaries"])


@router.get("/tags", response_model=list[TagResponse])
def list_tags(db: Session = Depends(get_db)):
    """All tags, alphabetically."""
    return [
        TagResponse(tag_id=t.TagId, name=t.Name)
        for t in DictionaryRepository(db).get_all_tags()
    ]


@router.get("/ingredients", response_model=list[IngredientResponse])
def list_ingredients(db: Session = Depends(get_db)):
    """All ingredients, alphabetically."""
    return [
        IngredientResponse(ingredient_id=i.IngredientId, name=i.Name)
        for i in DictionaryRepository(db).get_all_ingredients()
    ]


@router.get("/units", response_model=list[UnitResponse])
def list_units(db: Session = Depends(get_db)):
    """All units, grouped by category then sorted by name."""
    return [
        UnitResponse(
            unit_id=u.UnitId,
            name=u.Name,
            abbreviation=u.Abbreviation,
            category=u.Category
        )
        for u in DictionaryRepository(db).get_all_units()
    ]
