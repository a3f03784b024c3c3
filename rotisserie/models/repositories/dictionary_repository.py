"""
Dictionary Repository - Data access for the shared ingredient, tag and
unit dictionaries.

Ingredients and tags are written from many places (recipe create and
update), so every write goes through one resolve-or-create method. It
canonicalizes the name and performs an atomic conditional insert backed
by the unique constraint on the name column:

    INSERT ... ON CONFLICT (Name) DO UPDATE SET Name = excluded.Name
    RETURNING id

Concurrent callers resolving the same name therefore always converge on
one row. The conflict branch rewrites the stored name with the caller's
canonical form, so the last writer's spelling wins.
"""

import logging

from sqlalchemy import insert, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rotisserie.exceptions import RecipeValidationError
from rotisserie.models.entities import Ingredient, Tag, Unit
from rotisserie.services.normalizer import canonical_ingredient_name, canonical_tag_name

logger = logging.getLogger(__name__)

# Seeded into an empty units table by init_db
DEFAULT_UNITS = [
    # (name, abbreviation, category)
    ("teaspoon", "tsp", "volume"),
    ("tablespoon", "tbsp", "volume"),
    ("cup", "c", "volume"),
    ("fluid ounce", "fl oz", "volume"),
    ("milliliter", "ml", "volume"),
    ("liter", "l", "volume"),
    ("pinch", None, "volume"),
    ("gram", "g", "weight"),
    ("kilogram", "kg", "weight"),
    ("ounce", "oz", "weight"),
    ("pound", "lb", "weight"),
    ("piece", "pc", "count"),
    ("clove", None, "count"),
    ("can", None, "count"),
    ("slice", None, "count"),
]

# Dialects with a native INSERT ... ON CONFLICT
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class DictionaryRepository:
    """Repository for the ingredient, tag and unit dictionaries."""

    def __init__(self, db: Session):
        """Initialize with a database session."""
        self.db = db

    # ==========================================
    # Resolve-or-create
    # ==========================================

    def resolve_ingredient(self, name: str) -> str:
        """
        Return the id of the ingredient named `name`, creating it if needed.

        "onion", "Onion " and " ONION" all resolve to the row named "Onion".
        Runs inside the caller's transaction; nothing is committed here.
        """
        return self._resolve(Ingredient, Ingredient.IngredientId, canonical_ingredient_name(name))

    def resolve_tag(self, name: str) -> str:
        """Return the id of the tag named `name`, creating it if needed."""
        return self._resolve(Tag, Tag.TagId, canonical_tag_name(name))

    def _resolve(self, model, id_column, canonical: str) -> str:
        if not canonical:
            raise RecipeValidationError(f"{model.__tablename__} name must not be blank")

        dialect = self.db.get_bind().dialect.name
        upsert = _UPSERT_INSERTS.get(dialect)

        if upsert is not None:
            stmt = upsert(model).values(Name=canonical)
            stmt = stmt.on_conflict_do_update(
                index_elements=[model.__table__.c.Name],
                set_={"Name": stmt.excluded.Name},
            ).returning(id_column)
            row_id = self.db.execute(stmt).scalar_one()
        else:
            row_id = self._resolve_with_savepoint(model, id_column, canonical)

        logger.debug(f"Resolved {model.__tablename__} '{canonical}' -> {row_id}")
        return row_id

    def _resolve_with_savepoint(self, model, id_column, canonical: str) -> str:
        # No native upsert: let the unique constraint arbitrate, then read back
        lookup = select(id_column).where(model.Name == canonical)
        try:
            with self.db.begin_nested():
                self.db.execute(insert(model).values(Name=canonical))
        except IntegrityError:
            # Only a concurrent insert of the same name may fail here
            row_id = self.db.scalar(lookup)
            if row_id is None:
                raise
            return row_id

        return self.db.scalar(lookup)

    # ==========================================
    # Listings
    # ==========================================

    def get_all_tags(self) -> list[Tag]:
        """All tags, alphabetically."""
        return list(self.db.scalars(select(Tag).order_by(Tag.Name)))

    def get_all_ingredients(self) -> list[Ingredient]:
        """All ingredients, alphabetically."""
        return list(self.db.scalars(select(Ingredient).order_by(Ingredient.Name)))

    def get_all_units(self) -> list[Unit]:
        """All units, grouped by category then sorted by name."""
        return list(self.db.scalars(select(Unit).order_by(Unit.Category, Unit.Name)))

    # ==========================================
    # Seeding
    # ==========================================

    def seed_default_units(self) -> int:
        """Insert any missing DEFAULT_UNITS. Returns the number added."""
        existing = set(self.db.scalars(select(Unit.Name)))
        added = 0
        for name, abbreviation, category in DEFAULT_UNITS:
            if name in existing:
                continue
            self.db.add(Unit(Name=name, Abbreviation=abbreviation, Category=category))
            added += 1
        self.db.commit()
        return added
