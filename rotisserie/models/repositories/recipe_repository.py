"""
Recipe Repository - Data access for the Recipe aggregate.

A recipe aggregate is the recipe row, its ordered ingredient lines and
its tag set. Every write operation here is a single unit of work: all
statements commit together, or the session is rolled back and the error
re-raised, so a half-applied create or update is never visible.
"""

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from rotisserie.exceptions import (
    InvalidPatternError,
    RecipeNotPersistedError,
    RecipeValidationError,
)
from rotisserie.models.entities import Recipe, RecipeIngredient, Tag
from rotisserie.models.repositories.dictionary_repository import DictionaryRepository
from rotisserie.models.repositories.recipe_filters import build_recipe_query
from rotisserie.models.schemas import (
    RecipeCreate,
    RecipeFilter,
    RecipeIngredientInput,
    RecipeUpdate,
)

logger = logging.getLogger(__name__)

MIN_CLEANUP_PATTERN_LENGTH = 3

# RecipeUpdate field -> Recipe column attribute
_SCALAR_FIELDS = {
    "name": "Name",
    "instructions": "Instructions",
    "prep_time_minutes": "PrepTimeMinutes",
    "cook_time_minutes": "CookTimeMinutes",
    "servings": "Servings",
    "source_url": "SourceURL",
    "notes": "Notes",
}


class RecipeRepository:
    """Repository for recipe database operations."""

    def __init__(self, db: Session):
        """Initialize with a database session."""
        self.db = db
        self.dictionary = DictionaryRepository(db)

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        try:
            yield
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    # ==========================================
    # Recipe CRUD
    # ==========================================

    def create_recipe(self, data: RecipeCreate) -> Recipe:
        """
        Create a recipe with its ingredient lines and tags.

        Ingredients and tags are resolved against the shared dictionaries
        (created when missing). Lines get sort orders 0..n-1 in input order.

        Returns the recipe row; load details with get_recipe_by_id.

        Raises:
            RecipeValidationError: no ingredient lines were given
            RecipeNotPersistedError: the recipe insert produced no row
        """
        if not data.ingredients:
            raise RecipeValidationError("A recipe needs at least one ingredient")

        with self._transaction():
            now = datetime.now()
            recipe = Recipe(
                Name=data.name,
                Instructions=data.instructions,
                PrepTimeMinutes=data.prep_time_minutes,
                CookTimeMinutes=data.cook_time_minutes,
                Servings=data.servings,
                SourceURL=data.source_url or None,
                Notes=data.notes,
                CreatedAt=now,
                UpdatedAt=now
            )
            self.db.add(recipe)
            self.db.flush()  # Get the RecipeId before adding lines

            if recipe.RecipeId is None:
                raise RecipeNotPersistedError(data.name)

            self._add_ingredient_lines(recipe, data.ingredients)
            self._set_tags(recipe, data.tags)

        logger.info(f"Created recipe {recipe.RecipeId} '{recipe.Name}'")
        return recipe

    def get_recipe_by_id(self, recipe_id: str) -> Optional[Recipe]:
        """
        Get a recipe with its ingredient lines (by sort order, each with its
        ingredient) and tags (by name). Returns None if it does not exist.
        """
        return self.db.scalar(
            select(Recipe)
            .options(
                selectinload(Recipe.ingredients).joinedload(RecipeIngredient.ingredient),
                selectinload(Recipe.tags)
            )
            .where(Recipe.RecipeId == recipe_id)
            .execution_options(populate_existing=True)
        )

    def list_recipes(self, recipe_filter: Optional[RecipeFilter] = None) -> list[Recipe]:
        """List recipes matching an optional filter, newest first."""
        return list(self.db.scalars(build_recipe_query(recipe_filter)))

    def update_recipe(self, recipe_id: str, data: RecipeUpdate) -> Optional[Recipe]:
        """
        Apply a partial update to a recipe.

        Only fields set on `data` are written and UpdatedAt is always
        refreshed. A given ingredient list or tag list replaces the current
        set entirely; an omitted one is left as is.

        Returns None, without touching anything, if the recipe does not exist.
        """
        provided = data.model_fields_set
        if "ingredients" in provided and not data.ingredients:
            raise RecipeValidationError("A recipe needs at least one ingredient")

        with self._transaction():
            recipe = self.db.get(Recipe, recipe_id)
            if recipe is None:
                return None

            for field, column in _SCALAR_FIELDS.items():
                if field in provided:
                    value = getattr(data, field)
                    if field == "source_url":
                        value = value or None
                    setattr(recipe, column, value)
            recipe.UpdatedAt = datetime.now()

            if "ingredients" in provided:
                self._replace_ingredient_lines(recipe, data.ingredients)
            if "tags" in provided:
                self._set_tags(recipe, data.tags or [])

        logger.info(f"Updated recipe {recipe_id} (fields: {', '.join(sorted(provided)) or 'none'})")
        return recipe

    def delete_recipe(self, recipe_id: str) -> bool:
        """
        Delete a recipe. Its ingredient lines and tag links go with it;
        the dictionary ingredients and tags stay.

        Returns False if the recipe does not exist.
        """
        with self._transaction():
            recipe = self.db.get(Recipe, recipe_id)
            if recipe is None:
                return False
            self.db.delete(recipe)

        logger.info(f"Deleted recipe {recipe_id}")
        return True

    def delete_recipes_by_pattern(
        self,
        pattern: str,
        min_length: int = MIN_CLEANUP_PATTERN_LENGTH
    ) -> int:
        """
        Delete every recipe whose name contains `pattern`, ignoring case.

        Meant for operational cleanup (e.g. test data). The pattern is
        matched literally; LIKE wildcards in it are escaped.

        Returns:
            Number of recipes deleted

        Raises:
            InvalidPatternError: pattern shorter than min_length after
                trimming; checked before any database access
        """
        needle = pattern.strip()
        if len(needle) < min_length:
            raise InvalidPatternError(pattern, min_length)

        with self._transaction():
            recipes = self.db.scalars(
                select(Recipe).where(Recipe.Name.icontains(needle, autoescape=True))
            ).all()
            for recipe in recipes:
                self.db.delete(recipe)

        logger.warning(f"Cleanup deleted {len(recipes)} recipe(s) matching '{needle}'")
        return len(recipes)

    # ==========================================
    # Ingredient lines and tags
    # ==========================================

    def _add_ingredient_lines(
        self,
        recipe: Recipe,
        lines: list[RecipeIngredientInput]
    ) -> None:
        for idx, line in enumerate(lines):
            ingredient_id = self.dictionary.resolve_ingredient(line.ingredient_name)
            recipe.ingredients.append(
                RecipeIngredient(
                    IngredientId=ingredient_id,
                    Quantity=line.quantity,
                    Unit=line.unit,
                    Notes=line.notes,
                    SortOrder=idx
                )
            )
        self.db.flush()

    def _replace_ingredient_lines(
        self,
        recipe: Recipe,
        lines: list[RecipeIngredientInput]
    ) -> None:
        # Old lines must be gone before new ones reuse their sort orders
        recipe.ingredients.clear()
        self.db.flush()
        self._add_ingredient_lines(recipe, lines)

    def _set_tags(self, recipe: Recipe, names: list[str]) -> None:
        tag_ids = []
        for name in names:
            tag_id = self.dictionary.resolve_tag(name)
            if tag_id not in tag_ids:
                tag_ids.append(tag_id)

        tags = self.db.scalars(select(Tag).where(Tag.TagId.in_(tag_ids))).all() if tag_ids else []
        recipe.tags = sorted(tags, key=lambda t: t.Name)
        self.db.flush()
