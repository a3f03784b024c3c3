"""
Models Package - Database entities and API schemas

This package contains SQLAlchemy ORM models for the Rotisserie database,
the Pydantic schemas for request/response validation, and the
repositories that read and write the recipe aggregate.
"""

from rotisserie.models.entities import (
    Recipe,
    Ingredient,
    Tag,
    Unit,
    RecipeIngredient,
    recipe_tags,
)
from rotisserie.models.schemas import (
    RecipeIngredientInput,
    IngredientLineResponse,
    IngredientResponse,
    TagResponse,
    UnitResponse,
    RecipeCreate,
    RecipeUpdate,
    RecipeFilter,
    RecipeSummary,
    RecipeDetail,
    RecipeSteps,
    CleanupRequest,
    CleanupResponse,
    CookingSessionStart,
    CookingSessionResponse,
)

__all__ = [
    # ORM entities
    "Recipe",
    "Ingredient",
    "Tag",
    "Unit",
    "RecipeIngredient",
    "recipe_tags",
    # Schemas
    "RecipeIngredientInput",
    "IngredientLineResponse",
    "IngredientResponse",
    "TagResponse",
    "UnitResponse",
    "RecipeCreate",
    "RecipeUpdate",
    "RecipeFilter",
    "RecipeSummary",
    "RecipeDetail",
    "RecipeSteps",
    "CleanupRequest",
    "CleanupResponse",
    "CookingSessionStart",
    "CookingSessionResponse",
]
