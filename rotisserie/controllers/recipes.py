"""
Recipes Controller

Handles all CRUD operations for recipes. This controller manages:
- Listing recipes with search, tag and ingredient filters
- Getting recipe details
- Creating recipes with ingredient lines and tags
- Partially updating recipes
- Deleting recipes, one at a time or in bulk by name pattern
- Serving a recipe's instructions as cooking steps

Design Decisions:
- All database work goes through RecipeRepository, which owns the
  transaction boundaries; the controller only maps HTTP to repository calls
- Repositories return None for missing recipes; this layer turns that
  into a 404
- Returns structured Pydantic responses for consistent API output
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from rotisserie.config import get_settings
from rotisserie.database import get_db
from rotisserie.models import (
    # ORM entities
    Recipe,
    RecipeIngredient,
    # Schemas
    RecipeCreate,
    RecipeUpdate,
    RecipeFilter,
    RecipeSummary,
    RecipeDetail,
    RecipeSteps,
    IngredientLineResponse,
    TagResponse,
    CleanupRequest,
    CleanupResponse,
)
from rotisserie.models.repositories import RecipeRepository
from rotisserie.services.cooking import segment_instructions

router = APIRouter(prefix="/recipes", tags=["recipes"])


def get_recipe_repository(db: Session = Depends(get_db)) -> RecipeRepository:
    return RecipeRepository(db)


# ============================================
# Response builders
# ============================================

def to_line_response(line: RecipeIngredient) -> IngredientLineResponse:
    return IngredientLineResponse(
        ingredient_id=line.IngredientId,
        name=line.ingredient.Name,
        quantity=line.Quantity,
        unit=line.Unit,
        notes=line.Notes,
        sort_order=line.SortOrder
    )


def to_summary(recipe: Recipe) -> RecipeSummary:
    return RecipeSummary(
        recipe_id=recipe.RecipeId,
        name=recipe.Name,
        prep_time_minutes=recipe.PrepTimeMinutes,
        cook_time_minutes=recipe.CookTimeMinutes,
        servings=recipe.Servings,
        source_url=recipe.SourceURL,
        notes=recipe.Notes,
        created_at=recipe.CreatedAt,
        updated_at=recipe.UpdatedAt
    )


def to_detail(recipe: Recipe) -> RecipeDetail:
    return RecipeDetail(
        **to_summary(recipe).model_dump(),
        instructions=recipe.Instructions,
        ingredients=[to_line_response(line) for line in recipe.ingredients],
        tags=[TagResponse(tag_id=t.TagId, name=t.Name) for t in recipe.tags]
    )


def _split_values(values: list[str] | None) -> list[str] | None:
    # Accept both ?tags=a&tags=b and ?tags=a,b
    if not values:
        return None
    return [v.strip() for value in values for v in value.split(",") if v.strip()]


# ============================================
# Endpoints
# ============================================

@router.get("", response_model=list[RecipeSummary])
def list_recipes(
    search: str | None = None,
    tags: list[str] | None = Query(None),
    ingredient_ids: list[str] | None = Query(None),
    repo: RecipeRepository = Depends(get_recipe_repository)
):
    """
    List recipes, newest first.

    Query Parameters:
    - search: Case-insensitive substring of the recipe name
    - tags: Recipe has at least one of these tags
    - ingredient_ids: Recipe uses at least one of these ingredients

    Filters combine with AND. Each recipe appears once.
    """
    try:
        recipe_filter = RecipeFilter(
            search=search,
            tags=_split_values(tags),
            ingredient_ids=_split_values(ingredient_ids)
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return [to_summary(r) for r in repo.list_recipes(recipe_filter)]


@router.post("", response_model=RecipeDetail, status_code=201)
def create_recipe(
    recipe_data: RecipeCreate,
    repo: RecipeRepository = Depends(get_recipe_repository)
):
    """
    Create a new recipe with ingredient lines and tags.

    Ingredient and tag names are normalized and matched against the shared
    dictionaries, so "onion" and "Onion " reference the same ingredient.
    """
    recipe = repo.create_recipe(recipe_data)
    return to_detail(repo.get_recipe_by_id(recipe.RecipeId))


@router.post("/cleanup", response_model=CleanupResponse)
def cleanup_recipes(
    request: CleanupRequest,
    repo: RecipeRepository = Depends(get_recipe_repository)
):
    """
    Delete all recipes whose name contains the pattern (case-insensitive).

    Operational tool for clearing out test data. Patterns shorter than the
    configured minimum are rejected with 400.
    """
    min_length = get_settings().cleanup_min_pattern_length
    deleted = repo.delete_recipes_by_pattern(request.pattern, min_length=min_length)
    return CleanupResponse(deleted=deleted)


@router.get("/{recipe_id}", response_model=RecipeDetail)
def get_recipe(recipe_id: str, repo: RecipeRepository = Depends(get_recipe_repository)):
    """Get a single recipe with its ordered ingredient lines and tags."""
    recipe = repo.get_recipe_by_id(recipe_id)
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return to_detail(recipe)


@router.patch("/{recipe_id}", response_model=RecipeDetail)
def update_recipe(
    recipe_id: str,
    recipe_data: RecipeUpdate,
    repo: RecipeRepository = Depends(get_recipe_repository)
):
    """
    Partially update a recipe.

    Only fields present in the body change. Sending `ingredients` or `tags`
    replaces that whole set; leaving them out keeps the current ones.
    """
    recipe = repo.update_recipe(recipe_id, recipe_data)
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return to_detail(repo.get_recipe_by_id(recipe_id))


@router.delete("/{recipe_id}", status_code=204)
def delete_recipe(recipe_id: str, repo: RecipeRepository = Depends(get_recipe_repository)):
    """
    Delete a recipe.

    Its ingredient lines and tag links are removed with it. The shared
    ingredient and tag entries are NOT deleted as other recipes may use them.
    """
    if not repo.delete_recipe(recipe_id):
        raise HTTPException(status_code=404, detail="Recipe not found")


@router.get("/{recipe_id}/steps", response_model=RecipeSteps)
def get_recipe_steps(recipe_id: str, repo: RecipeRepository = Depends(get_recipe_repository)):
    """Get a recipe's instructions split into cooking steps."""
    recipe = repo.get_recipe_by_id(recipe_id)
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")

    steps = segment_instructions(recipe.Instructions)
    return RecipeSteps(recipe_id=recipe.RecipeId, total_steps=len(steps), steps=steps)
