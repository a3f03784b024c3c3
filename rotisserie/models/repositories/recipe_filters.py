"""
Recipe list filtering.

Translates a RecipeFilter into a single SELECT. Criteria are ANDed; each
list criterion matches when any of its values matches. Tag and ingredient
criteria are EXISTS subqueries rather than joins, so a recipe matching
several values is still returned once.
"""

from sqlalchemy import Select, select

from rotisserie.models.entities import Recipe, RecipeIngredient, Tag
from rotisserie.models.schemas import RecipeFilter
from rotisserie.services.normalizer import canonical_tag_name


def build_recipe_query(recipe_filter: RecipeFilter | None = None) -> Select:
    """
    Build the list query for an optional filter, newest recipes first.

    - search: case-insensitive substring of the recipe name
    - tags: recipe has at least one of the tags (names are canonicalized)
    - ingredient_ids: recipe uses at least one of the ingredients

    Missing or empty criteria impose no constraint.
    """
    query = select(Recipe)

    if recipe_filter is not None:
        if recipe_filter.search and recipe_filter.search.strip():
            query = query.where(Recipe.Name.icontains(recipe_filter.search.strip(), autoescape=True))

        tag_names = {
            canonical_tag_name(t) for t in recipe_filter.tags or [] if t.strip()
        }
        if tag_names:
            query = query.where(Recipe.tags.any(Tag.Name.in_(tag_names)))

        ingredient_ids = {str(i) for i in recipe_filter.ingredient_ids or []}
        if ingredient_ids:
            query = query.where(
                Recipe.ingredients.any(RecipeIngredient.IngredientId.in_(ingredient_ids))
            )

    # RecipeId breaks ties between recipes created in the same instant
    return query.order_by(Recipe.CreatedAt.desc(), Recipe.RecipeId)
