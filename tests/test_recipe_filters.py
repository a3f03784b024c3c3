"""Tests for recipe list filtering and ordering."""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import select, update

from conftest import make_recipe
from rotisserie.models import Ingredient, Recipe, RecipeFilter


def _names(recipes) -> list[str]:
    return [r.Name for r in recipes]


def _ingredient_id(db, name: str) -> str:
    return db.scalar(select(Ingredient.IngredientId).where(Ingredient.Name == name))


def test_no_filter_lists_newest_first(repo):
    for name in ["First", "Second", "Third"]:
        repo.create_recipe(make_recipe(name=name))

    assert _names(repo.list_recipes()) == ["Third", "Second", "First"]
    assert _names(repo.list_recipes(RecipeFilter())) == ["Third", "Second", "First"]


def test_tag_filter_returns_each_match_once(repo):
    repo.create_recipe(make_recipe(name="Chili", tags=["x", "spicy"]))
    repo.create_recipe(make_recipe(name="Salad", tags=["y"]))
    repo.create_recipe(make_recipe(name="Curry", tags=["x", "spicy", "dinner"]))

    assert _names(repo.list_recipes(RecipeFilter(tags=["x"]))) == ["Curry", "Chili"]
    # Matching several of the given tags still yields one row per recipe
    assert _names(repo.list_recipes(RecipeFilter(tags=["x", "spicy"]))) == ["Curry", "Chili"]


def test_tag_filter_matches_any_given_tag(repo):
    repo.create_recipe(make_recipe(name="Pancakes", tags=["breakfast"]))
    repo.create_recipe(make_recipe(name="Steak", tags=["dinner"]))
    repo.create_recipe(make_recipe(name="Cake", tags=["dessert"]))

    result = repo.list_recipes(RecipeFilter(tags=["breakfast", "dinner"]))
    assert _names(result) == ["Steak", "Pancakes"]


def test_tag_filter_is_normalized(repo):
    repo.create_recipe(make_recipe(name="Pho", tags=["soup"]))
    assert _names(repo.list_recipes(RecipeFilter(tags=[" SOUP "]))) == ["Pho"]


def test_search_is_case_insensitive_substring(repo):
    repo.create_recipe(make_recipe(name="Apple Pie"))
    repo.create_recipe(make_recipe(name="Pineapple Salsa"))
    repo.create_recipe(make_recipe(name="Banana Bread"))

    assert _names(repo.list_recipes(RecipeFilter(search="APPLE"))) == ["Pineapple Salsa", "Apple Pie"]
    assert _names(repo.list_recipes(RecipeFilter(search="   "))) == [
        "Banana Bread", "Pineapple Salsa", "Apple Pie"
    ]


def test_ingredient_filter(db, repo):
    repo.create_recipe(make_recipe(name="Omelette", ingredients=["egg", "butter"]))
    repo.create_recipe(make_recipe(name="Toast", ingredients=["bread", "butter"]))
    repo.create_recipe(make_recipe(name="Fruit Salad", ingredients=["apple"]))

    butter = _ingredient_id(db, "Butter")
    egg = _ingredient_id(db, "Egg")

    assert _names(repo.list_recipes(RecipeFilter(ingredient_ids=[butter]))) == ["Toast", "Omelette"]
    assert _names(repo.list_recipes(RecipeFilter(ingredient_ids=[egg, butter]))) == ["Toast", "Omelette"]
    assert repo.list_recipes(RecipeFilter(ingredient_ids=[uuid4()])) == []


def test_criteria_combine_with_and(db, repo):
    repo.create_recipe(make_recipe(name="Garlic Soup", ingredients=["garlic"], tags=["soup"]))
    repo.create_recipe(make_recipe(name="Onion Soup", ingredients=["onion"], tags=["soup"]))
    repo.create_recipe(make_recipe(name="Garlic Bread", ingredients=["garlic"], tags=["side"]))

    garlic = _ingredient_id(db, "Garlic")
    result = repo.list_recipes(RecipeFilter(search="soup", tags=["soup"], ingredient_ids=[garlic]))
    assert _names(result) == ["Garlic Soup"]


def test_empty_lists_impose_no_constraint(repo):
    repo.create_recipe(make_recipe(name="Only"))
    assert _names(repo.list_recipes(RecipeFilter(tags=[], ingredient_ids=[]))) == ["Only"]


def test_search_folds_case_beyond_ascii(repo):
    repo.create_recipe(make_recipe(name="CRÈME BRÛLÉE"))
    repo.create_recipe(make_recipe(name="Crepes"))

    assert _names(repo.list_recipes(RecipeFilter(search="crème"))) == ["CRÈME BRÛLÉE"]
    assert _names(repo.list_recipes(RecipeFilter(search="Brûlée"))) == ["CRÈME BRÛLÉE"]


def test_same_created_at_is_ordered_by_id(db, repo):
    created = [repo.create_recipe(make_recipe(name=f"Batch {i}")) for i in range(6)]
    stamp = datetime(2024, 1, 1, 12, 0)
    db.execute(update(Recipe).values(CreatedAt=stamp))
    db.commit()

    result = repo.list_recipes()
    assert [r.RecipeId for r in result] == sorted(r.RecipeId for r in created)
    assert [r.RecipeId for r in repo.list_recipes()] == [r.RecipeId for r in result]
