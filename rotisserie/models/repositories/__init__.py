"""
Repositories - Data access layer for database operations.
"""

from rotisserie.models.repositories.dictionary_repository import DictionaryRepository
from rotisserie.models.repositories.recipe_repository import RecipeRepository

__all__ = ["DictionaryRepository", "RecipeRepository"]
