"""
Controllers Package - The 'C' in MVC

Controllers handle HTTP requests and coordinate between:
- Models (repositories and validation schemas)
- Services (cooking mode logic)

Each controller is a FastAPI APIRouter that defines endpoints
for a specific resource or feature area.
"""

from rotisserie.controllers.recipes import router as recipes_router
from rotisserie.controllers.dictionaries import router as dictionaries_router
from rotisserie.controllers.cooking import router as cooking_router

__all__ = ["recipes_router", "dictionaries_router", "cooking_router"]
