"""
Rotisserie API - Application Entry Point

This is the main FastAPI application for the Rotisserie recipe manager.
It follows the MVC (Model-View-Controller) architectural pattern.

Architecture Overview:
=====================
- Models (rotisserie/models/): Data structures and data access
  - entities.py: SQLAlchemy ORM models for database tables
  - schemas.py: Pydantic schemas for request/response validation
  - repositories/: Recipe aggregate and dictionary data access

- Controllers (rotisserie/controllers/): Request handlers
  - recipes.py: CRUD, filtering and bulk cleanup for recipes
  - dictionaries.py: Tag, ingredient and unit listings
  - cooking.py: Step-by-step cooking sessions

- Services (rotisserie/services/): Business logic without database access
  - normalizer.py: Canonical ingredient and tag names
  - cooking.py: Instruction segmenting and cooking session state

Request Flow:
============
1. Request arrives at a Controller endpoint
2. Controller validates input using Pydantic Schemas (Models)
3. Controller calls a Repository, which runs one transaction
4. Response is serialized using Pydantic Schemas (Models)

Run with:
    uvicorn rotisserie.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rotisserie import __version__
from rotisserie.config import get_settings
from rotisserie.controllers import cooking_router, dictionaries_router, recipes_router
from rotisserie.database import get_db, init_db
from rotisserie.exceptions import (
    InvalidPatternError,
    RecipeNotPersistedError,
    RecipeValidationError,
    StepOutOfRange,
)

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create tables and seed units once at startup
    init_db()
    logger.info("Database initialized")
    yield


app = FastAPI(
    title="Rotisserie API",
    description="""
    Recipe manager: create, browse, filter, edit, delete and cook recipes.

    ## Features
    - Recipe management with ingredient lines, quantities, units and tags
    - Shared ingredient and tag dictionaries with normalized names
    - Search by name, tags and ingredients
    - Guided cooking mode that walks through instructions step by step
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register controllers (routers)
app.include_router(recipes_router)        # /recipes endpoints
app.include_router(dictionaries_router)   # /tags, /ingredients, /units
app.include_router(cooking_router)        # /cooking endpoints


# ============================================
# Error Handlers
# ============================================

@app.exception_handler(InvalidPatternError)
async def invalid_pattern_handler(request: Request, exc: InvalidPatternError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(StepOutOfRange)
async def step_out_of_range_handler(request: Request, exc: StepOutOfRange):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(RecipeValidationError)
async def recipe_validation_handler(request: Request, exc: RecipeValidationError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(RecipeNotPersistedError)
async def recipe_not_persisted_handler(request: Request, exc: RecipeNotPersistedError):
    logger.error(f"Integrity failure: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Recipe could not be saved"})


# ============================================
# Health Check Endpoints
# ============================================

@app.get("/", tags=["health"])
def root():
    """
    Basic health check endpoint.

    Returns a simple status indicating the API is running.
    """
    return {
        "status": "healthy",
        "service": "Rotisserie API",
        "version": __version__
    }


@app.get("/health", tags=["health"])
def health_check(db: Session = Depends(get_db)):
    """
    Detailed health check endpoint.

    Pings the database so monitoring can tell a dead backend apart
    from a dead API process.
    """
    try:
        db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        database = "unavailable"

    return {
        "status": "healthy" if database == "ok" else "degraded",
        "database": database
    }
