"""Pytest configuration and fixtures for repository and API tests."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from rotisserie.controllers import cooking as cooking_controller
from rotisserie.database import Base, build_engine, get_db
from rotisserie.main import app
from rotisserie.models import RecipeCreate, RecipeIngredientInput
from rotisserie.models import entities  # noqa: F401  (registers tables)
from rotisserie.models.repositories import DictionaryRepository, RecipeRepository


@pytest.fixture(scope="function")
def engine():
    """Provide a clean in-memory database for each test function.

    StaticPool keeps one connection, so every session sees the same
    in-memory database.
    """
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture(scope="function")
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture(scope="function")
def repo(db):
    return RecipeRepository(db)


@pytest.fixture(scope="function")
def dictionary(db):
    return DictionaryRepository(db)


@pytest.fixture(scope="function")
def client(session_factory):
    """TestClient bound to the test database."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
    cooking_controller.active_sessions.clear()


def make_recipe(
    name: str = "Tomato Soup",
    ingredients=("tomato", "onion"),
    tags=(),
    instructions: str = "1. Chop\n2. Simmer\n3. Blend",
    **fields
) -> RecipeCreate:
    """Build a RecipeCreate with one line per ingredient name."""
    return RecipeCreate(
        name=name,
        instructions=instructions,
        ingredients=[RecipeIngredientInput(ingredient_name=i) for i in ingredients],
        tags=list(tags),
        **fields
    )


def recipe_payload(name: str = "Tomato Soup", ingredients=("tomato",), tags=(), **fields) -> dict:
    """JSON body for POST /recipes."""
    payload = {
        "name": name,
        "instructions": "1. Chop\n2. Simmer",
        "ingredients": [{"ingredient_name": i} for i in ingredients],
        "tags": list(tags),
    }
    payload.update(fields)
    return payload
