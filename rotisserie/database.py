"""
Database Setup

Creates the SQLAlchemy engine and session factory from the configured
database URL, and provides the per-request session dependency used by
the controllers.

SQLite is the default backend. SQLite only enforces foreign keys when
asked to, so every new SQLite connection turns them on; without it the
ON DELETE CASCADE rules on recipe_ingredients and recipe_tags are ignored.
Its built-in lower() also only folds ASCII letters, so connections get a
Unicode-aware replacement; case-insensitive name search relies on it.
"""

import logging
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from rotisserie.config import get_settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def build_engine(database_url: str, echo: bool = False, **kwargs) -> Engine:
    """Create an engine, applying the SQLite specific connection settings."""
    if database_url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        kwargs["connect_args"] = connect_args

    engine = create_engine(database_url, echo=echo, **kwargs)

    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _configure_sqlite_connection)

    return engine


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def _configure_sqlite_connection(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


settings = get_settings()
engine = build_engine(settings.database_url, echo=settings.database_echo)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db() -> Iterator[Session]:
    """
    FastAPI dependency yielding one session per request.

    Repositories commit or roll back their own units of work; this
    only guarantees the session is closed when the request ends.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    """Create all tables and seed the unit dictionary."""
    # Entities must be imported so their tables register on Base.metadata
    from rotisserie.models import entities  # noqa: F401
    from rotisserie.models.repositories import DictionaryRepository

    bind = bind or engine
    Base.metadata.create_all(bind=bind)

    db = Session(bind=bind, expire_on_commit=False)
    try:
        added = DictionaryRepository(db).seed_default_units()
        if added:
            logger.info(f"Seeded {added} default units")
    finally:
        db.close()
