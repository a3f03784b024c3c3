"""
SQLAlchemy ORM Entity Models

These models represent the database tables and define the relationships
between entities.

Database Design Rationale:
- Ingredients and tags are shared dictionaries keyed by a canonical name,
  so "Onion" and " onion " in two recipes point at one row
- Cascade deletes remove a recipe's ingredient lines and tag links, never
  the dictionary rows they reference
- SortOrder preserves the submitted order of ingredient lines
- Units are a reference table only; ingredient lines store the unit as
  free text so ad-hoc units need no dictionary entry

Table Relationships:
    Recipe (1) ──────┬──> (*) RecipeIngredient ──> (1) Ingredient
                     └──> (*) recipe_tags ───────> (1) Tag
    Unit (standalone reference table)
"""

import uuid
from datetime import datetime

from sqlalchemy import (
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from rotisserie.database import Base


def new_id() -> str:
    """Generate an opaque primary key."""
    return str(uuid.uuid4())


recipe_tags = Table(
    "recipe_tags",
    Base.metadata,
    Column(
        "RecipeId",
        String(36),
        ForeignKey("recipes.RecipeId", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "TagId",
        String(36),
        ForeignKey("tags.TagId", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Recipe(Base):
    """
    Recipe metadata and the central entity in the domain model.

    A recipe owns an ordered list of ingredient lines and an unordered
    set of tags. Instructions are free text; cooking mode segments them
    into steps on demand.
    """
    __tablename__ = "recipes"

    RecipeId = Column(String(36), primary_key=True, default=new_id)
    Name = Column(String(255), nullable=False, index=True)
    Instructions = Column(Text, nullable=False)
    PrepTimeMinutes = Column(Integer, nullable=True)
    CookTimeMinutes = Column(Integer, nullable=True)
    Servings = Column(Integer, nullable=True)
    SourceURL = Column(String(2048), nullable=True)
    Notes = Column(Text, nullable=True)
    CreatedAt = Column(DateTime, nullable=False, default=datetime.now, index=True)
    UpdatedAt = Column(DateTime, nullable=False, default=datetime.now)

    ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeIngredient.SortOrder"
    )
    tags = relationship(
        "Tag",
        secondary=recipe_tags,
        back_populates="recipes",
        order_by="Tag.Name"
    )


class Ingredient(Base):
    """
    Shared ingredient dictionary.

    Name holds the canonical form (trimmed, first letter upper-cased,
    the rest lower-cased) and is unique.
    """
    __tablename__ = "ingredients"

    IngredientId = Column(String(36), primary_key=True, default=new_id)
    Name = Column(String(255), nullable=False, unique=True)


class Tag(Base):
    """Shared tag dictionary. Name is trimmed, lower-cased and unique."""
    __tablename__ = "tags"

    TagId = Column(String(36), primary_key=True, default=new_id)
    Name = Column(String(100), nullable=False, unique=True)

    recipes = relationship(
        "Recipe",
        secondary=recipe_tags,
        back_populates="tags",
        passive_deletes=True
    )


class Unit(Base):
    """
    Units of measure offered by the selection UI.

    Category is only used for grouping ("volume", "weight", ...).
    """
    __tablename__ = "units"

    UnitId = Column(String(36), primary_key=True, default=new_id)
    Name = Column(String(50), nullable=False, unique=True)
    Abbreviation = Column(String(20), nullable=True)
    Category = Column(String(50), nullable=True)


class RecipeIngredient(Base):
    """
    Ingredient line of a recipe.

    Links a recipe to a dictionary ingredient and stores the amount.
    SortOrder is zero-based and dense per recipe.
    """
    __tablename__ = "recipe_ingredients"
    __table_args__ = (
        UniqueConstraint("RecipeId", "SortOrder", name="uq_recipe_ingredients_sort"),
    )

    RecipeIngredientId = Column(Integer, primary_key=True, autoincrement=True)
    RecipeId = Column(
        String(36),
        ForeignKey("recipes.RecipeId", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    IngredientId = Column(
        String(36),
        ForeignKey("ingredients.IngredientId"),
        nullable=False,
        index=True
    )
    Quantity = Column(Float, nullable=True)
    Unit = Column(String(50), nullable=True)  # Free text, see module docstring
    Notes = Column(Text, nullable=True)
    SortOrder = Column(Integer, nullable=False)

    recipe = relationship("Recipe", back_populates="ingredients")
    ingredient = relationship("Ingredient", lazy="joined")
