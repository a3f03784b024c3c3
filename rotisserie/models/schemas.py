"""
Pydantic Schemas (Data Transfer Objects)

These schemas define the structure of data flowing in and out of the API.
Input schemas are the typed structs the repositories accept: the data
model constraints (non-empty name, positive quantities, well-formed URL,
at least one ingredient) are enforced when they are constructed, so the
core never sees duck-typed dictionaries.

Naming Convention:
- *Input: Nested data received from clients
- *Create / *Update: Bodies for creating and partially updating resources
- *Response: Data returned to clients
- *Summary: Condensed view for list endpoints
- *Detail: Full view for single-resource endpoints
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    Field,
    TypeAdapter,
    ValidationError,
    model_validator,
)

_url_adapter = TypeAdapter(AnyUrl)


def _require_text(value: str | None) -> str | None:
    if value is not None and not value.strip():
        raise ValueError("must not be blank")
    return value


def _check_source_url(value: str | None) -> str | None:
    # Forms submit an empty field as "", which means "no URL"
    if value is None or value == "":
        return None
    if len(value) > 2048:
        raise ValueError("must be at most 2048 characters")
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        raise ValueError("must be a well-formed URL")
    return value


SourceUrl = Annotated[str | None, AfterValidator(_check_source_url)]
RecipeName = Annotated[str, AfterValidator(_require_text)]
TagName = Annotated[str, AfterValidator(_require_text)]
IngredientName = Annotated[str, AfterValidator(_require_text)]


# ============================================
# Ingredient Schemas
# ============================================

class RecipeIngredientInput(BaseModel):
    """
    Ingredient line when creating or updating a recipe.

    The ingredient is referenced by name; it is matched against the shared
    dictionary case and whitespace insensitively, and added if missing.
    Position in the list determines the line's sort order.
    """
    ingredient_name: IngredientName = Field(..., min_length=1, max_length=255, description="Ingredient name, e.g. 'onion'")
    quantity: float | None = Field(None, gt=0, description="Amount needed (e.g. 2, 0.5)")
    unit: str | None = Field(None, max_length=50, description="Unit of measure (e.g. 'cup', 'tbsp')")
    notes: str | None = Field(None, description="Preparation notes (e.g. 'finely chopped')")


class IngredientLineResponse(BaseModel):
    """
    Ingredient line in API responses.

    Includes sort_order so clients can display lines in the intended order.
    """
    ingredient_id: str
    name: str
    quantity: float | None
    unit: str | None
    notes: str | None
    sort_order: int

    class Config:
        from_attributes = True


# ============================================
# Dictionary Schemas
# ============================================

class IngredientResponse(BaseModel):
    """Entry of the shared ingredient dictionary."""
    ingredient_id: str
    name: str

    class Config:
        from_attributes = True


class TagResponse(BaseModel):
    """Entry of the shared tag dictionary."""
    tag_id: str
    name: str

    class Config:
        from_attributes = True


class UnitResponse(BaseModel):
    """Unit of measure offered for selection."""
    unit_id: str
    name: str
    abbreviation: str | None
    category: str | None

    class Config:
        from_attributes = True


# ============================================
# Recipe Schemas
# ============================================

class RecipeCreate(BaseModel):
    """Request body for creating a recipe."""
    name: RecipeName = Field(..., min_length=1, max_length=255)
    instructions: str = Field(..., min_length=1, description="Free text, one step per line")
    prep_time_minutes: int | None = Field(None, gt=0)
    cook_time_minutes: int | None = Field(None, gt=0)
    servings: int | None = Field(None, gt=0)
    source_url: SourceUrl = None
    notes: str | None = None
    ingredients: list[RecipeIngredientInput] = Field(..., min_length=1)
    tags: list[TagName] = Field(default_factory=list)


class RecipeUpdate(BaseModel):
    """
    Request body for partially updating a recipe.

    Only fields that are present are applied. A present `ingredients` or
    `tags` list replaces the recipe's whole set; an absent one leaves it
    untouched. Optional scalar fields may be sent as null to clear them.
    """
    name: RecipeName | None = Field(None, min_length=1, max_length=255)
    instructions: str | None = Field(None, min_length=1)
    prep_time_minutes: int | None = Field(None, gt=0)
    cook_time_minutes: int | None = Field(None, gt=0)
    servings: int | None = Field(None, gt=0)
    source_url: SourceUrl = None
    notes: str | None = None
    ingredients: list[RecipeIngredientInput] | None = Field(None, min_length=1)
    tags: list[TagName] | None = None

    @model_validator(mode="after")
    def required_fields_not_null(self):
        for field in ("name", "instructions", "ingredients", "tags"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class RecipeFilter(BaseModel):
    """
    Optional list filter. Criteria are combined with AND; a recipe
    satisfies a list criterion when it matches any of its values.
    """
    search: str | None = None
    tags: list[str] | None = None
    ingredient_ids: list[UUID] | None = None


class RecipeSummary(BaseModel):
    """Recipe without nested details, for list views."""
    recipe_id: str
    name: str
    prep_time_minutes: int | None
    cook_time_minutes: int | None
    servings: int | None
    source_url: str | None
    notes: str | None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class RecipeDetail(RecipeSummary):
    """Full recipe with ordered ingredient lines and tags."""
    instructions: str
    ingredients: list[IngredientLineResponse]
    tags: list[TagResponse]


class RecipeSteps(BaseModel):
    """Instructions segmented into cooking steps."""
    recipe_id: str
    total_steps: int
    steps: list[str]


# ============================================
# Cleanup Schemas
# ============================================

class CleanupRequest(BaseModel):
    """Bulk delete of recipes whose name contains a pattern."""
    pattern: str


class CleanupResponse(BaseModel):
    deleted: int


# ============================================
# Cooking Session Schemas
# ============================================

class CookingSessionStart(BaseModel):
    """Request to start a cooking session."""
    recipe_id: str


class CookingSessionResponse(BaseModel):
    """State of a cooking session."""
    session_id: str
    recipe_id: str
    recipe_name: str
    total_steps: int
    current_step: int
    current_instruction: str | None
    completed_steps: list[int]
    progress: float
    steps: list[str]
    ingredients: list[IngredientLineResponse]
