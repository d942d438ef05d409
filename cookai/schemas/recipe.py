"""Recipe schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from cookai.models.enums import Difficulty, InteractionType, SourceType

# --- Recipe Ingredient ---


class RecipeIngredientCreate(BaseModel):
    """Create a recipe ingredient."""

    name: str = Field(..., min_length=1, max_length=255)
    quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, max_length=50)
    preparation: str | None = Field(None, max_length=500)
    is_optional: bool = False
    group_name: str | None = Field(None, max_length=100)


class RecipeIngredientUpdate(BaseModel):
    """Update a recipe ingredient."""

    name: str | None = Field(None, min_length=1, max_length=255)
    quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, max_length=50)
    preparation: str | None = Field(None, max_length=500)
    is_optional: bool | None = None
    group_name: str | None = Field(None, max_length=100)


class RecipeIngredientResponse(BaseModel):
    """Recipe ingredient response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipe_id: int
    name: str
    quantity: float | None
    unit: str | None
    preparation: str | None
    is_optional: bool
    group_name: str | None
    order_index: int


# --- Recipe ---


class RecipeCreate(BaseModel):
    """Create a new recipe."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)
    source_type: SourceType = SourceType.MANUAL
    source_url: str | None = Field(None, max_length=2000)
    prep_time_minutes: int | None = Field(None, ge=0)
    cook_time_minutes: int | None = Field(None, ge=0)
    total_time_minutes: int | None = Field(None, ge=0)
    servings: int | None = Field(None, ge=1)
    difficulty: Difficulty | None = None
    cuisine: str | None = Field(None, max_length=100)
    tags: list[str] = []
    instructions: list[str] = []
    notes: str | None = Field(None, max_length=5000)
    ingredients: list[RecipeIngredientCreate] = []
    # Free-text ingredient lines ("2 cups flour, sifted"), parsed and appended
    ingredient_lines: list[str] = []


class RecipeUpdate(BaseModel):
    """Update a recipe."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)
    source_url: str | None = Field(None, max_length=2000)
    prep_time_minutes: int | None = Field(None, ge=0)
    cook_time_minutes: int | None = Field(None, ge=0)
    total_time_minutes: int | None = Field(None, ge=0)
    servings: int | None = Field(None, ge=1)
    difficulty: Difficulty | None = None
    cuisine: str | None = Field(None, max_length=100)
    tags: list[str] | None = None
    instructions: list[str] | None = None
    notes: str | None = Field(None, max_length=5000)


class RecipeResponse(BaseModel):
    """Recipe response with ingredients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    description: str | None
    source_type: str
    source_url: str | None
    prep_time_minutes: int | None
    cook_time_minutes: int | None
    total_time_minutes: int | None
    servings: int | None
    difficulty: str | None
    cuisine: str | None
    tags: list[str]
    instructions: list[str]
    notes: str | None
    is_favorite: bool
    times_cooked: int
    last_cooked_at: datetime | None
    ingredients: list[RecipeIngredientResponse]
    created_at: datetime
    updated_at: datetime


class RecipeListResponse(BaseModel):
    """Recipe list item (without full ingredients)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None
    source_type: str
    difficulty: str | None
    cuisine: str | None
    tags: list[str]
    total_time_minutes: int | None
    is_favorite: bool
    times_cooked: int
    ingredient_count: int
    created_at: datetime


# --- Ingredient search ---


class IngredientSearchRequest(BaseModel):
    """Ingredients the user has on hand."""

    ingredients: list[str] = Field(..., max_length=100)


class RecipeMatchResponse(BaseModel):
    """A recipe with its ingredient match statistics."""

    recipe: RecipeListResponse
    match_count: int
    total_ingredients: int
    match_ratio: float


class IngredientSearchResponse(BaseModel):
    """Search results split into perfect and partial matches."""

    perfect: list[RecipeMatchResponse]
    partial: list[RecipeMatchResponse]


# --- Ingredient parsing ---


class ParseIngredientsRequest(BaseModel):
    """Free-text ingredient lines to parse."""

    lines: list[str] = Field(..., max_length=200)


class ParsedIngredientResponse(BaseModel):
    """One parsed ingredient line."""

    name: str
    quantity: float | None
    unit: str | None
    preparation: str | None
    is_optional: bool
    order_index: int


# --- Interactions ---


class RecipeInteractionRequest(BaseModel):
    """A user action on a stored recipe."""

    type: InteractionType
    rating: int | None = Field(None, ge=1, le=5)
