"""Recipe generation schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from cookai.models.enums import Difficulty


class RecipeGenerationCreate(BaseModel):
    """Request to generate a recipe with the LLM."""

    ingredients: list[str] = Field([], max_length=50)
    cuisine_preference: str | None = Field(None, max_length=100)
    dietary_restrictions: list[str] = Field([], max_length=20)
    max_cook_time: int | None = Field(None, ge=5, le=600)
    difficulty: Difficulty | None = None
    servings: int | None = Field(None, ge=1, le=50)
    additional_notes: str | None = Field(None, max_length=2000)


class RecipeGenerationResponse(BaseModel):
    """Status of a recipe generation job."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    status: str  # pending, processing, completed, failed
    request: dict[str, Any]
    generated_recipe: dict[str, Any] | None = None
    recipe_id: int | None = None
    error_message: str | None = None
    processed_at: datetime | None = None
    created_at: datetime
