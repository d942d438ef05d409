"""Taste profile schemas."""

from pydantic import BaseModel, Field

from cookai.models.enums import Difficulty, InteractionType
from cookai.services.interactions import InteractionEvent
from cookai.services.taste_profile import TasteProfile


class InteractionCreate(BaseModel):
    """Track a taste interaction that isn't tied to a stored recipe."""

    type: InteractionType
    recipe_id: str | None = Field(None, max_length=100)
    cuisine: str | None = Field(None, max_length=100)
    ingredients: list[str] | None = Field(None, max_length=200)
    tags: list[str] | None = Field(None, max_length=100)
    difficulty: Difficulty | None = None
    rating: int | None = Field(None, ge=1, le=5)


class InteractionResponse(BaseModel):
    """A recorded interaction."""

    type: InteractionType
    timestamp: int
    recipe_id: str | None = None
    cuisine: str | None = None
    ingredients: list[str] | None = None
    tags: list[str] | None = None
    difficulty: Difficulty | None = None
    rating: int | None = None
    weight: int

    @classmethod
    def from_event(cls, event: InteractionEvent) -> "InteractionResponse":
        return cls(
            type=event.type,
            timestamp=event.timestamp,
            recipe_id=event.recipe_id,
            cuisine=event.cuisine,
            ingredients=list(event.ingredients) if event.ingredients is not None else None,
            tags=list(event.tags) if event.tags is not None else None,
            difficulty=event.difficulty,
            rating=event.rating,
            weight=event.weight,
        )


class TasteProfileResponse(BaseModel):
    """Serialized taste profile."""

    cuisine_scores: dict[str, float]
    ingredient_scores: dict[str, float]
    spice_tolerance: float
    complexity_preference: str
    dietary_patterns: list[str]
    preferred_servings: int
    cooking_frequency: str
    recent_interactions: list[InteractionResponse]
    total_interactions: int
    last_updated: int

    @classmethod
    def from_profile(cls, profile: TasteProfile) -> "TasteProfileResponse":
        return cls(
            cuisine_scores=profile.cuisine_scores,
            ingredient_scores=profile.ingredient_scores,
            spice_tolerance=profile.spice_tolerance,
            complexity_preference=profile.complexity_preference.value,
            dietary_patterns=profile.dietary_patterns,
            preferred_servings=profile.preferred_servings,
            cooking_frequency=profile.cooking_frequency.value,
            recent_interactions=[
                InteractionResponse.from_event(event) for event in profile.recent_interactions
            ],
            total_interactions=profile.total_interactions,
            last_updated=profile.last_updated,
        )


class ProfileSummaryResponse(BaseModel):
    """Natural-language profile summary for prompts."""

    summary: str


class CuisineScore(BaseModel):
    cuisine: str
    score: float


class IngredientScore(BaseModel):
    ingredient: str
    score: float


class ServingsUpdate(BaseModel):
    """Update preferred serving count."""

    preferred_servings: int = Field(..., ge=1, le=50)
