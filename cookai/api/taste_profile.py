"""Taste profile API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from cookai.api.dependencies import get_current_user, get_taste_profile_store
from cookai.models.user import User
from cookai.schemas.taste_profile import (
    CuisineScore,
    IngredientScore,
    InteractionCreate,
    InteractionResponse,
    ProfileSummaryResponse,
    ServingsUpdate,
    TasteProfileResponse,
)
from cookai.services.profile_summary import get_profile_summary
from cookai.services.taste_profile_store import TasteProfileStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/taste-profile", tags=["taste-profile"])


@router.get("", response_model=TasteProfileResponse)
async def get_taste_profile(
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[TasteProfileStore, Depends(get_taste_profile_store)],
):
    """Get the current user's taste profile, creating a default one if needed."""
    return TasteProfileResponse.from_profile(store.load(current_user.id))


@router.delete("", response_model=TasteProfileResponse)
async def reset_taste_profile(
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[TasteProfileStore, Depends(get_taste_profile_store)],
):
    """Forget everything learned and start from the default profile."""
    return TasteProfileResponse.from_profile(store.reset(current_user.id))


@router.post("/interactions", response_model=InteractionResponse)
async def track_interaction(
    interaction: InteractionCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[TasteProfileStore, Depends(get_taste_profile_store)],
):
    """Track an interaction with a recipe that may not be stored (e.g. a suggestion)."""
    aggregator = store.aggregator(current_user.id)
    event = aggregator.track_interaction(
        interaction.type,
        recipe_id=interaction.recipe_id,
        cuisine=interaction.cuisine,
        ingredients=interaction.ingredients,
        tags=interaction.tags,
        difficulty=interaction.difficulty,
        rating=interaction.rating,
    )
    store.save(current_user.id, aggregator.profile)
    return InteractionResponse.from_event(event)


@router.get("/summary", response_model=ProfileSummaryResponse)
async def get_summary(
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[TasteProfileStore, Depends(get_taste_profile_store)],
):
    """Natural-language summary used to personalize recipe generation."""
    return ProfileSummaryResponse(summary=get_profile_summary(store.load(current_user.id)))


@router.get("/top-cuisines", response_model=list[CuisineScore])
async def get_top_cuisines(
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[TasteProfileStore, Depends(get_taste_profile_store)],
    limit: int = Query(5, ge=1, le=50),
):
    aggregator = store.aggregator(current_user.id)
    return [
        CuisineScore(cuisine=name, score=score) for name, score in aggregator.top_cuisines(limit)
    ]


@router.get("/top-ingredients", response_model=list[IngredientScore])
async def get_top_ingredients(
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[TasteProfileStore, Depends(get_taste_profile_store)],
    limit: int = Query(10, ge=1, le=100),
):
    aggregator = store.aggregator(current_user.id)
    return [
        IngredientScore(ingredient=name, score=score)
        for name, score in aggregator.top_ingredients(limit)
    ]


@router.get("/disliked-ingredients", response_model=list[str])
async def get_disliked_ingredients(
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[TasteProfileStore, Depends(get_taste_profile_store)],
):
    return store.aggregator(current_user.id).disliked_ingredients()


@router.put("/servings", response_model=TasteProfileResponse)
async def update_servings(
    data: ServingsUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[TasteProfileStore, Depends(get_taste_profile_store)],
):
    """Set how many servings the user usually cooks for."""
    aggregator = store.aggregator(current_user.id)
    aggregator.set_preferred_servings(data.preferred_servings)
    store.save(current_user.id, aggregator.profile)
    logger.info(f"User {current_user.id} set preferred servings to {data.preferred_servings}")
    return TasteProfileResponse.from_profile(aggregator.profile)
