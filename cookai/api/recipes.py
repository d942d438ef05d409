"""Recipe API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from cookai.api.dependencies import get_current_user, get_recipe_service
from cookai.database import get_db
from cookai.models.enums import Difficulty, GenerationStatus, SourceType
from cookai.models.recipe import Recipe
from cookai.models.recipe_generation import RecipeGeneration
from cookai.models.user import User
from cookai.schemas.recipe import (
    IngredientSearchRequest,
    IngredientSearchResponse,
    ParsedIngredientResponse,
    ParseIngredientsRequest,
    RecipeCreate,
    RecipeIngredientCreate,
    RecipeIngredientResponse,
    RecipeIngredientUpdate,
    RecipeInteractionRequest,
    RecipeListResponse,
    RecipeMatchResponse,
    RecipeResponse,
    RecipeUpdate,
)
from cookai.schemas.recipe_generation import RecipeGenerationCreate, RecipeGenerationResponse
from cookai.schemas.taste_profile import InteractionResponse
from cookai.services.ingredient_parser import parse_ingredient_lines
from cookai.services.recipe_search import RecipeMatch
from cookai.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])


def to_list_response(recipe: Recipe) -> RecipeListResponse:
    return RecipeListResponse(
        id=recipe.id,
        title=recipe.title,
        description=recipe.description,
        source_type=recipe.source_type,
        difficulty=recipe.difficulty,
        cuisine=recipe.cuisine,
        tags=recipe.tags or [],
        total_time_minutes=recipe.total_time_minutes,
        is_favorite=recipe.is_favorite,
        times_cooked=recipe.times_cooked,
        ingredient_count=len(recipe.ingredients),
        created_at=recipe.created_at,
    )


def to_match_response(match: RecipeMatch) -> RecipeMatchResponse:
    return RecipeMatchResponse(
        recipe=to_list_response(match.recipe),
        match_count=match.match_count,
        total_ingredients=match.total_ingredients,
        match_ratio=round(match.ratio, 4),
    )


# --- Static routes first (before /{recipe_id}) ---


@router.get("", response_model=list[RecipeListResponse])
async def list_recipes(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
    q: str | None = Query(None, max_length=200),
    cuisine: str | None = Query(None, max_length=100),
    difficulty: Difficulty | None = None,
    source_type: SourceType | None = None,
    is_favorite: bool | None = None,
):
    """List the current user's recipes, optionally filtered."""
    recipes = service.list_recipes(
        current_user.id,
        query=q,
        cuisine=cuisine,
        difficulty=difficulty.value if difficulty else None,
        source_type=source_type.value if source_type else None,
        is_favorite=is_favorite,
    )
    return [to_list_response(recipe) for recipe in recipes]


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
async def create_recipe(
    recipe_data: RecipeCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Create a new recipe with ingredients."""
    return service.create_recipe(current_user.id, recipe_data.model_dump())


@router.post("/search-by-ingredients", response_model=IngredientSearchResponse)
async def search_by_ingredients(
    request: IngredientSearchRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Find recipes that can be made from the ingredients on hand."""
    result = service.search_by_ingredients(current_user.id, request.ingredients)
    return IngredientSearchResponse(
        perfect=[to_match_response(match) for match in result.perfect],
        partial=[to_match_response(match) for match in result.partial],
    )


@router.post("/parse-ingredients", response_model=list[ParsedIngredientResponse])
async def parse_ingredients(
    request: ParseIngredientsRequest,
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Parse free-text ingredient lines without saving anything."""
    return parse_ingredient_lines(request.lines)


# --- Recipe generation (static routes) ---


@router.post(
    "/generate",
    response_model=RecipeGenerationResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def create_recipe_generation(
    data: RecipeGenerationCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Queue an LLM recipe generation personalized by the user's taste profile."""
    generation = RecipeGeneration(
        user_id=current_user.id,
        request=data.model_dump(mode="json"),
        status=GenerationStatus.PENDING.value,
    )
    db.add(generation)
    db.commit()
    db.refresh(generation)

    # Trigger async processing
    from cookai.tasks.recipe_generation import generate_recipe

    generate_recipe.delay(generation.id)
    logger.info(f"Queued recipe generation {generation.id} for user {current_user.id}")

    return generation


@router.get("/generate/{job_id}", response_model=RecipeGenerationResponse)
async def get_recipe_generation(
    job_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get generation status and, once completed, the stored recipe id."""
    generation = (
        db.query(RecipeGeneration)
        .filter(RecipeGeneration.id == job_id, RecipeGeneration.user_id == current_user.id)
        .first()
    )
    if not generation:
        raise HTTPException(status_code=404, detail="Generation not found")
    return generation


# --- Ingredient routes (static prefix) ---


@router.patch("/ingredients/{ingredient_id}", response_model=RecipeIngredientResponse)
async def update_ingredient(
    ingredient_id: int,
    ingredient_data: RecipeIngredientUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Update an ingredient."""
    return service.update_ingredient(
        ingredient_id, current_user.id, ingredient_data.model_dump(exclude_unset=True)
    )


@router.delete("/ingredients/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ingredient(
    ingredient_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Delete an ingredient."""
    service.delete_ingredient(ingredient_id, current_user.id)


# --- Dynamic routes ---


@router.get("/{recipe_id}", response_model=RecipeResponse)
async def get_recipe(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Get a recipe with all ingredients."""
    return service.get_recipe(recipe_id, current_user.id)


@router.patch("/{recipe_id}", response_model=RecipeResponse)
async def update_recipe(
    recipe_id: int,
    recipe_data: RecipeUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Update a recipe."""
    return service.update_recipe(
        recipe_id, current_user.id, recipe_data.model_dump(exclude_unset=True)
    )


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Soft delete a recipe."""
    service.delete_recipe(recipe_id, current_user.id)


@router.post(
    "/{recipe_id}/ingredients",
    response_model=RecipeIngredientResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_ingredient(
    recipe_id: int,
    ingredient_data: RecipeIngredientCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Add an ingredient to a recipe."""
    return service.add_ingredient(recipe_id, current_user.id, ingredient_data.model_dump())


@router.post("/{recipe_id}/interactions", response_model=InteractionResponse)
async def record_interaction(
    recipe_id: int,
    interaction: RecipeInteractionRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Record a save, favorite, cook, skip or rating on a recipe."""
    event = service.record_interaction(
        recipe_id, current_user.id, interaction.type, rating=interaction.rating
    )
    return InteractionResponse.from_event(event)
