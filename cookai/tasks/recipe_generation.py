"""Celery tasks for LLM recipe generation."""

import asyncio
import logging
from datetime import UTC, datetime

from cookai.celery_app import app as celery_app
from cookai.database import SessionLocal
from cookai.models.enums import GenerationStatus, InteractionType
from cookai.models.recipe_generation import RecipeGeneration
from cookai.services.llm import LLMService
from cookai.services.llm_prompts import (
    RECIPE_GENERATION_SYSTEM_PROMPT,
    get_recipe_generation_prompt,
)
from cookai.services.profile_summary import get_profile_summary
from cookai.services.recipe_generation import build_recipe, normalize_generated_recipe
from cookai.services.taste_profile_store import TasteProfileStore

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, max_retries=3)
def generate_recipe(self, generation_id: int) -> dict:
    """Generate a recipe with the LLM, personalized by the user's taste profile.

    Args:
        generation_id: ID of the RecipeGeneration record to process

    Returns:
        dict with processing result
    """
    db = SessionLocal()
    try:
        generation = db.query(RecipeGeneration).filter(RecipeGeneration.id == generation_id).first()
        if not generation:
            return {"error": "Generation not found"}

        generation.status = GenerationStatus.PROCESSING.value
        db.commit()

        logger.info(f"Processing recipe generation {generation_id}")

        store = TasteProfileStore(db)
        aggregator = store.aggregator(generation.user_id)
        prompt = get_recipe_generation_prompt(
            generation.request, get_profile_summary(aggregator.profile)
        )

        llm_service = LLMService()
        raw = asyncio.run(
            llm_service.generate_json(
                prompt=prompt,
                system_prompt=RECIPE_GENERATION_SYSTEM_PROMPT,
            )
        )

        if not raw.get("title") or not raw.get("ingredients") or not raw.get("instructions"):
            generation.status = GenerationStatus.FAILED.value
            generation.error_message = "Generated recipe is missing title, ingredients or instructions"
            db.commit()
            return {"error": "Invalid structure"}

        recipe_data = normalize_generated_recipe(raw)
        recipe = build_recipe(generation.user_id, recipe_data)
        db.add(recipe)
        db.flush()

        generation.generated_recipe = recipe_data
        generation.recipe_id = recipe.id
        generation.status = GenerationStatus.COMPLETED.value
        generation.processed_at = datetime.now(UTC)
        db.commit()

        aggregator.track_interaction(
            InteractionType.GENERATE,
            recipe_id=str(recipe.id),
            cuisine=recipe_data["cuisine"],
            ingredients=[ingredient["name"] for ingredient in recipe_data["ingredients"]],
            tags=recipe_data["tags"],
            difficulty=recipe_data["difficulty"],
        )
        store.save(generation.user_id, aggregator.profile)

        logger.info(f"Recipe generation {generation_id} stored as recipe {recipe.id}")

        return {"success": True, "recipe_id": recipe.id}

    except Exception as e:
        logger.error(f"Error processing recipe generation {generation_id}: {e}", exc_info=True)
        db.rollback()
        generation = db.query(RecipeGeneration).filter(RecipeGeneration.id == generation_id).first()
        if generation:
            generation.status = GenerationStatus.FAILED.value
            generation.error_message = str(e)
            db.commit()

        # Retry if not exhausted
        if self.request.retries < self.max_retries:
            raise self.retry(exc=e, countdown=60) from e

        return {"error": str(e)}
    finally:
        db.close()
