"""Recipe service: CRUD, ingredient search and taste tracking for stored recipes."""

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from cookai.models.enums import InteractionType
from cookai.models.recipe import Recipe, RecipeIngredient
from cookai.services.ingredient_parser import parse_ingredient_lines
from cookai.services.interactions import InteractionEvent
from cookai.services.recipe_search import (
    IngredientSearchResult,
    filter_recipes,
    search_recipes_by_ingredients,
)
from cookai.services.taste_profile_store import TasteProfileStore

logger = logging.getLogger(__name__)

RECIPE_FIELDS = {
    "title",
    "description",
    "source_type",
    "source_url",
    "prep_time_minutes",
    "cook_time_minutes",
    "total_time_minutes",
    "servings",
    "difficulty",
    "cuisine",
    "tags",
    "instructions",
    "notes",
}


class RecipeService:
    """Service for recipe-related operations."""

    def __init__(self, db: Session):
        self.db = db
        self.profiles = TasteProfileStore(db)

    def get_recipe(self, recipe_id: int, user_id: int) -> Recipe:
        """Get a live recipe that belongs to the user."""
        recipe = (
            self.db.query(Recipe)
            .filter(Recipe.id == recipe_id, Recipe.user_id == user_id, Recipe.not_deleted())
            .first()
        )
        if not recipe:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
        return recipe

    def get_ingredient(self, ingredient_id: int, user_id: int) -> RecipeIngredient:
        """Get an ingredient that belongs to one of the user's recipes."""
        ingredient = (
            self.db.query(RecipeIngredient)
            .join(Recipe)
            .filter(
                RecipeIngredient.id == ingredient_id,
                Recipe.user_id == user_id,
                Recipe.not_deleted(),
            )
            .first()
        )
        if not ingredient:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ingredient not found")
        return ingredient

    def list_recipes(self, user_id: int, **filters: Any) -> list[Recipe]:
        """List the user's recipes, newest first, narrowed by the list filters."""
        recipes = (
            self.db.query(Recipe)
            .filter(Recipe.user_id == user_id, Recipe.not_deleted())
            .order_by(Recipe.created_at.desc(), Recipe.id.desc())
            .all()
        )
        return filter_recipes(recipes, **filters)

    def create_recipe(self, user_id: int, data: dict[str, Any]) -> Recipe:
        """Create a recipe from structured ingredients plus free-text ingredient lines."""
        recipe = Recipe(
            user_id=user_id,
            **{key: _enum_value(value) for key, value in data.items() if key in RECIPE_FIELDS},
        )

        ingredients = list(data.get("ingredients") or [])
        ingredients.extend(
            {key: value for key, value in parsed.items() if key != "order_index"}
            for parsed in parse_ingredient_lines(data.get("ingredient_lines") or [])
        )
        for index, ingredient in enumerate(ingredients):
            recipe.ingredients.append(RecipeIngredient(**ingredient, order_index=index))

        self.db.add(recipe)
        self.db.commit()
        self.db.refresh(recipe)
        logger.info(f"Created recipe {recipe.id} with {len(ingredients)} ingredients")
        return recipe

    def update_recipe(self, recipe_id: int, user_id: int, updates: dict[str, Any]) -> Recipe:
        recipe = self.get_recipe(recipe_id, user_id)
        for field, value in updates.items():
            if field in RECIPE_FIELDS:
                setattr(recipe, field, _enum_value(value))
        self.db.commit()
        self.db.refresh(recipe)
        return recipe

    def delete_recipe(self, recipe_id: int, user_id: int) -> None:
        recipe = self.get_recipe(recipe_id, user_id)
        recipe.soft_delete()
        self.db.commit()

    def add_ingredient(self, recipe_id: int, user_id: int, data: dict[str, Any]) -> RecipeIngredient:
        recipe = self.get_recipe(recipe_id, user_id)
        current = (
            self.db.query(func.max(RecipeIngredient.order_index))
            .filter(RecipeIngredient.recipe_id == recipe.id)
            .scalar()
        )
        ingredient = RecipeIngredient(
            recipe_id=recipe.id,
            order_index=0 if current is None else current + 1,
            **data,
        )
        self.db.add(ingredient)
        self.db.commit()
        self.db.refresh(ingredient)
        return ingredient

    def update_ingredient(
        self, ingredient_id: int, user_id: int, updates: dict[str, Any]
    ) -> RecipeIngredient:
        ingredient = self.get_ingredient(ingredient_id, user_id)
        for field, value in updates.items():
            setattr(ingredient, field, value)
        self.db.commit()
        self.db.refresh(ingredient)
        return ingredient

    def delete_ingredient(self, ingredient_id: int, user_id: int) -> None:
        ingredient = self.get_ingredient(ingredient_id, user_id)
        self.db.delete(ingredient)
        self.db.commit()

    def search_by_ingredients(self, user_id: int, ingredients: list[str]) -> IngredientSearchResult:
        """Rank the user's recipes by how many of the given ingredients they use.

        Recipes with equal match ratios are ordered by the user's cuisine affinity.
        """
        recipes = self.list_recipes(user_id)
        profile = self.profiles.load(user_id)
        return search_recipes_by_ingredients(ingredients, recipes, profile=profile)

    def record_interaction(
        self,
        recipe_id: int,
        user_id: int,
        interaction_type: InteractionType,
        rating: int | None = None,
    ) -> InteractionEvent:
        """Apply a user action to a recipe and feed it into the taste profile."""
        recipe = self.get_recipe(recipe_id, user_id)

        if interaction_type == InteractionType.FAVORITE:
            recipe.is_favorite = True
        elif interaction_type == InteractionType.UNFAVORITE:
            recipe.is_favorite = False
        elif interaction_type == InteractionType.COOK:
            recipe.times_cooked = (recipe.times_cooked or 0) + 1
            recipe.last_cooked_at = datetime.now(UTC)
        self.db.commit()

        aggregator = self.profiles.aggregator(user_id)
        event = aggregator.track_interaction(
            interaction_type,
            recipe_id=str(recipe.id),
            cuisine=recipe.cuisine,
            ingredients=[ingredient.name for ingredient in recipe.ingredients],
            tags=recipe.tags or [],
            difficulty=recipe.difficulty,
            rating=rating,
        )
        self.profiles.save(user_id, aggregator.profile)

        logger.info(
            f"Recorded {interaction_type.value} on recipe {recipe.id} for user {user_id} "
            f"(weight {event.weight})"
        )
        return event


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)
