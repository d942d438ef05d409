"""Turn raw LLM recipe output into stored recipes."""

import logging
from typing import Any

from cookai.models.enums import Difficulty, SourceType
from cookai.models.recipe import Recipe, RecipeIngredient
from cookai.services.ingredient_parser import (
    normalize_unit,
    parse_ingredient_string,
    parse_quantity,
)

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled Recipe"
DEFAULT_CUISINE = "International"
DEFAULT_SERVINGS = 4


def normalize_generated_recipe(raw: dict[str, Any]) -> dict[str, Any]:
    """Fill defaults and normalize ingredients of a generated recipe.

    Ingredients may arrive as structured objects or as plain strings; strings
    go through the ingredient parser, quantities like "1/2" become floats and
    units are mapped to their canonical spelling.
    """
    prep = _int_or_none(raw.get("prep_time_minutes")) or 0
    cook = _int_or_none(raw.get("cook_time_minutes")) or 0
    total = _int_or_none(raw.get("total_time_minutes")) or (prep + cook) or None

    difficulty = str(raw.get("difficulty") or Difficulty.MEDIUM.value).lower()
    if difficulty not in {d.value for d in Difficulty}:
        difficulty = Difficulty.MEDIUM.value

    instructions = raw.get("instructions") or []
    if isinstance(instructions, str):
        instructions = [line.strip() for line in instructions.splitlines() if line.strip()]

    return {
        "title": raw.get("title") or DEFAULT_TITLE,
        "description": raw.get("description") or "",
        "prep_time_minutes": prep or None,
        "cook_time_minutes": cook or None,
        "total_time_minutes": total,
        "servings": _int_or_none(raw.get("servings")) or DEFAULT_SERVINGS,
        "difficulty": difficulty,
        "cuisine": raw.get("cuisine") or DEFAULT_CUISINE,
        "tags": [t for t in raw.get("tags") or [] if isinstance(t, str)],
        "ingredients": [
            ingredient
            for ingredient in (_normalize_ingredient(item) for item in raw.get("ingredients") or [])
            if ingredient is not None
        ],
        "instructions": [str(step) for step in instructions],
        "notes": raw.get("notes"),
    }


def build_recipe(user_id: int, recipe_data: dict[str, Any]) -> Recipe:
    """Create an (unsaved) AI-sourced Recipe from normalized recipe data."""
    recipe = Recipe(
        user_id=user_id,
        title=recipe_data["title"],
        description=recipe_data["description"],
        source_type=SourceType.AI.value,
        prep_time_minutes=recipe_data["prep_time_minutes"],
        cook_time_minutes=recipe_data["cook_time_minutes"],
        total_time_minutes=recipe_data["total_time_minutes"],
        servings=recipe_data["servings"],
        difficulty=recipe_data["difficulty"],
        cuisine=recipe_data["cuisine"],
        tags=recipe_data["tags"],
        instructions=recipe_data["instructions"],
        notes=recipe_data["notes"],
    )
    for index, ingredient in enumerate(recipe_data["ingredients"]):
        recipe.ingredients.append(RecipeIngredient(**ingredient, order_index=index))
    return recipe


def _normalize_ingredient(item: Any) -> dict[str, Any] | None:
    if isinstance(item, str):
        parsed = parse_ingredient_string(item)
        if not parsed.name:
            return None
        return {
            "name": parsed.name,
            "quantity": parsed.quantity,
            "unit": parsed.unit,
            "preparation": parsed.preparation,
            "is_optional": "optional" in item.lower(),
        }

    if not isinstance(item, dict):
        logger.debug(f"Skipping unreadable generated ingredient: {item!r}")
        return None

    name = str(item.get("name") or "").strip()
    if not name:
        return None

    quantity = item.get("quantity")
    if isinstance(quantity, str):
        quantity = parse_quantity(quantity) if quantity.strip() else None
    elif not isinstance(quantity, int | float) or isinstance(quantity, bool):
        quantity = None

    return {
        "name": name,
        "quantity": float(quantity) if quantity is not None else None,
        "unit": normalize_unit(item.get("unit")),
        "preparation": item.get("preparation") or None,
        "is_optional": bool(item.get("is_optional", False)),
    }


def _int_or_none(value: Any) -> int | None:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None
