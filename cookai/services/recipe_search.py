"""Ingredient-based recipe search and recipe list filtering.

Works on any recipe-like object (ORM rows or plain dicts) exposing title,
description, instructions, cuisine and ingredients with a name.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from cookai.services.taste_profile import TasteProfile

logger = logging.getLogger(__name__)

# Recipes without structured ingredients are scored as if they had this many,
# so a single text hit can't make them a perfect match
DEFAULT_TOTAL_INGREDIENTS = 5
PERFECT_RATIO_THRESHOLD = 0.7
PERFECT_MIN_MATCHES = 3
MAX_PARTIAL_RESULTS = 10


@dataclass
class RecipeMatch:
    """A recipe together with how well it matched the user's ingredients."""

    recipe: Any
    match_count: int
    total_ingredients: int

    @property
    def ratio(self) -> float:
        return self.match_count / self.total_ingredients

    @property
    def is_perfect(self) -> bool:
        return self.ratio > PERFECT_RATIO_THRESHOLD or self.match_count >= PERFECT_MIN_MATCHES


@dataclass
class IngredientSearchResult:
    """Recipes split into perfect and partial match tiers."""

    perfect: list[RecipeMatch] = field(default_factory=list)
    partial: list[RecipeMatch] = field(default_factory=list)

    @property
    def perfect_recipes(self) -> list[Any]:
        return [match.recipe for match in self.perfect]

    @property
    def partial_recipes(self) -> list[Any]:
        return [match.recipe for match in self.partial]


def search_recipes_by_ingredients(
    user_ingredients: Iterable[str],
    recipes: Iterable[Any],
    profile: TasteProfile | None = None,
) -> IngredientSearchResult:
    """Find recipes that can be made from the ingredients a user has.

    A user ingredient matches a recipe when it and a stored ingredient name
    contain one another, or when the recipe's title, description or
    instructions mention it. Recipes with no matches are left out.
    """
    normalized_input = [
        ingredient.lower().strip()
        for ingredient in user_ingredients
        if isinstance(ingredient, str) and ingredient.strip()
    ]
    if not normalized_input:
        return IngredientSearchResult()

    matches = []
    for recipe in recipes:
        match = match_recipe(normalized_input, recipe)
        if match.match_count > 0:
            matches.append(match)

    # Stable sort keeps input order for equal ratios
    if profile is not None:
        matches.sort(key=lambda m: (-m.ratio, -_cuisine_affinity(profile, m.recipe)))
    else:
        matches.sort(key=lambda m: -m.ratio)

    perfect = [m for m in matches if m.is_perfect]
    partial = [m for m in matches if not m.is_perfect][:MAX_PARTIAL_RESULTS]

    logger.debug(
        f"Ingredient search for {len(normalized_input)} ingredients: "
        f"{len(perfect)} perfect, {len(partial)} partial"
    )
    return IngredientSearchResult(perfect=perfect, partial=partial)


def match_recipe(normalized_input: Sequence[str], recipe: Any) -> RecipeMatch:
    """Count how many of the (already normalized) user ingredients a recipe uses."""
    recipe_ingredients = [
        name.lower()
        for name in (_get(ingredient, "name") for ingredient in _get(recipe, "ingredients") or [])
        if isinstance(name, str) and name.strip()
    ]
    all_text = _recipe_text(recipe)

    match_count = 0
    for user_ingredient in normalized_input:
        has_match = any(
            user_ingredient in name or name in user_ingredient for name in recipe_ingredients
        ) or user_ingredient in all_text
        if has_match:
            match_count += 1

    total = len(set(recipe_ingredients)) or DEFAULT_TOTAL_INGREDIENTS
    return RecipeMatch(recipe=recipe, match_count=match_count, total_ingredients=total)


def filter_recipes(
    recipes: Iterable[Any],
    query: str | None = None,
    cuisine: str | None = None,
    difficulty: str | None = None,
    source_type: str | None = None,
    is_favorite: bool | None = None,
) -> list[Any]:
    """Apply the recipe list filters: free-text query plus exact facets."""
    query_lower = query.lower().strip() if query else ""
    results = []
    for recipe in recipes:
        if query_lower:
            haystack = f"{_get(recipe, 'title') or ''} {_get(recipe, 'description') or ''}".lower()
            tags = " ".join(_get(recipe, "tags") or []).lower()
            if query_lower not in haystack and query_lower not in tags:
                continue
        if cuisine and (_get(recipe, "cuisine") or "").lower() != cuisine.lower():
            continue
        if difficulty and _enum_value(_get(recipe, "difficulty")) != difficulty:
            continue
        if source_type and _enum_value(_get(recipe, "source_type")) != source_type:
            continue
        if is_favorite is not None and bool(_get(recipe, "is_favorite")) != is_favorite:
            continue
        results.append(recipe)
    return results


def _recipe_text(recipe: Any) -> str:
    instructions = _get(recipe, "instructions") or []
    if isinstance(instructions, str):
        instructions = [instructions]
    parts = [
        _get(recipe, "title") or "",
        _get(recipe, "description") or "",
        " ".join(step for step in instructions if isinstance(step, str)),
    ]
    return " ".join(parts).lower()


def _cuisine_affinity(profile: TasteProfile, recipe: Any) -> float:
    cuisine = _get(recipe, "cuisine")
    if not cuisine:
        return 0.0
    return profile.cuisine_scores.get(cuisine, 0.0)


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


def _get(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)
