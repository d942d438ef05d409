"""Interaction events and their scoring weights."""

import logging
from dataclasses import dataclass
from typing import Any

from cookai.models.enums import Difficulty, InteractionType

logger = logging.getLogger(__name__)

# Cooking is the strongest signal, unfavoriting the strongest negative one
INTERACTION_WEIGHTS: dict[InteractionType, int] = {
    InteractionType.COOK: 5,
    InteractionType.FAVORITE: 3,
    InteractionType.SAVE: 2,
    InteractionType.GENERATE: 1,
    InteractionType.RATE: 0,  # Derived from the rating instead
    InteractionType.SKIP: -1,
    InteractionType.UNFAVORITE: -2,
}

NEUTRAL_RATING = 3
MIN_RATING = 1
MAX_RATING = 5


def clamp_rating(rating: Any) -> int | None:
    """Coerce a rating to an int on the 1-5 scale, or None if unusable."""
    if rating is None or isinstance(rating, bool):
        return None
    try:
        value = int(round(float(rating)))
    except (TypeError, ValueError):
        logger.debug(f"Ignoring non-numeric rating: {rating!r}")
        return None
    return max(MIN_RATING, min(MAX_RATING, value))


def interaction_weight(interaction_type: InteractionType, rating: int | None = None) -> int:
    """Scalar weight of an interaction.

    Ratings map 1..5 onto -2..+2; a rate event without a rating is neutral.
    """
    if interaction_type == InteractionType.RATE:
        return (rating or NEUTRAL_RATING) - NEUTRAL_RATING
    return INTERACTION_WEIGHTS[interaction_type]


@dataclass(frozen=True)
class InteractionEvent:
    """A single user action, as recorded in the profile history."""

    type: InteractionType
    timestamp: int  # Milliseconds since epoch
    recipe_id: str | None = None
    cuisine: str | None = None
    ingredients: tuple[str, ...] | None = None
    tags: tuple[str, ...] | None = None
    difficulty: Difficulty | None = None
    rating: int | None = None

    @property
    def weight(self) -> int:
        return interaction_weight(self.type, self.rating)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted (camelCase) shape, omitting absent fields."""
        data: dict[str, Any] = {"type": self.type.value, "timestamp": self.timestamp}
        if self.recipe_id is not None:
            data["recipeId"] = self.recipe_id
        if self.cuisine is not None:
            data["cuisine"] = self.cuisine
        if self.ingredients is not None:
            data["ingredients"] = list(self.ingredients)
        if self.tags is not None:
            data["tags"] = list(self.tags)
        if self.difficulty is not None:
            data["difficulty"] = self.difficulty.value
        if self.rating is not None:
            data["rating"] = self.rating
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InteractionEvent | None":
        """Rebuild an event from its persisted shape.

        Returns None for entries whose type is unknown so a corrupted history
        entry never breaks loading the rest of the profile.
        """
        try:
            interaction_type = InteractionType(data.get("type"))
        except ValueError:
            logger.warning(f"Dropping stored interaction with unknown type: {data.get('type')!r}")
            return None

        return cls(
            type=interaction_type,
            timestamp=int(data.get("timestamp") or 0),
            recipe_id=data.get("recipeId"),
            cuisine=data.get("cuisine"),
            ingredients=_as_str_tuple(data.get("ingredients")),
            tags=_as_str_tuple(data.get("tags")),
            difficulty=parse_difficulty(data.get("difficulty")),
            rating=clamp_rating(data.get("rating")),
        )


def parse_difficulty(value: Any) -> Difficulty | None:
    """Parse a difficulty label, ignoring anything unrecognized."""
    if value is None:
        return None
    if isinstance(value, Difficulty):
        return value
    try:
        return Difficulty(str(value).lower().strip())
    except ValueError:
        logger.debug(f"Ignoring unknown difficulty: {value!r}")
        return None


def _as_str_tuple(values: Any) -> tuple[str, ...] | None:
    """Keep only the string entries of a list-like field."""
    if values is None:
        return None
    if isinstance(values, str):
        values = [values]
    try:
        return tuple(v for v in values if isinstance(v, str))
    except TypeError:
        logger.debug(f"Ignoring non-iterable list field: {values!r}")
        return None
