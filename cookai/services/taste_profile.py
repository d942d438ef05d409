"""Taste profile aggregation.

Every interaction (save, favorite, cook, skip, ...) nudges the profile:
cuisine and ingredient affinities, spice tolerance, complexity preference,
dietary patterns and cooking frequency. The aggregator only mutates the
in-memory profile it was handed; persisting it is the caller's job
(see TasteProfileStore).
"""

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from cookai.models.enums import (
    ComplexityPreference,
    CookingFrequency,
    Difficulty,
    InteractionType,
)
from cookai.services.interactions import (
    InteractionEvent,
    clamp_rating,
    interaction_weight,
    parse_difficulty,
)

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1
MAX_RECENT_INTERACTIONS = 200

DEFAULT_SPICE_TOLERANCE = 5.0
MAX_SPICE_TOLERANCE = 10.0
MIN_SPICE_TOLERANCE = 0.0
SPICE_STEP = 0.2
DEFAULT_SERVINGS = 4

LIKED_THRESHOLD = 3
DISLIKED_THRESHOLD = -2

SPICY_KEYWORDS = ["spicy", "hot", "chili", "habanero", "jalapeno", "sriracha", "cayenne"]
MEAT_KEYWORDS = [
    "chicken",
    "beef",
    "pork",
    "lamb",
    "turkey",
    "bacon",
    "sausage",
    "steak",
    "ground meat",
]
DAIRY_KEYWORDS = ["milk", "cheese", "cream", "butter", "yogurt"]
HEALTHY_KEYWORDS = ["quinoa", "kale", "avocado", "salmon", "tofu", "lentils", "chickpeas"]
HEALTH_CONSCIOUS_MIN_MATCHES = 3

DIFFICULTY_SHIFT = {
    Difficulty.EASY: -0.1,
    Difficulty.MEDIUM: 0.0,
    Difficulty.HARD: 0.1,
}
COMPLEXITY_EVENT_TYPES = {InteractionType.COOK, InteractionType.SAVE}

FREQUENCY_WINDOW_DAYS = 28
MS_PER_DAY = 24 * 60 * 60 * 1000


def now_ms() -> int:
    """Current wall-clock time in milliseconds."""
    return int(time.time() * 1000)


@dataclass
class TasteProfile:
    """Learned preferences for a single user."""

    cuisine_scores: dict[str, float] = field(default_factory=dict)
    ingredient_scores: dict[str, float] = field(default_factory=dict)
    spice_tolerance: float = DEFAULT_SPICE_TOLERANCE
    complexity_preference: ComplexityPreference = ComplexityPreference.BALANCED
    dietary_patterns: list[str] = field(default_factory=list)
    preferred_servings: int = DEFAULT_SERVINGS
    cooking_frequency: CookingFrequency = CookingFrequency.SEVERAL_WEEKLY
    recent_interactions: list[InteractionEvent] = field(default_factory=list)
    total_interactions: int = 0
    last_updated: int = field(default_factory=now_ms)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON-compatible persisted shape."""
        return {
            "schemaVersion": SCHEMA_VERSION,
            "cuisineScores": dict(self.cuisine_scores),
            "ingredientScores": dict(self.ingredient_scores),
            "spiceTolerance": self.spice_tolerance,
            "complexityPreference": self.complexity_preference.value,
            "dietaryPatterns": list(self.dietary_patterns),
            "preferredServings": self.preferred_servings,
            "cookingFrequency": self.cooking_frequency.value,
            "recentInteractions": [event.to_dict() for event in self.recent_interactions],
            "totalInteractions": self.total_interactions,
            "lastUpdated": self.last_updated,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "TasteProfile":
        """Rebuild a profile from its persisted shape.

        Missing or unreadable keys fall back to defaults. Stored profiles
        without a schemaVersion are read as version 1.
        """
        profile = cls()
        if not data:
            return profile

        version = data.get("schemaVersion", SCHEMA_VERSION)
        if version != SCHEMA_VERSION:
            logger.warning(f"Loading taste profile with unexpected schema version {version}")

        profile.cuisine_scores = _float_map(data.get("cuisineScores"))
        profile.ingredient_scores = _float_map(data.get("ingredientScores"))
        profile.spice_tolerance = _clamp_spice(
            data.get("spiceTolerance", DEFAULT_SPICE_TOLERANCE)
        )
        profile.complexity_preference = _enum_or_default(
            ComplexityPreference,
            data.get("complexityPreference"),
            ComplexityPreference.BALANCED,
        )
        profile.dietary_patterns = [
            p for p in data.get("dietaryPatterns") or [] if isinstance(p, str)
        ]
        profile.preferred_servings = int(data.get("preferredServings") or DEFAULT_SERVINGS)
        profile.cooking_frequency = _enum_or_default(
            CookingFrequency,
            data.get("cookingFrequency"),
            CookingFrequency.SEVERAL_WEEKLY,
        )

        events = []
        for raw in (data.get("recentInteractions") or [])[:MAX_RECENT_INTERACTIONS]:
            if isinstance(raw, dict):
                event = InteractionEvent.from_dict(raw)
                if event is not None:
                    events.append(event)
        profile.recent_interactions = events

        profile.total_interactions = int(data.get("totalInteractions") or 0)
        profile.last_updated = int(data.get("lastUpdated") or profile.last_updated)
        return profile


class TasteProfileAggregator:
    """Applies interactions to one taste profile and exposes ranked views."""

    def __init__(self, profile: TasteProfile | None = None, clock: Callable[[], int] | None = None):
        self.clock = clock or now_ms
        self.profile = profile if profile is not None else TasteProfile(last_updated=self.clock())

    def track_interaction(
        self,
        interaction_type: InteractionType | str,
        *,
        recipe_id: str | None = None,
        cuisine: str | None = None,
        ingredients: Iterable[str] | None = None,
        tags: Iterable[str] | None = None,
        difficulty: Difficulty | str | None = None,
        rating: int | None = None,
    ) -> InteractionEvent:
        """Record an interaction and fold it into the profile.

        Optional fields are applied independently; anything missing or
        malformed is skipped on its own without affecting the rest.
        """
        interaction_type = InteractionType(interaction_type)
        timestamp = self.clock()
        rating = clamp_rating(rating)
        difficulty = parse_difficulty(difficulty)
        event = InteractionEvent(
            type=interaction_type,
            timestamp=timestamp,
            recipe_id=str(recipe_id) if recipe_id is not None else None,
            cuisine=cuisine if isinstance(cuisine, str) and cuisine.strip() else None,
            ingredients=_clean_strings(ingredients),
            tags=_clean_strings(tags),
            difficulty=difficulty,
            rating=rating,
        )
        self.apply(event)
        return event

    def apply(self, event: InteractionEvent) -> None:
        """Fold an already-built event into the profile."""
        profile = self.profile
        weight = interaction_weight(event.type, event.rating)

        if event.cuisine:
            current = profile.cuisine_scores.get(event.cuisine, 0)
            profile.cuisine_scores[event.cuisine] = current + weight

        if event.ingredients:
            for ingredient in event.ingredients:
                normalized = ingredient.lower().strip()
                if not normalized:
                    continue
                current = profile.ingredient_scores.get(normalized, 0)
                profile.ingredient_scores[normalized] = current + weight

        if event.tags and weight > 0 and _has_spicy_tag(event.tags):
            profile.spice_tolerance = _clamp_spice(profile.spice_tolerance + SPICE_STEP)

        if event.difficulty and event.type in COMPLEXITY_EVENT_TYPES:
            profile.complexity_preference = shift_complexity(
                profile.complexity_preference, event.difficulty
            )

        profile.dietary_patterns = detect_dietary_patterns(profile.ingredient_scores)

        profile.recent_interactions = [event, *profile.recent_interactions][
            :MAX_RECENT_INTERACTIONS
        ]

        if event.type == InteractionType.COOK:
            profile.cooking_frequency = estimate_cooking_frequency(
                profile.recent_interactions, event.timestamp
            )

        profile.total_interactions += 1
        profile.last_updated = event.timestamp

    def top_cuisines(self, limit: int = 5) -> list[tuple[str, float]]:
        """Positively scored cuisines, best first."""
        return _top_positive(self.profile.cuisine_scores, limit)

    def top_ingredients(self, limit: int = 10) -> list[tuple[str, float]]:
        """Positively scored ingredients, best first."""
        return _top_positive(self.profile.ingredient_scores, limit)

    def disliked_ingredients(self) -> list[str]:
        """Ingredients scored below the dislike threshold, most disliked first."""
        disliked = [
            (name, score)
            for name, score in self.profile.ingredient_scores.items()
            if score < DISLIKED_THRESHOLD
        ]
        disliked.sort(key=lambda entry: (entry[1], entry[0]))
        return [name for name, _ in disliked]

    def set_preferred_servings(self, servings: int) -> None:
        if servings < 1:
            raise ValueError("Preferred servings must be at least 1")
        self.profile.preferred_servings = servings
        self.profile.last_updated = self.clock()

    def reset(self) -> TasteProfile:
        """Replace the profile with a fresh default one."""
        self.profile = TasteProfile(last_updated=self.clock())
        return self.profile


def shift_complexity(
    current: ComplexityPreference, difficulty: Difficulty
) -> ComplexityPreference:
    """Nudge the complexity preference toward the difficulty just cooked or saved."""
    value = current.value_score + DIFFICULTY_SHIFT[difficulty]
    if value < -0.5:
        return ComplexityPreference.QUICK
    if value > 0.5:
        return ComplexityPreference.ELABORATE
    return ComplexityPreference.BALANCED


def detect_dietary_patterns(ingredient_scores: dict[str, float]) -> list[str]:
    """Infer dietary tendencies from strongly liked and disliked ingredients."""
    patterns = []

    liked = [name.lower() for name, score in ingredient_scores.items() if score > LIKED_THRESHOLD]
    disliked = [
        name.lower() for name, score in ingredient_scores.items() if score < DISLIKED_THRESHOLD
    ]

    avoids_meat = any(_mentions(keyword, disliked) for keyword in MEAT_KEYWORDS)
    likes_meat = any(_mentions(keyword, liked) for keyword in MEAT_KEYWORDS)
    if avoids_meat and not likes_meat:
        patterns.append("vegetarian-leaning")

    if any(_mentions(keyword, disliked) for keyword in DAIRY_KEYWORDS):
        patterns.append("dairy-free-leaning")

    healthy_matches = sum(1 for keyword in HEALTHY_KEYWORDS if _mentions(keyword, liked))
    if healthy_matches >= HEALTH_CONSCIOUS_MIN_MATCHES:
        patterns.append("health-conscious")

    return patterns


def estimate_cooking_frequency(events: Iterable[InteractionEvent], now: int) -> CookingFrequency:
    """Bucket how often the user cooked over the trailing four weeks."""
    window_start = now - FREQUENCY_WINDOW_DAYS * MS_PER_DAY
    cooks = sum(
        1 for event in events if event.type == InteractionType.COOK and event.timestamp >= window_start
    )
    per_week = cooks / (FREQUENCY_WINDOW_DAYS / 7)

    if per_week >= 5:
        return CookingFrequency.DAILY
    if per_week >= 2:
        return CookingFrequency.SEVERAL_WEEKLY
    if per_week >= 1:
        return CookingFrequency.WEEKLY
    return CookingFrequency.OCCASIONAL


def _mentions(keyword: str, names: list[str]) -> bool:
    return any(keyword in name for name in names)


def _has_spicy_tag(tags: Iterable[str]) -> bool:
    return any(spicy in tag.lower() for tag in tags for spicy in SPICY_KEYWORDS)


def _top_positive(scores: dict[str, float], limit: int) -> list[tuple[str, float]]:
    # Ties are broken alphabetically so the ranking is deterministic
    ranked = sorted(
        ((name, score) for name, score in scores.items() if score > 0),
        key=lambda entry: (-entry[1], entry[0]),
    )
    return ranked[: max(limit, 0)]


def _clamp_spice(value: Any) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        return DEFAULT_SPICE_TOLERANCE
    return max(MIN_SPICE_TOLERANCE, min(MAX_SPICE_TOLERANCE, value))


def _clean_strings(values: Iterable[str] | None) -> tuple[str, ...] | None:
    if values is None:
        return None
    if isinstance(values, str):
        values = [values]
    cleaned = []
    try:
        for value in values:
            if isinstance(value, str):
                cleaned.append(value)
            else:
                logger.debug(f"Skipping non-string interaction entry: {value!r}")
    except TypeError:
        logger.debug(f"Skipping non-iterable interaction field: {values!r}")
        return None
    return tuple(cleaned)


def _float_map(raw: Any) -> dict[str, float]:
    if not isinstance(raw, dict):
        return {}
    result = {}
    for key, value in raw.items():
        try:
            result[str(key)] = float(value)
        except (TypeError, ValueError):
            logger.debug(f"Dropping unreadable score for {key!r}: {value!r}")
    return result


def _enum_or_default(enum_cls, value, default):
    try:
        return enum_cls(value)
    except ValueError:
        return default
