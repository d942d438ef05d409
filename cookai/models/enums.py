"""Enums for model fields."""

from enum import Enum


class InteractionType(str, Enum):
    """User actions that feed the taste profile."""

    SAVE = "save"
    FAVORITE = "favorite"
    UNFAVORITE = "unfavorite"
    COOK = "cook"
    SKIP = "skip"
    GENERATE = "generate"
    RATE = "rate"


class Difficulty(str, Enum):
    """Recipe difficulty."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class ComplexityPreference(str, Enum):
    """How involved the recipes a user actually cooks tend to be."""

    QUICK = "quick"
    BALANCED = "balanced"
    ELABORATE = "elaborate"

    @property
    def value_score(self) -> int:
        """Position on the quick (-1) to elaborate (+1) axis."""
        return {"quick": -1, "balanced": 0, "elaborate": 1}[self.value]


class CookingFrequency(str, Enum):
    """How often a user cooks."""

    DAILY = "daily"
    SEVERAL_WEEKLY = "several-weekly"
    WEEKLY = "weekly"
    OCCASIONAL = "occasional"


class SourceType(str, Enum):
    """Where a recipe came from."""

    VIDEO = "video"
    COOKBOOK = "cookbook"
    MANUAL = "manual"
    URL = "url"
    AI = "ai"


class GenerationStatus(str, Enum):
    """Lifecycle of a background recipe generation job."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class MealType(str, Enum):
    """Slot a meal plan entry fills on its day."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"
