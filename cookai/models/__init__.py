"""SQLAlchemy models."""

from cookai.models.grocery import GroceryItem, GroceryList
from cookai.models.meal_plan import MealPlan, MealPlanEntry
from cookai.models.recipe import Recipe, RecipeIngredient
from cookai.models.recipe_generation import RecipeGeneration
from cookai.models.taste_profile import TasteProfileRecord
from cookai.models.user import User

__all__ = [
    "User",
    "Recipe",
    "RecipeIngredient",
    "RecipeGeneration",
    "GroceryList",
    "GroceryItem",
    "MealPlan",
    "MealPlanEntry",
    "TasteProfileRecord",
]
