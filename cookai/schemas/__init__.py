"""Pydantic schemas for API requests and responses."""

from cookai.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from cookai.schemas.grocery import (
    GroceryItemCreate,
    GroceryItemResponse,
    GroceryItemUpdate,
    GroceryListCreate,
    GroceryListResponse,
)
from cookai.schemas.recipe import RecipeCreate, RecipeResponse, RecipeUpdate
from cookai.schemas.taste_profile import InteractionCreate, TasteProfileResponse

__all__ = [
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "UserResponse",
    "RecipeCreate",
    "RecipeUpdate",
    "RecipeResponse",
    "GroceryListCreate",
    "GroceryListResponse",
    "GroceryItemCreate",
    "GroceryItemUpdate",
    "GroceryItemResponse",
    "InteractionCreate",
    "TasteProfileResponse",
]
