"""Grocery list schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class GroceryListCreate(BaseModel):
    """Create a grocery list."""

    name: str = Field(..., min_length=1, max_length=255)


class GroceryListUpdate(BaseModel):
    """Update a grocery list."""

    name: str | None = Field(None, min_length=1, max_length=255)
    is_active: bool | None = None


class GroceryItemCreate(BaseModel):
    """Add an item to a grocery list."""

    name: str = Field(..., min_length=1, max_length=255)
    quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, max_length=50)
    aisle: str | None = Field(None, max_length=50)
    notes: str | None = Field(None, max_length=500)
    recipe_id: int | None = None


class GroceryItemUpdate(BaseModel):
    """Update a grocery item."""

    name: str | None = Field(None, min_length=1, max_length=255)
    quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, max_length=50)
    aisle: str | None = Field(None, max_length=50)
    notes: str | None = Field(None, max_length=500)
    is_checked: bool | None = None


class GroceryItemResponse(BaseModel):
    """Grocery item response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    grocery_list_id: int
    recipe_id: int | None
    name: str
    quantity: float | None
    unit: str | None
    aisle: str | None
    notes: str | None
    is_checked: bool
    order_index: int
    created_at: datetime


class GroceryListResponse(BaseModel):
    """Grocery list with its items."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    is_active: bool
    items: list[GroceryItemResponse]
    created_at: datetime
    updated_at: datetime


class AddRecipeToListRequest(BaseModel):
    """Add a recipe's ingredients to a list."""

    recipe_id: int


class ClearCheckedResponse(BaseModel):
    removed: int


class AddRecipesToListRequest(BaseModel):
    """Add several recipes' ingredients to a list in one merged batch."""

    recipe_ids: list[int] = Field(..., min_length=1, max_length=50)
