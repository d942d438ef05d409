"""Grocery list API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from cookai.api.dependencies import get_current_user, get_grocery_service
from cookai.models.user import User
from cookai.schemas.grocery import (
    AddRecipeToListRequest,
    AddRecipesToListRequest,
    ClearCheckedResponse,
    GroceryItemCreate,
    GroceryItemResponse,
    GroceryItemUpdate,
    GroceryListCreate,
    GroceryListResponse,
    GroceryListUpdate,
)
from cookai.services.grocery_service import GroceryService

router = APIRouter(prefix="/api/v1/grocery", tags=["grocery"])


# --- Lists ---


@router.get("/lists", response_model=list[GroceryListResponse])
async def list_grocery_lists(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[GroceryService, Depends(get_grocery_service)],
):
    """Get all grocery lists for the current user."""
    return service.list_lists(current_user.id)


@router.post("/lists", response_model=GroceryListResponse, status_code=status.HTTP_201_CREATED)
async def create_grocery_list(
    list_data: GroceryListCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[GroceryService, Depends(get_grocery_service)],
):
    return service.create_list(current_user.id, list_data.name)


@router.get("/lists/{list_id}", response_model=GroceryListResponse)
async def get_grocery_list(
    list_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[GroceryService, Depends(get_grocery_service)],
):
    return service.get_list(list_id, current_user.id)


@router.patch("/lists/{list_id}", response_model=GroceryListResponse)
async def update_grocery_list(
    list_id: int,
    list_data: GroceryListUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[GroceryService, Depends(get_grocery_service)],
):
    return service.update_list(list_id, current_user.id, list_data.model_dump(exclude_unset=True))


@router.delete("/lists/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_grocery_list(
    list_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[GroceryService, Depends(get_grocery_service)],
):
    """Delete a grocery list and all its items."""
    service.delete_list(list_id, current_user.id)


@router.post(
    "/lists/{list_id}/recipes",
    response_model=list[GroceryItemResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_recipe_to_list(
    list_id: int,
    request: AddRecipeToListRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[GroceryService, Depends(get_grocery_service)],
):
    """Add a recipe's ingredients, merging into open items with the same name and unit."""
    return service.add_recipe_to_list(list_id, request.recipe_id, current_user.id)


@router.post(
    "/lists/{list_id}/recipes/batch",
    response_model=list[GroceryItemResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_recipes_to_list(
    list_id: int,
    request: AddRecipesToListRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[GroceryService, Depends(get_grocery_service)],
):
    """Add several recipes at once; shared ingredients end up on one line."""
    return service.add_recipes_to_list(list_id, request.recipe_ids, current_user.id)


@router.delete("/lists/{list_id}/checked", response_model=ClearCheckedResponse)
async def clear_checked_items(
    list_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[GroceryService, Depends(get_grocery_service)],
):
    """Remove everything already checked off."""
    return ClearCheckedResponse(removed=service.clear_checked_items(list_id, current_user.id))


@router.get("/lists/{list_id}/aisles", response_model=dict[str, list[GroceryItemResponse]])
async def get_items_by_aisle(
    list_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[GroceryService, Depends(get_grocery_service)],
):
    """Get the list's items grouped by store aisle."""
    return service.get_items_by_aisle(list_id, current_user.id)


# --- Items ---


@router.post(
    "/lists/{list_id}/items",
    response_model=GroceryItemResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_item(
    list_id: int,
    item_data: GroceryItemCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[GroceryService, Depends(get_grocery_service)],
):
    """Add an item. The aisle is guessed from the name when not given."""
    return service.add_item(list_id, current_user.id, item_data.model_dump())


@router.patch("/items/{item_id}", response_model=GroceryItemResponse)
async def update_item(
    item_id: int,
    item_data: GroceryItemUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[GroceryService, Depends(get_grocery_service)],
):
    return service.update_item(item_id, current_user.id, item_data.model_dump(exclude_unset=True))


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[GroceryService, Depends(get_grocery_service)],
):
    service.delete_item(item_id, current_user.id)


@router.post("/items/{item_id}/toggle", response_model=GroceryItemResponse)
async def toggle_item(
    item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[GroceryService, Depends(get_grocery_service)],
):
    """Check or uncheck an item."""
    return service.toggle_item_checked(item_id, current_user.id)
