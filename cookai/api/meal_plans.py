"""Meal plan API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from cookai.api.dependencies import get_current_user, get_meal_plan_service
from cookai.models.user import User
from cookai.schemas.grocery import GroceryListResponse
from cookai.schemas.meal_plan import (
    MealPlanCreate,
    MealPlanDayResponse,
    MealPlanEntriesCreate,
    MealPlanEntryCreate,
    MealPlanEntryResponse,
    MealPlanEntryUpdate,
    MealPlanResponse,
    MealPlanSummaryResponse,
    PlanToGroceryListRequest,
)
from cookai.services.meal_plan_service import MealPlanService

router = APIRouter(prefix="/api/v1/meal-plans", tags=["meal-plans"])


# --- Static routes first (before /{plan_id}) ---


@router.get("", response_model=list[MealPlanSummaryResponse])
async def list_meal_plans(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[MealPlanService, Depends(get_meal_plan_service)],
    limit: int = Query(10, ge=1, le=52),
):
    """List the user's plans, most recent week first."""
    return service.list_plans(current_user.id, limit=limit)


@router.post("", response_model=MealPlanResponse, status_code=status.HTTP_201_CREATED)
async def create_meal_plan(
    plan_data: MealPlanCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[MealPlanService, Depends(get_meal_plan_service)],
):
    """Create the plan for the week containing the given date."""
    return service.create_plan(current_user.id, plan_data.week_start_date)


@router.get("/current", response_model=MealPlanResponse)
async def get_current_week_plan(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[MealPlanService, Depends(get_meal_plan_service)],
):
    return service.get_current_week_plan(current_user.id)


@router.patch("/entries/{entry_id}", response_model=MealPlanEntryResponse)
async def update_entry(
    entry_id: int,
    entry_data: MealPlanEntryUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[MealPlanService, Depends(get_meal_plan_service)],
):
    return service.update_entry(
        entry_id, current_user.id, entry_data.model_dump(exclude_unset=True)
    )


@router.delete("/entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(
    entry_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[MealPlanService, Depends(get_meal_plan_service)],
):
    service.delete_entry(entry_id, current_user.id)


# --- Dynamic routes ---


@router.get("/{plan_id}", response_model=MealPlanResponse)
async def get_meal_plan(
    plan_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[MealPlanService, Depends(get_meal_plan_service)],
):
    return service.get_plan(plan_id, current_user.id)


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meal_plan(
    plan_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[MealPlanService, Depends(get_meal_plan_service)],
):
    """Delete a plan and all its entries."""
    service.delete_plan(plan_id, current_user.id)


@router.get("/{plan_id}/days", response_model=list[MealPlanDayResponse])
async def get_meal_plan_days(
    plan_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[MealPlanService, Depends(get_meal_plan_service)],
):
    """The plan's seven days, Monday first, each with its meals in slot order."""
    return [
        MealPlanDayResponse(
            date=day,
            entries=[MealPlanEntryResponse.model_validate(entry) for entry in entries],
        )
        for day, entries in service.get_days(plan_id, current_user.id)
    ]


@router.post(
    "/{plan_id}/entries",
    response_model=MealPlanEntryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_entry(
    plan_id: int,
    entry_data: MealPlanEntryCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[MealPlanService, Depends(get_meal_plan_service)],
):
    return service.add_entry(plan_id, current_user.id, entry_data.model_dump())


@router.post(
    "/{plan_id}/entries/bulk",
    response_model=list[MealPlanEntryResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_entries(
    plan_id: int,
    request: MealPlanEntriesCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[MealPlanService, Depends(get_meal_plan_service)],
):
    """Schedule several meals at once, e.g. a suggested week. All or nothing."""
    return service.add_entries(
        plan_id, current_user.id, [entry.model_dump() for entry in request.entries]
    )


@router.post(
    "/{plan_id}/grocery-list",
    response_model=GroceryListResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_plan_to_grocery_list(
    plan_id: int,
    request: PlanToGroceryListRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[MealPlanService, Depends(get_meal_plan_service)],
):
    """Add every planned recipe's ingredients to one grocery list."""
    return service.add_plan_to_grocery_list(
        plan_id, current_user.id, grocery_list_id=request.grocery_list_id, name=request.name
    )
