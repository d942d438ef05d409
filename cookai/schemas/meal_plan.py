"""Meal plan schemas."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from cookai.models.enums import MealType


class MealPlanCreate(BaseModel):
    """Create a plan. Any date in the week may be given; it is moved back to Monday."""

    week_start_date: dt.date


class MealPlanEntryCreate(BaseModel):
    """Schedule a recipe for a meal."""

    recipe_id: int
    date: dt.date
    meal_type: MealType
    servings: int = Field(1, ge=1, le=50)
    notes: str | None = Field(None, max_length=1000)


class MealPlanEntriesCreate(BaseModel):
    """Schedule several meals at once, e.g. a suggested week."""

    entries: list[MealPlanEntryCreate] = Field(..., min_length=1, max_length=50)


class MealPlanEntryUpdate(BaseModel):
    """Move, swap or resize a scheduled meal."""

    recipe_id: int | None = None
    date: dt.date | None = None
    meal_type: MealType | None = None
    servings: int | None = Field(None, ge=1, le=50)
    notes: str | None = Field(None, max_length=1000)


class MealPlanEntryResponse(BaseModel):
    """A scheduled meal."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    meal_plan_id: int
    recipe_id: int
    recipe_title: str | None
    date: dt.date
    meal_type: str
    servings: int
    notes: str | None


class MealPlanSummaryResponse(BaseModel):
    """Plan without its entries, for listing."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    week_start_date: dt.date
    created_at: dt.datetime


class MealPlanResponse(MealPlanSummaryResponse):
    """Plan with all of its entries."""

    entries: list[MealPlanEntryResponse]
    updated_at: dt.datetime


class MealPlanDayResponse(BaseModel):
    """One day of a plan with the meals scheduled on it."""

    date: dt.date
    entries: list[MealPlanEntryResponse]


class PlanToGroceryListRequest(BaseModel):
    """Target list for a plan's ingredients. A new list is created when omitted."""

    grocery_list_id: int | None = None
    name: str = Field("Meal Plan Groceries", min_length=1, max_length=255)
