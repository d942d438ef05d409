"""Weekly meal plans and turning a plan into a shopping list."""

import logging
from collections.abc import Iterable
from datetime import date, timedelta
from typing import Any

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from cookai.models.enums import MealType
from cookai.models.grocery import GroceryList
from cookai.models.meal_plan import MealPlan, MealPlanEntry
from cookai.services.grocery_service import GroceryService
from cookai.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7
MEAL_ORDER = {meal_type.value: index for index, meal_type in enumerate(MealType)}
ENTRY_FIELDS = {"recipe_id", "date", "meal_type", "servings", "notes"}


def get_week_start_date(day: date | None = None) -> date:
    """Monday of the week containing ``day`` (today when omitted)."""
    day = day or date.today()
    return day - timedelta(days=day.weekday())


def get_days_of_week(week_start: date) -> list[date]:
    return [week_start + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]


def get_entries_for_day(entries: Iterable[Any], day: date) -> list[Any]:
    """Entries on ``day``, breakfast first and snacks last."""
    return sorted(
        (entry for entry in entries if entry.date == day),
        key=lambda entry: MEAL_ORDER.get(_enum_value(entry.meal_type), len(MEAL_ORDER)),
    )


def group_entries_by_day(entries: Iterable[Any], week_start: date) -> list[tuple[date, list[Any]]]:
    """All seven days of the week in order, each with its entries.

    Days with nothing planned are included with an empty list. Entries dated
    outside the week are left out.
    """
    entries = list(entries)
    return [(day, get_entries_for_day(entries, day)) for day in get_days_of_week(week_start)]


class MealPlanService:
    """Service for meal plan operations."""

    def __init__(self, db: Session):
        self.db = db
        self.recipes = RecipeService(db)
        self.groceries = GroceryService(db)

    # --- Plans ---

    def list_plans(self, user_id: int, limit: int = 10) -> list[MealPlan]:
        """Most recent weeks first."""
        return (
            self.db.query(MealPlan)
            .filter(MealPlan.user_id == user_id)
            .order_by(MealPlan.week_start_date.desc())
            .limit(limit)
            .all()
        )

    def get_plan(self, plan_id: int, user_id: int) -> MealPlan:
        plan = (
            self.db.query(MealPlan)
            .filter(MealPlan.id == plan_id, MealPlan.user_id == user_id)
            .first()
        )
        if not plan:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Meal plan not found")
        return plan

    def find_plan_for_week(self, user_id: int, day: date) -> MealPlan | None:
        return (
            self.db.query(MealPlan)
            .filter(
                MealPlan.user_id == user_id,
                MealPlan.week_start_date == get_week_start_date(day),
            )
            .first()
        )

    def get_current_week_plan(self, user_id: int, today: date | None = None) -> MealPlan:
        plan = self.find_plan_for_week(user_id, today or date.today())
        if not plan:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="No meal plan for this week"
            )
        return plan

    def create_plan(self, user_id: int, week_of: date) -> MealPlan:
        """Create the plan for the week containing ``week_of``. One plan per week."""
        week_start = get_week_start_date(week_of)
        if self.find_plan_for_week(user_id, week_start):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="A meal plan already exists for this week",
            )

        plan = MealPlan(user_id=user_id, week_start_date=week_start)
        self.db.add(plan)
        self.db.commit()
        self.db.refresh(plan)
        logger.info(f"Created meal plan {plan.id} for user {user_id}, week of {week_start}")
        return plan

    def delete_plan(self, plan_id: int, user_id: int) -> None:
        plan = self.get_plan(plan_id, user_id)
        self.db.delete(plan)
        self.db.commit()

    def get_days(self, plan_id: int, user_id: int) -> list[tuple[date, list[MealPlanEntry]]]:
        plan = self.get_plan(plan_id, user_id)
        return group_entries_by_day(plan.entries, plan.week_start_date)

    # --- Entries ---

    def get_entry(self, entry_id: int, user_id: int) -> MealPlanEntry:
        entry = (
            self.db.query(MealPlanEntry)
            .join(MealPlan)
            .filter(MealPlanEntry.id == entry_id, MealPlan.user_id == user_id)
            .first()
        )
        if not entry:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Entry not found")
        return entry

    def add_entry(self, plan_id: int, user_id: int, data: dict[str, Any]) -> MealPlanEntry:
        return self.add_entries(plan_id, user_id, [data])[0]

    def add_entries(
        self, plan_id: int, user_id: int, entries: list[dict[str, Any]]
    ) -> list[MealPlanEntry]:
        """Schedule several meals. Nothing is saved unless every entry is valid."""
        plan = self.get_plan(plan_id, user_id)
        for data in entries:
            self._check_entry(plan, user_id, data)

        created = [
            MealPlanEntry(
                meal_plan_id=plan.id,
                **{key: _enum_value(value) for key, value in data.items() if key in ENTRY_FIELDS},
            )
            for data in entries
        ]
        self.db.add_all(created)
        self.db.commit()
        for entry in created:
            self.db.refresh(entry)

        logger.info(f"Added {len(created)} entries to meal plan {plan.id}")
        return created

    def update_entry(self, entry_id: int, user_id: int, updates: dict[str, Any]) -> MealPlanEntry:
        entry = self.get_entry(entry_id, user_id)
        self._check_entry(entry.meal_plan, user_id, updates)
        for field, value in updates.items():
            # Only notes can be cleared
            if field not in ENTRY_FIELDS or (value is None and field != "notes"):
                continue
            setattr(entry, field, _enum_value(value))
        self.db.commit()
        self.db.refresh(entry)
        return entry

    def delete_entry(self, entry_id: int, user_id: int) -> None:
        entry = self.get_entry(entry_id, user_id)
        self.db.delete(entry)
        self.db.commit()

    # --- Groceries ---

    def add_plan_to_grocery_list(
        self,
        plan_id: int,
        user_id: int,
        grocery_list_id: int | None = None,
        name: str = "Meal Plan Groceries",
    ) -> GroceryList:
        """Put every recipe in the plan on one grocery list.

        Each recipe counts once however often it is scheduled. Shared
        ingredients are merged by the grocery service. A new list is created
        when no list id is given.
        """
        plan = self.get_plan(plan_id, user_id)
        recipe_ids = list(dict.fromkeys(entry.recipe_id for entry in plan.entries))
        if not recipe_ids:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Meal plan has no entries"
            )

        if grocery_list_id is None:
            grocery_list = self.groceries.create_list(user_id, name)
        else:
            grocery_list = self.groceries.get_list(grocery_list_id, user_id)

        self.groceries.add_recipes_to_list(grocery_list.id, recipe_ids, user_id)
        logger.info(
            f"Added {len(recipe_ids)} recipes from meal plan {plan.id} "
            f"to grocery list {grocery_list.id}"
        )
        self.db.refresh(grocery_list)
        return grocery_list

    def _check_entry(self, plan: MealPlan, user_id: int, data: dict[str, Any]) -> None:
        if data.get("recipe_id") is not None:
            self.recipes.get_recipe(data["recipe_id"], user_id)

        day = data.get("date")
        if day is not None and day not in get_days_of_week(plan.week_start_date):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"{day} is not in the week of {plan.week_start_date}",
            )


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)
