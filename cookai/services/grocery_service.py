"""Grocery list service: ingredient merging, aisle sorting and list operations."""

import logging
from collections.abc import Iterable
from typing import Any

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from cookai.models.grocery import GroceryItem, GroceryList
from cookai.models.recipe import Recipe

logger = logging.getLogger(__name__)

OTHER_AISLE = "Other"

# First matching aisle wins, so order matters ("pepper" is Produce before Pantry)
AISLE_CATEGORIES: dict[str, list[str]] = {
    "Produce": [
        "apple",
        "banana",
        "tomato",
        "lettuce",
        "onion",
        "garlic",
        "potato",
        "carrot",
        "celery",
        "pepper",
        "cucumber",
        "spinach",
        "broccoli",
        "lemon",
        "lime",
        "orange",
        "avocado",
        "mushroom",
        "ginger",
        "herb",
        "cilantro",
        "parsley",
        "basil",
        "mint",
    ],
    "Meat & Seafood": [
        "chicken",
        "beef",
        "pork",
        "lamb",
        "fish",
        "salmon",
        "shrimp",
        "bacon",
        "sausage",
        "turkey",
        "steak",
        "ground",
    ],
    "Dairy & Eggs": [
        "milk",
        "cheese",
        "butter",
        "cream",
        "yogurt",
        "egg",
        "sour cream",
        "cottage",
        "mozzarella",
        "parmesan",
        "cheddar",
    ],
    "Bakery": ["bread", "roll", "baguette", "tortilla", "pita", "croissant", "bagel"],
    "Pantry": [
        "flour",
        "sugar",
        "salt",
        "pepper",
        "oil",
        "vinegar",
        "sauce",
        "paste",
        "rice",
        "pasta",
        "noodle",
        "bean",
        "lentil",
        "stock",
        "broth",
        "honey",
        "syrup",
        "vanilla",
    ],
    "Spices": [
        "cumin",
        "paprika",
        "oregano",
        "thyme",
        "rosemary",
        "cinnamon",
        "nutmeg",
        "turmeric",
        "cayenne",
        "chili",
        "curry",
    ],
    "Canned Goods": ["can", "canned", "tomato sauce", "coconut milk", "chickpea"],
    "Frozen": ["frozen", "ice cream"],
    "Beverages": ["water", "juice", "wine", "beer", "soda", "coffee", "tea"],
}


def merge_key(name: str | None, unit: str | None) -> tuple[str, str]:
    """Items with the same key share one line on a grocery list."""
    return ((name or "").lower(), unit or "")


def merge_ingredients(items: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Collapse items that share a name (case-insensitive) and unit.

    Quantities are summed when both sides have one. When either side has no
    quantity the existing entry is kept unchanged. Output keeps the order in
    which each key first appeared.
    """
    merged: dict[tuple[str, str], dict[str, Any]] = {}

    for item in items:
        key = merge_key(item.get("name"), item.get("unit"))
        existing = merged.get(key)

        if existing is None:
            merged[key] = dict(item)
            continue

        existing["quantity"] = combine_quantities(
            item.get("name"), existing.get("quantity"), item.get("quantity")
        )

    return list(merged.values())


def combine_quantities(name: str | None, current: Any, incoming: Any) -> Any:
    """Sum two quantities, or keep the current one when either is missing."""
    if _is_number(current) and _is_number(incoming):
        return current + incoming
    logger.debug(f"Not merging quantity for '{name}': {current!r} + {incoming!r}")
    return current


def categorize_item(item_name: str) -> str:
    """Guess the store aisle for an item from keywords in its name."""
    lower_name = (item_name or "").lower()
    for aisle, keywords in AISLE_CATEGORIES.items():
        if any(keyword in lower_name for keyword in keywords):
            return aisle
    return OTHER_AISLE


def group_items_by_aisle(items: Iterable[Any]) -> dict[str, list[Any]]:
    """Group items by their aisle, unassigned items under Other."""
    grouped: dict[str, list[Any]] = {}
    for item in items:
        aisle = (item.get("aisle") if isinstance(item, dict) else item.aisle) or OTHER_AISLE
        grouped.setdefault(aisle, []).append(item)
    return grouped


def _is_number(value: Any) -> bool:
    # Zero counts as missing, the same as an absent quantity
    return isinstance(value, int | float) and not isinstance(value, bool) and value != 0


class GroceryService:
    """Service for grocery list operations."""

    def __init__(self, db: Session):
        self.db = db

    def get_list(self, list_id: int, user_id: int) -> GroceryList:
        """Get a grocery list that belongs to the user."""
        grocery_list = (
            self.db.query(GroceryList)
            .filter(GroceryList.id == list_id, GroceryList.user_id == user_id)
            .first()
        )
        if not grocery_list:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Grocery list not found"
            )
        return grocery_list

    def get_item(self, item_id: int, user_id: int) -> GroceryItem:
        """Get an item on one of the user's grocery lists."""
        item = (
            self.db.query(GroceryItem)
            .join(GroceryList)
            .filter(GroceryItem.id == item_id, GroceryList.user_id == user_id)
            .first()
        )
        if not item:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
        return item

    def list_lists(self, user_id: int) -> list[GroceryList]:
        return (
            self.db.query(GroceryList)
            .filter(GroceryList.user_id == user_id)
            .order_by(GroceryList.created_at.desc(), GroceryList.id.desc())
            .all()
        )

    def create_list(self, user_id: int, name: str) -> GroceryList:
        grocery_list = GroceryList(user_id=user_id, name=name, is_active=True)
        self.db.add(grocery_list)
        self.db.commit()
        self.db.refresh(grocery_list)
        return grocery_list

    def update_list(self, list_id: int, user_id: int, updates: dict[str, Any]) -> GroceryList:
        grocery_list = self.get_list(list_id, user_id)
        for field, value in updates.items():
            setattr(grocery_list, field, value)
        self.db.commit()
        self.db.refresh(grocery_list)
        return grocery_list

    def delete_list(self, list_id: int, user_id: int) -> None:
        grocery_list = self.get_list(list_id, user_id)
        self.db.delete(grocery_list)
        self.db.commit()

    def add_item(self, list_id: int, user_id: int, data: dict[str, Any]) -> GroceryItem:
        """Add an item, assigning an aisle from its name when none is given."""
        grocery_list = self.get_list(list_id, user_id)
        item = self._build_item(grocery_list.id, data, self._next_order_index(grocery_list.id))
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    def add_recipe_to_list(self, list_id: int, recipe_id: int, user_id: int) -> list[GroceryItem]:
        """Add one recipe's ingredients to a list. See add_recipes_to_list."""
        return self.add_recipes_to_list(list_id, [recipe_id], user_id)

    def add_recipes_to_list(
        self, list_id: int, recipe_ids: list[int], user_id: int
    ) -> list[GroceryItem]:
        """Add the ingredients of several recipes to a list as one merged batch.

        Ingredients are merged across all the recipes first, then folded into
        unchecked items already on the list with the same name and unit.
        Unknown or deleted recipes are skipped; 404 if none are left.

        Returns the items that were created or updated, in ingredient order.
        """
        grocery_list = self.get_list(list_id, user_id)
        recipes = self._get_recipes(recipe_ids, user_id)

        ingredients = [
            {
                "name": ingredient.name,
                "quantity": ingredient.quantity,
                "unit": ingredient.unit,
                "recipe_id": recipe.id,
                "notes": ingredient.preparation,
                "is_checked": False,
                "aisle": None,
            }
            for recipe in recipes
            for ingredient in recipe.ingredients
        ]
        merged = merge_ingredients(ingredients)

        # Checked items are already in the cart, so new quantities start a fresh line
        open_items = {
            merge_key(item.name, item.unit): item
            for item in grocery_list.items
            if not item.is_checked
        }

        next_index = self._next_order_index(grocery_list.id)
        touched = []
        merged_count = 0
        for data in merged:
            existing = open_items.get(merge_key(data["name"], data["unit"]))
            if existing is not None:
                existing.quantity = combine_quantities(
                    data["name"], existing.quantity, data["quantity"]
                )
                touched.append(existing)
                merged_count += 1
                continue

            item = self._build_item(grocery_list.id, data, next_index)
            next_index += 1
            self.db.add(item)
            touched.append(item)

        self.db.commit()
        for item in touched:
            self.db.refresh(item)

        logger.info(
            f"Added recipes {[recipe.id for recipe in recipes]} to grocery list "
            f"{grocery_list.id}: {len(ingredients)} ingredients -> "
            f"{len(touched) - merged_count} new, {merged_count} merged"
        )
        return touched

    def update_item(self, item_id: int, user_id: int, updates: dict[str, Any]) -> GroceryItem:
        item = self.get_item(item_id, user_id)
        for field, value in updates.items():
            setattr(item, field, value)
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete_item(self, item_id: int, user_id: int) -> None:
        item = self.get_item(item_id, user_id)
        self.db.delete(item)
        self.db.commit()

    def toggle_item_checked(self, item_id: int, user_id: int) -> GroceryItem:
        item = self.get_item(item_id, user_id)
        item.is_checked = not item.is_checked
        self.db.commit()
        self.db.refresh(item)
        return item

    def clear_checked_items(self, list_id: int, user_id: int) -> int:
        """Delete every checked item on the list. Returns how many were removed."""
        grocery_list = self.get_list(list_id, user_id)
        removed = (
            self.db.query(GroceryItem)
            .filter(
                GroceryItem.grocery_list_id == grocery_list.id,
                GroceryItem.is_checked.is_(True),
            )
            .delete(synchronize_session=False)
        )
        self.db.commit()
        self.db.expire_all()
        return removed

    def get_items_by_aisle(self, list_id: int, user_id: int) -> dict[str, list[GroceryItem]]:
        grocery_list = self.get_list(list_id, user_id)
        return group_items_by_aisle(grocery_list.items)

    def _get_recipes(self, recipe_ids: list[int], user_id: int) -> list[Recipe]:
        """Load the user's live recipes in the order requested, without repeats."""
        wanted = list(dict.fromkeys(recipe_ids))
        found = {
            recipe.id: recipe
            for recipe in self.db.query(Recipe)
            .filter(
                Recipe.id.in_(wanted),
                Recipe.user_id == user_id,
                Recipe.not_deleted(),
            )
            .all()
        }
        if not found:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")

        missing = [recipe_id for recipe_id in wanted if recipe_id not in found]
        if missing:
            logger.warning(f"Skipping unknown recipes {missing} for user {user_id}")
        return [found[recipe_id] for recipe_id in wanted if recipe_id in found]

    def _build_item(self, list_id: int, data: dict[str, Any], order_index: int) -> GroceryItem:
        return GroceryItem(
            grocery_list_id=list_id,
            recipe_id=data.get("recipe_id"),
            name=data["name"],
            quantity=data.get("quantity"),
            unit=data.get("unit"),
            aisle=data.get("aisle") or categorize_item(data["name"]),
            notes=data.get("notes"),
            is_checked=bool(data.get("is_checked", False)),
            order_index=order_index,
        )

    def _next_order_index(self, list_id: int) -> int:
        current = (
            self.db.query(func.max(GroceryItem.order_index))
            .filter(GroceryItem.grocery_list_id == list_id)
            .scalar()
        )
        return 0 if current is None else current + 1
