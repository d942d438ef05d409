"""Tests for meal plan week helpers and the meal plan API."""

from datetime import date, timedelta
from types import SimpleNamespace

import pytest

from cookai.services.meal_plan_service import (
    get_days_of_week,
    get_entries_for_day,
    get_week_start_date,
    group_entries_by_day,
)

# --- Week helpers ---


@pytest.mark.parametrize(
    ("day", "monday"),
    [
        (date(2026, 10, 14), date(2026, 10, 12)),  # Wednesday
        (date(2026, 10, 12), date(2026, 10, 12)),  # Monday
        (date(2026, 10, 18), date(2026, 10, 12)),  # Sunday belongs to the week before
        (date(2026, 10, 19), date(2026, 10, 19)),
        (date(2026, 1, 1), date(2025, 12, 29)),  # Across a year boundary
    ],
)
def test_week_start_is_monday(day, monday):
    assert get_week_start_date(day) == monday


def test_week_start_defaults_to_today():
    week_start = get_week_start_date()
    assert week_start.weekday() == 0
    assert timedelta(0) <= date.today() - week_start < timedelta(days=7)


def test_days_of_week_cross_month_boundary():
    days = get_days_of_week(date(2026, 9, 28))
    assert days == [
        date(2026, 9, 28),
        date(2026, 9, 29),
        date(2026, 9, 30),
        date(2026, 10, 1),
        date(2026, 10, 2),
        date(2026, 10, 3),
        date(2026, 10, 4),
    ]


def entry(day, meal_type, name=""):
    return SimpleNamespace(date=day, meal_type=meal_type, name=name)


def test_entries_for_day_in_meal_order():
    wednesday = date(2026, 10, 14)
    entries = [
        entry(wednesday, "snack", "popcorn"),
        entry(wednesday, "dinner", "curry"),
        entry(date(2026, 10, 15), "breakfast", "toast"),
        entry(wednesday, "breakfast", "oats"),
    ]

    assert [e.name for e in get_entries_for_day(entries, wednesday)] == [
        "oats",
        "curry",
        "popcorn",
    ]
    assert get_entries_for_day(entries, date(2026, 10, 16)) == []


def test_group_entries_by_day_covers_the_whole_week():
    monday = date(2026, 10, 12)
    entries = [
        entry(date(2026, 10, 14), "dinner", "curry"),
        entry(date(2026, 10, 18), "lunch", "soup"),
        entry(date(2026, 10, 19), "dinner", "next week"),
    ]

    grouped = group_entries_by_day(entries, monday)

    assert [day for day, _ in grouped] == get_days_of_week(monday)
    assert {day.isoformat(): [e.name for e in items] for day, items in grouped if items} == {
        "2026-10-14": ["curry"],
        "2026-10-18": ["soup"],
    }


# --- API ---


def create_recipe(client, auth_headers, title, ingredients):
    response = client.post(
        "/api/v1/recipes",
        headers=auth_headers,
        json={"title": title, "ingredients": ingredients},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def meal_plan(client, auth_headers):
    response = client.post(
        "/api/v1/meal-plans", headers=auth_headers, json={"week_start_date": "2026-10-14"}
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def curry(client, auth_headers):
    return create_recipe(
        client,
        auth_headers,
        "Curry",
        [
            {"name": "rice", "quantity": 1, "unit": "cup"},
            {"name": "onion", "quantity": 2},
        ],
    )


def add_entry(client, auth_headers, plan_id, recipe_id, day, meal_type="dinner"):
    return client.post(
        f"/api/v1/meal-plans/{plan_id}/entries",
        headers=auth_headers,
        json={"recipe_id": recipe_id, "date": day, "meal_type": meal_type},
    )


def test_create_plan_starts_on_monday(meal_plan):
    assert meal_plan["week_start_date"] == "2026-10-12"
    assert meal_plan["entries"] == []


def test_one_plan_per_week(client, auth_headers, meal_plan):
    response = client.post(
        "/api/v1/meal-plans", headers=auth_headers, json={"week_start_date": "2026-10-18"}
    )
    assert response.status_code == 400

    response = client.post(
        "/api/v1/meal-plans", headers=auth_headers, json={"week_start_date": "2026-10-19"}
    )
    assert response.status_code == 201

    response = client.get("/api/v1/meal-plans", headers=auth_headers)
    assert [p["week_start_date"] for p in response.json()] == ["2026-10-19", "2026-10-12"]


def test_current_week_plan(client, auth_headers):
    response = client.get("/api/v1/meal-plans/current", headers=auth_headers)
    assert response.status_code == 404

    client.post(
        "/api/v1/meal-plans",
        headers=auth_headers,
        json={"week_start_date": date.today().isoformat()},
    )

    response = client.get("/api/v1/meal-plans/current", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["week_start_date"] == get_week_start_date().isoformat()


def test_add_entries_and_view_days(client, auth_headers, meal_plan, curry):
    plan_id = meal_plan["id"]
    response = add_entry(client, auth_headers, plan_id, curry["id"], "2026-10-14", "dinner")
    assert response.status_code == 201
    assert response.json()["recipe_title"] == "Curry"
    assert response.json()["servings"] == 1
    add_entry(client, auth_headers, plan_id, curry["id"], "2026-10-14", "breakfast")
    add_entry(client, auth_headers, plan_id, curry["id"], "2026-10-16", "lunch")

    response = client.get(f"/api/v1/meal-plans/{plan_id}/days", headers=auth_headers)

    assert response.status_code == 200
    days = response.json()
    assert [d["date"] for d in days] == [f"2026-10-{n}" for n in range(12, 19)]
    meals = {d["date"]: [e["meal_type"] for e in d["entries"]] for d in days}
    assert meals["2026-10-14"] == ["breakfast", "dinner"]
    assert meals["2026-10-16"] == ["lunch"]
    assert meals["2026-10-12"] == []


def test_entry_must_fall_in_plan_week(client, auth_headers, meal_plan, curry):
    response = add_entry(client, auth_headers, meal_plan["id"], curry["id"], "2026-10-19")
    assert response.status_code == 400


def test_entry_with_unknown_recipe_404(client, auth_headers, meal_plan):
    response = add_entry(client, auth_headers, meal_plan["id"], 9999, "2026-10-14")
    assert response.status_code == 404


def test_bulk_entries_are_all_or_nothing(client, auth_headers, meal_plan, curry):
    plan_id = meal_plan["id"]
    entries = [
        {"recipe_id": curry["id"], "date": "2026-10-12", "meal_type": "dinner", "servings": 2},
        {"recipe_id": curry["id"], "date": "2026-10-25", "meal_type": "dinner"},
    ]
    response = client.post(
        f"/api/v1/meal-plans/{plan_id}/entries/bulk",
        headers=auth_headers,
        json={"entries": entries},
    )
    assert response.status_code == 400
    plan = client.get(f"/api/v1/meal-plans/{plan_id}", headers=auth_headers).json()
    assert plan["entries"] == []

    entries[1]["date"] = "2026-10-13"
    response = client.post(
        f"/api/v1/meal-plans/{plan_id}/entries/bulk",
        headers=auth_headers,
        json={"entries": entries},
    )
    assert response.status_code == 201
    assert [(e["date"], e["servings"]) for e in response.json()] == [
        ("2026-10-12", 2),
        ("2026-10-13", 1),
    ]


def test_update_and_delete_entry(client, auth_headers, meal_plan, curry):
    entry_id = add_entry(
        client, auth_headers, meal_plan["id"], curry["id"], "2026-10-14"
    ).json()["id"]

    response = client.patch(
        f"/api/v1/meal-plans/entries/{entry_id}",
        headers=auth_headers,
        json={"date": "2026-10-15", "meal_type": "lunch", "servings": 4},
    )
    assert response.status_code == 200
    assert (response.json()["date"], response.json()["meal_type"]) == ("2026-10-15", "lunch")
    assert response.json()["servings"] == 4

    response = client.patch(
        f"/api/v1/meal-plans/entries/{entry_id}",
        headers=auth_headers,
        json={"date": "2026-11-01"},
    )
    assert response.status_code == 400

    response = client.delete(f"/api/v1/meal-plans/entries/{entry_id}", headers=auth_headers)
    assert response.status_code == 204
    plan = client.get(f"/api/v1/meal-plans/{meal_plan['id']}", headers=auth_headers).json()
    assert plan["entries"] == []


def test_delete_plan(client, auth_headers, meal_plan, curry):
    add_entry(client, auth_headers, meal_plan["id"], curry["id"], "2026-10-14")

    response = client.delete(f"/api/v1/meal-plans/{meal_plan['id']}", headers=auth_headers)
    assert response.status_code == 204

    response = client.get(f"/api/v1/meal-plans/{meal_plan['id']}", headers=auth_headers)
    assert response.status_code == 404


def test_plan_to_grocery_list_merges_recipes(client, auth_headers, meal_plan, curry):
    plan_id = meal_plan["id"]
    dal = create_recipe(
        client,
        auth_headers,
        "Dal",
        [
            {"name": "Rice", "quantity": 2, "unit": "cup"},
            {"name": "lentils", "quantity": 1, "unit": "cup"},
        ],
    )
    add_entry(client, auth_headers, plan_id, curry["id"], "2026-10-12")
    add_entry(client, auth_headers, plan_id, dal["id"], "2026-10-13")
    # Scheduled twice, shopped for once
    add_entry(client, auth_headers, plan_id, curry["id"], "2026-10-14")

    response = client.post(
        f"/api/v1/meal-plans/{plan_id}/grocery-list", headers=auth_headers, json={}
    )

    assert response.status_code == 201
    grocery_list = response.json()
    assert grocery_list["name"] == "Meal Plan Groceries"
    assert [(i["name"], i["quantity"], i["unit"]) for i in grocery_list["items"]] == [
        ("rice", 3.0, "cup"),
        ("onion", 2.0, None),
        ("lentils", 1.0, "cup"),
    ]

    response = client.post(
        f"/api/v1/meal-plans/{plan_id}/grocery-list",
        headers=auth_headers,
        json={"grocery_list_id": grocery_list["id"]},
    )
    assert response.status_code == 201
    items = response.json()["items"]
    assert [(i["name"], i["quantity"]) for i in items] == [
        ("rice", 6.0),
        ("onion", 4.0),
        ("lentils", 2.0),
    ]


def test_empty_plan_to_grocery_list_400(client, auth_headers, meal_plan):
    response = client.post(
        f"/api/v1/meal-plans/{meal_plan['id']}/grocery-list", headers=auth_headers, json={}
    )
    assert response.status_code == 400

    response = client.get("/api/v1/grocery/lists", headers=auth_headers)
    assert response.json() == []


def test_other_users_cannot_see_plan(client, auth_headers, meal_plan):
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "other@example.com", "password": "password123"},
    )
    other_headers = {"Authorization": f"Bearer {response.json()['access_token']}"}

    response = client.get(f"/api/v1/meal-plans/{meal_plan['id']}", headers=other_headers)
    assert response.status_code == 404
