"""Recipe API tests."""

import pytest


@pytest.fixture
def recipe(client, auth_headers, recipe_payload):
    response = client.post("/api/v1/recipes", headers=auth_headers, json=recipe_payload)
    assert response.status_code == 201
    return response.json()


def test_create_recipe(recipe):
    assert recipe["title"] == "Chicken Tikka Masala"
    assert recipe["source_type"] == "manual"
    assert recipe["difficulty"] == "medium"
    assert recipe["is_favorite"] is False
    assert recipe["times_cooked"] == 0
    assert [i["name"] for i in recipe["ingredients"]] == [
        "chicken",
        "garlic",
        "tomato sauce",
        "cream",
    ]
    assert [i["order_index"] for i in recipe["ingredients"]] == [0, 1, 2, 3]


def test_create_recipe_parses_ingredient_lines(client, auth_headers):
    response = client.post(
        "/api/v1/recipes",
        headers=auth_headers,
        json={
            "title": "Focaccia",
            "ingredients": [{"name": "yeast", "quantity": 1, "unit": "tsp"}],
            "ingredient_lines": ["3 cups bread flour, sifted", "2 tbsp olive oil (optional)"],
        },
    )
    assert response.status_code == 201
    ingredients = response.json()["ingredients"]
    assert [(i["name"], i["quantity"], i["unit"]) for i in ingredients] == [
        ("yeast", 1.0, "tsp"),
        ("bread flour", 3.0, "cup"),
        ("olive oil", 2.0, "tbsp"),
    ]
    assert ingredients[1]["preparation"] == "sifted"
    assert ingredients[2]["is_optional"] is True


def test_create_recipe_requires_title(client, auth_headers):
    response = client.post("/api/v1/recipes", headers=auth_headers, json={"title": ""})
    assert response.status_code == 422


def test_list_recipes(client, auth_headers, recipe):
    response = client.get("/api/v1/recipes", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]["ingredient_count"] == 4
    assert data[0]["cuisine"] == "Indian"


def test_list_recipes_filters(client, auth_headers, recipe):
    client.post(
        "/api/v1/recipes",
        headers=auth_headers,
        json={"title": "Caesar Salad", "cuisine": "Italian", "difficulty": "easy"},
    )

    def list_titles(**params):
        response = client.get("/api/v1/recipes", headers=auth_headers, params=params)
        assert response.status_code == 200
        return [r["title"] for r in response.json()]

    assert list_titles(q="caesar") == ["Caesar Salad"]
    assert list_titles(cuisine="indian") == ["Chicken Tikka Masala"]
    assert list_titles(difficulty="easy") == ["Caesar Salad"]
    assert list_titles(is_favorite="true") == []
    assert list_titles(source_type="ai") == []


def test_get_recipe(client, auth_headers, recipe):
    response = client.get(f"/api/v1/recipes/{recipe['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["instructions"] == ["Marinate the chicken", "Simmer in sauce"]


def test_get_recipe_not_found(client, auth_headers):
    response = client.get("/api/v1/recipes/9999", headers=auth_headers)
    assert response.status_code == 404


def test_update_recipe(client, auth_headers, recipe):
    response = client.patch(
        f"/api/v1/recipes/{recipe['id']}",
        headers=auth_headers,
        json={"title": "Butter Chicken", "difficulty": "hard", "tags": ["rich"]},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Butter Chicken"
    assert data["difficulty"] == "hard"
    assert data["tags"] == ["rich"]
    assert data["cuisine"] == "Indian"


def test_delete_recipe_is_soft(client, auth_headers, recipe, db):
    response = client.delete(f"/api/v1/recipes/{recipe['id']}", headers=auth_headers)
    assert response.status_code == 204

    assert client.get(f"/api/v1/recipes/{recipe['id']}", headers=auth_headers).status_code == 404
    assert client.get("/api/v1/recipes", headers=auth_headers).json() == []

    from cookai.models.recipe import Recipe

    stored = db.query(Recipe).filter(Recipe.id == recipe["id"]).first()
    assert stored is not None
    assert stored.is_deleted


def test_ingredient_crud(client, auth_headers, recipe):
    response = client.post(
        f"/api/v1/recipes/{recipe['id']}/ingredients",
        headers=auth_headers,
        json={"name": "garam masala", "quantity": 2, "unit": "tsp"},
    )
    assert response.status_code == 201
    ingredient = response.json()
    assert ingredient["order_index"] == 4

    response = client.patch(
        f"/api/v1/recipes/ingredients/{ingredient['id']}",
        headers=auth_headers,
        json={"quantity": 1.5, "preparation": "toasted"},
    )
    assert response.status_code == 200
    assert response.json()["quantity"] == 1.5
    assert response.json()["preparation"] == "toasted"
    assert response.json()["unit"] == "tsp"

    response = client.delete(
        f"/api/v1/recipes/ingredients/{ingredient['id']}", headers=auth_headers
    )
    assert response.status_code == 204

    response = client.get(f"/api/v1/recipes/{recipe['id']}", headers=auth_headers)
    assert len(response.json()["ingredients"]) == 4


def test_other_user_cannot_access_recipe(client, auth_headers, recipe):
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "other@example.com", "password": "password123"},
    )
    other_headers = {"Authorization": f"Bearer {response.json()['access_token']}"}

    assert client.get(f"/api/v1/recipes/{recipe['id']}", headers=other_headers).status_code == 404
    response = client.post(
        f"/api/v1/recipes/{recipe['id']}/interactions",
        headers=other_headers,
        json={"type": "favorite"},
    )
    assert response.status_code == 404


# --- Ingredient search ---


def test_search_by_ingredients(client, auth_headers, recipe):
    client.post(
        "/api/v1/recipes",
        headers=auth_headers,
        json={
            "title": "Garlic Bread",
            "ingredients": [{"name": "bread"}, {"name": "garlic"}, {"name": "butter"}],
        },
    )

    response = client.post(
        "/api/v1/recipes/search-by-ingredients",
        headers=auth_headers,
        json={"ingredients": ["Chicken", "garlic", "cream"]},
    )

    assert response.status_code == 200
    data = response.json()
    assert [m["recipe"]["title"] for m in data["perfect"]] == ["Chicken Tikka Masala"]
    assert data["perfect"][0]["match_count"] == 3
    assert data["perfect"][0]["total_ingredients"] == 4
    assert data["perfect"][0]["match_ratio"] == 0.75
    assert [m["recipe"]["title"] for m in data["partial"]] == ["Garlic Bread"]


def test_search_by_ingredients_no_matches(client, auth_headers, recipe):
    response = client.post(
        "/api/v1/recipes/search-by-ingredients",
        headers=auth_headers,
        json={"ingredients": ["marshmallow"]},
    )
    assert response.json() == {"perfect": [], "partial": []}


def test_parse_ingredients_endpoint(client, auth_headers):
    response = client.post(
        "/api/v1/recipes/parse-ingredients",
        headers=auth_headers,
        json={"lines": ["2 cups flour, sifted", "1/2 tsp salt"]},
    )
    assert response.status_code == 200
    assert response.json() == [
        {
            "name": "flour",
            "quantity": 2.0,
            "unit": "cup",
            "preparation": "sifted",
            "is_optional": False,
            "order_index": 0,
        },
        {
            "name": "salt",
            "quantity": 0.5,
            "unit": "tsp",
            "preparation": None,
            "is_optional": False,
            "order_index": 1,
        },
    ]


# --- Interactions ---


def test_favorite_and_unfavorite_flip_flag(client, auth_headers, recipe):
    url = f"/api/v1/recipes/{recipe['id']}/interactions"

    response = client.post(url, headers=auth_headers, json={"type": "favorite"})
    assert response.status_code == 200
    event = response.json()
    assert event["weight"] == 3
    assert event["recipe_id"] == str(recipe["id"])
    assert event["cuisine"] == "Indian"
    assert event["ingredients"] == ["chicken", "garlic", "tomato sauce", "cream"]
    assert event["tags"] == ["spicy", "dinner"]
    assert event["difficulty"] == "medium"

    detail = client.get(f"/api/v1/recipes/{recipe['id']}", headers=auth_headers).json()
    assert detail["is_favorite"] is True

    client.post(url, headers=auth_headers, json={"type": "unfavorite"})
    detail = client.get(f"/api/v1/recipes/{recipe['id']}", headers=auth_headers).json()
    assert detail["is_favorite"] is False


def test_cook_interaction_updates_recipe_and_profile(client, auth_headers, recipe):
    response = client.post(
        f"/api/v1/recipes/{recipe['id']}/interactions",
        headers=auth_headers,
        json={"type": "cook"},
    )
    assert response.status_code == 200

    detail = client.get(f"/api/v1/recipes/{recipe['id']}", headers=auth_headers).json()
    assert detail["times_cooked"] == 1
    assert detail["last_cooked_at"] is not None

    profile = client.get("/api/v1/taste-profile", headers=auth_headers).json()
    assert profile["total_interactions"] == 1
    assert profile["cuisine_scores"] == {"Indian": 5}
    assert profile["ingredient_scores"]["tomato sauce"] == 5
    # Tagged spicy and positively weighted
    assert profile["spice_tolerance"] == pytest.approx(5.2)


def test_rate_interaction(client, auth_headers, recipe):
    response = client.post(
        f"/api/v1/recipes/{recipe['id']}/interactions",
        headers=auth_headers,
        json={"type": "rate", "rating": 1},
    )
    assert response.json()["weight"] == -2

    profile = client.get("/api/v1/taste-profile", headers=auth_headers).json()
    assert profile["cuisine_scores"] == {"Indian": -2}


def test_rating_out_of_range_rejected(client, auth_headers, recipe):
    response = client.post(
        f"/api/v1/recipes/{recipe['id']}/interactions",
        headers=auth_headers,
        json={"type": "rate", "rating": 7},
    )
    assert response.status_code == 422
