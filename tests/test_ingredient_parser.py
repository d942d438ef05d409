"""Tests for the deterministic ingredient parser."""

import pytest

from cookai.services.ingredient_parser import (
    ParsedIngredient,
    normalize_unit,
    parse_ingredient_lines,
    parse_ingredient_string,
    parse_quantity,
)


def test_quantity_unit_name_and_preparation():
    assert parse_ingredient_string("2 cups flour, sifted") == ParsedIngredient(
        name="flour", quantity=2, unit="cup", preparation="sifted"
    )


def test_fraction_quantity():
    assert parse_ingredient_string("1/2 tsp salt") == ParsedIngredient(
        name="salt", quantity=0.5, unit="tsp", preparation=None
    )


def test_mixed_number_quantity():
    parsed = parse_ingredient_string("1 1/2 cups whole milk")
    assert parsed.quantity == 1.5
    assert parsed.unit == "cup"
    assert parsed.name == "whole milk"


def test_decimal_quantity_and_long_unit():
    parsed = parse_ingredient_string("0.75 Tablespoons olive oil")
    assert parsed.quantity == 0.75
    assert parsed.unit == "tbsp"
    assert parsed.name == "olive oil"


@pytest.mark.parametrize(
    ("text", "unit", "name"),
    [
        ("2 Tbsp. olive oil", "tbsp", "olive oil"),
        ("1 tsp. vanilla extract", "tsp", "vanilla extract"),
        ("8 oz. cream cheese", "oz", "cream cheese"),
    ],
)
def test_period_after_abbreviated_unit_is_dropped(text, unit, name):
    parsed = parse_ingredient_string(text)
    assert parsed.unit == unit
    assert parsed.name == name


def test_parenthesized_preparation_and_unit_after_name():
    parsed = parse_ingredient_string("3 garlic cloves (minced)")
    assert parsed == ParsedIngredient(
        name="garlic", quantity=3, unit="clove", preparation="minced"
    )


def test_leading_of_removed():
    parsed = parse_ingredient_string("1 cup of rice")
    assert parsed.name == "rice"
    assert parsed.unit == "cup"


def test_liter_keeps_capital_l():
    parsed = parse_ingredient_string("1 l water")
    assert parsed.unit == "L"
    assert parsed.name == "water"


def test_unit_letters_inside_words_are_not_units():
    parsed = parse_ingredient_string("2 large eggs")
    assert parsed.unit is None
    assert parsed.name == "large eggs"


def test_division_by_zero_leaves_quantity_empty():
    parsed = parse_ingredient_string("1/0 cup sugar")
    assert parsed.quantity is None
    assert parsed.unit == "cup"
    assert parsed.name == "sugar"


@pytest.mark.parametrize("text", ["salt to taste", "!!!", "   fresh   herbs   "])
def test_unstructured_text_becomes_name(text):
    parsed = parse_ingredient_string(text)
    assert parsed.quantity is None
    assert parsed.unit is None
    assert parsed.name == " ".join(text.split())


def test_empty_and_non_string_input_never_raise():
    assert parse_ingredient_string("") == ParsedIngredient(name="")
    assert parse_ingredient_string(None) == ParsedIngredient(name="")


def test_normalize_unit():
    assert normalize_unit("Cups") == "cup"
    assert normalize_unit("teaspoons") == "tsp"
    assert normalize_unit(" handful ") == "handful"
    assert normalize_unit(None) is None
    assert normalize_unit("") is None


def test_parse_quantity():
    assert parse_quantity("3") == 3.0
    assert parse_quantity(".5") == 0.5
    assert parse_quantity("2 3/4") == 2.75
    assert parse_quantity("4/0") is None


def test_parse_ingredient_lines():
    parsed = parse_ingredient_lines(
        ["2 cups flour", "", "   ", "1 tsp vanilla extract (optional)", "3 eggs"]
    )

    assert [item["name"] for item in parsed] == ["flour", "vanilla extract", "eggs"]
    assert [item["order_index"] for item in parsed] == [0, 1, 2]
    assert parsed[1]["is_optional"] is True
    assert parsed[1]["preparation"] == "optional"
    assert parsed[0]["is_optional"] is False
    assert parsed[2] == {
        "name": "eggs",
        "quantity": 3.0,
        "unit": None,
        "preparation": None,
        "is_optional": False,
        "order_index": 2,
    }
