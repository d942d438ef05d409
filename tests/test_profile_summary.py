"""Tests for the natural-language taste profile summary."""

import re

from cookai.models.enums import ComplexityPreference, InteractionType
from cookai.services.profile_summary import (
    MAX_LINE_LENGTH,
    NEW_USER_SUMMARY,
    get_profile_summary,
)
from cookai.services.taste_profile import TasteProfile, TasteProfileAggregator


def make_profile(**overrides) -> TasteProfile:
    defaults = {"total_interactions": 10}
    defaults.update(overrides)
    return TasteProfile(**defaults)


def test_fresh_profile_gets_new_user_summary():
    assert get_profile_summary(TasteProfile()) == NEW_USER_SUMMARY
    assert NEW_USER_SUMMARY == (
        "New user - no established preferences yet. Suggest diverse, approachable recipes."
    )


def test_cold_start_ignores_data_present():
    profile = TasteProfile(
        cuisine_scores={"Italian": 50},
        spice_tolerance=10,
        preferred_servings=2,
        total_interactions=2,
    )
    assert get_profile_summary(profile) == NEW_USER_SUMMARY


def test_full_summary_lines_in_order():
    profile = make_profile(
        cuisine_scores={"Italian": 10, "Thai": 5, "Mexican": 3, "French": 1, "Greek": -2},
        ingredient_scores={
            "garlic": 12,
            "basil": 9,
            "tomato": 8,
            "lemon": 6,
            "olive oil": 5,
            "parmesan": 4,
            "cilantro": -5,
            "olives": -3,
        },
        spice_tolerance=9,
        complexity_preference=ComplexityPreference.QUICK,
        dietary_patterns=["health-conscious"],
        preferred_servings=2,
    )

    assert get_profile_summary(profile).split("\n") == [
        "Favorite cuisines: Italian, Thai, Mexican",
        "Loves: garlic, basil, tomato, lemon, olive oil",
        "Avoids: cilantro, olives",
        "Loves spicy and bold flavors",
        "Prefers quick, easy recipes (under 30 min)",
        "Dietary tendencies: health-conscious",
        "Usually cooks for 2 servings",
    ]


def test_mild_and_elaborate_lines():
    profile = make_profile(
        spice_tolerance=1.4,
        complexity_preference=ComplexityPreference.ELABORATE,
    )
    assert get_profile_summary(profile) == (
        "Prefers mild, non-spicy food\nEnjoys complex, multi-step cooking projects"
    )


def test_balanced_defaults_produce_no_extra_lines():
    profile = make_profile(cuisine_scores={"Korean": 4})
    assert get_profile_summary(profile) == "Favorite cuisines: Korean"


def test_scores_never_appear_in_summary():
    profile = make_profile(
        cuisine_scores={"Italian": 17.5, "Thai": 42},
        ingredient_scores={"garlic": 31, "okra": -9},
        spice_tolerance=8.6,
    )
    summary = get_profile_summary(profile)
    assert not re.search(r"\d", summary)


def test_list_lines_are_bounded():
    disliked = {f"very long ingredient name number {'x' * 20} {i}": -5 for i in range(40)}
    profile = make_profile(ingredient_scores=disliked)

    summary = get_profile_summary(profile)

    assert summary.startswith("Avoids: ")
    assert len(summary) <= MAX_LINE_LENGTH
    # Whole names are dropped rather than cut mid-name
    assert summary.split(", ")[-1] in disliked


def test_summary_is_idempotent():
    aggregator = TasteProfileAggregator()
    for cuisine in ["Italian", "Italian", "Thai", "Mexican"]:
        aggregator.track_interaction(InteractionType.COOK, cuisine=cuisine, ingredients=["garlic"])

    first = get_profile_summary(aggregator.profile)
    second = get_profile_summary(aggregator.profile)

    assert first == second
    assert aggregator.profile.total_interactions == 4
