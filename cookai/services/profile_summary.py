"""Render a taste profile as short natural-language context for LLM prompts.

The summary only ever contains qualitative language; raw scores stay out of
the prompt.
"""

from cookai.models.enums import ComplexityPreference
from cookai.services.taste_profile import DEFAULT_SERVINGS, TasteProfile, TasteProfileAggregator

NEW_USER_SUMMARY = (
    "New user - no established preferences yet. Suggest diverse, approachable recipes."
)
MIN_INTERACTIONS_FOR_SUMMARY = 3
MAX_LINE_LENGTH = 300

SUMMARY_TOP_CUISINES = 3
SUMMARY_TOP_INGREDIENTS = 5
MILD_SPICE_MAX = 2
BOLD_SPICE_MIN = 8


def get_profile_summary(profile: TasteProfile) -> str:
    """Summarize a profile for injection into a generation prompt."""
    if profile.total_interactions < MIN_INTERACTIONS_FOR_SUMMARY:
        return NEW_USER_SUMMARY

    # Read-only use: the aggregator never mutates unless an interaction is tracked
    views = TasteProfileAggregator(profile)
    lines = []

    top_cuisines = views.top_cuisines(SUMMARY_TOP_CUISINES)
    if top_cuisines:
        lines.append(_list_line("Favorite cuisines", [name for name, _ in top_cuisines]))

    top_ingredients = views.top_ingredients(SUMMARY_TOP_INGREDIENTS)
    if top_ingredients:
        lines.append(_list_line("Loves", [name for name, _ in top_ingredients]))

    disliked = views.disliked_ingredients()
    if disliked:
        lines.append(_list_line("Avoids", disliked))

    if profile.spice_tolerance <= MILD_SPICE_MAX:
        lines.append("Prefers mild, non-spicy food")
    elif profile.spice_tolerance >= BOLD_SPICE_MIN:
        lines.append("Loves spicy and bold flavors")

    if profile.complexity_preference == ComplexityPreference.QUICK:
        lines.append("Prefers quick, easy recipes (under 30 min)")
    elif profile.complexity_preference == ComplexityPreference.ELABORATE:
        lines.append("Enjoys complex, multi-step cooking projects")

    if profile.dietary_patterns:
        lines.append(_list_line("Dietary tendencies", profile.dietary_patterns))

    if profile.preferred_servings != DEFAULT_SERVINGS:
        lines.append(f"Usually cooks for {profile.preferred_servings} servings")

    return "\n".join(lines)


def _list_line(label: str, names: list[str]) -> str:
    """Join names after a label, dropping trailing names to stay under the line cap."""
    names = list(names)
    line = f"{label}: {', '.join(names)}"
    while len(line) > MAX_LINE_LENGTH and len(names) > 1:
        names.pop()
        line = f"{label}: {', '.join(names)}"
    return line[:MAX_LINE_LENGTH]
