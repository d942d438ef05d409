"""LLM prompt templates for recipe generation."""

from typing import Any

RECIPE_GENERATION_SYSTEM_PROMPT = """You are a world-class chef. Generate ONE detailed, creative recipe based on the user's requirements.

Return a JSON object (NOT wrapped in a "recipes" array):
{
  "title": "Creative recipe name",
  "description": "1-2 sentence appetizing description",
  "prep_time_minutes": 15,
  "cook_time_minutes": 30,
  "total_time_minutes": 45,
  "servings": 4,
  "difficulty": "easy|medium|hard",
  "cuisine": "Italian",
  "tags": ["quick", "healthy"],
  "ingredients": [
    {
      "name": "ingredient name",
      "quantity": 2,
      "unit": "cups",
      "preparation": "diced",
      "is_optional": false
    }
  ],
  "instructions": [
    "Step 1: instruction",
    "Step 2: instruction"
  ],
  "notes": "Helpful tips"
}

Rules:
- One detailed recipe only
- Prioritize the provided ingredients
- Clear, beginner-friendly instructions
- Include temperatures and visual cues
- Respect all dietary restrictions
- Treat the user's taste preferences as guidance, not hard rules

Respond with JSON only."""


def get_recipe_generation_prompt(request: dict[str, Any], taste_profile: str | None) -> str:
    """Generate the user prompt for a recipe generation request.

    Args:
        request: Stored generation request (ingredients, cuisine_preference,
            dietary_restrictions, max_cook_time, difficulty, servings,
            additional_notes)
        taste_profile: Profile summary, embedded verbatim
    """
    parts = []

    ingredients = request.get("ingredients") or []
    if ingredients:
        parts.append(f"Available ingredients: {', '.join(ingredients)}")
    else:
        parts.append("Available ingredients: chef's choice")

    if request.get("cuisine_preference"):
        parts.append(f"Preferred cuisine: {request['cuisine_preference']}")

    restrictions = request.get("dietary_restrictions") or []
    if restrictions:
        parts.append(f"Dietary restrictions (MUST follow): {', '.join(restrictions)}")

    if request.get("max_cook_time"):
        parts.append(f"Maximum total cooking time: {request['max_cook_time']} minutes")

    if request.get("difficulty"):
        parts.append(f"Difficulty level: {request['difficulty']}")

    if request.get("servings"):
        parts.append(f"Number of servings: {request['servings']}")

    if taste_profile:
        parts.append(f"\nUser taste preferences:\n{taste_profile}")

    if request.get("additional_notes"):
        parts.append(f"\nAdditional notes: {request['additional_notes']}")

    return "\n".join(parts)
