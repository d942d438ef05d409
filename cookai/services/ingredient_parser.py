"""Deterministic ingredient string parsing - no LLM calls.

Turns free text such as "2 cups flour, sifted" into quantity, unit,
preparation and name. This is a best-effort heuristic: each step takes the
first thing that matches (quantity, then unit, then preparation) and never
backtracks, and any input produces a result.
"""

import logging
import re
from dataclasses import asdict, dataclass

logger = logging.getLogger(__name__)

# Long and plural spellings map onto one canonical abbreviation
UNIT_MAPPINGS = {
    "tablespoon": "tbsp",
    "tablespoons": "tbsp",
    "tbsp": "tbsp",
    "tbsps": "tbsp",
    "teaspoon": "tsp",
    "teaspoons": "tsp",
    "tsp": "tsp",
    "tsps": "tsp",
    "cup": "cup",
    "cups": "cup",
    "ounce": "oz",
    "ounces": "oz",
    "oz": "oz",
    "pound": "lb",
    "pounds": "lb",
    "lb": "lb",
    "gram": "g",
    "grams": "g",
    "g": "g",
    "kilogram": "kg",
    "kilograms": "kg",
    "kg": "kg",
    "milliliter": "ml",
    "milliliters": "ml",
    "ml": "ml",
    "liter": "L",
    "liters": "L",
    "l": "L",
    "pinch": "pinch",
    "dash": "dash",
    "clove": "clove",
    "cloves": "clove",
}

QUANTITY_PATTERN = re.compile(r"^(\d+\s+\d+/\d+|\d+/\d+|\d+(?:\.\d+)?|\.\d+)")
UNIT_PATTERN = re.compile(
    r"\b(tbsps?|tsps?|cups?|oz|lb|g|kg|ml|l|pinch|dash|cloves?|"
    r"tablespoons?|teaspoons?|ounces?|pounds?|grams?|kilograms?|milliliters?|liters?)\b",
    re.IGNORECASE,
)
PREPARATION_PATTERN = re.compile(r",\s*(.+)$|\((.+)\)$")
LEADING_OF_PATTERN = re.compile(r"^of\s+", re.IGNORECASE)
OPTIONAL_PATTERN = re.compile(r"\boptional\b", re.IGNORECASE)


@dataclass
class ParsedIngredient:
    """Structured view of a single ingredient line."""

    name: str
    quantity: float | None = None
    unit: str | None = None
    preparation: str | None = None


def normalize_unit(unit: str | None) -> str | None:
    """Map a unit spelling to its canonical abbreviation.

    Unknown units are returned trimmed but otherwise untouched.
    """
    if not unit:
        return None
    cleaned = unit.strip()
    return UNIT_MAPPINGS.get(cleaned.lower(), cleaned)


def parse_quantity(token: str) -> float | None:
    """Convert "2", "1.5", "1/2" or "1 1/2" to a float."""
    token = token.strip()
    try:
        if "/" in token:
            parts = token.split()
            if len(parts) == 2:
                whole, fraction = parts
                numerator, denominator = fraction.split("/")
                return int(whole) + int(numerator) / int(denominator)
            numerator, denominator = token.split("/")
            return int(numerator) / int(denominator)
        return float(token)
    except (ValueError, ZeroDivisionError):
        logger.warning(f"Could not parse ingredient quantity: {token!r}")
        return None


def parse_ingredient_string(text: str) -> ParsedIngredient:
    """Parse a free-text ingredient line.

    Examples:
    - "2 cups flour, sifted" -> flour, 2.0, cup, sifted
    - "1/2 tsp salt" -> salt, 0.5, tsp, None
    - "3 garlic cloves (minced)" -> garlic, 3.0, clove, minced
    """
    if not isinstance(text, str):
        text = "" if text is None else str(text)

    remaining = text.strip()
    quantity = None
    unit = None
    preparation = None

    quantity_match = QUANTITY_PATTERN.match(remaining)
    if quantity_match:
        quantity = parse_quantity(quantity_match.group(1))
        remaining = remaining[quantity_match.end() :].strip()

    unit_match = UNIT_PATTERN.search(remaining)
    if unit_match:
        unit = normalize_unit(unit_match.group(1))
        after_unit = remaining[unit_match.end() :]
        # Abbreviation period, as in "2 Tbsp. olive oil"
        if after_unit.startswith("."):
            after_unit = after_unit[1:]
        remaining = (remaining[: unit_match.start()] + after_unit).strip()

    prep_match = PREPARATION_PATTERN.search(remaining)
    if prep_match:
        preparation = (prep_match.group(1) or prep_match.group(2)).strip() or None
        remaining = remaining[: prep_match.start()].strip()

    name = LEADING_OF_PATTERN.sub("", remaining)
    name = re.sub(r"\s+", " ", name).strip()

    if not name and text.strip():
        logger.debug(f"Ingredient line produced no name: {text!r}")

    return ParsedIngredient(name=name, quantity=quantity, unit=unit, preparation=preparation)


def parse_ingredient_lines(lines: list[str]) -> list[dict]:
    """Parse many ingredient lines into recipe-ingredient dicts.

    Blank lines and lines without a usable name are dropped; order_index
    follows the order of the remaining lines.
    """
    results = []
    for line in lines:
        if not isinstance(line, str) or not line.strip():
            continue
        parsed = parse_ingredient_string(line)
        if not parsed.name:
            continue
        results.append(
            {
                **asdict(parsed),
                "is_optional": bool(OPTIONAL_PATTERN.search(line)),
                "order_index": len(results),
            }
        )
    return results
