"""Ingredient line parsing, scaling, unit conversion and formatting.

Every function here is total: a line that cannot be understood is carried
through unchanged rather than raising.
"""

import math
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace

from recipekit.logging_config import get_logger
from recipekit.normalize.units import (
    UnitSystem,
    conversion_for,
    display_unit,
    resolve_unit,
    unit_pattern,
    unit_system,
)

logger = get_logger(__name__)

DEFAULT_ORIGINAL_SERVINGS = 4

# Common cooking fractions, tried in order against the fractional part.
COMMON_FRACTIONS: tuple[tuple[float, str], ...] = (
    (1 / 8, "1/8"),
    (1 / 4, "1/4"),
    (1 / 3, "1/3"),
    (3 / 8, "3/8"),
    (1 / 2, "1/2"),
    (5 / 8, "5/8"),
    (2 / 3, "2/3"),
    (3 / 4, "3/4"),
    (7 / 8, "7/8"),
)
FRACTION_TOLERANCE = 0.01


@dataclass(frozen=True)
class ParsedIngredient:
    """A structured reading of one ingredient line.

    `unit` only carries meaning while `amount` is present.
    """

    original: str
    amount: float | None = None
    unit: str | None = None
    ingredient: str = ""


# =============================================================================
# Quantity Parsing
# =============================================================================

_MIXED_RE = re.compile(r"^(\d+)\s+(\d+)\s*/\s*(\d+)$")
_FRACTION_RE = re.compile(r"^(\d+)\s*/\s*(\d+)$")
_DECIMAL_RE = re.compile(r"^(?:\d+(?:\.\d*)?|\.\d+)$")


def parse_quantity(text: str) -> float:
    """
    Parse a quantity literal into a float.

    Handles formats like:
    - "2"
    - "0.5"
    - "3/4"
    - "1 1/2" (one and a half)

    Anything else, including a zero denominator, yields 0.0.
    """
    text = " ".join(text.split())

    if mixed_match := _MIXED_RE.match(text):
        whole, num, denom = (int(g) for g in mixed_match.groups())
        if denom == 0:
            return 0.0
        return whole + num / denom

    if frac_match := _FRACTION_RE.match(text):
        num, denom = (int(g) for g in frac_match.groups())
        if denom == 0:
            return 0.0
        return num / denom

    if _DECIMAL_RE.match(text):
        return float(text)

    return 0.0


# =============================================================================
# Parse Rules
# =============================================================================

Extractor = Callable[[str, re.Match[str]], ParsedIngredient]


@dataclass(frozen=True)
class ParseRule:
    """One pattern and the extractor that reads its match."""

    name: str
    pattern: re.Pattern[str]
    extractor: Extractor

    def apply(self, line: str) -> ParsedIngredient | None:
        match = self.pattern.fullmatch(line)
        if match is None:
            return None
        return self.extractor(line, match)


def _compile(body: str) -> re.Pattern[str]:
    return re.compile(body, re.IGNORECASE)


def _name(match: re.Match[str]) -> str:
    return (match.groupdict().get("ingredient") or "").strip()


def _extract_parenthetical(line: str, match: re.Match[str]) -> ParsedIngredient:
    # The parenthetical reading replaces the leading quantity and unit.
    unit = resolve_unit(match.group("alt_unit"))
    return ParsedIngredient(
        original=line,
        amount=float(match.group("alt_amount")),
        unit=unit.value if unit else None,
        ingredient=_name(match),
    )


def _extract_quantity_unit(line: str, match: re.Match[str]) -> ParsedIngredient:
    unit = resolve_unit(match.group("unit"))
    return ParsedIngredient(
        original=line,
        amount=parse_quantity(match.group("amount")),
        unit=unit.value if unit else None,
        ingredient=_name(match),
    )


def _extract_quantity_only(line: str, match: re.Match[str]) -> ParsedIngredient:
    return ParsedIngredient(
        original=line,
        amount=parse_quantity(match.group("amount")),
        ingredient=_name(match),
    )


_AMOUNT = r"(?P<amount>\d[\d/.]*(?:\s+\d[\d/.]*)*)"
_UNIT = rf"(?P<unit>{unit_pattern()})"

# Most specific first: a later, looser rule would also match the lines an
# earlier rule is meant to handle.
PARSE_RULES: tuple[ParseRule, ...] = (
    ParseRule(
        name="parenthetical_weight",
        pattern=_compile(
            rf"{_AMOUNT}\s+{_UNIT}\s+"
            rf"\(\s*(?P<alt_amount>\d+(?:\.\d+)?)\s*(?P<alt_unit>{unit_pattern()})\s*\)"
            r"(?:\s+(?:of\s+)?(?P<ingredient>.+))?"
        ),
        extractor=_extract_parenthetical,
    ),
    ParseRule(
        name="unit_of",
        pattern=_compile(rf"{_AMOUNT}\s+{_UNIT}\s+of\s+(?P<ingredient>.+)"),
        extractor=_extract_quantity_unit,
    ),
    ParseRule(
        name="unit_ingredient",
        pattern=_compile(rf"{_AMOUNT}\s+{_UNIT}\s+(?P<ingredient>.+)"),
        extractor=_extract_quantity_unit,
    ),
    ParseRule(
        name="unit_only",
        pattern=_compile(rf"{_AMOUNT}\s+{_UNIT}"),
        extractor=_extract_quantity_unit,
    ),
    ParseRule(
        name="amount_ingredient",
        pattern=_compile(rf"{_AMOUNT}\s+(?P<ingredient>.+)"),
        extractor=_extract_quantity_only,
    ),
)


def parse_ingredient(line: str) -> ParsedIngredient:
    """
    Parse a free-text ingredient line.

    Rules from PARSE_RULES are tried in order and the first one that
    yields an amount or a name wins. A line no rule understands becomes
    the ingredient name as a whole.

    Examples:
        "2 cups flour" -> amount=2, unit="cup", ingredient="flour"
        "2 lbs of bananas" -> amount=2, unit="lb", ingredient="bananas"
        "3 eggs" -> amount=3, unit=None, ingredient="eggs"
        "salt to taste" -> amount=None, unit=None, ingredient="salt to taste"
    """
    original = line.strip()

    if found := _first_match(original):
        return found[1]

    logger.debug(f"No quantity found in ingredient line: {original!r}")
    return ParsedIngredient(original=original, ingredient=original)


def matching_rule(line: str) -> ParseRule | None:
    """Get the rule that parse_ingredient would use for a line."""
    found = _first_match(line.strip())
    return found[0] if found else None


def _first_match(line: str) -> tuple[ParseRule, ParsedIngredient] | None:
    for rule in PARSE_RULES:
        result = rule.apply(line)
        if result is not None and (result.amount is not None or result.ingredient):
            return rule, result
    return None


# =============================================================================
# Scaling and Conversion
# =============================================================================


def scale_ingredient(parsed: ParsedIngredient, factor: float) -> ParsedIngredient:
    """Multiply the amount by a serving ratio. No rounding happens here."""
    if parsed.amount is None:
        return parsed
    return replace(parsed, amount=parsed.amount * factor)


def convert_ingredient(parsed: ParsedIngredient, to_metric: bool) -> ParsedIngredient:
    """
    Convert an ingredient to metric or to imperial units.

    Conversion is single hop: each unit maps to one fixed target unit no
    matter the magnitude. Ingredients without an amount or unit, and units
    with no entry in the conversion table, are returned unchanged.
    """
    if parsed.amount is None or not parsed.unit:
        return parsed

    conversion = conversion_for(parsed.unit, to_metric)
    if conversion is None:
        logger.debug(
            f"No {'metric' if to_metric else 'imperial'} conversion for unit {parsed.unit!r}"
        )
        return parsed

    target, factor = conversion
    return replace(parsed, amount=parsed.amount * factor, unit=target.value)


# =============================================================================
# Formatting
# =============================================================================


def format_amount(value: float) -> str:
    """
    Render an amount the way a recipe would print it.

    Whole numbers print without a decimal point. A fractional part within
    FRACTION_TOLERANCE of a common cooking fraction prints as that fraction
    ("1/2", "1 1/2"). Everything else is rounded to two decimal places.
    """
    if not math.isfinite(value):
        return str(value)
    if value < 0:
        magnitude = format_amount(-value)
        return magnitude if magnitude == "0" else f"-{magnitude}"

    if value == int(value):
        return str(int(value))

    whole = math.floor(value)
    fraction = value - whole
    for decimal, text in COMMON_FRACTIONS:
        if abs(fraction - decimal) < FRACTION_TOLERANCE:
            return f"{whole} {text}" if whole else text

    rounded = round(value, 2)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.2f}".rstrip("0").rstrip(".")


def format_ingredient(parsed: ParsedIngredient) -> str:
    """Render a parsed ingredient back into a line of text."""
    if parsed.amount is None:
        return parsed.ingredient or parsed.original

    amount_text = format_amount(parsed.amount)
    parts = [amount_text]
    if parsed.unit:
        # Pluralize on what is printed, so 1.004 reads "1 cup".
        parts.append(display_unit(parsed.unit, parse_quantity(amount_text)))
    if parsed.ingredient:
        parts.append(parsed.ingredient)
    return " ".join(parts)


# =============================================================================
# Pipeline
# =============================================================================


def process_ingredient(
    line: str,
    scale_factor: float | None,
    use_metric: bool,
) -> str:
    """Parse, scale, convert and re-render a single line."""
    parsed = parse_ingredient(line)

    if scale_factor is not None:
        parsed = scale_ingredient(parsed, scale_factor)

    target = UnitSystem.METRIC if use_metric else UnitSystem.IMPERIAL
    current = unit_system(parsed.unit)
    if current is not None and current not in (target, UnitSystem.NONE):
        parsed = convert_ingredient(parsed, to_metric=use_metric)

    return format_ingredient(parsed)


def process_ingredients(
    lines: Iterable[str],
    target_servings: float,
    original_servings: float = DEFAULT_ORIGINAL_SERVINGS,
    use_metric: bool = False,
) -> list[str]:
    """
    Rescale and convert a recipe's ingredient lines for display.

    Each line is parsed, scaled by target_servings / original_servings
    (skipped when original_servings is not positive), converted into the
    requested unit system and formatted again. Scaling always happens
    before conversion.

    Args:
        lines: Raw ingredient lines.
        target_servings: Servings the reader wants to cook.
        original_servings: Servings the recipe was written for.
        use_metric: Convert toward metric units instead of imperial.

    Returns:
        One display line per input line, in the same order.
    """
    scale_factor = target_servings / original_servings if original_servings > 0 else None
    return [process_ingredient(line, scale_factor, use_metric) for line in lines]


def normalize_ingredient_line(line: str) -> str:
    """Clean an imported line: canonical units and amounts, nothing rescaled."""
    return format_ingredient(parse_ingredient(line))
