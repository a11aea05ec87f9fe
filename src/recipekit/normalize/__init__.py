"""Parse, scale, convert and format ingredient lines."""

from recipekit.normalize.ingredients import (
    PARSE_RULES,
    ParsedIngredient,
    ParseRule,
    convert_ingredient,
    format_amount,
    format_ingredient,
    matching_rule,
    normalize_ingredient_line,
    parse_ingredient,
    parse_quantity,
    process_ingredients,
    scale_ingredient,
)
from recipekit.normalize.units import (
    Dimension,
    Unit,
    UnitSystem,
    conversion_for,
    display_unit,
    resolve_unit,
    unit_system,
)

__all__ = [
    "PARSE_RULES",
    "Dimension",
    "ParseRule",
    "ParsedIngredient",
    "Unit",
    "UnitSystem",
    "conversion_for",
    "convert_ingredient",
    "display_unit",
    "format_amount",
    "format_ingredient",
    "matching_rule",
    "normalize_ingredient_line",
    "parse_ingredient",
    "parse_quantity",
    "process_ingredients",
    "resolve_unit",
    "scale_ingredient",
    "unit_system",
]
