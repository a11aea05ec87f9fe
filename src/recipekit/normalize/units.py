"""Unit vocabulary and imperial/metric conversion tables."""

import re
from dataclasses import dataclass
from enum import Enum


class Dimension(str, Enum):
    """Physical quantity a unit measures."""

    VOLUME = "volume"
    WEIGHT = "weight"
    LENGTH = "length"
    COUNT = "count"


class UnitSystem(str, Enum):
    """Measurement system a unit belongs to."""

    IMPERIAL = "imperial"
    METRIC = "metric"
    NONE = "none"  # count units


class Unit(str, Enum):
    """Canonical unit abbreviations."""

    # Volume
    TSP = "tsp"
    TBSP = "tbsp"
    CUP = "cup"
    FL_OZ = "fl oz"
    PINT = "pint"
    QUART = "quart"
    GALLON = "gallon"
    ML = "ml"
    L = "l"
    # Weight
    OZ = "oz"
    LB = "lb"
    G = "g"
    KG = "kg"
    # Length
    INCH = "inch"
    FOOT = "foot"
    CM = "cm"
    # Count
    CLOVE = "clove"
    HEAD = "head"
    BUNCH = "bunch"
    STALK = "stalk"
    SLICE = "slice"
    PIECE = "piece"
    CAN = "can"
    PACKAGE = "package"
    BAG = "bag"
    JAR = "jar"
    BOTTLE = "bottle"
    STICK = "stick"
    PINCH = "pinch"
    DASH = "dash"
    SPRIG = "sprig"


@dataclass(frozen=True)
class UnitSpec:
    """Everything known about one canonical unit."""

    unit: Unit
    dimension: Dimension
    system: UnitSystem
    aliases: tuple[str, ...]
    plural: str | None = None  # None: the abbreviation never changes


def _count(unit: Unit, *aliases: str, plural: str | None = None) -> UnitSpec:
    return UnitSpec(
        unit=unit,
        dimension=Dimension.COUNT,
        system=UnitSystem.NONE,
        aliases=(unit.value, *aliases),
        plural=plural or f"{unit.value}s",
    )


# =============================================================================
# Unit Table
# =============================================================================

_VOLUME, _WEIGHT, _LENGTH = Dimension.VOLUME, Dimension.WEIGHT, Dimension.LENGTH
_IMPERIAL, _METRIC = UnitSystem.IMPERIAL, UnitSystem.METRIC

UNIT_SPECS: dict[Unit, UnitSpec] = {
    spec.unit: spec
    for spec in (
        # Volume
        UnitSpec(Unit.TSP, _VOLUME, _IMPERIAL, ("tsp", "tsps", "teaspoon", "teaspoons")),
        UnitSpec(
            Unit.TBSP,
            _VOLUME,
            _IMPERIAL,
            ("tbsp", "tbsps", "tbs", "tblsp", "tablespoon", "tablespoons"),
        ),
        UnitSpec(Unit.CUP, _VOLUME, _IMPERIAL, ("cup", "cups"), plural="cups"),
        UnitSpec(Unit.FL_OZ, _VOLUME, _IMPERIAL, ("fl oz", "fluid ounce", "fluid ounces")),
        UnitSpec(Unit.PINT, _VOLUME, _IMPERIAL, ("pint", "pints", "pt"), plural="pints"),
        UnitSpec(Unit.QUART, _VOLUME, _IMPERIAL, ("quart", "quarts", "qt"), plural="quarts"),
        UnitSpec(
            Unit.GALLON, _VOLUME, _IMPERIAL, ("gallon", "gallons", "gal"), plural="gallons"
        ),
        UnitSpec(
            Unit.ML,
            _VOLUME,
            _METRIC,
            ("ml", "milliliter", "milliliters", "millilitre", "millilitres"),
        ),
        UnitSpec(Unit.L, _VOLUME, _METRIC, ("l", "liter", "liters", "litre", "litres")),
        # Weight
        UnitSpec(Unit.OZ, _WEIGHT, _IMPERIAL, ("oz", "ounce", "ounces")),
        UnitSpec(Unit.LB, _WEIGHT, _IMPERIAL, ("lb", "lbs", "pound", "pounds"), plural="lbs"),
        UnitSpec(Unit.G, _WEIGHT, _METRIC, ("g", "gram", "grams")),
        UnitSpec(Unit.KG, _WEIGHT, _METRIC, ("kg", "kilogram", "kilograms")),
        # Length
        UnitSpec(Unit.INCH, _LENGTH, _IMPERIAL, ("inch", "inches", "in"), plural="inches"),
        UnitSpec(Unit.FOOT, _LENGTH, _IMPERIAL, ("foot", "feet", "ft"), plural="feet"),
        UnitSpec(
            Unit.CM,
            _LENGTH,
            _METRIC,
            ("cm", "centimeter", "centimeters", "centimetre", "centimetres"),
        ),
        # Count
        _count(Unit.CLOVE, "cloves"),
        _count(Unit.HEAD, "heads"),
        _count(Unit.BUNCH, "bunches", plural="bunches"),
        _count(Unit.STALK, "stalks"),
        _count(Unit.SLICE, "slices"),
        _count(Unit.PIECE, "pieces"),
        _count(Unit.CAN, "cans"),
        _count(Unit.PACKAGE, "packages"),
        _count(Unit.BAG, "bags"),
        _count(Unit.JAR, "jars"),
        _count(Unit.BOTTLE, "bottles"),
        _count(Unit.STICK, "sticks"),
        _count(Unit.PINCH, "pinches", plural="pinches"),
        _count(Unit.DASH, "dashes", plural="dashes"),
        _count(Unit.SPRIG, "sprigs"),
    )
}

UNIT_ALIASES: dict[str, Unit] = {
    alias: spec.unit for spec in UNIT_SPECS.values() for alias in spec.aliases
}


# =============================================================================
# Conversion Tables
# =============================================================================

# Exact definitions; every other factor is derived from these.
ML_PER_CUP = 236.5882365
G_PER_LB = 453.59237
CM_PER_INCH = 2.54

ML_PER_TSP = ML_PER_CUP / 48
ML_PER_TBSP = ML_PER_CUP / 16
ML_PER_FL_OZ = ML_PER_CUP / 8
G_PER_OZ = G_PER_LB / 16

# Single hop: each source unit lands on one fixed target unit.
TO_METRIC: dict[Unit, tuple[Unit, float]] = {
    Unit.TSP: (Unit.ML, ML_PER_TSP),
    Unit.TBSP: (Unit.ML, ML_PER_TBSP),
    Unit.CUP: (Unit.ML, ML_PER_CUP),
    Unit.FL_OZ: (Unit.ML, ML_PER_FL_OZ),
    Unit.PINT: (Unit.ML, ML_PER_CUP * 2),
    Unit.QUART: (Unit.ML, ML_PER_CUP * 4),
    Unit.GALLON: (Unit.L, ML_PER_CUP * 16 / 1000),
    Unit.OZ: (Unit.G, G_PER_OZ),
    Unit.LB: (Unit.G, G_PER_LB),
    Unit.INCH: (Unit.CM, CM_PER_INCH),
    Unit.FOOT: (Unit.CM, CM_PER_INCH * 12),
}

TO_IMPERIAL: dict[Unit, tuple[Unit, float]] = {
    Unit.ML: (Unit.CUP, 1 / ML_PER_CUP),
    Unit.L: (Unit.CUP, 1000 / ML_PER_CUP),
    Unit.G: (Unit.OZ, 1 / G_PER_OZ),
    Unit.KG: (Unit.LB, 1000 / G_PER_LB),
    Unit.CM: (Unit.INCH, 1 / CM_PER_INCH),
}


# =============================================================================
# Lookup Functions
# =============================================================================


def resolve_unit(token: str | None) -> Unit | None:
    """
    Map a unit spelling to its canonical unit.

    Matching ignores case, collapses internal whitespace and drops one
    trailing period, so "Tbsp.", "tablespoons" and "TBSP" all resolve to
    Unit.TBSP. Unknown tokens return None.
    """
    if not token:
        return None
    key = " ".join(token.lower().split())
    if key.endswith("."):
        key = key[:-1]
    return UNIT_ALIASES.get(key)


def unit_system(unit: str | None) -> UnitSystem | None:
    """Get the measurement system of a unit, or None if it is unknown."""
    resolved = resolve_unit(unit)
    if resolved is None:
        return None
    return UNIT_SPECS[resolved].system


def conversion_for(unit: str | None, to_metric: bool) -> tuple[Unit, float] | None:
    """Get the (target unit, factor) pair for converting a unit, if any."""
    resolved = resolve_unit(unit)
    if resolved is None:
        return None
    table = TO_METRIC if to_metric else TO_IMPERIAL
    return table.get(resolved)


def display_unit(unit: str, amount: float) -> str:
    """
    Get the display form of a unit for an amount.

    Amounts above one take the plural form when the unit has one; one and
    anything smaller ("1/2 cup") stay singular. Unknown units are returned
    unchanged.
    """
    resolved = resolve_unit(unit)
    if resolved is None:
        return unit
    spec = UNIT_SPECS[resolved]
    if amount > 1 and spec.plural:
        return spec.plural
    return spec.unit.value


def unit_pattern() -> str:
    """
    Build a regex alternation matching every known unit spelling.

    Longer spellings come first so "cups" is preferred over "cup". Spaces
    inside a spelling ("fl oz") match any run of whitespace.
    """
    aliases = sorted(UNIT_ALIASES, key=len, reverse=True)
    escaped = [r"\s+".join(map(re.escape, alias.split())) for alias in aliases]
    return rf"(?:{'|'.join(escaped)})\.?"
