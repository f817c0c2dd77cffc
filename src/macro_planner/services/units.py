"""Ingredient units and display formatting of amounts."""

from macro_planner.domain.models import Ingredient, IngredientUnit

VOLUME_UNITS_ML: dict[str, float] = {
    "ml": 1,
    "tsp": 5,
    "tbsp": 15,
    "dl": 100,
    "cup": 240,
}

_FRACTIONS: list[tuple[float, str]] = [
    (0.25, "¼"),
    (0.5, "½"),
    (0.75, "¾"),
    (0.333, "⅓"),
    (0.667, "⅔"),
]

GRAM_UNIT = IngredientUnit(name="g", grams=1, is_default=True)


class UnknownUnitError(LookupError):
    """Raised when an ingredient has no unit with the requested name."""


def all_units(ingredient: Ingredient) -> list[IngredientUnit]:
    """Return stored units plus volume units derived from density."""
    if not ingredient.density:
        return list(ingredient.units)
    existing = {unit.name.lower() for unit in ingredient.units}
    volume_units = [
        IngredientUnit(name=name, grams=round(ml * ingredient.density * 100) / 100)
        for name, ml in VOLUME_UNITS_ML.items()
        if name not in existing
    ]
    return [*ingredient.units, *volume_units]


def default_unit(ingredient: Ingredient) -> IngredientUnit:
    """Return the ingredient's default unit, grams when none is marked."""
    for unit in ingredient.units:
        if unit.is_default:
            return unit
    return GRAM_UNIT


def grams_for(ingredient: Ingredient, amount: float, unit_name: str) -> float:
    """Convert an amount in a named unit into grams."""
    if unit_name.lower() == GRAM_UNIT.name:
        return amount
    for unit in all_units(ingredient):
        if unit.name.lower() == unit_name.lower():
            return amount * unit.grams
    raise UnknownUnitError(f"Unknown unit {unit_name!r} for {ingredient.name}")


def format_amount(value: float) -> str:
    """Format an amount using common fraction glyphs where they fit."""
    if value == 0:
        return "0"
    whole = int(value)
    frac = value - whole
    if frac < 0.01:
        return str(whole)
    for threshold, symbol in _FRACTIONS:
        if abs(frac - threshold) < 0.02:
            return f"{whole}{symbol}" if whole > 0 else symbol
    return f"{value:.1f}"


def format_ingredient_amount(amount: float, unit: str) -> str:
    """Format an amount with its unit, hiding the piece unit."""
    formatted = format_amount(amount)
    if unit == "pcs":
        return formatted
    return f"{formatted} {unit}"
