"""Recipe totals, yield and per-portion macro calculations.

Everything here is a pure function over the recipe snapshot it receives.
Nothing is cached: edits to a base ingredient show up on the next call.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from macro_planner.domain.macros import MacroTotals, MacroValues
from macro_planner.domain.models import (
    IngredientLine,
    Recipe,
    RecipeLine,
    SubrecipeLine,
)


class MacroAmount(Protocol):
    """Anything carrying macros per 100 g and an amount in grams."""

    @property
    def per_100g(self) -> MacroValues:
        """Macros per 100 g."""

    @property
    def grams(self) -> float:
        """Amount in grams."""


@dataclass(frozen=True)
class IngredientAmount:
    """Macro density paired with an amount."""

    per_100g: MacroValues
    grams: float


@dataclass(frozen=True)
class RecipeCalculations:
    """Derived numbers for one recipe."""

    line_macros: list[MacroTotals]
    totals: MacroTotals
    cooked_weight: float
    portion_size: float
    portion: MacroValues
    portions_per_batch: float


def calculate_ingredient_macros(per_100g: MacroValues, grams: float) -> MacroTotals:
    """Return absolute macros for an amount of an ingredient."""
    factor = grams / 100
    return MacroTotals(
        protein=per_100g.protein * factor,
        carbs=per_100g.carbs * factor,
        fat=per_100g.fat * factor,
        kcal=per_100g.kcal * factor,
        fiber=per_100g.fiber * factor,
        weight=grams,
    )


def calculate_recipe_totals(items: Iterable[MacroAmount]) -> MacroTotals:
    """Sum macros and weight over a flat list of amounts."""
    protein = carbs = fat = kcal = fiber = weight = 0.0
    for item in items:
        macros = calculate_ingredient_macros(item.per_100g, item.grams)
        protein += macros.protein
        carbs += macros.carbs
        fat += macros.fat
        kcal += macros.kcal
        fiber += macros.fiber
        weight += macros.weight
    return MacroTotals(
        protein=protein, carbs=carbs, fat=fat, kcal=kcal, fiber=fiber, weight=weight
    )


def effective_cooked_weight(raw_weight: float, cooked_weight: float | None) -> float:
    """Return the cooked weight, falling back to raw weight when unset or zero."""
    if cooked_weight is not None and cooked_weight > 0:
        return cooked_weight
    return raw_weight


def effective_portion_size(cooked_weight: float, portion_size: float | None) -> float:
    """Return the portion size; without one the whole dish is a single portion."""
    if portion_size is not None and portion_size > 0:
        return portion_size
    return cooked_weight


def calculate_portion_macros(
    totals: MacroTotals, cooked_weight: float, portion_size: float
) -> MacroValues:
    """Scale recipe totals down to one portion."""
    if cooked_weight == 0:
        return MacroValues()
    return totals.macros.scaled(portion_size / cooked_weight)


def macro_percentage(macro_grams: float, total_weight: float) -> float:
    """Return a macro's share of the total weight in percent."""
    if total_weight == 0:
        return 0.0
    return macro_grams / total_weight * 100


def raw_weight(recipe: Recipe) -> float:
    """Sum the grams written on every line of a recipe."""
    return sum(line.amount_grams for line in recipe.lines)


def recipe_effective_weight(recipe: Recipe) -> float:
    """Return the product weight of one batch as used inside another recipe.

    Only a missing cooked weight falls back to the raw total. A stored zero
    is kept, so such a sub-recipe contributes nothing.
    """
    if recipe.cooked_weight is not None:
        return recipe.cooked_weight
    return raw_weight(recipe)


def line_amount(line: RecipeLine, max_depth: int = 1) -> IngredientAmount | None:
    """Convert a recipe line into a macro density and amount.

    A sub-recipe line is valued at the density of the sub-recipe's cooked
    product, which yields the same macros as flattening it proportionally.
    ``max_depth`` limits how many sub-recipe levels are followed.
    """
    if isinstance(line, IngredientLine):
        return IngredientAmount(
            per_100g=line.ingredient.per_100g, grams=line.amount_grams
        )
    if isinstance(line, SubrecipeLine):
        if max_depth < 1:
            return None
        effective = recipe_effective_weight(line.recipe)
        if effective == 0:
            return None
        sub_amounts = recipe_amounts(line.recipe, max_depth - 1)
        sub_totals = calculate_recipe_totals(sub_amounts)
        return IngredientAmount(
            per_100g=sub_totals.macros.scaled(100 / effective),
            grams=line.amount_grams,
        )
    return None


def recipe_amounts(recipe: Recipe, max_depth: int = 1) -> list[IngredientAmount]:
    """Return the macro amounts of every line that resolves."""
    amounts = []
    for line in recipe.lines:
        amount = line_amount(line, max_depth)
        if amount is not None:
            amounts.append(amount)
    return amounts


def calculate_recipe(recipe: Recipe, max_depth: int = 1) -> RecipeCalculations:
    """Compute totals, yields and portion macros for a recipe."""
    line_macros = []
    for line in recipe.lines:
        amount = line_amount(line, max_depth)
        if amount is None:
            line_macros.append(MacroTotals())
        else:
            line_macros.append(
                calculate_ingredient_macros(amount.per_100g, amount.grams)
            )

    totals = calculate_recipe_totals(recipe_amounts(recipe, max_depth))
    cooked_weight = effective_cooked_weight(totals.weight, recipe.cooked_weight)
    portion_size = effective_portion_size(cooked_weight, recipe.portion_size)
    portion = calculate_portion_macros(totals, cooked_weight, portion_size)
    portions_per_batch = cooked_weight / portion_size if portion_size > 0 else 0.0
    return RecipeCalculations(
        line_macros=line_macros,
        totals=totals,
        cooked_weight=cooked_weight,
        portion_size=portion_size,
        portion=portion,
        portions_per_batch=portions_per_batch,
    )
