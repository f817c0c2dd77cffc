"""Flattening of recipe lines into base ingredient amounts."""

import logging
from dataclasses import dataclass
from uuid import UUID

from macro_planner.domain.macros import MacroValues
from macro_planner.domain.models import (
    Ingredient,
    IngredientLine,
    Recipe,
    RecipeLine,
    SubrecipeLine,
)
from macro_planner.services.macros import (
    effective_portion_size,
    recipe_effective_weight,
)

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedAmount:
    """A base ingredient and the raw grams of it consumed."""

    ingredient: Ingredient
    grams: float

    @property
    def per_100g(self) -> MacroValues:
        """Macros per 100 g of the ingredient."""
        return self.ingredient.per_100g

    def scaled(self, factor: float) -> "ResolvedAmount":
        """Return the same ingredient with grams multiplied by a factor."""
        return ResolvedAmount(ingredient=self.ingredient, grams=self.grams * factor)


def resolve_line(line: RecipeLine) -> list[ResolvedAmount]:
    """Flatten a recipe line one sub-recipe level deep."""
    return flatten_line(line, max_depth=1)


def flatten_line(
    line: RecipeLine,
    max_depth: int = 1,
    _path: frozenset[UUID] = frozenset(),
) -> list[ResolvedAmount]:
    """Flatten a recipe line into base ingredients, following sub-recipes.

    A sub-recipe line's grams are cooked product grams. The fraction of the
    sub-recipe's yield they represent scales each of its own lines. Lines
    beyond ``max_depth`` levels, broken references and sub-recipes already on
    the current path contribute nothing.
    """
    if isinstance(line, IngredientLine):
        return [ResolvedAmount(ingredient=line.ingredient, grams=line.amount_grams)]
    if not isinstance(line, SubrecipeLine) or max_depth < 1:
        return []

    subrecipe = line.recipe
    if subrecipe.id in _path:
        _logger.warning(
            "Skipping circular sub-recipe reference: recipe=%s", subrecipe.id
        )
        return []

    effective_weight = recipe_effective_weight(subrecipe)
    if effective_weight == 0:
        return []

    fraction = line.amount_grams / effective_weight
    path = _path | {subrecipe.id}
    resolved = []
    for sub_line in subrecipe.lines:
        for amount in flatten_line(sub_line, max_depth - 1, path):
            resolved.append(amount.scaled(fraction))
    return resolved


def flatten_recipe(recipe: Recipe, max_depth: int = 1) -> list[ResolvedAmount]:
    """Flatten every line of a recipe into base ingredient amounts."""
    path = frozenset({recipe.id})
    resolved = []
    for line in recipe.lines:
        resolved.extend(flatten_line(line, max_depth, path))
    return resolved


def find_cycle(recipe_id: UUID, candidate: Recipe) -> bool:
    """Return True if using ``candidate`` inside ``recipe_id`` creates a cycle."""
    pending = [candidate]
    seen: set[UUID] = set()
    while pending:
        current = pending.pop()
        if current.id == recipe_id:
            return True
        if current.id in seen:
            continue
        seen.add(current.id)
        pending.extend(
            line.recipe for line in current.lines if isinstance(line, SubrecipeLine)
        )
    return False


def subrecipe_amount_for_portions(recipe: Recipe, portions: float) -> float:
    """Return cooked product grams for a number of portions of a sub-recipe."""
    cooked_weight = recipe_effective_weight(recipe)
    return portions * effective_portion_size(cooked_weight, recipe.portion_size)
