"""Grocery list generation from meal plans."""

import logging
from dataclasses import dataclass, field
from uuid import UUID

from macro_planner.domain.grocery import GroceryItem, GrocerySource
from macro_planner.domain.models import Ingredient, InventoryEntry, MealPlan
from macro_planner.services.macros import calculate_recipe
from macro_planner.services.resolver import flatten_line

_logger = logging.getLogger(__name__)


@dataclass
class _Accumulator:
    ingredient: Ingredient
    total_grams: float = 0.0
    sources: dict[str, float] = field(default_factory=dict)

    def add(self, recipe_name: str, grams: float) -> None:
        self.total_grams += grams
        self.sources[recipe_name] = self.sources.get(recipe_name, 0.0) + grams


def batches_for_inventory(entry: InventoryEntry, max_depth: int = 1) -> float:
    """Return how many as-written batches cover an entry's portion target."""
    if entry.recipe is None:
        return 0.0
    calculations = calculate_recipe(entry.recipe, max_depth)
    if calculations.portion_size == 0:
        return 0.0
    portions_per_batch = calculations.cooked_weight / calculations.portion_size
    if portions_per_batch == 0:
        return 0.0
    return entry.total_portions / portions_per_batch


def generate_grocery_list(plan: MealPlan, max_depth: int = 1) -> list[GroceryItem]:
    """Aggregate ingredient demand across a plan into one sorted list."""
    merged: dict[UUID, _Accumulator] = {}

    for entry in plan.inventory:
        recipe = entry.recipe
        if recipe is None:
            _logger.warning("Skipping inventory entry without recipe: id=%s", entry.id)
            continue
        batches = batches_for_inventory(entry, max_depth)
        if batches == 0:
            continue

        path = frozenset({recipe.id})
        for line in recipe.lines:
            for resolved in flatten_line(line, max_depth, path):
                accumulator = merged.get(resolved.ingredient.id)
                if accumulator is None:
                    accumulator = _Accumulator(ingredient=resolved.ingredient)
                    merged[resolved.ingredient.id] = accumulator
                accumulator.add(recipe.name, resolved.grams * batches)

    items = [
        GroceryItem(
            ingredient=accumulator.ingredient,
            total_grams=accumulator.total_grams,
            sources=[
                GrocerySource(recipe_name=name, grams=grams)
                for name, grams in sorted(
                    accumulator.sources.items(), key=lambda pair: pair[0].casefold()
                )
            ],
        )
        for accumulator in merged.values()
    ]
    return sorted(
        items,
        key=lambda item: (
            item.ingredient.name.casefold(),
            item.ingredient.name,
            str(item.ingredient.id),
        ),
    )
