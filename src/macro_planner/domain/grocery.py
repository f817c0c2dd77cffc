"""Domain models for grocery lists."""

from dataclasses import dataclass

from macro_planner.domain.models import Ingredient


@dataclass(frozen=True)
class GrocerySource:
    """Grams of an ingredient contributed by one recipe."""

    recipe_name: str
    grams: float


@dataclass(frozen=True)
class GroceryItem:
    """Consolidated shopping list entry for one base ingredient."""

    ingredient: Ingredient
    total_grams: float
    sources: list[GrocerySource]
