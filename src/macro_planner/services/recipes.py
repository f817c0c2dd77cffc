"""Services for recipe macro calculations and exports."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID, uuid4

from macro_planner.domain.macros import MacroValues
from macro_planner.domain.models import (
    Ingredient,
    IngredientLine,
    Recipe,
    RecipeType,
)
from macro_planner.services.export import format_recipe
from macro_planner.services.macros import RecipeCalculations, calculate_recipe
from macro_planner.services.resolver import find_cycle, subrecipe_amount_for_portions
from macro_planner.services.units import GRAM_UNIT

_logger = logging.getLogger(__name__)


class RecipeNotFoundError(LookupError):
    """Raised when a recipe id does not resolve."""


class CircularReferenceError(ValueError):
    """Raised when a sub-recipe would end up containing its parent."""


class RecipeRepository(Protocol):
    """Persistence interface for recipes."""

    def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        """Return a recipe with its lines and sub-recipes loaded."""

    def create_recipe(self, recipe: Recipe) -> Recipe:
        """Persist a new recipe together with its lines and ingredients."""


@dataclass(frozen=True)
class PremadeLabel:
    """Nutrition label of a packaged product, per serving."""

    name: str
    serving_size: float
    protein: float
    carbs: float
    fat: float
    kcal: float
    fiber: float = 0.0
    servings: float = 1.0


@dataclass
class RecipeService:
    """Application service for recipe calculations."""

    repository: RecipeRepository
    max_subrecipe_depth: int = 1

    def get_recipe(self, recipe_id: UUID) -> Recipe:
        """Load a recipe or raise if it does not exist."""
        recipe = self.repository.get_recipe(recipe_id)
        if recipe is None:
            raise RecipeNotFoundError(str(recipe_id))
        return recipe

    def get_calculations(self, recipe_id: UUID) -> tuple[Recipe, RecipeCalculations]:
        """Return a recipe and its derived totals."""
        recipe = self.get_recipe(recipe_id)
        return recipe, calculate_recipe(recipe, self.max_subrecipe_depth)

    def export_recipe(self, recipe_id: UUID) -> str:
        """Render a recipe as markdown."""
        recipe, calculations = self.get_calculations(recipe_id)
        return format_recipe(recipe, calculations)

    def subrecipe_amount(
        self, recipe_id: UUID, subrecipe_id: UUID, portions: float = 1.0
    ) -> float:
        """Return grams to store for a sub-recipe line, rejecting cycles."""
        subrecipe = self.get_recipe(subrecipe_id)
        if find_cycle(recipe_id, subrecipe):
            raise CircularReferenceError(
                "Adding this sub-recipe would create a circular reference"
            )
        return subrecipe_amount_for_portions(subrecipe, portions)

    def create_premade(self, label: PremadeLabel) -> Recipe:
        """Create a premade product recipe backed by one label ingredient."""
        recipe = build_premade(label)
        created = self.repository.create_recipe(recipe)
        _logger.info("Created premade recipe: id=%s name=%s", created.id, created.name)
        return created


def build_premade(label: PremadeLabel) -> Recipe:
    """Build a premade recipe whose single line carries the label macros."""
    factor = 100 / label.serving_size
    ingredient = Ingredient(
        id=uuid4(),
        name=label.name,
        per_100g=MacroValues(
            protein=label.protein,
            carbs=label.carbs,
            fat=label.fat,
            kcal=label.kcal,
            fiber=label.fiber,
        ).scaled(factor),
        source="label",
        units=[GRAM_UNIT],
    )
    line = IngredientLine(
        id=uuid4(),
        ingredient=ingredient,
        amount_grams=label.serving_size * label.servings,
        sort_order=0,
    )
    return Recipe(
        id=uuid4(),
        name=label.name,
        lines=[line],
        portion_size=label.serving_size,
        type=RecipeType.PREMADE,
    )
