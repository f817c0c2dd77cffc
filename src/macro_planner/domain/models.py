"""Domain models for ingredients, recipes and meal plans."""

from dataclasses import dataclass, field
from enum import Enum
from uuid import UUID

from macro_planner.domain.macros import MacroValues


class RecipeType(str, Enum):
    """Distinguishes composable recipes from packaged products."""

    RECIPE = "recipe"
    PREMADE = "premade"


@dataclass(frozen=True)
class IngredientUnit:
    """Named alternate unit for an ingredient with a fixed gram factor."""

    name: str
    grams: float
    is_default: bool = False


@dataclass(frozen=True)
class Ingredient:
    """Base food item with macros per 100 g raw."""

    id: UUID
    name: str
    per_100g: MacroValues
    density: float | None = None
    source: str = "manual"
    units: list[IngredientUnit] = field(default_factory=list)


@dataclass(frozen=True)
class IngredientLine:
    """Recipe line that references a base ingredient in raw grams."""

    id: UUID
    ingredient: Ingredient
    amount_grams: float
    sort_order: int = 0
    display_unit: str | None = None
    display_amount: float | None = None
    preparation: str | None = None


@dataclass(frozen=True)
class SubrecipeLine:
    """Recipe line that uses another recipe, measured in cooked product grams."""

    id: UUID
    recipe: "Recipe"
    amount_grams: float
    sort_order: int = 0
    display_unit: str | None = None
    display_amount: float | None = None
    preparation: str | None = None


@dataclass(frozen=True)
class UnresolvedLine:
    """Recipe line whose ingredient or sub-recipe could not be loaded."""

    id: UUID
    reference_id: UUID | None
    amount_grams: float
    sort_order: int = 0
    display_unit: str | None = None
    display_amount: float | None = None
    preparation: str | None = None


RecipeLine = IngredientLine | SubrecipeLine | UnresolvedLine


@dataclass(frozen=True)
class Recipe:
    """Named composition of ingredient and sub-recipe lines."""

    id: UUID
    name: str
    lines: list[RecipeLine] = field(default_factory=list)
    cooked_weight: float | None = None
    portion_size: float | None = None
    instructions: str | None = None
    type: RecipeType = RecipeType.RECIPE


@dataclass(frozen=True)
class Slot:
    """Scheduled consumption of an inventory recipe on a weekday."""

    id: UUID
    day_of_week: int
    slot_index: int = 0
    portions: float = 1.0


@dataclass(frozen=True)
class InventoryEntry:
    """Recipe pooled into a meal plan with a portion target."""

    id: UUID
    recipe: Recipe | None
    total_portions: float
    slots: list[Slot] = field(default_factory=list)


@dataclass(frozen=True)
class MealPlan:
    """Weekly meal plan container."""

    id: UUID
    name: str
    inventory: list[InventoryEntry] = field(default_factory=list)
