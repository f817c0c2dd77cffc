"""Pydantic response models for the planner API."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from macro_planner.domain.grocery import GroceryItem
from macro_planner.domain.models import (
    IngredientLine,
    Recipe,
    RecipeLine,
    SubrecipeLine,
)
from macro_planner.domain.schedule import WeekSummary
from macro_planner.services.export import DAY_NAMES
from macro_planner.services.macros import RecipeCalculations
from macro_planner.services.units import all_units


class Macros(BaseModel):
    """Macro amounts in grams and kcal."""

    model_config = ConfigDict(from_attributes=True)

    protein: float
    carbs: float
    fat: float
    kcal: float
    fiber: float


class Unit(BaseModel):
    """Unit available for an ingredient line."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    grams: float
    is_default: bool = False


class RecipeLinePayload(BaseModel):
    """One recipe line with its macros."""

    id: UUID
    kind: str
    name: str
    amount_grams: float
    display_unit: str | None = None
    display_amount: float | None = None
    preparation: str | None = None
    macros: Macros
    units: list[Unit] = []


class RecipePayload(BaseModel):
    """Recipe with totals, yields and per-portion macros."""

    id: UUID
    name: str
    type: str
    cooked_weight: float
    portion_size: float
    portions_per_batch: float
    weight: float
    totals: Macros
    portion: Macros
    lines: list[RecipeLinePayload]


class SlotPayload(BaseModel):
    """Macros for a scheduled slot."""

    model_config = ConfigDict(from_attributes=True)

    recipe_name: str
    slot_index: int
    portions: float
    macros: Macros


class DayPayload(BaseModel):
    """Slots and totals for one weekday."""

    day_of_week: int
    day_name: str
    slots: list[SlotPayload]
    totals: Macros


class WeekPayload(BaseModel):
    """Week rollup."""

    days: list[DayPayload]
    average: Macros
    filled_days: int


class InventoryStatusPayload(BaseModel):
    """Allocation status of an inventory entry."""

    model_config = ConfigDict(from_attributes=True)

    inventory_id: UUID
    recipe_name: str
    total_portions: float
    allocated_portions: float
    remaining_portions: float
    default_portions: float
    is_over_allocated: bool


class GrocerySourcePayload(BaseModel):
    """Grams contributed by one recipe."""

    model_config = ConfigDict(from_attributes=True)

    recipe_name: str
    grams: float


class GroceryItemPayload(BaseModel):
    """Grocery list entry."""

    ingredient_id: UUID
    ingredient_name: str
    total_grams: float
    sources: list[GrocerySourcePayload]


def recipe_payload(recipe: Recipe, calculations: RecipeCalculations) -> RecipePayload:
    """Build the recipe response from domain objects."""
    return RecipePayload(
        id=recipe.id,
        name=recipe.name,
        type=recipe.type.value,
        cooked_weight=calculations.cooked_weight,
        portion_size=calculations.portion_size,
        portions_per_batch=calculations.portions_per_batch,
        weight=calculations.totals.weight,
        totals=Macros.model_validate(calculations.totals),
        portion=Macros.model_validate(calculations.portion),
        lines=[
            _line_payload(line, macros)
            for line, macros in zip(recipe.lines, calculations.line_macros, strict=True)
        ],
    )


def _line_payload(line: RecipeLine, macros: object) -> RecipeLinePayload:
    if isinstance(line, IngredientLine):
        kind = "ingredient"
        name = line.ingredient.name
        units = [Unit.model_validate(unit) for unit in all_units(line.ingredient)]
    elif isinstance(line, SubrecipeLine):
        kind = "subrecipe"
        name = line.recipe.name
        units = []
    else:
        kind = "unresolved"
        name = "Unknown"
        units = []
    return RecipeLinePayload(
        id=line.id,
        kind=kind,
        name=name,
        amount_grams=line.amount_grams,
        display_unit=line.display_unit,
        display_amount=line.display_amount,
        preparation=line.preparation,
        macros=Macros.model_validate(macros),
        units=units,
    )


def week_payload(week: WeekSummary) -> WeekPayload:
    """Build the week response from a summary."""
    return WeekPayload(
        days=[
            DayPayload(
                day_of_week=day.day_of_week,
                day_name=DAY_NAMES[day.day_of_week],
                slots=[SlotPayload.model_validate(slot) for slot in day.slots],
                totals=Macros.model_validate(day.totals),
            )
            for day in week.days
        ],
        average=Macros.model_validate(week.average),
        filled_days=week.filled_days,
    )


def grocery_payload(items: list[GroceryItem]) -> list[GroceryItemPayload]:
    """Build grocery list entries."""
    return [
        GroceryItemPayload(
            ingredient_id=item.ingredient.id,
            ingredient_name=item.ingredient.name,
            total_grams=item.total_grams,
            sources=[
                GrocerySourcePayload.model_validate(source) for source in item.sources
            ],
        )
        for item in items
    ]
