"""Day and week rollups of scheduled meal plan slots."""

from collections.abc import Sequence

from macro_planner.domain.macros import MacroValues
from macro_planner.domain.models import InventoryEntry, MealPlan, Recipe
from macro_planner.domain.schedule import (
    DaySummary,
    InventoryStatus,
    SlotMacros,
    WeekSummary,
)
from macro_planner.services.macros import calculate_recipe

DAYS_PER_WEEK = 7


def calculate_slot_macros(portion_macros: MacroValues, portions: float) -> MacroValues:
    """Scale portion macros by the number of portions in a slot."""
    return portion_macros.scaled(portions)


def calculate_day_totals(slot_macros: Sequence[MacroValues]) -> MacroValues:
    """Sum the macros of every slot in a day."""
    total = MacroValues()
    for macros in slot_macros:
        total = total.plus(macros)
    return total


def count_filled_days(day_totals: Sequence[MacroValues]) -> int:
    """Count days that have any calories planned."""
    return sum(1 for day in day_totals if day.kcal > 0)


def calculate_weekly_average(day_totals: Sequence[MacroValues]) -> MacroValues:
    """Average day totals over filled days only."""
    filled = [day for day in day_totals if day.kcal > 0]
    if not filled:
        return MacroValues()
    return calculate_day_totals(filled).scaled(1 / len(filled))


def summarize_week(plan: MealPlan, max_depth: int = 1) -> WeekSummary:
    """Build per-day slot macros, day totals and the weekly average."""
    slots_by_day: list[list[SlotMacros]] = [[] for _ in range(DAYS_PER_WEEK)]
    for entry in plan.inventory:
        if entry.recipe is None:
            continue
        portion = calculate_recipe(entry.recipe, max_depth).portion
        for slot in entry.slots:
            if not 0 <= slot.day_of_week < DAYS_PER_WEEK:
                continue
            slots_by_day[slot.day_of_week].append(
                SlotMacros(
                    recipe_name=entry.recipe.name,
                    day_of_week=slot.day_of_week,
                    slot_index=slot.slot_index,
                    portions=slot.portions,
                    macros=calculate_slot_macros(portion, slot.portions),
                )
            )

    days = [
        DaySummary(
            day_of_week=day,
            slots=slots,
            totals=calculate_day_totals([slot.macros for slot in slots]),
        )
        for day, slots in enumerate(slots_by_day)
    ]
    day_totals = [day.totals for day in days]
    return WeekSummary(
        days=days,
        average=calculate_weekly_average(day_totals),
        filled_days=count_filled_days(day_totals),
    )


def remaining_portions(entry: InventoryEntry) -> float:
    """Return portions not yet allocated to slots; negative when over-allocated."""
    return entry.total_portions - sum(slot.portions for slot in entry.slots)


def default_portions(recipe: Recipe, max_depth: int = 1) -> float:
    """Return one batch's portion count rounded to the nearest half."""
    calculations = calculate_recipe(recipe, max_depth)
    if calculations.portion_size <= 0:
        return 1.0
    return round(calculations.portions_per_batch * 2) / 2


def inventory_status(entry: InventoryEntry, max_depth: int = 1) -> InventoryStatus:
    """Summarize how an inventory entry's portions are allocated."""
    allocated = sum(slot.portions for slot in entry.slots)
    recipe = entry.recipe
    return InventoryStatus(
        inventory_id=entry.id,
        recipe_name=recipe.name if recipe is not None else "Unknown",
        total_portions=entry.total_portions,
        allocated_portions=allocated,
        remaining_portions=remaining_portions(entry),
        default_portions=default_portions(recipe, max_depth) if recipe else 1.0,
    )


def target_delta(actual: float, target: float) -> str:
    """Render the signed difference to a target, empty when within one unit."""
    diff = actual - target
    if abs(diff) < 1:
        return ""
    if diff > 0:
        return f"+{diff:.0f}"
    return f"{diff:.0f}"
