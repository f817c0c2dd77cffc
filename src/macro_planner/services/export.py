"""Plain-text exports of recipes, meal plans and grocery lists."""

from macro_planner.domain.grocery import GroceryItem
from macro_planner.domain.macros import MacroTargets, MacroTotals, MacroValues
from macro_planner.domain.models import (
    Recipe,
    RecipeLine,
    SubrecipeLine,
    UnresolvedLine,
)
from macro_planner.domain.schedule import WeekSummary
from macro_planner.services.macros import RecipeCalculations
from macro_planner.services.schedule import target_delta
from macro_planner.services.units import format_ingredient_amount

DAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

_KILOGRAM = 1000


def format_macros(macros: MacroValues | MacroTotals) -> str:
    """Format macros as a single summary line."""
    return (
        f"{macros.kcal:.0f} kcal | P {macros.protein:.0f}g | C {macros.carbs:.0f}g"
        f" | F {macros.fat:.0f}g | Fiber {macros.fiber:.0f}g"
    )


def _portion_label(portions: float) -> str:
    if portions == 1:
        return "1 portion"
    return f"{portions:g} portions"


def format_meal_plan(
    name: str, week: WeekSummary, targets: MacroTargets | None = None
) -> str:
    """Format a week summary as markdown."""
    lines = [f'# Weekly Meal Plan: "{name}"']
    if week.filled_days > 0:
        lines.append(
            f"Weekly average ({week.filled_days} days): {format_macros(week.average)}"
        )
        if targets is not None and targets.kcal > 0:
            lines.append(_format_target_deltas(week.average, targets))

    for day in week.days:
        lines.append("")
        lines.append(f"## {DAY_NAMES[day.day_of_week]}")
        if not day.slots:
            lines.append("(no meals planned)")
            continue
        for slot in day.slots:
            lines.append(
                f"- {slot.recipe_name} ({_portion_label(slot.portions)}):"
                f" {format_macros(slot.macros)}"
            )
        lines.append(f"Day total: {format_macros(day.totals)}")

    return "\n".join(lines).rstrip()


def _format_target_deltas(average: MacroValues, targets: MacroTargets) -> str:
    parts = []
    for label, actual, target in (
        ("kcal", average.kcal, targets.kcal),
        ("P", average.protein, targets.protein),
        ("C", average.carbs, targets.carbs),
        ("F", average.fat, targets.fat),
        ("Fiber", average.fiber, targets.fiber),
    ):
        delta = target_delta(actual, target)
        parts.append(f"{label} {delta or 'on target'}")
    return "vs targets: " + " | ".join(parts)


def format_grams(grams: float) -> str:
    """Format a weight, switching to kilograms from 1000 g."""
    if grams >= _KILOGRAM:
        return f"{grams / _KILOGRAM:.1f}kg"
    return f"{round(grams)}g"


def format_grocery_list(items: list[GroceryItem]) -> str:
    """Format a grocery list as plain text lines."""
    if not items:
        return "No ingredients in this meal plan."
    return "\n".join(
        f"{item.ingredient.name} — {format_grams(item.total_grams)}" for item in items
    )


def _line_name(line: RecipeLine) -> str:
    if isinstance(line, SubrecipeLine):
        return line.recipe.name
    if isinstance(line, UnresolvedLine):
        return "Unknown"
    return line.ingredient.name


def _format_recipe_line(line: RecipeLine) -> str:
    if isinstance(line, SubrecipeLine):
        amount = _portion_label(line.display_amount or 1)
    elif line.display_unit and line.display_amount:
        amount = format_ingredient_amount(line.display_amount, line.display_unit)
    else:
        amount = f"{round(line.amount_grams)}g"
    prep = f" ({line.preparation})" if line.preparation else ""
    return f"- {amount} {_line_name(line)}{prep}"


def format_recipe(recipe: Recipe, calculations: RecipeCalculations) -> str:
    """Format a recipe with its per-portion and total macros as markdown."""
    lines = [f"# Recipe: {recipe.name}"]

    portions = (
        round(calculations.cooked_weight / calculations.portion_size)
        if calculations.portion_size > 0
        else 0
    )
    if portions > 1:
        lines.append(
            f"Portion size: {round(calculations.portion_size)}g"
            f" (cooked weight: {round(calculations.cooked_weight)}g,"
            f" {portions} portions)"
        )
    elif recipe.cooked_weight:
        lines.append(f"Cooked weight: {round(calculations.cooked_weight)}g")

    if recipe.lines:
        lines.append("")
        lines.append("## Ingredients")
        lines.extend(_format_recipe_line(line) for line in recipe.lines)

    lines.append("")
    lines.append("## Per Portion")
    lines.append(format_macros(calculations.portion))

    lines.append("")
    lines.append("## Totals (full recipe)")
    lines.append(format_macros(calculations.totals))

    instructions = (recipe.instructions or "").strip()
    if instructions:
        lines.append("")
        lines.append("## Method")
        lines.append(instructions)

    return "\n".join(lines).rstrip()
