"""Services for meal plan rollups, grocery lists and exports."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from macro_planner.domain.grocery import GroceryItem
from macro_planner.domain.macros import MacroTargets
from macro_planner.domain.models import MealPlan
from macro_planner.domain.schedule import InventoryStatus, WeekSummary
from macro_planner.services.export import format_grocery_list, format_meal_plan
from macro_planner.services.grocery import generate_grocery_list
from macro_planner.services.schedule import inventory_status, summarize_week


class MealPlanNotFoundError(LookupError):
    """Raised when a meal plan id does not resolve."""


class MealPlanRepository(Protocol):
    """Persistence interface for meal plans."""

    def get_meal_plan(self, plan_id: UUID) -> MealPlan | None:
        """Return a plan with inventory, slots and recipes loaded."""


@dataclass
class MealPlanService:
    """Application service for meal plan computations."""

    repository: MealPlanRepository
    max_subrecipe_depth: int = 1

    def get_meal_plan(self, plan_id: UUID) -> MealPlan:
        """Load a plan or raise if it does not exist."""
        plan = self.repository.get_meal_plan(plan_id)
        if plan is None:
            raise MealPlanNotFoundError(str(plan_id))
        return plan

    def get_week_summary(self, plan_id: UUID) -> WeekSummary:
        """Return day totals and the weekly average for a plan."""
        return summarize_week(self.get_meal_plan(plan_id), self.max_subrecipe_depth)

    def get_inventory_status(self, plan_id: UUID) -> list[InventoryStatus]:
        """Return allocation status for each inventory entry."""
        plan = self.get_meal_plan(plan_id)
        return [
            inventory_status(entry, self.max_subrecipe_depth)
            for entry in plan.inventory
        ]

    def get_grocery_list(self, plan_id: UUID) -> list[GroceryItem]:
        """Return the consolidated grocery list for a plan."""
        return generate_grocery_list(
            self.get_meal_plan(plan_id), self.max_subrecipe_depth
        )

    def export_plan(self, plan_id: UUID, targets: MacroTargets | None = None) -> str:
        """Render a plan's week as markdown."""
        plan = self.get_meal_plan(plan_id)
        week = summarize_week(plan, self.max_subrecipe_depth)
        return format_meal_plan(plan.name, week, targets)

    def export_grocery_list(self, plan_id: UUID) -> str:
        """Render a plan's grocery list as plain text."""
        return format_grocery_list(self.get_grocery_list(plan_id))
