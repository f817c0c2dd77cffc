"""Supabase repository for meal plans."""

import logging
from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from macro_planner.adapters.supabase_recipe_repository import load_recipes
from macro_planner.domain.models import InventoryEntry, MealPlan, Recipe, Slot
from macro_planner.services.meal_plans import MealPlanRepository

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseMealPlanRepository(MealPlanRepository):
    """Supabase implementation for meal plan reads."""

    client: Client
    max_subrecipe_depth: int = 1

    def get_meal_plan(self, plan_id: UUID) -> MealPlan | None:
        """Return a plan with inventory, slots and recipes loaded."""
        response = (
            self.client.table("meal_plans")
            .select("id, name")
            .eq("id", str(plan_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        plan_row = response.data[0]

        inventory_response = (
            self.client.table("meal_plan_inventory")
            .select("*")
            .eq("meal_plan_id", str(plan_id))
            .execute()
        )
        inventory_rows = inventory_response.data or []
        inventory_ids = [str(row["id"]) for row in inventory_rows]

        slot_rows: list[dict[str, object]] = []
        if inventory_ids:
            slots_response = (
                self.client.table("meal_plan_slots")
                .select("*")
                .in_("inventory_id", inventory_ids)
                .order("day_of_week", desc=False)
                .order("slot_index", desc=False)
                .execute()
            )
            slot_rows = slots_response.data or []

        recipe_ids = sorted({str(row["recipe_id"]) for row in inventory_rows})
        recipes = load_recipes(
            self.client, recipe_ids, depth=self.max_subrecipe_depth + 1
        )

        return MealPlan(
            id=UUID(str(plan_row["id"])),
            name=str(plan_row.get("name", "")),
            inventory=[
                _parse_inventory(row, recipes, slot_rows) for row in inventory_rows
            ],
        )


def _parse_inventory(
    row: dict[str, object],
    recipes: dict[str, Recipe],
    slot_rows: list[dict[str, object]],
) -> InventoryEntry:
    inventory_id = str(row["id"])
    recipe = recipes.get(str(row["recipe_id"]))
    if recipe is None:
        _logger.warning(
            "Inventory entry references missing recipe: inventory=%s recipe=%s",
            inventory_id,
            row["recipe_id"],
        )
    return InventoryEntry(
        id=UUID(inventory_id),
        recipe=recipe,
        total_portions=float(row.get("total_portions", 0.0)),
        slots=[
            _parse_slot(slot)
            for slot in slot_rows
            if str(slot["inventory_id"]) == inventory_id
        ],
    )


def _parse_slot(row: dict[str, object]) -> Slot:
    portions = row.get("portions")
    return Slot(
        id=UUID(str(row["id"])),
        day_of_week=int(row.get("day_of_week", 0)),
        slot_index=int(row.get("slot_index", 0)),
        portions=float(portions) if portions is not None else 1.0,
    )
