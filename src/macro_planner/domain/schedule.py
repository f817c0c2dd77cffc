"""Domain models for meal plan schedule rollups."""

from dataclasses import dataclass
from uuid import UUID

from macro_planner.domain.macros import MacroValues


@dataclass(frozen=True)
class SlotMacros:
    """Macros for one scheduled slot."""

    recipe_name: str
    day_of_week: int
    slot_index: int
    portions: float
    macros: MacroValues


@dataclass(frozen=True)
class DaySummary:
    """Slots and totals for a single weekday."""

    day_of_week: int
    slots: list[SlotMacros]
    totals: MacroValues


@dataclass(frozen=True)
class WeekSummary:
    """Seven day summaries with the average over filled days."""

    days: list[DaySummary]
    average: MacroValues
    filled_days: int


@dataclass(frozen=True)
class InventoryStatus:
    """Allocation status of an inventory entry."""

    inventory_id: UUID
    recipe_name: str
    total_portions: float
    allocated_portions: float
    remaining_portions: float
    default_portions: float

    @property
    def is_over_allocated(self) -> bool:
        """Whether slots use more portions than the entry provides."""
        return self.remaining_portions < 0
