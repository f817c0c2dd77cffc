"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from macro_planner.adapters.supabase_meal_plan_repository import (
    SupabaseMealPlanRepository,
)
from macro_planner.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from macro_planner.config import Settings
from macro_planner.services.meal_plans import MealPlanService
from macro_planner.services.recipes import RecipeService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    recipe_service: RecipeService
    meal_plan_service: MealPlanService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    depth = resolved_settings.max_subrecipe_depth
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    recipe_repository = SupabaseRecipeRepository(
        supabase_client, max_subrecipe_depth=depth
    )
    meal_plan_repository = SupabaseMealPlanRepository(
        supabase_client, max_subrecipe_depth=depth
    )
    recipe_service = RecipeService(recipe_repository, max_subrecipe_depth=depth)
    meal_plan_service = MealPlanService(
        meal_plan_repository, max_subrecipe_depth=depth
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=resolved_settings,
        recipe_service=recipe_service,
        meal_plan_service=meal_plan_service,
        close_resources=close_resources,
    )
