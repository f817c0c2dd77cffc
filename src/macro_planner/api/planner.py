"""Read-only recipe and meal plan endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.responses import PlainTextResponse

from macro_planner.api.schemas import (
    GroceryItemPayload,
    InventoryStatusPayload,
    RecipePayload,
    WeekPayload,
    grocery_payload,
    recipe_payload,
    week_payload,
)
from macro_planner.config import parse_api_token
from macro_planner.domain.macros import MacroTargets
from macro_planner.services.meal_plans import MealPlanNotFoundError
from macro_planner.services.recipes import RecipeNotFoundError

if TYPE_CHECKING:
    from macro_planner.containers import AppContainer

router = APIRouter(tags=["planner"])


def _get_api_token(request: Request) -> str | None:
    container: AppContainer = request.app.state.container
    return parse_api_token(container.settings.api_token)


async def require_token(
    x_api_token: str | None = Header(default=None),
    api_token: str | None = Depends(_get_api_token),
) -> None:
    """Ensure requests include the API token when one is configured."""
    if api_token is not None and x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/recipes/{recipe_id}", dependencies=[Depends(require_token)])
async def get_recipe(recipe_id: UUID, request: Request) -> RecipePayload:
    """Return a recipe with totals and per-portion macros."""
    try:
        recipe, calculations = _container(request).recipe_service.get_calculations(
            recipe_id
        )
    except RecipeNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    return recipe_payload(recipe, calculations)


@router.get(
    "/recipes/{recipe_id}/export",
    dependencies=[Depends(require_token)],
    response_class=PlainTextResponse,
)
async def export_recipe(recipe_id: UUID, request: Request) -> PlainTextResponse:
    """Return a recipe rendered as markdown."""
    try:
        text = _container(request).recipe_service.export_recipe(recipe_id)
    except RecipeNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    return PlainTextResponse(text)


@router.get("/meal-plans/{plan_id}/summary", dependencies=[Depends(require_token)])
async def plan_summary(plan_id: UUID, request: Request) -> WeekPayload:
    """Return day totals and the weekly average for a plan."""
    try:
        week = _container(request).meal_plan_service.get_week_summary(plan_id)
    except MealPlanNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    return week_payload(week)


@router.get("/meal-plans/{plan_id}/inventory", dependencies=[Depends(require_token)])
async def plan_inventory(
    plan_id: UUID, request: Request
) -> list[InventoryStatusPayload]:
    """Return allocation status for each inventory entry."""
    try:
        statuses = _container(request).meal_plan_service.get_inventory_status(plan_id)
    except MealPlanNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    return [InventoryStatusPayload.model_validate(entry) for entry in statuses]


@router.get("/meal-plans/{plan_id}/grocery", dependencies=[Depends(require_token)])
async def plan_grocery(plan_id: UUID, request: Request) -> list[GroceryItemPayload]:
    """Return the consolidated grocery list for a plan."""
    try:
        items = _container(request).meal_plan_service.get_grocery_list(plan_id)
    except MealPlanNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    return grocery_payload(items)


@router.get(
    "/meal-plans/{plan_id}/export",
    dependencies=[Depends(require_token)],
    response_class=PlainTextResponse,
)
async def export_plan(  # noqa: PLR0913
    plan_id: UUID,
    request: Request,
    kcal: float | None = None,
    protein: float = 0,
    carbs: float = 0,
    fat: float = 0,
    fiber: float = 0,
) -> PlainTextResponse:
    """Return a plan rendered as markdown, optionally against daily targets."""
    targets = None
    if kcal is not None:
        targets = MacroTargets(
            kcal=kcal, protein=protein, carbs=carbs, fat=fat, fiber=fiber
        )
    try:
        text = _container(request).meal_plan_service.export_plan(plan_id, targets)
    except MealPlanNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    return PlainTextResponse(text)


@router.get(
    "/meal-plans/{plan_id}/grocery/export",
    dependencies=[Depends(require_token)],
    response_class=PlainTextResponse,
)
async def export_grocery(plan_id: UUID, request: Request) -> PlainTextResponse:
    """Return a plan's grocery list as plain text."""
    try:
        text = _container(request).meal_plan_service.export_grocery_list(plan_id)
    except MealPlanNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    return PlainTextResponse(text)
