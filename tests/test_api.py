"""Tests for planner endpoints."""

from uuid import uuid4

from fastapi.testclient import TestClient

from macro_planner.api.app import create_app
from macro_planner.containers import AppContainer
from tests.conftest import (
    InMemoryMealPlanRepository,
    InMemoryRecipeRepository,
    chicken_bowl,
    make_entry,
    make_plan,
)

HEADERS = {"X-Api-Token": "api-token"}


def test_health_endpoint(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_requires_api_token(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get(f"/recipes/{uuid4()}")
    wrong = client.get(f"/recipes/{uuid4()}", headers={"X-Api-Token": "nope"})

    assert response.status_code == 401
    assert wrong.status_code == 401


def test_token_not_required_when_unset(container: AppContainer) -> None:
    container.settings.api_token = " "
    client = TestClient(create_app(container))

    response = client.get(f"/recipes/{uuid4()}")

    assert response.status_code == 404


def test_recipe_endpoint(
    container: AppContainer, recipe_repository: InMemoryRecipeRepository
) -> None:
    recipe = recipe_repository.add(chicken_bowl())
    client = TestClient(create_app(container))

    response = client.get(f"/recipes/{recipe.id}", headers=HEADERS)

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Chicken Bowl"
    assert data["type"] == "recipe"
    assert data["weight"] == 350
    assert data["portions_per_batch"] == 2
    assert round(data["portion"]["protein"], 2) == 25.95
    assert [line["name"] for line in data["lines"]] == ["Chicken breast", "Rice"]
    assert data["lines"][0]["kind"] == "ingredient"


def test_recipe_export_endpoint(
    container: AppContainer, recipe_repository: InMemoryRecipeRepository
) -> None:
    recipe = recipe_repository.add(chicken_bowl())
    client = TestClient(create_app(container))

    response = client.get(f"/recipes/{recipe.id}/export", headers=HEADERS)

    assert response.status_code == 200
    assert response.text.startswith("# Recipe: Chicken Bowl")


def test_missing_recipe_returns_404(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get(f"/recipes/{uuid4()}/export", headers=HEADERS)

    assert response.status_code == 404


def test_meal_plan_endpoints(
    container: AppContainer, meal_plan_repository: InMemoryMealPlanRepository
) -> None:
    plan = meal_plan_repository.add(
        make_plan("Cut", [make_entry(chicken_bowl(), 2, slots=((0, 1), (3, 2)))])
    )
    client = TestClient(create_app(container))

    summary = client.get(f"/meal-plans/{plan.id}/summary", headers=HEADERS)
    inventory = client.get(f"/meal-plans/{plan.id}/inventory", headers=HEADERS)
    grocery = client.get(f"/meal-plans/{plan.id}/grocery", headers=HEADERS)

    assert summary.status_code == 200
    week = summary.json()
    assert week["filled_days"] == 2
    assert week["days"][3]["day_name"] == "Thursday"
    assert week["days"][3]["slots"][0]["portions"] == 2
    assert inventory.json()[0]["remaining_portions"] == -1
    assert inventory.json()[0]["is_over_allocated"] is True
    assert [item["ingredient_name"] for item in grocery.json()] == [
        "Chicken breast",
        "Rice",
    ]
    assert grocery.json()[0]["sources"][0]["recipe_name"] == "Chicken Bowl"


def test_meal_plan_exports(
    container: AppContainer, meal_plan_repository: InMemoryMealPlanRepository
) -> None:
    plan = meal_plan_repository.add(
        make_plan("Cut", [make_entry(chicken_bowl(), 2, slots=((0, 1),))])
    )
    client = TestClient(create_app(container))

    export = client.get(
        f"/meal-plans/{plan.id}/export",
        params={"kcal": 2000, "protein": 150},
        headers=HEADERS,
    )
    grocery = client.get(f"/meal-plans/{plan.id}/grocery/export", headers=HEADERS)

    assert export.status_code == 200
    assert export.text.startswith('# Weekly Meal Plan: "Cut"')
    assert "vs targets: kcal -1746" in export.text
    assert grocery.text == "Chicken breast — 150g\nRice — 200g"


def test_missing_meal_plan_returns_404(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get(f"/meal-plans/{uuid4()}/summary", headers=HEADERS)

    assert response.status_code == 404
