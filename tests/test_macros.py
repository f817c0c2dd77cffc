"""Tests for recipe totals, yields and portion macros."""

import pytest

from macro_planner.domain.macros import MacroTotals, MacroValues
from macro_planner.services.macros import (
    IngredientAmount,
    calculate_ingredient_macros,
    calculate_portion_macros,
    calculate_recipe,
    calculate_recipe_totals,
    effective_cooked_weight,
    effective_portion_size,
    macro_percentage,
    recipe_amounts,
)
from tests.conftest import (
    chicken_bowl,
    make_ingredient,
    make_recipe,
    missing,
    uses,
    uses_recipe,
)


def test_ingredient_macros_scale_per_100g() -> None:
    per_100g = MacroValues(protein=31, carbs=0, fat=3.6, kcal=165, fiber=0)

    macros = calculate_ingredient_macros(per_100g, 250)

    assert macros.protein == pytest.approx(77.5)
    assert macros.kcal == pytest.approx(412.5)
    assert macros.weight == 250


def test_recipe_totals_empty_is_zero() -> None:
    assert calculate_recipe_totals([]) == MacroTotals()


def test_recipe_totals_sum_macros_and_weight() -> None:
    items = [
        IngredientAmount(per_100g=MacroValues(protein=10, kcal=100), grams=50),
        IngredientAmount(per_100g=MacroValues(carbs=20, fiber=4), grams=200),
    ]

    totals = calculate_recipe_totals(items)

    assert totals.protein == pytest.approx(5)
    assert totals.carbs == pytest.approx(40)
    assert totals.fiber == pytest.approx(8)
    assert totals.kcal == pytest.approx(50)
    assert totals.weight == pytest.approx(250)


def test_recipe_totals_order_independent() -> None:
    items = [
        IngredientAmount(per_100g=MacroValues(protein=1.1, kcal=9.3), grams=13.7),
        IngredientAmount(per_100g=MacroValues(protein=7.9, kcal=0.7), grams=211.1),
        IngredientAmount(per_100g=MacroValues(protein=3.3, kcal=51.2), grams=0.9),
    ]

    forward = calculate_recipe_totals(items)
    backward = calculate_recipe_totals(list(reversed(items)))

    assert forward.protein == pytest.approx(backward.protein)
    assert forward.kcal == pytest.approx(backward.kcal)


@pytest.mark.parametrize(
    ("raw", "cooked", "expected"),
    [(350, 300, 300), (350, None, 350), (350, 0, 350), (0, None, 0)],
)
def test_effective_cooked_weight(
    raw: float, cooked: float | None, expected: float
) -> None:
    assert effective_cooked_weight(raw, cooked) == expected


@pytest.mark.parametrize(
    ("cooked", "portion", "expected"),
    [(300, 150, 150), (300, None, 300), (300, 0, 300), (0, None, 0)],
)
def test_effective_portion_size(
    cooked: float, portion: float | None, expected: float
) -> None:
    assert effective_portion_size(cooked, portion) == expected


def test_portion_macros_zero_cooked_weight_is_zero() -> None:
    totals = MacroTotals(protein=10, carbs=10, fat=10, kcal=100, fiber=1, weight=0)

    assert calculate_portion_macros(totals, 0, 0) == MacroValues()


@pytest.mark.parametrize("cooked", [None, 0, 120])
@pytest.mark.parametrize("portion", [None, 0, 60])
def test_empty_recipe_has_zero_portion_macros(
    cooked: float | None, portion: float | None
) -> None:
    recipe = make_recipe("Nothing", [], cooked_weight=cooked, portion_size=portion)

    calculations = calculate_recipe(recipe)

    assert calculations.totals == MacroTotals()
    assert calculations.portion == MacroValues()


def test_chicken_bowl_portion_protein() -> None:
    calculations = calculate_recipe(chicken_bowl())

    assert calculations.totals.weight == pytest.approx(350)
    assert calculations.totals.protein == pytest.approx(51.9)
    assert calculations.cooked_weight == 300
    assert calculations.portion_size == 150
    assert calculations.portions_per_batch == pytest.approx(2)
    assert calculations.portion.protein == pytest.approx(25.95)


def test_no_portion_size_means_whole_dish() -> None:
    oats = make_ingredient("Oats", protein=13, carbs=60, kcal=380)
    recipe = make_recipe("Porridge", [uses(oats, 80)])

    calculations = calculate_recipe(recipe)

    assert calculations.portion_size == 80
    assert calculations.portions_per_batch == 1
    assert calculations.portion.kcal == pytest.approx(304)


def test_subrecipe_line_uses_cooked_product_density() -> None:
    lentils = make_ingredient("Lentils", protein=24, kcal=350)
    dal = make_recipe("Dal", [uses(lentils, 200)], cooked_weight=500)
    bowl = make_recipe("Dal Bowl", [uses_recipe(dal, 250)])

    calculations = calculate_recipe(bowl)

    assert calculations.totals.protein == pytest.approx(24)
    assert calculations.totals.kcal == pytest.approx(350)
    assert calculations.totals.weight == pytest.approx(250)


def test_zero_cooked_weight_subrecipe_adds_no_macros() -> None:
    oil = make_ingredient("Olive oil", fat=100, kcal=884)
    dressing = make_recipe("Dressing", [uses(oil, 30)], cooked_weight=0)
    lettuce = make_ingredient("Lettuce", kcal=15)
    salad = make_recipe("Salad", [uses(lettuce, 100), uses_recipe(dressing, 20)])

    calculations = calculate_recipe(salad)

    assert calculations.totals.kcal == pytest.approx(15)
    assert calculations.totals.fat == 0
    assert calculations.line_macros[1] == MacroTotals()
    assert calculate_recipe(dressing).totals.kcal == pytest.approx(265.2)


def test_unresolved_lines_are_skipped() -> None:
    butter = make_ingredient("Butter", fat=81, kcal=717)
    recipe = make_recipe("Toast", [uses(butter, 10), missing(40)])

    calculations = calculate_recipe(recipe)

    assert len(recipe_amounts(recipe)) == 1
    assert calculations.totals.weight == 10
    assert calculations.line_macros[1] == MacroTotals()


def test_macro_percentage() -> None:
    assert macro_percentage(25, 200) == pytest.approx(12.5)
    assert macro_percentage(25, 0) == 0
