"""Supabase implementation for recipes and their ingredient graph."""

import logging
from dataclasses import dataclass, field
from uuid import UUID

from supabase import Client

from macro_planner.domain.macros import MacroValues
from macro_planner.domain.models import (
    Ingredient,
    IngredientLine,
    IngredientUnit,
    Recipe,
    RecipeLine,
    RecipeType,
    SubrecipeLine,
    UnresolvedLine,
)
from macro_planner.services.recipes import RecipeRepository

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase-backed repository for recipes."""

    client: Client
    max_subrecipe_depth: int = 1

    def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        """Return a recipe with sub-recipes loaded to the configured depth."""
        recipes = load_recipes(
            self.client, [str(recipe_id)], depth=self.max_subrecipe_depth + 1
        )
        return recipes.get(str(recipe_id))

    def create_recipe(self, recipe: Recipe) -> Recipe:
        """Persist a recipe, its base ingredients and its lines."""
        response = (
            self.client.table("recipes")
            .insert(
                {
                    "id": str(recipe.id),
                    "name": recipe.name,
                    "cooked_weight": recipe.cooked_weight,
                    "portion_size": recipe.portion_size,
                    "instructions": recipe.instructions,
                    "type": recipe.type.value,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create recipe")

        for line in recipe.lines:
            if isinstance(line, IngredientLine):
                self._upsert_ingredient(line.ingredient)
        line_rows = [
            _serialize_line(recipe.id, line)
            for line in recipe.lines
            if not isinstance(line, UnresolvedLine)
        ]
        if line_rows:
            self.client.table("recipe_ingredients").insert(line_rows).execute()
        return recipe

    def _upsert_ingredient(self, ingredient: Ingredient) -> None:
        self.client.table("ingredients").upsert(
            {
                "id": str(ingredient.id),
                "name": ingredient.name,
                "protein": ingredient.per_100g.protein,
                "carbs": ingredient.per_100g.carbs,
                "fat": ingredient.per_100g.fat,
                "kcal": ingredient.per_100g.kcal,
                "fiber": ingredient.per_100g.fiber,
                "density": ingredient.density,
                "source": ingredient.source,
            }
        ).execute()
        if ingredient.units:
            self.client.table("ingredient_units").upsert(
                [
                    {
                        "ingredient_id": str(ingredient.id),
                        "name": unit.name,
                        "grams": unit.grams,
                        "is_default": unit.is_default,
                    }
                    for unit in ingredient.units
                ]
            ).execute()


def load_recipes(
    client: Client, recipe_ids: list[str], depth: int
) -> dict[str, Recipe]:
    """Load recipes keyed by id.

    ``depth`` counts how many levels have their lines loaded. Rows are fetched
    one level at a time, so a sub-recipe shared by several parents is queried
    once. Recipes at depth zero are returned without lines; the engine never
    descends into them. A sub-recipe reference back onto its own path becomes
    an unresolved line.
    """
    graph = _RecipeGraph()
    seen: set[str] = set()
    frontier = sorted(set(recipe_ids))
    depth = max(depth, 0)
    for level in range(depth + 1):
        if not frontier:
            break
        seen.update(frontier)
        response = client.table("recipes").select("*").in_("id", frontier).execute()
        fetched = [str(row["id"]) for row in response.data or []]
        graph.recipes.update({str(row["id"]): row for row in response.data or []})
        if level == depth or not fetched:
            break

        lines_response = (
            client.table("recipe_ingredients")
            .select("*")
            .in_("recipe_id", fetched)
            .order("sort_order", desc=False)
            .execute()
        )
        level_rows = lines_response.data or []
        for recipe_id in fetched:
            graph.lines[recipe_id] = []
        for row in level_rows:
            graph.lines.setdefault(str(row["recipe_id"]), []).append(row)
        frontier = sorted(
            {str(row["subrecipe_id"]) for row in level_rows if row.get("subrecipe_id")}
            - seen
        )

    ingredient_ids = {
        str(row["ingredient_id"])
        for rows in graph.lines.values()
        for row in rows
        if row.get("ingredient_id")
    }
    graph.ingredients = _load_ingredients(client, sorted(ingredient_ids))
    return {
        recipe_id: graph.build(recipe_id, depth, frozenset())
        for recipe_id in dict.fromkeys(recipe_ids)
        if recipe_id in graph.recipes
    }


@dataclass
class _RecipeGraph:
    """Fetched rows of a recipe graph, assembled into records on demand."""

    recipes: dict[str, dict[str, object]] = field(default_factory=dict)
    lines: dict[str, list[dict[str, object]]] = field(default_factory=dict)
    ingredients: dict[str, Ingredient] = field(default_factory=dict)

    def build(self, recipe_id: str, depth: int, path: frozenset[str]) -> Recipe:
        row = self.recipes[recipe_id]
        if depth <= 0:
            return _parse_recipe(row, [])
        recipe_path = path | {recipe_id}
        own_rows = sorted(
            self.lines.get(recipe_id, []),
            key=lambda line: int(line.get("sort_order") or 0),
        )
        sub_ids = {
            str(line["subrecipe_id"]) for line in own_rows if line.get("subrecipe_id")
        }
        subrecipes = {
            sub_id: self.build(sub_id, depth - 1, recipe_path)
            for sub_id in sorted(sub_ids)
            if sub_id not in recipe_path and sub_id in self.recipes
        }
        lines = [
            _parse_line(line, self.ingredients, subrecipes, recipe_path)
            for line in own_rows
        ]
        return _parse_recipe(row, lines)


def _load_ingredients(
    client: Client, ingredient_ids: list[str]
) -> dict[str, Ingredient]:
    if not ingredient_ids:
        return {}
    response = (
        client.table("ingredients").select("*").in_("id", ingredient_ids).execute()
    )
    units_response = (
        client.table("ingredient_units")
        .select("*")
        .in_("ingredient_id", ingredient_ids)
        .execute()
    )
    units_by_ingredient: dict[str, list[IngredientUnit]] = {}
    for row in units_response.data or []:
        units_by_ingredient.setdefault(str(row["ingredient_id"]), []).append(
            IngredientUnit(
                name=str(row.get("name", "")),
                grams=float(row.get("grams", 0.0)),
                is_default=bool(row.get("is_default", False)),
            )
        )
    return {
        str(row["id"]): _parse_ingredient(
            row, units_by_ingredient.get(str(row["id"]), [])
        )
        for row in response.data or []
    }


def _parse_ingredient(
    row: dict[str, object], units: list[IngredientUnit]
) -> Ingredient:
    density = row.get("density")
    return Ingredient(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        per_100g=MacroValues(
            protein=float(row.get("protein") or 0.0),
            carbs=float(row.get("carbs") or 0.0),
            fat=float(row.get("fat") or 0.0),
            kcal=float(row.get("kcal") or 0.0),
            fiber=float(row.get("fiber") or 0.0),
        ),
        density=float(density) if density is not None else None,
        source=str(row.get("source") or "manual"),
        units=units,
    )


def _parse_recipe(row: dict[str, object], lines: list[RecipeLine]) -> Recipe:
    cooked_weight = row.get("cooked_weight")
    portion_size = row.get("portion_size")
    return Recipe(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        lines=lines,
        cooked_weight=float(cooked_weight) if cooked_weight is not None else None,
        portion_size=float(portion_size) if portion_size is not None else None,
        instructions=row.get("instructions"),
        type=RecipeType(row.get("type") or RecipeType.RECIPE.value),
    )


def _parse_line(
    row: dict[str, object],
    ingredients: dict[str, Ingredient],
    subrecipes: dict[str, Recipe],
    path: frozenset[str],
) -> RecipeLine:
    """Parse a recipe line row into the matching line variant."""
    ingredient_id = row.get("ingredient_id")
    subrecipe_id = row.get("subrecipe_id")
    display_amount = row.get("display_amount")
    common = {
        "id": UUID(str(row["id"])),
        "amount_grams": float(row.get("amount_grams") or 0.0),
        "sort_order": int(row.get("sort_order") or 0),
        "display_unit": row.get("display_unit"),
        "display_amount": float(display_amount) if display_amount is not None else None,
        "preparation": row.get("preparation"),
    }

    if bool(ingredient_id) == bool(subrecipe_id):
        _logger.warning(
            "Recipe line must reference exactly one ingredient or sub-recipe: %s",
            row.get("id"),
        )
        return UnresolvedLine(reference_id=None, **common)

    if ingredient_id:
        ingredient = ingredients.get(str(ingredient_id))
        if ingredient is not None:
            return IngredientLine(ingredient=ingredient, **common)
        _logger.warning("Recipe line references missing ingredient: %s", ingredient_id)
        return UnresolvedLine(reference_id=UUID(str(ingredient_id)), **common)

    subrecipe = subrecipes.get(str(subrecipe_id))
    if subrecipe is not None:
        return SubrecipeLine(recipe=subrecipe, **common)
    if str(subrecipe_id) in path:
        _logger.warning("Recipe line forms a sub-recipe cycle: %s", subrecipe_id)
    else:
        _logger.warning("Recipe line references missing sub-recipe: %s", subrecipe_id)
    return UnresolvedLine(reference_id=UUID(str(subrecipe_id)), **common)


def _serialize_line(
    recipe_id: UUID, line: IngredientLine | SubrecipeLine
) -> dict[str, object]:
    ingredient_id = None
    subrecipe_id = None
    if isinstance(line, IngredientLine):
        ingredient_id = str(line.ingredient.id)
    else:
        subrecipe_id = str(line.recipe.id)
    return {
        "id": str(line.id),
        "recipe_id": str(recipe_id),
        "ingredient_id": ingredient_id,
        "subrecipe_id": subrecipe_id,
        "amount_grams": line.amount_grams,
        "sort_order": line.sort_order,
        "display_unit": line.display_unit,
        "display_amount": line.display_amount,
        "preparation": line.preparation,
    }
