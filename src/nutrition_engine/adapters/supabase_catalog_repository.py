"""Supabase repository for catalog foods and recipes."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutrition_engine.domain.nutrition import (
    CatalogFood,
    NutrientProfile,
    Recipe,
    RecipeComposition,
    RecipeIngredient,
)
from nutrition_engine.services.aggregator import CatalogRepository

_FOOD_COLUMNS = "id, name, calories, protein, carbs, fat, fiber"


@dataclass
class SupabaseCatalogRepository(CatalogRepository):
    """Supabase implementation for reading foods and recipes."""

    client: Client

    def get_food(self, food_id: UUID) -> CatalogFood | None:
        """Return a food by id."""
        response = (
            self.client.table("foods")
            .select(_FOOD_COLUMNS)
            .eq("id", str(food_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        """Return a recipe with each ingredient's food profile attached.

        Ingredients whose food row is gone keep ``profile=None`` so the
        portion calculation can fail loudly.
        """
        response = (
            self.client.table("recipes")
            .select("id, name")
            .eq("id", str(recipe_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        recipe_row = response.data[0]
        ingredient_rows = (
            self.client.table("recipe_ingredients")
            .select("food_id, quantity_grams, position")
            .eq("recipe_id", str(recipe_id))
            .order("position", desc=False)
            .execute()
        ).data or []
        foods = self._get_foods([str(row["food_id"]) for row in ingredient_rows])
        ingredients = []
        for row in ingredient_rows:
            food = foods.get(str(row["food_id"]))
            ingredients.append(
                RecipeIngredient(
                    food_id=UUID(str(row["food_id"])),
                    quantity_grams=float(row.get("quantity_grams") or 0.0),
                    profile=food.profile if food else None,
                    name=food.name if food else "",
                )
            )
        return Recipe(
            id=UUID(str(recipe_row["id"])),
            name=str(recipe_row.get("name", "")),
            composition=RecipeComposition(tuple(ingredients)),
        )

    def _get_foods(self, food_ids: list[str]) -> dict[str, CatalogFood]:
        if not food_ids:
            return {}
        response = (
            self.client.table("foods")
            .select(_FOOD_COLUMNS)
            .in_("id", food_ids)
            .execute()
        )
        return {str(row["id"]): _parse_food(row) for row in response.data or []}


def _parse_food(row: dict[str, object]) -> CatalogFood:
    return CatalogFood(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        profile=NutrientProfile(
            calories=float(row.get("calories") or 0.0),
            protein_g=float(row.get("protein") or 0.0),
            carbs_g=float(row.get("carbs") or 0.0),
            fat_g=float(row.get("fat") or 0.0),
            fiber_g=float(row.get("fiber") or 0.0),
        ),
    )
