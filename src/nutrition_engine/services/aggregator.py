"""Nutrient snapshots for diary entries."""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from nutrition_engine.domain.errors import InvalidQuantityError, NotFoundError
from nutrition_engine.domain.nutrition import (
    CatalogFood,
    DiaryNutrientSnapshot,
    EntrySource,
    FoodSource,
    IngredientSnapshot,
    InlineSource,
    NutrientProfile,
    NutrientSnapshot,
    Recipe,
    RecipeSource,
    SourceType,
)
from nutrition_engine.services.portions import (
    round_snapshot,
    scale_custom_ingredients,
    scale_food,
    scale_recipe_portion,
)


class CatalogRepository(Protocol):
    """Read-only access to catalog foods and recipes."""

    def get_food(self, food_id: UUID) -> CatalogFood | None:
        """Return a food with its per-100g profile."""

    def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        """Return a recipe with its ingredients resolved to profiles."""


def compute_entry_snapshot(
    source: EntrySource, quantity_grams: float
) -> DiaryNutrientSnapshot:
    """Compute the nutrients of a diary entry without persisting anything.

    For a recipe with custom ingredient quantities, ``quantity_grams`` may be
    0 and the snapshot records the sum of the ingredient grams instead.
    """
    if isinstance(source, FoodSource):
        return _profile_snapshot(SourceType.FOOD, source.food.profile, quantity_grams)
    if isinstance(source, InlineSource):
        return _profile_snapshot(SourceType.INLINE, source.profile, quantity_grams)
    if isinstance(source, RecipeSource):
        composition = source.recipe.composition
        if source.custom_quantities:
            if quantity_grams < 0:
                raise InvalidQuantityError(quantity_grams)
            total, breakdown = scale_custom_ingredients(
                composition, source.custom_quantities
            )
            quantity_grams = sum(item.grams for item in breakdown)
        else:
            total, breakdown = scale_recipe_portion(
                composition, quantity_grams, recipe_id=source.recipe.id
            )
        return _snapshot(
            SourceType.RECIPE,
            quantity_grams,
            total,
            ingredients=tuple(_round_ingredient(item) for item in breakdown),
        )
    raise TypeError(f"Unsupported entry source: {type(source).__name__}")


@dataclass
class NutritionAggregator:
    """Resolves catalog references and computes entry snapshots."""

    catalog: CatalogRepository

    def food_snapshot(
        self, food_id: UUID, quantity_grams: float
    ) -> tuple[CatalogFood, DiaryNutrientSnapshot]:
        food = self.catalog.get_food(food_id)
        if food is None:
            raise NotFoundError(f"food {food_id} not found")
        return food, compute_entry_snapshot(FoodSource(food), quantity_grams)

    def recipe_snapshot(
        self,
        recipe_id: UUID,
        quantity_grams: float,
        custom_quantities: Mapping[UUID, float] | None = None,
    ) -> tuple[Recipe, DiaryNutrientSnapshot]:
        recipe = self.catalog.get_recipe(recipe_id)
        if recipe is None:
            raise NotFoundError(f"recipe {recipe_id} not found")
        snapshot = compute_entry_snapshot(
            RecipeSource(recipe, custom_quantities), quantity_grams
        )
        return recipe, snapshot

    def inline_snapshot(
        self, name: str, profile: NutrientProfile, quantity_grams: float
    ) -> DiaryNutrientSnapshot:
        return compute_entry_snapshot(InlineSource(name, profile), quantity_grams)


def _profile_snapshot(
    source_type: SourceType, profile: NutrientProfile, quantity_grams: float
) -> DiaryNutrientSnapshot:
    return _snapshot(
        source_type,
        quantity_grams,
        scale_food(profile, quantity_grams),
        base_profile=profile,
    )


def _snapshot(
    source_type: SourceType,
    quantity_grams: float,
    nutrients: NutrientSnapshot,
    base_profile: NutrientProfile | None = None,
    ingredients: tuple[IngredientSnapshot, ...] = (),
) -> DiaryNutrientSnapshot:
    rounded = round_snapshot(nutrients)
    return DiaryNutrientSnapshot(
        source_type=source_type,
        quantity_grams=quantity_grams,
        calories=rounded.calories,
        protein_g=rounded.protein_g,
        carbs_g=rounded.carbs_g,
        fat_g=rounded.fat_g,
        fiber_g=rounded.fiber_g,
        base_profile=base_profile,
        ingredients=ingredients,
    )


def _round_ingredient(item: IngredientSnapshot) -> IngredientSnapshot:
    return replace(item, nutrients=round_snapshot(item.nutrients))


def rescale_snapshot(
    snapshot: DiaryNutrientSnapshot, quantity_grams: float
) -> DiaryNutrientSnapshot:
    """Recompute a stored snapshot for a new quantity.

    Only the data frozen in the snapshot is used, so later catalog edits
    never leak into an existing entry. Ingredients that carry their
    per-100g profile are recomputed from it; older ingredient rows without
    one fall back to scaling their stored nutrients.
    """
    if snapshot.base_profile is not None:
        return _profile_snapshot(
            snapshot.source_type, snapshot.base_profile, quantity_grams
        )
    if quantity_grams <= 0:
        raise InvalidQuantityError(quantity_grams)
    factor = quantity_grams / snapshot.quantity_grams
    if not snapshot.ingredients:
        return _snapshot(
            snapshot.source_type, quantity_grams, snapshot.nutrients.scaled(factor)
        )
    total = NutrientSnapshot.zero()
    breakdown = []
    for item in snapshot.ingredients:
        grams = item.grams * factor
        if item.profile is not None:
            nutrients = scale_food(item.profile, grams)
        else:
            nutrients = item.nutrients.scaled(factor)
        breakdown.append(replace(item, grams=grams, nutrients=nutrients))
        total = total.plus(nutrients)
    return _snapshot(
        snapshot.source_type,
        quantity_grams,
        total,
        ingredients=tuple(_round_ingredient(item) for item in breakdown),
    )
