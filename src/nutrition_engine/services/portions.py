"""Gram-based nutrient scaling for foods and recipes.

Values are never rounded here. Callers round once with ``round_snapshot``
when a result is stored or returned, so repeated scaling does not compound
rounding error.
"""

from collections.abc import Iterable, Mapping
from uuid import UUID

from nutrition_engine.domain.errors import (
    EmptyRecipeError,
    InvalidQuantityError,
    MissingIngredientError,
)
from nutrition_engine.domain.nutrition import (
    IngredientSnapshot,
    NutrientProfile,
    NutrientSnapshot,
    RecipeComposition,
    RecipeIngredient,
)

_BASIS_GRAMS = 100.0


def scale_food(profile: NutrientProfile, quantity_grams: float) -> NutrientSnapshot:
    """Return the nutrients in ``quantity_grams`` of a per-100g profile."""
    if quantity_grams <= 0:
        raise InvalidQuantityError(quantity_grams)
    factor = quantity_grams / _BASIS_GRAMS
    return NutrientSnapshot(
        calories=profile.calories * factor,
        protein_g=profile.protein_g * factor,
        carbs_g=profile.carbs_g * factor,
        fat_g=profile.fat_g * factor,
        fiber_g=profile.fiber_g * factor,
    )


def scale_recipe_portion(
    composition: RecipeComposition,
    consumed_grams: float,
    recipe_id: UUID | None = None,
) -> tuple[NutrientSnapshot, list[IngredientSnapshot]]:
    """Return nutrients for ``consumed_grams`` of a recipe.

    Every ingredient is scaled by ``consumed_grams / total_weight``. The
    aggregate is the sum of the ingredient snapshots.
    """
    total_weight = composition.total_weight
    if total_weight <= 0:
        raise EmptyRecipeError(recipe_id)
    if consumed_grams <= 0:
        raise InvalidQuantityError(consumed_grams)
    portion = consumed_grams / total_weight
    return _scale_ingredients(
        (ingredient, ingredient.quantity_grams * portion)
        for ingredient in composition.ingredients
    )


def scale_custom_ingredients(
    composition: RecipeComposition, overrides: Mapping[UUID, float]
) -> tuple[NutrientSnapshot, list[IngredientSnapshot]]:
    """Return nutrients for a recipe where some ingredient grams were changed.

    Ingredients without an override keep their listed quantity.
    """
    known = {ingredient.food_id for ingredient in composition.ingredients}
    for food_id, grams in overrides.items():
        if food_id not in known:
            raise MissingIngredientError(food_id)
        if grams <= 0:
            raise InvalidQuantityError(grams)
    return _scale_ingredients(
        (ingredient, overrides.get(ingredient.food_id, ingredient.quantity_grams))
        for ingredient in composition.ingredients
    )


def round_snapshot(snapshot: NutrientSnapshot, places: int = 2) -> NutrientSnapshot:
    """Round every nutrient for storage or display."""
    return NutrientSnapshot(
        calories=round(snapshot.calories, places),
        protein_g=round(snapshot.protein_g, places),
        carbs_g=round(snapshot.carbs_g, places),
        fat_g=round(snapshot.fat_g, places),
        fiber_g=round(snapshot.fiber_g, places),
    )


def _scale_ingredients(
    pairs: Iterable[tuple[RecipeIngredient, float]],
) -> tuple[NutrientSnapshot, list[IngredientSnapshot]]:
    total = NutrientSnapshot.zero()
    breakdown: list[IngredientSnapshot] = []
    for ingredient, grams in pairs:
        if ingredient.profile is None:
            raise MissingIngredientError(ingredient.food_id)
        nutrients = scale_food(ingredient.profile, grams)
        breakdown.append(
            IngredientSnapshot(
                food_id=ingredient.food_id,
                name=ingredient.name,
                grams=grams,
                nutrients=nutrients,
                profile=ingredient.profile,
            )
        )
        total = total.plus(nutrients)
    return total, breakdown
