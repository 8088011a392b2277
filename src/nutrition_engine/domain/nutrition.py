"""Nutrition domain models."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from uuid import UUID


@dataclass(frozen=True)
class NutrientProfile:
    """Nutrient values per 100 grams of a food."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float = 0.0


@dataclass(frozen=True)
class NutrientSnapshot:
    """Absolute nutrient amounts for a consumed quantity."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float

    @classmethod
    def zero(cls) -> "NutrientSnapshot":
        return cls(0.0, 0.0, 0.0, 0.0, 0.0)

    def plus(self, other: "NutrientSnapshot") -> "NutrientSnapshot":
        """Return the element-wise sum with another snapshot."""
        return NutrientSnapshot(
            calories=self.calories + other.calories,
            protein_g=self.protein_g + other.protein_g,
            carbs_g=self.carbs_g + other.carbs_g,
            fat_g=self.fat_g + other.fat_g,
            fiber_g=self.fiber_g + other.fiber_g,
        )

    def scaled(self, factor: float) -> "NutrientSnapshot":
        return NutrientSnapshot(
            calories=self.calories * factor,
            protein_g=self.protein_g * factor,
            carbs_g=self.carbs_g * factor,
            fat_g=self.fat_g * factor,
            fiber_g=self.fiber_g * factor,
        )


@dataclass(frozen=True)
class RecipeIngredient:
    """A food and gram quantity inside a recipe.

    ``profile`` is ``None`` when the referenced food could not be loaded.
    """

    food_id: UUID
    quantity_grams: float
    profile: NutrientProfile | None
    name: str = ""


@dataclass(frozen=True)
class RecipeComposition:
    """Ordered ingredients of a recipe."""

    ingredients: tuple[RecipeIngredient, ...]

    @property
    def total_weight(self) -> float:
        return sum(ingredient.quantity_grams for ingredient in self.ingredients)


@dataclass(frozen=True)
class IngredientSnapshot:
    """Nutrients contributed by one recipe ingredient to a logged portion.

    ``profile`` is the per-100g profile at logging time and ``grams`` is kept
    unrounded, so a later quantity change can be recomputed exactly.
    """

    food_id: UUID
    name: str
    grams: float
    nutrients: NutrientSnapshot
    profile: NutrientProfile | None = None


@dataclass(frozen=True)
class CatalogFood:
    """Food stored in the catalog."""

    id: UUID
    name: str
    profile: NutrientProfile


@dataclass(frozen=True)
class Recipe:
    """Recipe stored in the catalog."""

    id: UUID
    name: str
    composition: RecipeComposition


@dataclass(frozen=True)
class FoodSource:
    """Diary entry backed by a catalog food."""

    food: CatalogFood


@dataclass(frozen=True)
class RecipeSource:
    """Diary entry backed by a portion of a recipe.

    ``custom_quantities`` maps ingredient food ids to the grams actually
    eaten, replacing the uniform portion scaling.
    """

    recipe: Recipe
    custom_quantities: Mapping[UUID, float] | None = None


@dataclass(frozen=True)
class InlineSource:
    """Diary entry with an ad hoc profile and no catalog record."""

    name: str
    profile: NutrientProfile


EntrySource = FoodSource | RecipeSource | InlineSource


class SourceType(StrEnum):
    """Kind of source a diary snapshot was computed from."""

    FOOD = "food"
    RECIPE = "recipe"
    INLINE = "inline"


@dataclass(frozen=True)
class DiaryNutrientSnapshot:
    """Nutrients of a diary entry, frozen at the time it was logged.

    Food and inline entries keep the per-100g ``base_profile`` they were
    computed from; recipe entries keep the per-ingredient breakdown.
    """

    source_type: SourceType
    quantity_grams: float
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float
    base_profile: NutrientProfile | None = None
    ingredients: tuple[IngredientSnapshot, ...] = field(default_factory=tuple)

    @property
    def nutrients(self) -> NutrientSnapshot:
        return NutrientSnapshot(
            calories=self.calories,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
            fiber_g=self.fiber_g,
        )
