"""Pydantic models for API request payloads."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from nutrition_engine.domain.diary import MealType


class DietCalculationRequest(BaseModel):
    """Protocol-based diet calculation request."""

    diet_model: str
    protocol: int


class RecommendationRequest(BaseModel):
    """Simple goal recommendation request."""

    target_weight: float
    weeks_to_goal: int
    weight: float | None = None


class CreateGoalRequest(BaseModel):
    """Manual goal creation request."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float = 0.0
    start_date: date | None = None
    end_date: date | None = None


class CalculatedGoalRequest(BaseModel):
    """Create a goal from one phase of a diet model calculation."""

    diet_model: str
    protocol: int
    phase: int = 1
    start_date: date | None = None
    phase_duration_days: int | None = None


class InlineFoodRequest(BaseModel):
    """Ad hoc food with nutrients per 100 grams."""

    name: str
    calories: float
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    fiber_g: float = 0.0


class CustomIngredientRequest(BaseModel):
    """Ingredient quantity override for a recipe entry."""

    food_id: UUID
    quantity_grams: float


class DiaryEntryRequest(BaseModel):
    """Diary entry creation request for a food, recipe or inline item."""

    food_id: UUID | None = None
    recipe_id: UUID | None = None
    inline_food: InlineFoodRequest | None = None
    quantity_grams: float = 0.0
    custom_ingredients: list[CustomIngredientRequest] = Field(default_factory=list)
    entry_date: date | None = None
    meal_type: MealType = MealType.SNACK
    notes: str = ""


class UpdateEntryRequest(BaseModel):
    """Diary entry quantity change."""

    quantity_grams: float


class UpdateGoalRequest(BaseModel):
    """Goal edit; targets that are omitted or not positive are left unchanged."""

    calories: float | None = None
    protein_g: float | None = None
    carbs_g: float | None = None
    fat_g: float | None = None
    fiber_g: float | None = None
    end_date: date | None = None
