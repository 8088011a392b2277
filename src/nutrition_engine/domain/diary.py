"""Domain models for diary logging."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from uuid import UUID

from nutrition_engine.domain.goals import NutritionGoal
from nutrition_engine.domain.nutrition import DiaryNutrientSnapshot, NutrientSnapshot


class MealType(StrEnum):
    """Meal slot a diary entry belongs to."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class DiaryEntry:
    """Logged diary entry with its denormalized nutrients."""

    id: UUID
    user_id: UUID
    entry_date: date
    meal_type: MealType
    name: str
    snapshot: DiaryNutrientSnapshot
    food_id: UUID | None = None
    recipe_id: UUID | None = None
    notes: str = ""


@dataclass(frozen=True)
class Adherence:
    """Percentage of each goal target reached."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float


@dataclass(frozen=True)
class DailySummary:
    """Totals for a day compared against the goal in effect."""

    day: date
    totals: NutrientSnapshot
    goal: NutritionGoal | None
    adherence: Adherence
    entries: list[DiaryEntry]
