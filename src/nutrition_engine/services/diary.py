"""Diary logging service."""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import date
from typing import Protocol
from uuid import UUID

from nutrition_engine.domain.diary import Adherence, DailySummary, DiaryEntry, MealType
from nutrition_engine.domain.errors import NotFoundError
from nutrition_engine.domain.goals import NutritionGoal
from nutrition_engine.domain.nutrition import (
    DiaryNutrientSnapshot,
    NutrientProfile,
    NutrientSnapshot,
)
from nutrition_engine.services.aggregator import NutritionAggregator, rescale_snapshot
from nutrition_engine.services.goals import GoalLifecycleManager
from nutrition_engine.services.portions import round_snapshot


class DiaryRepository(Protocol):
    """Persistence interface for diary entries."""

    def create_entry(  # noqa: PLR0913
        self,
        user_id: UUID,
        entry_date: date,
        meal_type: MealType,
        name: str,
        snapshot: DiaryNutrientSnapshot,
        food_id: UUID | None,
        recipe_id: UUID | None,
        notes: str,
    ) -> DiaryEntry:
        """Create a diary entry and return it."""

    def get_entry(self, user_id: UUID, entry_id: UUID) -> DiaryEntry | None:
        """Return a diary entry by id."""

    def list_entries(self, user_id: UUID, day: date) -> list[DiaryEntry]:
        """Return a user's entries for a day."""

    def update_entry(self, entry: DiaryEntry) -> DiaryEntry:
        """Persist the quantity, snapshot, meal type and notes of an entry."""


@dataclass
class DiaryService:
    """Logs entries with nutrients frozen at write time."""

    aggregator: NutritionAggregator
    goal_manager: GoalLifecycleManager
    repository: DiaryRepository

    def log_food(  # noqa: PLR0913
        self,
        user_id: UUID,
        food_id: UUID,
        quantity_grams: float,
        entry_date: date,
        meal_type: MealType,
        notes: str = "",
    ) -> DiaryEntry:
        food, snapshot = self.aggregator.food_snapshot(food_id, quantity_grams)
        return self.repository.create_entry(
            user_id=user_id,
            entry_date=entry_date,
            meal_type=meal_type,
            name=food.name,
            snapshot=snapshot,
            food_id=food.id,
            recipe_id=None,
            notes=notes,
        )

    def log_recipe(  # noqa: PLR0913
        self,
        user_id: UUID,
        recipe_id: UUID,
        quantity_grams: float,
        entry_date: date,
        meal_type: MealType,
        custom_quantities: Mapping[UUID, float] | None = None,
        notes: str = "",
    ) -> DiaryEntry:
        recipe, snapshot = self.aggregator.recipe_snapshot(
            recipe_id, quantity_grams, custom_quantities
        )
        return self.repository.create_entry(
            user_id=user_id,
            entry_date=entry_date,
            meal_type=meal_type,
            name=recipe.name,
            snapshot=snapshot,
            food_id=None,
            recipe_id=recipe.id,
            notes=notes,
        )

    def log_inline(  # noqa: PLR0913
        self,
        user_id: UUID,
        name: str,
        profile: NutrientProfile,
        quantity_grams: float,
        entry_date: date,
        meal_type: MealType,
        notes: str = "",
    ) -> DiaryEntry:
        snapshot = self.aggregator.inline_snapshot(name, profile, quantity_grams)
        return self.repository.create_entry(
            user_id=user_id,
            entry_date=entry_date,
            meal_type=meal_type,
            name=name,
            snapshot=snapshot,
            food_id=None,
            recipe_id=None,
            notes=notes,
        )

    def update_entry_quantity(
        self, user_id: UUID, entry_id: UUID, quantity_grams: float
    ) -> DiaryEntry:
        """Rescale an entry from its stored snapshot, not the live catalog."""
        entry = self.repository.get_entry(user_id, entry_id)
        if entry is None:
            raise NotFoundError(f"diary entry {entry_id} not found")
        snapshot = rescale_snapshot(entry.snapshot, quantity_grams)
        return self.repository.update_entry(replace(entry, snapshot=snapshot))

    def daily_summary(self, user_id: UUID, day: date) -> DailySummary:
        """Return the day's totals and adherence to the goal in effect."""
        entries = self.repository.list_entries(user_id, day)
        totals = NutrientSnapshot.zero()
        for entry in entries:
            totals = totals.plus(entry.snapshot.nutrients)
        try:
            goal = self.goal_manager.get_goal_for_date(user_id, day)
        except NotFoundError:
            goal = None
        return DailySummary(
            day=day,
            totals=round_snapshot(totals),
            goal=goal,
            adherence=_adherence(totals, goal),
            entries=entries,
        )


def _adherence(totals: NutrientSnapshot, goal: NutritionGoal | None) -> Adherence:
    if goal is None:
        return Adherence(0.0, 0.0, 0.0, 0.0, 0.0)
    return Adherence(
        calories=_percent(totals.calories, goal.calories),
        protein_g=_percent(totals.protein_g, goal.protein_g),
        carbs_g=_percent(totals.carbs_g, goal.carbs_g),
        fat_g=_percent(totals.fat_g, goal.fat_g),
        fiber_g=_percent(totals.fiber_g, goal.fiber_g),
    )


def _percent(actual: float, target: float) -> float:
    if target == 0:
        return 0.0
    return round(actual / target * 100, 2)
