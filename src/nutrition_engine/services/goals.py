"""Nutrition goal lifecycle with a single active goal per user."""

import logging
from dataclasses import dataclass, replace
from datetime import date, timedelta
from typing import Protocol
from uuid import UUID

from nutrition_engine.domain.errors import NotFoundError, ValidationError
from nutrition_engine.domain.goals import DietResult, NutritionGoal
from nutrition_engine.services.recommendation import FIBER_G_PER_1000_KCAL

_logger = logging.getLogger(__name__)

_UPDATABLE_TARGETS = ("calories", "protein_g", "carbs_g", "fat_g", "fiber_g")


class GoalRepository(Protocol):
    """Persistence interface for nutrition goals."""

    def create_active_goal(self, goal: NutritionGoal) -> NutritionGoal:
        """Deactivate the user's active goals and insert ``goal`` atomically.

        Implementations must serialise concurrent calls for the same user so
        that exactly one goal stays active.
        """

    def get_active_goal(self, user_id: UUID) -> NutritionGoal | None:
        """Return the user's active goal, if any."""

    def get_goal(self, user_id: UUID, goal_id: UUID) -> NutritionGoal | None:
        """Return a goal by id for a user."""

    def list_goals(self, user_id: UUID) -> list[NutritionGoal]:
        """Return all goals for a user, newest first."""

    def list_goals_for_date(self, user_id: UUID, day: date) -> list[NutritionGoal]:
        """Return goals whose date range contains ``day``."""

    def update_goal(self, goal: NutritionGoal) -> NutritionGoal:
        """Persist changes to targets and end date."""

    def delete_goal(self, user_id: UUID, goal_id: UUID) -> bool:
        """Delete a goal, returning False when nothing matched."""


@dataclass
class GoalLifecycleManager:
    """Creates, reads and edits goals while keeping one goal active."""

    repository: GoalRepository
    phase_duration_days: int = 14

    def create_goal(self, goal: NutritionGoal) -> NutritionGoal:
        """Store ``goal`` as the user's only active goal."""
        created = self.repository.create_active_goal(replace(goal, is_active=True))
        _logger.info(
            "Created goal: user_id=%s goal_id=%s model=%s",
            created.user_id,
            created.id,
            created.diet_model_name or "manual",
        )
        return created

    def create_calculated_goal(
        self,
        user_id: UUID,
        result: DietResult,
        phase_number: int,
        start_date: date,
        phase_duration_days: int | None = None,
    ) -> NutritionGoal:
        """Create an active goal from one phase of a diet model result."""
        phase = result.phase(phase_number)
        if phase is None:
            raise ValidationError(
                f"phase {phase_number} does not exist in protocol {result.protocol}"
            )
        duration = phase_duration_days or self.phase_duration_days
        goal = NutritionGoal(
            user_id=user_id,
            calories=round(phase.calories, 2),
            protein_g=round(phase.protein_g, 2),
            carbs_g=round(phase.carbs_g, 2),
            fat_g=round(phase.fat_g, 2),
            fiber_g=round(FIBER_G_PER_1000_KCAL * phase.calories / 1000, 2),
            start_date=start_date,
            diet_model_name=result.model_name,
            protocol_number=result.protocol,
            phase_number=phase_number,
            expiration_date=start_date + timedelta(days=duration),
        )
        return self.create_goal(goal)

    def get_active_goal(self, user_id: UUID) -> NutritionGoal:
        goal = self.repository.get_active_goal(user_id)
        if goal is None:
            raise NotFoundError("no active goal found")
        return goal

    def get_goal_for_date(self, user_id: UUID, day: date) -> NutritionGoal:
        """Return the goal in effect on ``day``.

        Both ends of a goal's range are inclusive and a missing end date is
        open. When several goals match, the active one wins, then the one
        that started last.
        """
        candidates = [
            goal
            for goal in self.repository.list_goals_for_date(user_id, day)
            if goal.covers(day)
        ]
        if not candidates:
            raise NotFoundError(f"no goal found for {day.isoformat()}")
        return max(candidates, key=lambda goal: (goal.is_active, goal.start_date))

    def list_goals(self, user_id: UUID) -> list[NutritionGoal]:
        return self.repository.list_goals(user_id)

    def update_goal(
        self, user_id: UUID, goal_id: UUID, changes: dict[str, object]
    ) -> NutritionGoal:
        """Apply positive target values and an end date to a goal."""
        goal = self.repository.get_goal(user_id, goal_id)
        if goal is None:
            raise NotFoundError(f"goal {goal_id} not found")
        updates: dict[str, object] = {}
        for key in _UPDATABLE_TARGETS:
            value = changes.get(key)
            if isinstance(value, bool) or not isinstance(value, int | float):
                continue
            if value > 0:
                updates[key] = float(value)
        end_date = changes.get("end_date")
        if isinstance(end_date, date):
            if end_date < goal.start_date:
                raise ValidationError("end_date must not be before start_date")
            updates["end_date"] = end_date
        return self.repository.update_goal(replace(goal, **updates))

    def delete_goal(self, user_id: UUID, goal_id: UUID) -> None:
        if not self.repository.delete_goal(user_id, goal_id):
            raise NotFoundError(f"goal {goal_id} not found")
