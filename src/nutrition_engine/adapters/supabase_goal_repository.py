"""Supabase repository for nutrition goals."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from nutrition_engine.domain.goals import NutritionGoal
from nutrition_engine.services.goals import GoalRepository

_GOAL_COLUMNS = (
    "id, user_id, calories, protein_g, carbs_g, fat_g, fiber_g, start_date, "
    "end_date, is_active, diet_model, protocol, phase, expiration_date"
)


@dataclass
class SupabaseGoalRepository(GoalRepository):
    """Supabase implementation for nutrition goals.

    Creation goes through the ``create_nutrition_goal`` database function,
    which deactivates and inserts inside one transaction while holding an
    advisory lock on the user id.
    """

    client: Client

    def create_active_goal(self, goal: NutritionGoal) -> NutritionGoal:
        """Deactivate current goals and insert ``goal`` in one transaction."""
        response = self.client.rpc(
            "create_nutrition_goal",
            {
                "p_user_id": str(goal.user_id),
                "p_calories": goal.calories,
                "p_protein_g": goal.protein_g,
                "p_carbs_g": goal.carbs_g,
                "p_fat_g": goal.fat_g,
                "p_fiber_g": goal.fiber_g,
                "p_start_date": goal.start_date.isoformat(),
                "p_end_date": _iso(goal.end_date),
                "p_diet_model": goal.diet_model_name,
                "p_protocol": goal.protocol_number,
                "p_phase": goal.phase_number,
                "p_expiration_date": _iso(goal.expiration_date),
            },
        ).execute()
        data = response.data
        if isinstance(data, list):
            data = data[0] if data else None
        if not data:
            raise RuntimeError("Failed to create nutrition goal")
        return _parse_goal(data)

    def get_active_goal(self, user_id: UUID) -> NutritionGoal | None:
        response = (
            self.client.table("nutrition_goals")
            .select(_GOAL_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("is_active", True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_goal(response.data[0])

    def get_goal(self, user_id: UUID, goal_id: UUID) -> NutritionGoal | None:
        response = (
            self.client.table("nutrition_goals")
            .select(_GOAL_COLUMNS)
            .eq("id", str(goal_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_goal(response.data[0])

    def list_goals(self, user_id: UUID) -> list[NutritionGoal]:
        response = (
            self.client.table("nutrition_goals")
            .select(_GOAL_COLUMNS)
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_goal(row) for row in response.data or []]

    def list_goals_for_date(self, user_id: UUID, day: date) -> list[NutritionGoal]:
        """Return goals starting on or before ``day``.

        The open-ended ``end_date`` check is applied in Python because it
        needs an OR across a null test.
        """
        response = (
            self.client.table("nutrition_goals")
            .select(_GOAL_COLUMNS)
            .eq("user_id", str(user_id))
            .lte("start_date", day.isoformat())
            .order("start_date", desc=True)
            .execute()
        )
        goals = [_parse_goal(row) for row in response.data or []]
        return [goal for goal in goals if goal.covers(day)]

    def update_goal(self, goal: NutritionGoal) -> NutritionGoal:
        response = (
            self.client.table("nutrition_goals")
            .update(
                {
                    "calories": goal.calories,
                    "protein_g": goal.protein_g,
                    "carbs_g": goal.carbs_g,
                    "fat_g": goal.fat_g,
                    "fiber_g": goal.fiber_g,
                    "end_date": _iso(goal.end_date),
                }
            )
            .eq("id", str(goal.id))
            .eq("user_id", str(goal.user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update nutrition goal")
        return _parse_goal(response.data[0])

    def delete_goal(self, user_id: UUID, goal_id: UUID) -> bool:
        response = (
            self.client.table("nutrition_goals")
            .delete()
            .eq("id", str(goal_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)


def _iso(value: date | None) -> str | None:
    return value.isoformat() if value else None


def _parse_date(value: object) -> date | None:
    if not value:
        return None
    return date.fromisoformat(str(value)[:10])


def _parse_goal(row: dict[str, object]) -> NutritionGoal:
    return NutritionGoal(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        calories=float(row.get("calories") or 0.0),
        protein_g=float(row.get("protein_g") or 0.0),
        carbs_g=float(row.get("carbs_g") or 0.0),
        fat_g=float(row.get("fat_g") or 0.0),
        fiber_g=float(row.get("fiber_g") or 0.0),
        start_date=_parse_date(row["start_date"]),
        end_date=_parse_date(row.get("end_date")),
        is_active=bool(row.get("is_active")),
        diet_model_name=row.get("diet_model"),
        protocol_number=row.get("protocol"),
        phase_number=row.get("phase"),
        expiration_date=_parse_date(row.get("expiration_date")),
    )
