"""Supabase repository for diary entries."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from nutrition_engine.domain.diary import DiaryEntry, MealType
from nutrition_engine.domain.nutrition import (
    DiaryNutrientSnapshot,
    IngredientSnapshot,
    NutrientProfile,
    NutrientSnapshot,
    SourceType,
)
from nutrition_engine.services.diary import DiaryRepository

_ENTRY_COLUMNS = (
    "id, user_id, entry_date, meal_type, name, food_id, recipe_id, notes, "
    "source_type, quantity_grams, calories, protein_g, carbs_g, fat_g, fiber_g, "
    "nutrition_snapshot"
)


@dataclass
class SupabaseDiaryRepository(DiaryRepository):
    """Supabase implementation for diary entries."""

    client: Client

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
        """Create a diary entry row and return it."""
        payload = {
            "user_id": str(user_id),
            "entry_date": entry_date.isoformat(),
            "meal_type": str(meal_type),
            "name": name,
            "food_id": str(food_id) if food_id else None,
            "recipe_id": str(recipe_id) if recipe_id else None,
            "notes": notes,
            **_snapshot_columns(snapshot),
        }
        response = self.client.table("diary_entries").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create diary entry")
        return _parse_entry(response.data[0])

    def get_entry(self, user_id: UUID, entry_id: UUID) -> DiaryEntry | None:
        response = (
            self.client.table("diary_entries")
            .select(_ENTRY_COLUMNS)
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def list_entries(self, user_id: UUID, day: date) -> list[DiaryEntry]:
        response = (
            self.client.table("diary_entries")
            .select(_ENTRY_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("entry_date", day.isoformat())
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def update_entry(self, entry: DiaryEntry) -> DiaryEntry:
        response = (
            self.client.table("diary_entries")
            .update(
                {
                    "meal_type": str(entry.meal_type),
                    "notes": entry.notes,
                    **_snapshot_columns(entry.snapshot),
                }
            )
            .eq("id", str(entry.id))
            .eq("user_id", str(entry.user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update diary entry")
        return _parse_entry(response.data[0])


def _snapshot_columns(snapshot: DiaryNutrientSnapshot) -> dict[str, object]:
    return {
        "source_type": str(snapshot.source_type),
        "quantity_grams": snapshot.quantity_grams,
        "calories": snapshot.calories,
        "protein_g": snapshot.protein_g,
        "carbs_g": snapshot.carbs_g,
        "fat_g": snapshot.fat_g,
        "fiber_g": snapshot.fiber_g,
        "nutrition_snapshot": {
            "base_profile": _profile_json(snapshot.base_profile),
            "ingredients": [
                {
                    "food_id": str(item.food_id),
                    "name": item.name,
                    "grams": item.grams,
                    "calories": item.nutrients.calories,
                    "protein_g": item.nutrients.protein_g,
                    "carbs_g": item.nutrients.carbs_g,
                    "fat_g": item.nutrients.fat_g,
                    "fiber_g": item.nutrients.fiber_g,
                    "profile": _profile_json(item.profile),
                }
                for item in snapshot.ingredients
            ],
        },
    }


def _profile_json(profile: NutrientProfile | None) -> dict[str, float] | None:
    if profile is None:
        return None
    return {
        "calories": profile.calories,
        "protein_g": profile.protein_g,
        "carbs_g": profile.carbs_g,
        "fat_g": profile.fat_g,
        "fiber_g": profile.fiber_g,
    }


def _parse_profile(value: object) -> NutrientProfile | None:
    if not isinstance(value, dict):
        return None
    return NutrientProfile(
        calories=float(value.get("calories", 0.0)),
        protein_g=float(value.get("protein_g", 0.0)),
        carbs_g=float(value.get("carbs_g", 0.0)),
        fat_g=float(value.get("fat_g", 0.0)),
        fiber_g=float(value.get("fiber_g", 0.0)),
    )


def _parse_entry(row: dict[str, object]) -> DiaryEntry:
    stored = row.get("nutrition_snapshot") or {}
    snapshot = DiaryNutrientSnapshot(
        source_type=SourceType(str(row.get("source_type"))),
        quantity_grams=float(row.get("quantity_grams") or 0.0),
        calories=float(row.get("calories") or 0.0),
        protein_g=float(row.get("protein_g") or 0.0),
        carbs_g=float(row.get("carbs_g") or 0.0),
        fat_g=float(row.get("fat_g") or 0.0),
        fiber_g=float(row.get("fiber_g") or 0.0),
        base_profile=_parse_profile(stored.get("base_profile")),
        ingredients=tuple(
            IngredientSnapshot(
                food_id=UUID(str(item["food_id"])),
                name=str(item.get("name", "")),
                grams=float(item.get("grams", 0.0)),
                nutrients=NutrientSnapshot(
                    calories=float(item.get("calories", 0.0)),
                    protein_g=float(item.get("protein_g", 0.0)),
                    carbs_g=float(item.get("carbs_g", 0.0)),
                    fat_g=float(item.get("fat_g", 0.0)),
                    fiber_g=float(item.get("fiber_g", 0.0)),
                ),
                profile=_parse_profile(item.get("profile")),
            )
            for item in stored.get("ingredients") or []
        ),
    )
    return DiaryEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        entry_date=date.fromisoformat(str(row["entry_date"])[:10]),
        meal_type=MealType(str(row.get("meal_type") or MealType.SNACK)),
        name=str(row.get("name", "")),
        snapshot=snapshot,
        food_id=UUID(str(row["food_id"])) if row.get("food_id") else None,
        recipe_id=UUID(str(row["recipe_id"])) if row.get("recipe_id") else None,
        notes=str(row.get("notes") or ""),
    )
