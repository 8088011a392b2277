"""Supabase-backed user profile repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutrition_engine.domain.profile import ActivityLevel, AnthropometricProfile, Gender
from nutrition_engine.services.users import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for reading anthropometric data."""

    client: Client

    def get_profile(self, user_id: UUID) -> AnthropometricProfile | None:
        """Return the profile for a user, if present."""
        response = (
            self.client.table("users")
            .select("id, age, gender, height, weight, body_fat, activity_level")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return AnthropometricProfile(
            age=int(row.get("age") or 0),
            height_cm=float(row.get("height") or 0.0),
            weight_kg=float(row.get("weight") or 0.0),
            body_fat_percent=float(row.get("body_fat") or 0.0),
            gender=_parse_gender(row.get("gender")),
            activity_level=_parse_activity(row.get("activity_level")),
        )


def _parse_gender(value: object) -> Gender:
    if str(value).lower() == Gender.MALE:
        return Gender.MALE
    return Gender.FEMALE


def _parse_activity(value: object) -> ActivityLevel:
    try:
        return ActivityLevel(str(value))
    except ValueError:
        return ActivityLevel.MODERATE
