"""Anthropometric profile models."""

from dataclasses import dataclass
from enum import StrEnum


class Gender(StrEnum):
    """Biological sex used by the BMR equations."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(StrEnum):
    """Typical weekly activity used to scale BMR into TDEE."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


@dataclass(frozen=True)
class AnthropometricProfile:
    """Body measurements for a user.

    Values are stored as given; diet models decide which fields they
    require and reject out-of-range input in ``validate_user``.
    """

    age: int
    height_cm: float
    weight_kg: float
    body_fat_percent: float
    gender: Gender
    activity_level: ActivityLevel = ActivityLevel.MODERATE

    @property
    def lean_mass_kg(self) -> float:
        """Body weight minus estimated fat mass."""
        return self.weight_kg * (1 - self.body_fat_percent / 100)
