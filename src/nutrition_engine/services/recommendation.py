"""Simple goal recommendation based on Mifflin-St Jeor and activity level."""

from nutrition_engine.domain.errors import ValidationError
from nutrition_engine.domain.goals import GoalRecommendation
from nutrition_engine.domain.profile import AnthropometricProfile, Gender
from nutrition_engine.services.activity import activity_multiplier

KCAL_PER_KG = 7700.0
MAX_DAILY_DEFICIT = 1000.0
MAX_DAILY_SURPLUS = 500.0
FIBER_G_PER_1000_KCAL = 14.0

_PROTEIN_SHARE = 0.30
_CARBS_SHARE = 0.40
_FAT_SHARE = 0.30


def mifflin_st_jeor_bmr(
    weight_kg: float, height_cm: float, age: float, gender: Gender | str
) -> float:
    """Return BMR in kcal/day."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender == Gender.MALE:
        return base + 5
    return base - 161


def compute_recommendation(
    profile: AnthropometricProfile,
    target_weight_kg: float,
    weeks_to_goal: int,
    current_weight_kg: float | None = None,
) -> GoalRecommendation:
    """Recommend daily calories and macros to reach a target weight.

    The daily deficit is capped at 1000 kcal and the surplus at 500 kcal.
    Macros are split 30/40/30 protein/carbs/fat by calories.
    """
    weight = current_weight_kg if current_weight_kg is not None else profile.weight_kg
    if weeks_to_goal <= 0:
        raise ValidationError("weeks_to_goal must be greater than 0")
    if target_weight_kg <= 0:
        raise ValidationError("target weight must be greater than 0")
    if weight <= 0 or profile.height_cm <= 0 or profile.age <= 0:
        raise ValidationError("weight, height and age are required")

    bmr = mifflin_st_jeor_bmr(weight, profile.height_cm, profile.age, profile.gender)
    tdee = bmr * activity_multiplier(profile.activity_level)
    daily_delta = abs(weight - target_weight_kg) * KCAL_PER_KG / weeks_to_goal / 7

    if target_weight_kg < weight:
        calories = tdee - min(daily_delta, MAX_DAILY_DEFICIT)
        message = (
            f"Goal: Lose {weight - target_weight_kg:.1f} kg in {weeks_to_goal} weeks"
        )
    elif target_weight_kg > weight:
        calories = tdee + min(daily_delta, MAX_DAILY_SURPLUS)
        message = (
            f"Goal: Gain {target_weight_kg - weight:.1f} kg in {weeks_to_goal} weeks"
        )
    else:
        calories = tdee
        message = "Goal: Maintain current weight"

    return GoalRecommendation(
        bmr=round(bmr, 2),
        tdee=round(tdee, 2),
        calories=round(calories, 2),
        protein_g=round(calories * _PROTEIN_SHARE / 4, 2),
        carbs_g=round(calories * _CARBS_SHARE / 4, 2),
        fat_g=round(calories * _FAT_SHARE / 9, 2),
        fiber_g=round(FIBER_G_PER_1000_KCAL * calories / 1000, 2),
        message=message,
    )
