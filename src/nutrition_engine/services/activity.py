"""Activity level to TDEE multiplier mapping."""

from nutrition_engine.domain.profile import ActivityLevel

_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}

DEFAULT_MULTIPLIER = _MULTIPLIERS[ActivityLevel.MODERATE]


def activity_multiplier(level: ActivityLevel | str | None) -> float:
    """Return the BMR multiplier for an activity level.

    Unknown or missing levels fall back to the moderate multiplier.
    """
    if level is None:
        return DEFAULT_MULTIPLIER
    try:
        return _MULTIPLIERS[ActivityLevel(level)]
    except ValueError:
        return DEFAULT_MULTIPLIER
