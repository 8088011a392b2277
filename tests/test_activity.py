"""Tests for activity multipliers."""

import pytest

from nutrition_engine.domain.profile import ActivityLevel
from nutrition_engine.services.activity import DEFAULT_MULTIPLIER, activity_multiplier


@pytest.mark.parametrize(
    ("level", "expected"),
    [
        (ActivityLevel.SEDENTARY, 1.2),
        (ActivityLevel.LIGHT, 1.375),
        (ActivityLevel.MODERATE, 1.55),
        (ActivityLevel.ACTIVE, 1.725),
        (ActivityLevel.VERY_ACTIVE, 1.9),
        ("very_active", 1.9),
    ],
)
def test_activity_multiplier(level: ActivityLevel | str, expected: float) -> None:
    assert activity_multiplier(level) == expected


@pytest.mark.parametrize("level", [None, "", "couch"])
def test_unknown_activity_falls_back_to_moderate(level: str | None) -> None:
    assert activity_multiplier(level) == DEFAULT_MULTIPLIER == 1.55
