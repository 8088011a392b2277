"""Tests for the goal lifecycle manager."""

from concurrent.futures import ThreadPoolExecutor
from datetime import date, timedelta
from uuid import UUID, uuid4

import pytest

from nutrition_engine.domain.errors import NotFoundError, ValidationError
from nutrition_engine.domain.goals import NutritionGoal
from nutrition_engine.domain.profile import AnthropometricProfile
from nutrition_engine.services.diet_models import default_registry
from nutrition_engine.services.goals import GoalLifecycleManager
from tests.conftest import InMemoryGoalRepository


def _goal(
    user_id: UUID, start: date, end: date | None = None, calories: float = 2000
) -> NutritionGoal:
    return NutritionGoal(
        user_id=user_id,
        calories=calories,
        protein_g=150,
        carbs_g=200,
        fat_g=65,
        fiber_g=28,
        start_date=start,
        end_date=end,
        is_active=False,
    )


def test_create_goal_keeps_single_active(
    goal_manager: GoalLifecycleManager, goal_repository: InMemoryGoalRepository
) -> None:
    user_id = uuid4()

    created = [
        goal_manager.create_goal(_goal(user_id, date(2026, 1, 1), calories=calories))
        for calories in (1800, 2000, 2200)
    ]

    active = [goal for goal in goal_repository.goals.values() if goal.is_active]
    assert len(active) == 1
    assert active[0].id == created[-1].id
    assert goal_manager.get_active_goal(user_id).calories == 2200
    assert len(goal_manager.list_goals(user_id)) == 3


def test_create_goal_does_not_touch_other_users(
    goal_manager: GoalLifecycleManager,
) -> None:
    first, second = uuid4(), uuid4()
    goal_manager.create_goal(_goal(first, date(2026, 1, 1)))
    goal_manager.create_goal(_goal(second, date(2026, 1, 1)))

    assert goal_manager.get_active_goal(first).user_id == first
    assert goal_manager.get_active_goal(second).user_id == second


def test_concurrent_creation_leaves_one_active_goal() -> None:
    repository = InMemoryGoalRepository(write_delay=0.01)
    manager = GoalLifecycleManager(repository)
    user_id = uuid4()

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(
            pool.map(
                lambda calories: manager.create_goal(
                    _goal(user_id, date(2026, 1, 1), calories=calories)
                ),
                range(1500, 1900, 50),
            )
        )

    active = [goal for goal in repository.goals.values() if goal.is_active]
    assert len(repository.goals) == 8
    assert len(active) == 1


def test_get_active_goal_without_goal(goal_manager: GoalLifecycleManager) -> None:
    with pytest.raises(NotFoundError):
        goal_manager.get_active_goal(uuid4())


def test_goal_for_date_bounds_are_inclusive(
    goal_manager: GoalLifecycleManager,
) -> None:
    user_id = uuid4()
    goal = goal_manager.create_goal(
        _goal(user_id, date(2026, 3, 1), end=date(2026, 3, 31))
    )

    assert goal_manager.get_goal_for_date(user_id, date(2026, 3, 1)).id == goal.id
    assert goal_manager.get_goal_for_date(user_id, date(2026, 3, 31)).id == goal.id
    with pytest.raises(NotFoundError):
        goal_manager.get_goal_for_date(user_id, date(2026, 2, 28))
    with pytest.raises(NotFoundError):
        goal_manager.get_goal_for_date(user_id, date(2026, 4, 1))


def test_goal_without_end_date_is_open(goal_manager: GoalLifecycleManager) -> None:
    user_id = uuid4()
    goal = goal_manager.create_goal(_goal(user_id, date(2026, 3, 1)))

    found = goal_manager.get_goal_for_date(user_id, date(2030, 1, 1))

    assert found.id == goal.id


def test_goal_for_date_prefers_active_then_latest_start(
    goal_manager: GoalLifecycleManager,
) -> None:
    user_id = uuid4()
    historical = goal_manager.create_goal(
        _goal(user_id, date(2026, 1, 1), end=date(2026, 1, 31), calories=1800)
    )
    later = goal_manager.create_goal(
        _goal(user_id, date(2026, 1, 15), end=date(2026, 1, 31), calories=1900)
    )
    current = goal_manager.create_goal(
        _goal(user_id, date(2026, 2, 1), calories=2100)
    )

    assert goal_manager.get_goal_for_date(user_id, date(2026, 1, 10)).id == (
        historical.id
    )
    assert goal_manager.get_goal_for_date(user_id, date(2026, 1, 20)).id == later.id
    assert goal_manager.get_goal_for_date(user_id, date(2026, 2, 5)).id == current.id


def test_create_calculated_goal_from_phase(
    goal_manager: GoalLifecycleManager, male_profile: AnthropometricProfile
) -> None:
    user_id = uuid4()
    result = default_registry().calculate("zeroToHero", male_profile, 3)
    start = date(2026, 10, 19)

    goal = goal_manager.create_calculated_goal(user_id, result, 2, start)

    phase = result.phase(2)
    assert phase is not None
    assert goal.is_active
    assert goal.calories == round(phase.calories, 2)
    assert goal.carbs_g == round(phase.carbs_g, 2)
    assert goal.fiber_g == round(14 * phase.calories / 1000, 2)
    assert goal.diet_model_name == "zeroToHero"
    assert goal.protocol_number == 3
    assert goal.phase_number == 2
    assert goal.expiration_date == start + timedelta(days=14)


def test_calculated_goal_duration_can_be_overridden(
    goal_manager: GoalLifecycleManager, male_profile: AnthropometricProfile
) -> None:
    result = default_registry().calculate("zeroToHero", male_profile, 2)

    goal = goal_manager.create_calculated_goal(
        uuid4(), result, 1, date(2026, 1, 1), phase_duration_days=28
    )

    assert goal.expiration_date == date(2026, 1, 29)


def test_calculated_goal_rejects_missing_phase(
    goal_manager: GoalLifecycleManager, male_profile: AnthropometricProfile
) -> None:
    result = default_registry().calculate("zeroToHero", male_profile, 2)

    with pytest.raises(ValidationError):
        goal_manager.create_calculated_goal(uuid4(), result, 2, date(2026, 1, 1))


def test_update_goal_applies_positive_targets(
    goal_manager: GoalLifecycleManager,
) -> None:
    user_id = uuid4()
    goal = goal_manager.create_goal(_goal(user_id, date(2026, 1, 1)))

    updated = goal_manager.update_goal(
        user_id,
        goal.id,
        {"calories": 2300, "protein_g": 0, "end_date": date(2026, 6, 30)},
    )

    assert updated.calories == 2300
    assert updated.protein_g == 150
    assert updated.end_date == date(2026, 6, 30)


def test_update_goal_rejects_end_before_start(
    goal_manager: GoalLifecycleManager,
) -> None:
    user_id = uuid4()
    goal = goal_manager.create_goal(_goal(user_id, date(2026, 1, 10)))

    with pytest.raises(ValidationError):
        goal_manager.update_goal(user_id, goal.id, {"end_date": date(2026, 1, 9)})


def test_update_goal_of_other_user_is_not_found(
    goal_manager: GoalLifecycleManager,
) -> None:
    goal = goal_manager.create_goal(_goal(uuid4(), date(2026, 1, 1)))

    with pytest.raises(NotFoundError):
        goal_manager.update_goal(uuid4(), goal.id, {"calories": 1900})


def test_delete_goal(goal_manager: GoalLifecycleManager) -> None:
    user_id = uuid4()
    goal = goal_manager.create_goal(_goal(user_id, date(2026, 1, 1)))

    goal_manager.delete_goal(user_id, goal.id)

    assert goal_manager.list_goals(user_id) == []
    with pytest.raises(NotFoundError):
        goal_manager.delete_goal(user_id, goal.id)


def test_update_goal_ignores_boolean_targets(
    goal_manager: GoalLifecycleManager,
) -> None:
    user_id = uuid4()
    goal = goal_manager.create_goal(_goal(user_id, date(2026, 1, 1)))

    updated = goal_manager.update_goal(
        user_id, goal.id, {"calories": True, "fat_g": 70}
    )

    assert updated.calories == 2000
    assert updated.fat_g == 70
