"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from nutrition_engine.adapters.supabase_catalog_repository import (
    SupabaseCatalogRepository,
)
from nutrition_engine.adapters.supabase_diary_repository import (
    SupabaseDiaryRepository,
)
from nutrition_engine.adapters.supabase_goal_repository import SupabaseGoalRepository
from nutrition_engine.adapters.supabase_user_repository import (
    SupabaseProfileRepository,
)
from nutrition_engine.config import Settings
from nutrition_engine.services.aggregator import NutritionAggregator
from nutrition_engine.services.diary import DiaryService
from nutrition_engine.services.diet_models import DietModelRegistry, default_registry
from nutrition_engine.services.goals import GoalLifecycleManager
from nutrition_engine.services.users import ProfileService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    diet_registry: DietModelRegistry
    goal_manager: GoalLifecycleManager
    aggregator: NutritionAggregator
    diary_service: DiaryService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_service = ProfileService(SupabaseProfileRepository(supabase_client))
    goal_manager = GoalLifecycleManager(
        SupabaseGoalRepository(supabase_client),
        phase_duration_days=resolved_settings.calculated_goal_phase_days,
    )
    aggregator = NutritionAggregator(SupabaseCatalogRepository(supabase_client))
    diary_service = DiaryService(
        aggregator=aggregator,
        goal_manager=goal_manager,
        repository=SupabaseDiaryRepository(supabase_client),
    )
    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        diet_registry=default_registry(resolved_settings.negative_carbs_policy),
        goal_manager=goal_manager,
        aggregator=aggregator,
        diary_service=diary_service,
    )
