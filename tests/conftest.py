"""Shared test fixtures."""

import threading
import time
from dataclasses import dataclass, field, replace
from datetime import date
from uuid import UUID, uuid4

import pytest

from nutrition_engine.config import Settings
from nutrition_engine.containers import AppContainer
from nutrition_engine.domain.diary import DiaryEntry, MealType
from nutrition_engine.domain.goals import NutritionGoal
from nutrition_engine.domain.nutrition import (
    CatalogFood,
    DiaryNutrientSnapshot,
    NutrientProfile,
    Recipe,
    RecipeComposition,
    RecipeIngredient,
)
from nutrition_engine.domain.profile import (
    ActivityLevel,
    AnthropometricProfile,
    Gender,
)
from nutrition_engine.services.aggregator import CatalogRepository, NutritionAggregator
from nutrition_engine.services.diary import DiaryRepository, DiaryService
from nutrition_engine.services.diet_models import default_registry
from nutrition_engine.services.goals import GoalLifecycleManager, GoalRepository
from nutrition_engine.services.users import ProfileRepository, ProfileService


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, AnthropometricProfile] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> AnthropometricProfile | None:
        return self.profiles.get(user_id)


@dataclass
class InMemoryGoalRepository(GoalRepository):
    """In-memory goal repository that serialises creation per user.

    ``write_delay`` widens the window between deactivation and insert so
    concurrency tests would expose a missing lock.
    """

    goals: dict[UUID, NutritionGoal] = field(default_factory=dict)
    write_delay: float = 0.0
    _locks: dict[UUID, threading.Lock] = field(default_factory=dict)
    _registry_lock: threading.Lock = field(default_factory=threading.Lock)

    def _lock_for(self, user_id: UUID) -> threading.Lock:
        with self._registry_lock:
            return self._locks.setdefault(user_id, threading.Lock())

    def create_active_goal(self, goal: NutritionGoal) -> NutritionGoal:
        with self._lock_for(goal.user_id):
            for goal_id, existing in list(self.goals.items()):
                if existing.user_id == goal.user_id and existing.is_active:
                    self.goals[goal_id] = replace(existing, is_active=False)
            if self.write_delay:
                time.sleep(self.write_delay)
            created = replace(goal, id=uuid4(), is_active=True)
            self.goals[created.id] = created
            return created

    def get_active_goal(self, user_id: UUID) -> NutritionGoal | None:
        for goal in self.goals.values():
            if goal.user_id == user_id and goal.is_active:
                return goal
        return None

    def get_goal(self, user_id: UUID, goal_id: UUID) -> NutritionGoal | None:
        goal = self.goals.get(goal_id)
        if goal is None or goal.user_id != user_id:
            return None
        return goal

    def list_goals(self, user_id: UUID) -> list[NutritionGoal]:
        return list(
            reversed([goal for goal in self.goals.values() if goal.user_id == user_id])
        )

    def list_goals_for_date(self, user_id: UUID, day: date) -> list[NutritionGoal]:
        return [goal for goal in self.list_goals(user_id) if goal.covers(day)]

    def update_goal(self, goal: NutritionGoal) -> NutritionGoal:
        self.goals[goal.id] = goal
        return goal

    def delete_goal(self, user_id: UUID, goal_id: UUID) -> bool:
        if self.get_goal(user_id, goal_id) is None:
            return False
        del self.goals[goal_id]
        return True


@dataclass
class InMemoryCatalogRepository(CatalogRepository):
    """In-memory catalog of foods and recipes for tests."""

    foods: dict[UUID, CatalogFood] = field(default_factory=dict)
    recipes: dict[UUID, list[tuple[UUID, float]]] = field(default_factory=dict)
    recipe_names: dict[UUID, str] = field(default_factory=dict)

    def add_food(self, name: str, profile: NutrientProfile) -> CatalogFood:
        food = CatalogFood(id=uuid4(), name=name, profile=profile)
        self.foods[food.id] = food
        return food

    def update_food(self, food_id: UUID, profile: NutrientProfile) -> None:
        self.foods[food_id] = replace(self.foods[food_id], profile=profile)

    def add_recipe(self, name: str, ingredients: list[tuple[UUID, float]]) -> UUID:
        recipe_id = uuid4()
        self.recipes[recipe_id] = ingredients
        self.recipe_names[recipe_id] = name
        return recipe_id

    def get_food(self, food_id: UUID) -> CatalogFood | None:
        return self.foods.get(food_id)

    def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        rows = self.recipes.get(recipe_id)
        if rows is None:
            return None
        ingredients = []
        for food_id, grams in rows:
            food = self.foods.get(food_id)
            ingredients.append(
                RecipeIngredient(
                    food_id=food_id,
                    quantity_grams=grams,
                    profile=food.profile if food else None,
                    name=food.name if food else "",
                )
            )
        return Recipe(
            id=recipe_id,
            name=self.recipe_names[recipe_id],
            composition=RecipeComposition(tuple(ingredients)),
        )


@dataclass
class InMemoryDiaryRepository(DiaryRepository):
    """In-memory diary repository for tests."""

    entries: dict[UUID, DiaryEntry] = field(default_factory=dict)

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
        entry = DiaryEntry(
            id=uuid4(),
            user_id=user_id,
            entry_date=entry_date,
            meal_type=meal_type,
            name=name,
            snapshot=snapshot,
            food_id=food_id,
            recipe_id=recipe_id,
            notes=notes,
        )
        self.entries[entry.id] = entry
        return entry

    def get_entry(self, user_id: UUID, entry_id: UUID) -> DiaryEntry | None:
        entry = self.entries.get(entry_id)
        if entry is None or entry.user_id != user_id:
            return None
        return entry

    def list_entries(self, user_id: UUID, day: date) -> list[DiaryEntry]:
        return [
            entry
            for entry in self.entries.values()
            if entry.user_id == user_id and entry.entry_date == day
        ]

    def update_entry(self, entry: DiaryEntry) -> DiaryEntry:
        self.entries[entry.id] = entry
        return entry


CHICKEN = NutrientProfile(calories=165, protein_g=31, carbs_g=0, fat_g=3.6, fiber_g=0)
RICE = NutrientProfile(calories=130, protein_g=2.7, carbs_g=28, fat_g=0.3, fiber_g=0.4)
BROCCOLI = NutrientProfile(
    calories=34, protein_g=2.8, carbs_g=6.6, fat_g=0.4, fiber_g=2.6
)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="eyJhbGciOiJIUzI1NiJ9.eyJyb2xlIjoic2VydmljZSJ9.sig",
    )


@pytest.fixture
def male_profile() -> AnthropometricProfile:
    return AnthropometricProfile(
        age=28,
        height_cm=180,
        weight_kg=75,
        body_fat_percent=15,
        gender=Gender.MALE,
        activity_level=ActivityLevel.MODERATE,
    )


@pytest.fixture
def catalog() -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository()


@pytest.fixture
def goal_repository() -> InMemoryGoalRepository:
    return InMemoryGoalRepository()


@pytest.fixture
def goal_manager(goal_repository: InMemoryGoalRepository) -> GoalLifecycleManager:
    return GoalLifecycleManager(goal_repository)


@pytest.fixture
def diary_service(
    catalog: InMemoryCatalogRepository, goal_manager: GoalLifecycleManager
) -> DiaryService:
    return DiaryService(
        aggregator=NutritionAggregator(catalog),
        goal_manager=goal_manager,
        repository=InMemoryDiaryRepository(),
    )


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def container(
    settings: Settings,
    profile_repository: InMemoryProfileRepository,
    goal_manager: GoalLifecycleManager,
    diary_service: DiaryService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        profile_service=ProfileService(profile_repository),
        diet_registry=default_registry(),
        goal_manager=goal_manager,
        aggregator=diary_service.aggregator,
        diary_service=diary_service,
    )
