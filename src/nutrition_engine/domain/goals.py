"""Domain models for nutrition goals and diet calculations."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class NutritionGoal:
    """Daily nutrition targets for a user."""

    user_id: UUID
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float
    start_date: date
    end_date: date | None = None
    is_active: bool = True
    diet_model_name: str | None = None
    protocol_number: int | None = None
    phase_number: int | None = None
    expiration_date: date | None = None
    id: UUID | None = None

    def covers(self, day: date) -> bool:
        """Return True when ``day`` falls inside the goal's date range."""
        if day < self.start_date:
            return False
        return self.end_date is None or day <= self.end_date


@dataclass(frozen=True)
class PhaseResult:
    """Calorie and macro targets for one phase of a protocol."""

    phase: int
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    description: str
    carbs_clamped: bool = False


@dataclass(frozen=True)
class DietResult:
    """Output of a diet model calculation."""

    model_name: str
    protocol: int
    protocol_name: str
    bmr: float
    maintenance_calories: float
    lean_mass_kg: float
    phases: list[PhaseResult]
    metadata: dict[str, float] = field(default_factory=dict)

    def phase(self, number: int) -> PhaseResult | None:
        for phase in self.phases:
            if phase.phase == number:
                return phase
        return None


@dataclass(frozen=True)
class GoalRecommendation:
    """Recommended daily targets from the simple TDEE strategy."""

    bmr: float
    tdee: float
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float
    message: str
