"""Protocol-based diet models and the registry that resolves them by name."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from nutrition_engine.domain.errors import UnsupportedModelError, ValidationError
from nutrition_engine.domain.goals import DietResult, PhaseResult
from nutrition_engine.domain.profile import AnthropometricProfile

_logger = logging.getLogger(__name__)

NEGATIVE_CARBS_CLAMP = "clamp"
NEGATIVE_CARBS_REJECT = "reject"


class DietModel(Protocol):
    """Capability interface every diet model implements.

    ``validate_user`` and ``validate_protocol`` must both pass before
    ``calculate`` is called; ``calculate`` does no further checking.
    """

    name: str

    def validate_user(self, profile: AnthropometricProfile) -> None:
        """Raise ValidationError when the profile lacks required data."""

    def validate_protocol(self, protocol: int) -> None:
        """Raise ValidationError when the protocol number is unknown."""

    def protocol_name(self, protocol: int) -> str:
        """Return the human-readable protocol name."""

    def calculate(self, profile: AnthropometricProfile, protocol: int) -> DietResult:
        """Return BMR, maintenance and per-phase targets."""


@dataclass(frozen=True)
class _PhasePlan:
    delta_calories: float
    description: str


@dataclass(frozen=True)
class _ProtocolPlan:
    name: str
    phases: tuple[_PhasePlan, ...]


_ZERO_TO_HERO_PROTOCOLS: dict[int, _ProtocolPlan] = {
    1: _ProtocolPlan(
        "Protocol 1: Clean muscle gain",
        (
            _PhasePlan(0, "Maintenance phase"),
            _PhasePlan(200, "Moderate surplus phase"),
            _PhasePlan(400, "High surplus phase"),
        ),
    ),
    2: _ProtocolPlan(
        "Protocol 2: Body recomposition",
        (_PhasePlan(-300, "Recomposition phase"),),
    ),
    3: _ProtocolPlan(
        "Protocol 3: The perfect deficit",
        (
            _PhasePlan(-300, "Moderate deficit phase"),
            _PhasePlan(-500, "Higher deficit phase"),
        ),
    ),
    4: _ProtocolPlan(
        "Protocol 4: Progressive fat loss",
        (
            _PhasePlan(-300, "Initial deficit phase"),
            _PhasePlan(-500, "Moderate deficit phase"),
            _PhasePlan(-700, "Aggressive deficit phase"),
        ),
    ),
}


@dataclass
class ZeroToHeroModel:
    """Four-protocol model averaging two BMR equations.

    When a phase's protein and fat already exceed its calories, carbs are
    clamped to zero and the phase is flagged, or the calculation is
    rejected when ``negative_carbs`` is ``"reject"``.
    """

    negative_carbs: str = NEGATIVE_CARBS_CLAMP
    name: str = "zeroToHero"
    maintenance_factor: float = 1.5

    def validate_user(self, profile: AnthropometricProfile) -> None:
        if profile.age <= 0:
            raise ValidationError("age is required and must be greater than 0")
        if profile.height_cm <= 0:
            raise ValidationError("height is required and must be greater than 0")
        if profile.weight_kg <= 0:
            raise ValidationError("weight is required and must be greater than 0")
        if profile.body_fat_percent <= 0 or profile.body_fat_percent >= 100:
            raise ValidationError("body fat is required and must be between 0 and 100")

    def validate_protocol(self, protocol: int) -> None:
        if protocol not in _ZERO_TO_HERO_PROTOCOLS:
            raise ValidationError(
                f"protocol must be between 1 and {len(_ZERO_TO_HERO_PROTOCOLS)} "
                f"for {self.name}"
            )

    def protocol_name(self, protocol: int) -> str:
        plan = _ZERO_TO_HERO_PROTOCOLS.get(protocol)
        return plan.name if plan else "Unknown protocol"

    def calculate(self, profile: AnthropometricProfile, protocol: int) -> DietResult:
        weight = profile.weight_kg
        lean_fraction = 1 - profile.body_fat_percent / 100
        bmr_a = (
            13.707 * weight
            + 492.3 * (profile.height_cm / 100)
            - 6.673 * profile.age
            + 77.607
        )
        bmr_b = 21.6 * weight * lean_fraction + 370
        bmr = (bmr_a + bmr_b) / 2
        lean_mass = weight * lean_fraction
        maintenance = bmr * self.maintenance_factor

        protein = (weight * 1.5 + lean_mass * 2) / 2
        fat = 1.2 * weight * lean_fraction
        phases = [
            self._phase(number, maintenance + plan.delta_calories, plan, protein, fat)
            for number, plan in enumerate(
                _ZERO_TO_HERO_PROTOCOLS[protocol].phases, start=1
            )
        ]
        return DietResult(
            model_name=self.name,
            protocol=protocol,
            protocol_name=self.protocol_name(protocol),
            bmr=bmr,
            maintenance_calories=maintenance,
            lean_mass_kg=lean_mass,
            phases=phases,
            metadata={"bmr_variant_a": bmr_a, "bmr_variant_b": bmr_b},
        )

    def _phase(
        self,
        number: int,
        calories: float,
        plan: _PhasePlan,
        protein: float,
        fat: float,
    ) -> PhaseResult:
        carbs = (calories - protein * 4 - fat * 9) / 4
        clamped = False
        if carbs < 0:
            if self.negative_carbs == NEGATIVE_CARBS_REJECT:
                raise ValidationError(
                    f"phase {number} calories ({calories:.0f} kcal) do not cover "
                    "the protein and fat targets"
                )
            _logger.warning(
                "Clamping negative carbs to 0: model=%s phase=%s carbs=%.1f",
                self.name,
                number,
                carbs,
            )
            carbs = 0.0
            clamped = True
        return PhaseResult(
            phase=number,
            calories=calories,
            protein_g=protein,
            carbs_g=carbs,
            fat_g=fat,
            description=plan.description,
            carbs_clamped=clamped,
        )


@dataclass
class DietModelRegistry:
    """Explicit mapping from model names to implementations."""

    models: dict[str, DietModel] = field(default_factory=dict)

    def register(self, model: DietModel) -> None:
        self.models[model.name] = model

    def names(self) -> list[str]:
        return sorted(self.models)

    def resolve(self, name: str) -> DietModel:
        """Return the model registered under ``name``."""
        model = self.models.get(name)
        if model is None:
            raise UnsupportedModelError(name, self.names())
        return model

    def calculate(
        self, name: str, profile: AnthropometricProfile, protocol: int
    ) -> DietResult:
        """Resolve, validate and run a model in that order."""
        model = self.resolve(name)
        model.validate_user(profile)
        model.validate_protocol(protocol)
        return model.calculate(profile, protocol)


def default_registry(negative_carbs: str = NEGATIVE_CARBS_CLAMP) -> DietModelRegistry:
    """Return a registry with the built-in models."""
    registry = DietModelRegistry()
    registry.register(ZeroToHeroModel(negative_carbs=negative_carbs))
    return registry
