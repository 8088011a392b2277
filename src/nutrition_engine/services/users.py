"""User profile lookups."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutrition_engine.domain.errors import NotFoundError
from nutrition_engine.domain.profile import AnthropometricProfile


class ProfileRepository(Protocol):
    """Read access to users' anthropometric data."""

    def get_profile(self, user_id: UUID) -> AnthropometricProfile | None:
        """Return the profile for a user, if present."""


@dataclass
class ProfileService:
    """Application service for reading user profiles."""

    repository: ProfileRepository

    def get_profile(self, user_id: UUID) -> AnthropometricProfile:
        profile = self.repository.get_profile(user_id)
        if profile is None:
            raise NotFoundError(f"user {user_id} not found")
        return profile
