"""Profile repository protocol."""

from typing import Protocol

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get_by_username(self, username: str) -> Profile | None:
        """Get a profile by its username."""
        ...

    async def save(self, profile: Profile) -> Profile:
        """Insert the profile, or update it in place if its id already exists."""
        ...
