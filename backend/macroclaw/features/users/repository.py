"""
User repositories.

Data access layer for the User model.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from macroclaw.shared.repository import BaseRepository
from .models import User


class UserRepository(BaseRepository[User]):
    """Repository for User operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def get_or_create(self, user_id: str, **kwargs) -> tuple[User, bool]:
        """
        Get existing user or create new one.

        Args:
            user_id: User ID issued by the auth layer
            **kwargs: Additional fields for new user

        Returns:
            Tuple of (user, created) where created is True if new user
        """
        user = await self.get_by_id(user_id)
        if user:
            return user, False

        user = await self.create(id=user_id, **kwargs)
        return user, True

    async def set_strava_athlete(self, user_id: str, athlete_id: str | None) -> None:
        """Link (or unlink with None) the user's Strava athlete ID."""
        user = await self.get_by_id(user_id)
        if user:
            await self.update(user, strava_athlete_id=athlete_id)
