"""
Strava repositories.

Data access layer for the StravaCredential model.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from macroclaw.shared.repository import BaseRepository
from .models import StravaCredential
from .schemas import TokenBundle


class StravaCredentialRepository(BaseRepository[StravaCredential]):
    """Repository for Strava OAuth credentials."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, StravaCredential)

    async def get_credential(self, user_id: str) -> StravaCredential | None:
        """
        Get credential for user.

        Args:
            user_id: User's ID

        Returns:
            StravaCredential if connected, None otherwise
        """
        return await self.get_by(user_id=user_id)

    async def upsert_credential(
        self,
        user_id: str,
        bundle: TokenBundle,
        scope: Optional[str] = None
    ) -> StravaCredential:
        """
        Store a token bundle, overwriting both tokens and the expiry.

        The athlete ID and scope are only overwritten when present,
        since refresh responses carry neither.
        """
        existing = await self.get_credential(user_id)
        fields = {
            "access_token": bundle.access_token,
            "refresh_token": bundle.refresh_token,
            "expires_at": bundle.expires_at,
        }
        if bundle.athlete_id:
            fields["strava_athlete_id"] = bundle.athlete_id
        if scope:
            fields["scope"] = scope

        if existing:
            return await self.update(existing, updated_at=datetime.utcnow(), **fields)
        return await self.create(user_id=user_id, **fields)

    async def delete_credential(self, user_id: str) -> bool:
        """
        Delete credential (disconnect).

        Returns:
            True if a credential was deleted
        """
        existing = await self.get_credential(user_id)
        if not existing:
            return False
        await self.delete(existing)
        return True
