"""
Strava activity sync.

Sync Flow:
1. Get a valid access token (refreshing if needed)
2. Fetch one page of recent activities
3. Normalize every activity
4. Upsert all rows in one statement, keyed on (user_id, strava_activity_id)

A sync either completes as a whole or raises; an empty page is a
successful sync of zero activities.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from macroclaw.features.activities.repository import ActivityRepository
from .client import StravaClient
from .errors import NotConnectedError
from .normalize import normalize
from .schemas import SyncResult
from .tokens import TokenManager

logger = logging.getLogger(__name__)


class ActivitySyncPipeline:
    """
    Sync orchestrator.

    Usage:
        pipeline = ActivitySyncPipeline(db)
        result = await pipeline.sync(user_id)
    """

    def __init__(
        self,
        db: AsyncSession,
        token_manager: Optional[TokenManager] = None,
        client: Optional[StravaClient] = None
    ):
        self.db = db
        self.token_manager = token_manager or TokenManager(db)
        self.client = client or StravaClient()
        self.activities = ActivityRepository(db)

    async def sync(self, user_id: str, page_size: Optional[int] = None) -> SyncResult:
        """
        Sync the most recent page of activities for a user.

        Raises:
            NotConnectedError: User has no Strava credential
            OAuthRefreshError: Token refresh was refused
            FetchActivitiesError: Strava activities listing failed
        """
        access_token = await self.token_manager.get_valid_access_token(user_id)
        if access_token is None:
            raise NotConnectedError(user_id)

        return await self.sync_with_token(user_id, access_token, page_size)

    async def sync_with_token(
        self,
        user_id: str,
        access_token: str,
        page_size: Optional[int] = None
    ) -> SyncResult:
        """Sync using an access token the caller already holds (OAuth callback)."""
        raw_activities = await self.client.fetch_recent_activities(access_token, page_size)
        rows = [normalize(raw, user_id) for raw in raw_activities]

        synced = await self.activities.upsert_activities(rows)
        await self.db.commit()

        logger.info(f"Strava sync for user {user_id}: {synced} activities")
        return SyncResult(synced_count=synced)
