"""
Activity repositories.

Data access layer for the Activity model.
"""

from datetime import datetime
from typing import Iterable

from sqlalchemy import select, desc
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from macroclaw.shared.repository import BaseRepository
from .schemas import ActivityInsert
from .models import Activity

# Columns a re-sync overwrites. User notes survive.
_SYNC_COLUMNS = (
    "type",
    "name",
    "started_at",
    "duration_seconds",
    "distance_meters",
    "calories",
    "elevation_meters",
    "avg_heart_rate",
    "pace_seconds_per_km",
    "speed_kmh",
)


class ActivityRepository(BaseRepository[Activity]):
    """Repository for normalized activities."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Activity)

    def _insert(self):
        """INSERT construct for the bound dialect (both support ON CONFLICT)."""
        dialect = self.db.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert(Activity)
        if dialect == "sqlite":
            return sqlite.insert(Activity)
        raise NotImplementedError(f"Activity upsert not supported on {dialect}")

    async def upsert_activities(self, rows: Iterable[ActivityInsert]) -> int:
        """
        Insert or overwrite activities in one statement.

        Conflicts on (user_id, strava_activity_id) update the synced
        columns in place, so re-syncing never duplicates a row.

        Args:
            rows: Normalized activities

        Returns:
            Number of rows written
        """
        values = [row.model_dump(mode="python") for row in rows]
        if not values:
            return 0

        now = datetime.utcnow()
        for value in values:
            value["type"] = value["type"].value
            value["created_at"] = now
            value["updated_at"] = now

        stmt = self._insert().values(values)
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "strava_activity_id"],
            set_={
                **{column: stmt.excluded[column] for column in _SYNC_COLUMNS},
                "updated_at": stmt.excluded.updated_at,
            }
        )
        await self.db.execute(stmt)
        await self.db.flush()
        return len(values)

    async def list_for_user(
        self,
        user_id: str,
        activity_type: str | None = None,
        limit: int = 20,
        offset: int = 0
    ) -> list[Activity]:
        """
        Get user activities with pagination.

        Args:
            user_id: User's ID
            activity_type: Filter by category (Run, Ride, Swim, Other)
            limit: Maximum activities to return
            offset: Pagination offset

        Returns:
            List of activities ordered by start time (newest first)
        """
        query = (
            select(Activity)
            .where(Activity.user_id == user_id)
            .order_by(desc(Activity.started_at))
            .offset(offset)
            .limit(limit)
        )
        if activity_type:
            query = query.where(Activity.type == activity_type)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def count_for_user(self, user_id: str, activity_type: str | None = None) -> int:
        """Count user activities, optionally of one category."""
        if activity_type:
            return await self.count(user_id=user_id, type=activity_type)
        return await self.count(user_id=user_id)

    async def get_for_user(self, user_id: str, activity_id: int) -> Activity | None:
        """Get one activity, only if it belongs to the user."""
        return await self.get_by(id=activity_id, user_id=user_id)

    async def get_by_strava_id(self, user_id: str, strava_activity_id: str) -> Activity | None:
        return await self.get_by(user_id=user_id, strava_activity_id=strava_activity_id)
