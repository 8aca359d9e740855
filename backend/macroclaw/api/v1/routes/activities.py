"""
Activity Routes

- GET   /activities       - Paginated list, optional type filter
- PATCH /activities/{id}  - Edit an activity
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from macroclaw.api.deps import get_current_user_id
from macroclaw.db.session import get_async_db
from macroclaw.features.activities import (
    ActivityEnvelope,
    ActivityListResponse,
    ActivityRepository,
    ActivityResponse,
    ActivityUpdate,
)
from macroclaw.shared.constants import ActivityCategory

router = APIRouter(prefix="/activities")

MAX_PAGE_SIZE = 100


@router.get("", response_model=ActivityListResponse)
async def list_activities(
    type: Optional[ActivityCategory] = Query(None),
    limit: int = Query(20, ge=1),
    offset: int = Query(0, ge=0),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_db)
):
    """List the user's activities, newest first."""
    repo = ActivityRepository(db)
    activity_type = type.value if type else None
    activities = await repo.list_for_user(
        user_id,
        activity_type=activity_type,
        limit=min(limit, MAX_PAGE_SIZE),
        offset=offset
    )
    total = await repo.count_for_user(user_id, activity_type)

    return ActivityListResponse(
        activities=[ActivityResponse.model_validate(a) for a in activities],
        total=total
    )


@router.patch("/{activity_id}", response_model=ActivityEnvelope)
async def update_activity(
    activity_id: int,
    payload: ActivityUpdate = Body(...),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_db)
):
    """Update fields of one of the user's activities."""
    repo = ActivityRepository(db)
    activity = await repo.get_for_user(user_id, activity_id)
    if not activity:
        raise HTTPException(status_code=404, detail="Activity not found")

    activity = await repo.update(activity, **payload.changes())
    await db.commit()

    return ActivityEnvelope(activity=ActivityResponse.model_validate(activity))
