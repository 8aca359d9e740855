"""
Shared route dependencies.

Session handling happens upstream: the auth proxy resolves the session and
forwards the user ID in the X-User-Id header.
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from macroclaw.db.session import get_async_db
from macroclaw.features.strava import (
    ActivitySyncPipeline,
    StravaClient,
    StravaOAuth,
    TokenManager,
)


async def get_current_user_id(
    x_user_id: Optional[str] = Header(default=None)
) -> str:
    """Authenticated user ID, 401 when the upstream did not provide one."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return x_user_id


async def get_optional_user_id(
    x_user_id: Optional[str] = Header(default=None)
) -> Optional[str]:
    """User ID if present; browser redirects decide themselves what to do without one."""
    return x_user_id or None


def get_strava_oauth() -> StravaOAuth:
    return StravaOAuth()


def get_strava_client() -> StravaClient:
    return StravaClient()


def get_token_manager(
    db: AsyncSession = Depends(get_async_db),
    oauth: StravaOAuth = Depends(get_strava_oauth)
) -> TokenManager:
    return TokenManager(db, oauth=oauth)


def get_sync_pipeline(
    db: AsyncSession = Depends(get_async_db),
    token_manager: TokenManager = Depends(get_token_manager),
    client: StravaClient = Depends(get_strava_client)
) -> ActivitySyncPipeline:
    return ActivitySyncPipeline(db, token_manager=token_manager, client=client)
