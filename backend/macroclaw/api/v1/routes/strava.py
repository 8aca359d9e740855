"""
Strava Routes

Endpoints for Strava integration:
- /strava/connect - Initiate OAuth flow
- /strava/callback - Handle OAuth callback
- /strava/status - Check connection status
- /strava/sync - Sync recent activities
- /strava/disconnect - Disconnect Strava
"""

import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from macroclaw.api.deps import (
    get_current_user_id,
    get_optional_user_id,
    get_strava_oauth,
    get_sync_pipeline,
    get_token_manager,
)
from macroclaw.config import settings
from macroclaw.db.session import get_async_db
from macroclaw.features.strava import (
    ActivitySyncPipeline,
    FetchActivitiesError,
    NotConnectedError,
    OAuthExchangeError,
    OAuthRefreshError,
    StravaConfigError,
    StravaCredentialRepository,
    StravaOAuth,
    StravaStatus,
    SyncResult,
    TokenManager,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/strava")


# =============================================================================
# OAuth Flow
# =============================================================================

@router.get("/connect")
async def strava_connect(
    user_id: str = Depends(get_current_user_id),
    oauth: StravaOAuth = Depends(get_strava_oauth)
):
    """Redirect the user to the Strava authorization page."""
    try:
        auth_url = oauth.get_authorization_url()
    except StravaConfigError as e:
        logger.error(str(e))
        return _settings_redirect(error="strava_not_configured")

    logger.info(f"Strava OAuth initiated for user {user_id}")
    return RedirectResponse(url=auth_url)


@router.get("/callback")
async def strava_callback(
    code: Optional[str] = Query(None),
    error: Optional[str] = Query(None),
    scope: Optional[str] = Query(None),
    user_id: Optional[str] = Depends(get_optional_user_id),
    oauth: StravaOAuth = Depends(get_strava_oauth),
    token_manager: TokenManager = Depends(get_token_manager),
    pipeline: ActivitySyncPipeline = Depends(get_sync_pipeline)
):
    """
    Handle the Strava OAuth redirect.

    Exchanges the code, stores the credential, runs an initial sync of
    one page and redirects back to the integrations settings tab.
    """
    if error or not code:
        logger.warning(f"Strava OAuth denied: {error}")
        return _settings_redirect(error="strava_denied")

    if not user_id:
        return RedirectResponse(url=f"{settings.app_url.rstrip('/')}/login")

    try:
        bundle = await oauth.exchange_code(code)
    except StravaConfigError as e:
        logger.error(str(e))
        return _settings_redirect(error="strava_not_configured")
    except OAuthExchangeError:
        return _settings_redirect(error="strava_error")

    try:
        await token_manager.store_tokens(user_id, bundle, scope)
    except SQLAlchemyError as e:
        logger.error(f"Failed to store Strava credential for user {user_id}: {e}")
        return _settings_redirect(error="strava_error")

    # Non-fatal: the credential is saved and sync can be retried
    try:
        await pipeline.sync_with_token(user_id, bundle.access_token)
    except FetchActivitiesError as e:
        logger.warning(f"Initial Strava sync failed for user {user_id}: {e}")

    return _settings_redirect(connected="true")


# =============================================================================
# Status, Sync & Disconnect
# =============================================================================

@router.get("/status", response_model=StravaStatus)
async def strava_status(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_db)
):
    """Check Strava connection status for the user."""
    credential = await StravaCredentialRepository(db).get_credential(user_id)
    if not credential:
        return StravaStatus(connected=False)

    return StravaStatus(
        connected=True,
        athlete_id=credential.strava_athlete_id,
        expires_at=credential.expires_at
    )


@router.post("/sync", response_model=SyncResult)
async def strava_sync(
    page_size: Optional[int] = Query(None, ge=1, le=200),
    user_id: str = Depends(get_current_user_id),
    pipeline: ActivitySyncPipeline = Depends(get_sync_pipeline)
):
    """
    Sync the user's most recent Strava activities.

    400 when not connected, 401 when Strava refused the refresh
    (re-authorization needed), 502 when the activities listing failed.
    """
    try:
        return await pipeline.sync(user_id, page_size)
    except NotConnectedError:
        raise HTTPException(status_code=400, detail="strava_not_connected")
    except StravaConfigError as e:
        logger.error(str(e))
        raise HTTPException(status_code=503, detail="strava_not_configured")
    except OAuthRefreshError:
        raise HTTPException(status_code=401, detail="strava_reauthorization_required")
    except FetchActivitiesError:
        raise HTTPException(status_code=502, detail="strava_fetch_failed")


@router.delete("/disconnect")
async def strava_disconnect(
    user_id: str = Depends(get_current_user_id),
    token_manager: TokenManager = Depends(get_token_manager)
):
    """Remove the user's stored Strava credential."""
    await token_manager.disconnect(user_id)
    return {"success": True}


# =============================================================================
# Helper Functions
# =============================================================================

def _settings_redirect(**params: str) -> RedirectResponse:
    """Redirect to the integrations tab of the settings page."""
    query = urlencode({"tab": "integrations", **params})
    return RedirectResponse(url=f"{settings.app_url.rstrip('/')}/settings?{query}")
