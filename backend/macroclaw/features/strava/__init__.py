"""
Strava integration module.

Usage:
    from macroclaw.features.strava import StravaOAuth, TokenManager, ActivitySyncPipeline

Components:
- StravaOAuth: OAuth flow (auth URL, token exchange, refresh)
- TokenManager: Valid access token per user, connect/disconnect
- StravaClient: API client (recent activities)
- ActivitySyncPipeline: Fetch, normalize and upsert activities

Models:
- StravaCredential: OAuth tokens storage
"""

from .models import StravaCredential
from .errors import (
    StravaError,
    StravaConfigError,
    NotConnectedError,
    StravaProviderError,
    OAuthExchangeError,
    OAuthRefreshError,
    FetchActivitiesError,
)
from .schemas import (
    StravaAthlete,
    TokenBundle,
    RawActivity,
    SyncResult,
    StravaStatus,
)
from .oauth import StravaOAuth, require_strava_config
from .repository import StravaCredentialRepository
from .tokens import TokenManager
from .client import StravaClient
from .normalize import classify, estimate_calories, derive_timing, normalize
from .sync import ActivitySyncPipeline

__all__ = [
    # Models
    "StravaCredential",
    # Errors
    "StravaError",
    "StravaConfigError",
    "NotConnectedError",
    "StravaProviderError",
    "OAuthExchangeError",
    "OAuthRefreshError",
    "FetchActivitiesError",
    # Schemas
    "StravaAthlete",
    "TokenBundle",
    "RawActivity",
    "SyncResult",
    "StravaStatus",
    # OAuth / tokens
    "StravaOAuth",
    "require_strava_config",
    "StravaCredentialRepository",
    "TokenManager",
    # Sync
    "StravaClient",
    "classify",
    "estimate_calories",
    "derive_timing",
    "normalize",
    "ActivitySyncPipeline",
]
