"""
Strava token lifecycle.

Produces a currently-usable access token for a user, refreshing it when it
is about to expire, and owns the connect/disconnect transitions of the
stored credential.

Connection states:
    Disconnected -> (exchange) -> Connected -> (refresh)* -> Connected
    Connected -> (disconnect | revoked refresh token) -> Disconnected
"""

import asyncio
import logging
import time
import weakref
from typing import Callable, Optional

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from macroclaw.features.users import UserRepository
from .errors import OAuthRefreshError
from .models import StravaCredential
from .oauth import StravaOAuth
from .repository import StravaCredentialRepository
from .schemas import TokenBundle

logger = logging.getLogger(__name__)


# Per-user locks around read-decide-refresh-write. Strava refresh tokens
# rotate, so two concurrent refreshes would strand one of the callers.
# Only guards a single process. Entries disappear once no caller holds
# or waits on the lock.
_refresh_locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()


def _lock_for(user_id: str) -> asyncio.Lock:
    lock = _refresh_locks.get(user_id)
    if lock is None:
        lock = asyncio.Lock()
        _refresh_locks[user_id] = lock
    return lock


class TokenManager:
    """
    Strava credential manager.

    Usage:
        manager = TokenManager(db)
        access_token = await manager.get_valid_access_token(user_id)
    """

    def __init__(
        self,
        db: AsyncSession,
        oauth: Optional[StravaOAuth] = None,
        clock: Callable[[], float] = time.time,
        refresh_margin: Optional[int] = None
    ):
        self.db = db
        self.oauth = oauth or StravaOAuth()
        self.credentials = StravaCredentialRepository(db)
        self.users = UserRepository(db)
        self._clock = clock
        if refresh_margin is None:
            refresh_margin = self.oauth.settings.strava_refresh_margin_seconds
        self.refresh_margin = refresh_margin

    async def get_valid_access_token(self, user_id: str) -> Optional[str]:
        """
        Get a valid access token for user, refreshing if needed.

        Returns None if user has no Strava credential.

        Raises:
            OAuthRefreshError: If the token needed a refresh and Strava refused it.
                A revoked refresh token also disconnects the user.
        """
        async with _lock_for(user_id):
            credential = await self.credentials.get_credential(user_id)
            if not credential:
                return None

            if credential.seconds_until_expiry(self._clock()) >= self.refresh_margin:
                return credential.access_token

            return await self._refresh(credential)

    async def _refresh(self, credential: StravaCredential) -> str:
        user_id = credential.user_id
        logger.info(f"Refreshing Strava token for user {user_id}")

        try:
            bundle = await self.oauth.refresh_token(credential.refresh_token)
        except OAuthRefreshError as e:
            if e.revoked:
                logger.warning(
                    f"Strava refresh token revoked for user {user_id}, disconnecting"
                )
                await self._clear(user_id)
            raise

        # If this commit fails the rotated tokens are lost and the next
        # call refreshes again.
        await self.credentials.upsert_credential(user_id, bundle)
        await self.db.commit()
        return bundle.access_token

    async def store_tokens(
        self,
        user_id: str,
        bundle: TokenBundle,
        scope: Optional[str] = None
    ) -> StravaCredential:
        """
        Save tokens from a code exchange and link the athlete to the user.

        Creates the user row if the auth layer has not done so yet.
        """
        await self.users.get_or_create(user_id)
        credential = await self.credentials.upsert_credential(user_id, bundle, scope)
        await self.users.set_strava_athlete(user_id, bundle.athlete_id)
        await self.db.commit()

        logger.info(f"Strava connected: user_id={user_id}, athlete_id={bundle.athlete_id}")
        return credential

    async def disconnect(self, user_id: str) -> bool:
        """
        Disconnect Strava.

        - Revokes access at Strava (best effort)
        - Deletes the stored credential
        - Unlinks the athlete from the user

        Returns True if a credential existed.
        """
        credential = await self.credentials.get_credential(user_id)
        if not credential:
            return False

        try:
            await self.oauth.deauthorize(credential.access_token)
        except httpx.HTTPError as e:
            logger.warning(f"Strava deauthorize failed: {e!r}")

        await self._clear(user_id)
        logger.info(f"Strava disconnected for user {user_id}")
        return True

    async def _clear(self, user_id: str) -> None:
        await self.credentials.delete_credential(user_id)
        await self.users.set_strava_athlete(user_id, None)
        await self.db.commit()
