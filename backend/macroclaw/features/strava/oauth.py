"""
Strava OAuth flow.

Handles:
- Authorization URL generation
- Code exchange for tokens
- Token refresh
- Token revocation (deauthorization)

Each exchange/refresh performs exactly one request and never retries:
authorization codes are single-use.
"""

import logging
from typing import Optional
from urllib.parse import urlencode

import httpx
from pydantic import ValidationError

from macroclaw.config import Settings, settings as default_settings
from .errors import OAuthExchangeError, OAuthRefreshError, StravaConfigError
from .schemas import TokenBundle

logger = logging.getLogger(__name__)


def require_strava_config(settings: Settings) -> tuple[str, str, str]:
    """
    Return (client_id, client_secret, redirect_uri) or fail naming what is missing.

    Raises:
        StravaConfigError: If any of the three is unset
    """
    values = {
        "STRAVA_CLIENT_ID": settings.strava_client_id,
        "STRAVA_CLIENT_SECRET": settings.strava_client_secret,
        "STRAVA_REDIRECT_URI": settings.strava_redirect_uri,
    }
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise StravaConfigError(missing)
    return (
        settings.strava_client_id,
        settings.strava_client_secret,
        settings.strava_redirect_uri,
    )


class StravaOAuth:
    """
    Strava OAuth handler.

    Usage:
        oauth = StravaOAuth()
        auth_url = oauth.get_authorization_url()
        tokens = await oauth.exchange_code(code)
        tokens = await oauth.refresh_token(refresh_token)
    """

    AUTHORIZE_URL = "https://www.strava.com/oauth/authorize"
    TOKEN_URL = "https://www.strava.com/oauth/token"
    DEAUTHORIZE_URL = "https://www.strava.com/oauth/deauthorize"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.settings = settings or default_settings
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=self._transport,
            timeout=self.settings.strava_http_timeout
        )

    def get_authorization_url(
        self,
        scope: Optional[str] = None,
        state: Optional[str] = None
    ) -> str:
        """
        Generate Strava OAuth authorization URL.

        Args:
            scope: OAuth scope (default: settings.strava_scope)
            state: Optional state parameter for CSRF protection

        Scopes:
        - activity:read - View activities (excluding private)
        - activity:read_all - View all activities (including private)

        Returns:
            Authorization URL string

        Raises:
            StravaConfigError: If client id or redirect URI is not configured
        """
        client_id, _, redirect_uri = require_strava_config(self.settings)
        params = {
            "client_id": client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "approval_prompt": "auto",  # "force" to always show consent
            "scope": scope or self.settings.strava_scope,
        }
        if state:
            params["state"] = state

        return f"{self.AUTHORIZE_URL}?{urlencode(params)}"

    async def _token_request(self, grant: dict, error_cls) -> TokenBundle:
        client_id, client_secret, _ = require_strava_config(self.settings)
        payload = {
            "client_id": client_id,
            "client_secret": client_secret,
            **grant,
        }

        try:
            async with self._client() as client:
                response = await client.post(self.TOKEN_URL, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Strava {error_cls.action} request error: {e!r}")
            raise error_cls(None, str(e)) from e

        if response.status_code != 200:
            logger.error(
                f"Strava {error_cls.action} failed: "
                f"{response.status_code} {response.text}"
            )
            raise error_cls(response.status_code, response.text)

        try:
            return TokenBundle.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise error_cls(response.status_code, response.text) from e

    async def exchange_code(self, code: str) -> TokenBundle:
        """
        Exchange authorization code for tokens.

        Args:
            code: Authorization code from Strava callback

        Returns:
            TokenBundle including the athlete

        Raises:
            OAuthExchangeError: If token exchange fails
        """
        return await self._token_request(
            {"code": code, "grant_type": "authorization_code"},
            OAuthExchangeError
        )

    async def refresh_token(self, refresh_token: str) -> TokenBundle:
        """
        Refresh an access token.

        Strava may rotate the refresh token as well; callers must
        persist both.

        Raises:
            OAuthRefreshError: If token refresh fails
        """
        return await self._token_request(
            {"refresh_token": refresh_token, "grant_type": "refresh_token"},
            OAuthRefreshError
        )

    async def deauthorize(self, access_token: str) -> bool:
        """
        Revoke Strava access (user disconnect).

        Returns:
            True if deauthorization was successful
        """
        async with self._client() as client:
            response = await client.post(
                self.DEAUTHORIZE_URL,
                headers={"Authorization": f"Bearer {access_token}"}
            )
            return response.status_code == 200
