"""
Strava API client.

Authenticated calls against the Strava REST API.

Strava API Limits:
- 200 requests per 15 minutes
- 2,000 requests per day
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from macroclaw.config import Settings, settings as default_settings
from .errors import FetchActivitiesError
from .schemas import RawActivity

logger = logging.getLogger(__name__)


class StravaClient:
    """
    Async client for Strava API.

    Usage:
        client = StravaClient()
        activities = await client.fetch_recent_activities(access_token)
    """

    API_URL = "https://www.strava.com/api/v3"
    MAX_PER_PAGE = 200

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.settings = settings or default_settings
        self._transport = transport

    async def fetch_recent_activities(
        self,
        access_token: str,
        page_size: Optional[int] = None
    ) -> list[RawActivity]:
        """
        Get the athlete's most recent activities, newest first.

        Args:
            access_token: Valid access token
            page_size: Activities to fetch (default from settings, max 200)

        Raises:
            FetchActivitiesError: On non-200 response, network failure or
                a payload that is not a list of activities
        """
        page_size = page_size or self.settings.strava_activities_page_size
        params = {"page": 1, "per_page": max(1, min(page_size, self.MAX_PER_PAGE))}

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self.settings.strava_http_timeout
            ) as client:
                response = await client.get(
                    f"{self.API_URL}/athlete/activities",
                    headers={"Authorization": f"Bearer {access_token}"},
                    params=params
                )
        except httpx.HTTPError as e:
            logger.error(f"Strava activities request error: {e!r}")
            raise FetchActivitiesError(None, str(e)) from e

        # Log rate limit headers from Strava
        if "X-RateLimit-Limit" in response.headers:
            logger.debug(
                f"Strava rate limit: {response.headers.get('X-RateLimit-Usage')} "
                f"/ {response.headers.get('X-RateLimit-Limit')}"
            )

        if response.status_code != 200:
            logger.error(
                f"Strava activities fetch failed: {response.status_code} {response.text}"
            )
            raise FetchActivitiesError(response.status_code, response.text)

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Strava activities response is not JSON: {response.text[:200]}")
            raise FetchActivitiesError(response.status_code, response.text) from e

        if not isinstance(payload, list):
            raise FetchActivitiesError(response.status_code, response.text)

        try:
            return [RawActivity.model_validate(item) for item in payload[:page_size]]
        except ValidationError as e:
            raise FetchActivitiesError(response.status_code, str(e)) from e
