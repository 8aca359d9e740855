"""
Strava schemas.

Pydantic models for Strava payloads and sync results.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, model_validator


class StravaAthlete(BaseModel):
    """Athlete summary embedded in the code exchange response."""

    model_config = ConfigDict(extra="ignore")

    id: int
    firstname: Optional[str] = None
    lastname: Optional[str] = None


class TokenBundle(BaseModel):
    """
    Token endpoint response.

    The athlete is only present on authorization code exchange,
    not on refresh.
    """

    model_config = ConfigDict(extra="ignore")

    access_token: str
    refresh_token: str
    expires_at: int  # Unix timestamp
    athlete: Optional[StravaAthlete] = None

    @property
    def athlete_id(self) -> Optional[str]:
        return str(self.athlete.id) if self.athlete else None


class RawActivity(BaseModel):
    """
    Activity summary as returned by GET /athlete/activities.

    Only the fields we normalize are declared.
    """

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str = ""
    sport_type: str = "Workout"
    start_date: datetime
    moving_time: int = 0            # seconds
    distance: float = 0.0           # meters
    total_elevation_gain: Optional[float] = None
    average_heartrate: Optional[float] = None
    average_speed: float = 0.0      # m/s
    kilojoules: Optional[float] = None
    calories: Optional[float] = None

    @model_validator(mode="before")
    @classmethod
    def fallback_to_legacy_type(cls, data: Any) -> Any:
        """Older payloads only carry `type`; use it when `sport_type` is absent."""
        if isinstance(data, dict) and not data.get("sport_type") and data.get("type"):
            data = {**data, "sport_type": data["type"]}
        return data


class SyncResult(BaseModel):
    """Outcome of a successful sync."""

    synced_count: int


class StravaStatus(BaseModel):
    connected: bool
    athlete_id: Optional[str] = None
    expires_at: Optional[int] = None
