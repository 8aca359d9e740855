"""
Activity schemas.

Pydantic models for activity rows and the activities API.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from macroclaw.shared.constants import ActivityCategory

_CLEARABLE_FIELDS = {"elevation_meters", "avg_heart_rate", "notes"}


class ActivityInsert(BaseModel):
    """Normalized activity row, keyed on (user_id, strava_activity_id)."""

    user_id: str
    strava_activity_id: str
    type: ActivityCategory
    name: str
    started_at: datetime
    duration_seconds: int
    distance_meters: float
    calories: int
    elevation_meters: Optional[float] = None
    avg_heart_rate: Optional[int] = None
    pace_seconds_per_km: Optional[int] = None
    speed_kmh: Optional[float] = None


class ActivityResponse(BaseModel):
    """Activity as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    type: ActivityCategory
    name: str
    started_at: datetime
    distance_meters: float
    duration_seconds: int
    calories: int
    pace_seconds_per_km: Optional[int] = None
    speed_kmh: Optional[float] = None
    elevation_meters: Optional[float] = None
    avg_heart_rate: Optional[int] = None
    notes: Optional[str] = None


class ActivityListResponse(BaseModel):
    activities: list[ActivityResponse]
    total: int


class ActivityUpdate(BaseModel):
    """
    Partial activity edit.

    Only fields present in the request body are written. An empty string
    clears elevation, heart rate or notes.
    """

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    type: Optional[ActivityCategory] = None
    calories: Optional[int] = None
    distance_meters: Optional[float] = None
    duration_seconds: Optional[int] = None
    elevation_meters: Optional[float] = None
    avg_heart_rate: Optional[int] = None
    notes: Optional[str] = None

    @field_validator("elevation_meters", "avg_heart_rate", "notes", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if v == "":
            return None
        return v

    def changes(self) -> dict:
        """Fields explicitly set in the request; null is ignored for required columns."""
        data = self.model_dump(exclude_unset=True)
        data = {
            key: value for key, value in data.items()
            if value is not None or key in _CLEARABLE_FIELDS
        }
        if "type" in data:
            data["type"] = data["type"].value
        return data


class ActivityEnvelope(BaseModel):
    activity: ActivityResponse
