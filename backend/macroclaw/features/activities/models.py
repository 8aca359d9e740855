"""
Activity model.

Normalized workouts. Rows are written by the Strava sync (keyed on
user_id + strava_activity_id) and edited by the user afterwards.
"""

from datetime import datetime

from sqlalchemy import (
    Column, String, DateTime, Integer, Float, ForeignKey, Text, UniqueConstraint
)

from macroclaw.models.base import Base


class Activity(Base):
    """Normalized activity summary."""

    __tablename__ = "activities"
    __table_args__ = (
        UniqueConstraint("user_id", "strava_activity_id", name="uq_activities_user_strava"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    # Strava identifier (idempotency key together with user_id)
    strava_activity_id = Column(String(32), nullable=False)

    # Activity info
    type = Column(String(16), nullable=False)  # Run, Ride, Swim, Other
    name = Column(String(255), nullable=False, default="")
    started_at = Column(DateTime, nullable=False, index=True)

    # Core metrics
    duration_seconds = Column(Integer, nullable=False)
    distance_meters = Column(Float, nullable=False)
    calories = Column(Integer, nullable=False)
    elevation_meters = Column(Float, nullable=True)  # NULL = no elevation data
    avg_heart_rate = Column(Integer, nullable=True)

    # Runs get pace, everything else speed
    pace_seconds_per_km = Column(Integer, nullable=True)
    speed_kmh = Column(Float, nullable=True)

    # User edits
    notes = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Activity {self.strava_activity_id} {self.type} {self.distance_meters}m>"
