"""
Strava-related database models.

Models:
- StravaCredential: OAuth credential per user (row present == connected)
"""

from datetime import datetime

from sqlalchemy import Column, String, DateTime, Integer, ForeignKey, Text

from macroclaw.models.base import Base


class StravaCredential(Base):
    """
    Strava OAuth token storage.

    Access token, refresh token and expiry are written together and
    deleted together; a user without a row is not connected.
    Tokens should be encrypted in production.
    """

    __tablename__ = "strava_credentials"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)

    # Strava athlete info
    strava_athlete_id = Column(String(20), nullable=True)

    # OAuth tokens (should be encrypted in production)
    access_token = Column(Text, nullable=False)
    refresh_token = Column(Text, nullable=False)
    expires_at = Column(Integer, nullable=False)  # Unix timestamp

    # Token scope
    scope = Column(String(255), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def seconds_until_expiry(self, now: float) -> float:
        """Seconds left before the access token expires (negative if expired)."""
        return self.expires_at - now

    def __repr__(self):
        return f"<StravaCredential user_id={self.user_id} athlete_id={self.strava_athlete_id}>"
