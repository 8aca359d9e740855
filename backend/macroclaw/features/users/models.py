"""
User-related models.

Models:
- User: Application user (identity is resolved by the upstream auth layer)
"""

from datetime import datetime
import uuid

from sqlalchemy import Column, String, DateTime

from macroclaw.models.base import Base


class User(Base):
    """
    Application user.

    Connected to Strava for activity sync.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, index=True, nullable=True)

    # Profile
    name = Column(String(100), nullable=True)

    # Strava integration
    strava_athlete_id = Column(String(20), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<User {self.id}>"
