"""
Activities module.

Usage:
    from macroclaw.features.activities import Activity, ActivityRepository

Models:
- Activity: Normalized workout row

Repositories:
- ActivityRepository: Upsert from sync, listing and user edits
"""

from .models import Activity
from .schemas import (
    ActivityInsert,
    ActivityResponse,
    ActivityListResponse,
    ActivityUpdate,
    ActivityEnvelope,
)
from .repository import ActivityRepository

__all__ = [
    # Models
    "Activity",
    # Schemas
    "ActivityInsert",
    "ActivityResponse",
    "ActivityListResponse",
    "ActivityUpdate",
    "ActivityEnvelope",
    # Repositories
    "ActivityRepository",
]
