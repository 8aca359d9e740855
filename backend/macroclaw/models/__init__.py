"""
Database Models

Feature models live next to their feature (features/*/models.py).
Import them through register_models() so they are attached to Base.metadata
before create_all() or Alembic autogenerate runs.
"""

from macroclaw.models.base import Base


def register_models() -> None:
    """Import all feature models to register them with SQLAlchemy."""
    from macroclaw.features.users.models import User  # noqa: F401
    from macroclaw.features.strava.models import StravaCredential  # noqa: F401
    from macroclaw.features.activities.models import Activity  # noqa: F401


__all__ = ["Base", "register_models"]
