"""MacroClaw backend: Strava connection and activity sync service."""

__version__ = "0.1.0"
