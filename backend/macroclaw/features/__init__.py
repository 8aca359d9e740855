"""
Feature modules.

Each feature owns its models, schemas and repositories:
- users: application users
- strava: OAuth connection, token lifecycle, activity sync
- activities: normalized activity storage and user edits
"""
