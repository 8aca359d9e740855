"""
Strava error taxonomy.

Every failure of the connection/sync core is one of these. Routes map them
to HTTP responses; nothing in the core swallows them.

- StravaConfigError: client id / secret / redirect URI missing
- NotConnectedError: user has no stored credential (a state, not a fault)
- OAuthExchangeError: authorization code rejected
- OAuthRefreshError: refresh token rejected
- FetchActivitiesError: activities listing failed
"""

from typing import Optional


class StravaError(Exception):
    """Base Strava error."""
    pass


class StravaConfigError(StravaError):
    """Strava client configuration is incomplete."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            f"Strava integration not configured, missing: {', '.join(missing)}"
        )


class NotConnectedError(StravaError):
    """User has not connected Strava (or disconnected it)."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"Strava not connected for user {user_id}")


class StravaProviderError(StravaError):
    """
    Strava rejected a request or could not be reached.

    status_code is None when the request never got a response
    (timeout, connection error).
    """

    action = "request"

    def __init__(self, status_code: Optional[int], body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Strava {self.action} failed: {status_code} {body}".rstrip())


class OAuthExchangeError(StravaProviderError):
    """Authorization code exchange failed."""

    action = "token exchange"


class OAuthRefreshError(StravaProviderError):
    """Token refresh failed."""

    action = "token refresh"

    @property
    def revoked(self) -> bool:
        """Strava answers 400/401 when the refresh token is no longer valid."""
        return self.status_code in (400, 401)


class FetchActivitiesError(StravaProviderError):
    """Activities listing failed."""

    action = "activities fetch"
