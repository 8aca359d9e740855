"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import AliasChoices, Field, field_validator, ConfigDict


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")
    app_url: str = Field(
        default="http://localhost:3000",
        description="Front-end base URL used for post-OAuth redirects"
    )

    # === Database ===
    database_url: str = Field(
        default="sqlite:///./macroclaw.db",
        description="Database connection URL"
    )

    # === CORS ===
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # === Strava ===
    strava_client_id: Optional[str] = Field(default=None)
    strava_client_secret: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "strava_client_secret",
            "strava_secret",  # Also accept STRAVA_SECRET
        )
    )
    strava_redirect_uri: Optional[str] = Field(default=None)
    strava_scope: str = Field(default="activity:read_all")
    strava_http_timeout: float = Field(
        default=10.0,
        description="Timeout in seconds for every outbound Strava call"
    )
    strava_activities_page_size: int = Field(default=30, ge=1, le=200)
    strava_refresh_margin_seconds: int = Field(default=300, ge=0)

    @field_validator('database_url')
    @classmethod
    def fix_postgres_url(cls, v: str) -> str:
        """Fix Render/Railway postgres:// URL to postgresql://"""
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',')]
        return v

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
