"""
Configuration management for RateTheDogs.
Loads settings from environment variables and provides typed configuration access.
"""

from pathlib import Path
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application Settings
    environment: str = Field(default="development", description="Environment: development, test, production")
    log_level: str = Field(default="INFO", description="Logging level")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Database
    database_url: str = Field(
        default="sqlite:///./ratethedogs.db",
        description="SQLAlchemy database URL"
    )
    database_echo: bool = Field(default=False, description="Echo SQL statements")

    # Admin
    admin_secret: str = Field(default="", description="Shared secret for the X-Admin-Secret header")

    # Anonymous identity cookie
    anon_cookie_name: str = Field(default="anon_id", description="Anonymous ID cookie name")
    anon_cookie_max_age: int = Field(
        default=400 * 24 * 60 * 60,
        description="Anonymous ID cookie lifetime in seconds (browser max)"
    )

    # HTTP
    cors_origins: List[str] = Field(default=["*"], description="Allowed CORS origins")

    # Images
    image_public_url: Optional[str] = Field(
        default=None,
        description="Public base URL for uploaded images"
    )
    upload_dir: str = Field(default="./uploads", description="Directory for uploaded images")

    # Dog CEO API
    dog_ceo_base_url: str = Field(
        default="https://dog.ceo/api",
        description="Dog CEO API base URL"
    )

    # API client settings
    api_timeout: int = Field(default=30, description="API request timeout in seconds")
    api_max_retries: int = Field(default=3, description="Maximum API retry attempts")
    api_retry_base_delay: float = Field(
        default=1.0,
        description="Base delay in seconds for exponential backoff"
    )
    api_rate_limit: int = Field(default=100, description="API rate limit per minute")

    # Image fetch pipeline
    fetch_batch_size: int = Field(default=10, description="Breeds fetched concurrently per batch")
    fetch_batch_delay: float = Field(default=0.5, description="Delay in seconds between fetch batches")
    breed_images_path: str = Field(
        default="./data/breed-images.json",
        description="Output path of the fetched breed image catalog"
    )
    seed_default_limit: int = Field(default=50, description="Default images per breed when seeding")

    # Rate limiting
    rate_limit_enabled: bool = Field(default=True, description="Enforce per-user rate limits")
    rating_rate_limit: int = Field(default=10, description="Ratings per minute per anonymous user")
    upload_rate_limit: int = Field(default=5, description="Uploads per hour per anonymous user")

    # Leaderboard
    leaderboard_min_ratings: int = Field(
        default=1,
        description="Minimum ratings for a dog or breed to appear on the leaderboard"
    )

    def get_upload_path(self) -> Path:
        """Get the upload directory, creating it if needed."""
        path = Path(self.upload_dir)
        path.mkdir(parents=True, exist_ok=True)
        return path

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


# Convenience access
settings = get_settings()
