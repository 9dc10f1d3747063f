"""Application configuration."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Remote rendering service
    endpoint: str = "https://snaps.example.com"
    api_key: str = ""
    api_secret: str = ""

    # Transport settings
    retry_count: int = 5
    retry_delay_seconds: float = 1.0
    request_timeout_seconds: float = 60.0

    # Polling settings
    poll_interval_seconds: float = 5.0
    poll_timeout_seconds: float | None = None

    # Logging
    log_level: str = "INFO"
    debug: bool = False

    class Config:
        env_prefix = "SNAPFLEET_"
        env_file = ".env"


settings = Settings()
