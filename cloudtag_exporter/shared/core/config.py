from functools import lru_cache
from threading import Lock
from typing import Optional

import structlog
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


@lru_cache
def get_settings() -> "Settings":
    """Returns a singleton instance of the exporter settings."""
    return Settings()


_settings_reload_lock = Lock()


def reload_settings_from_environment() -> "Settings":
    """
    Atomically rebuild and replace cached settings from environment values.

    This avoids mutating the cached singleton instance in-place.
    """
    logger = structlog.get_logger()
    with _settings_reload_lock:
        logger.info("settings_reload_started")
        get_settings.cache_clear()
        refreshed = get_settings()
        logger.info("settings_reload_completed")
        return refreshed


class Settings(BaseSettings):
    """
    Configuration for the tag exporter.
    Uses Pydantic-Settings for environment variable parsing from .env.
    """

    APP_NAME: str = "cloudtag-exporter"
    VERSION: str = "0.1.0"
    DEBUG: bool = False
    TESTING: bool = False

    # AWS transport
    AWS_DEFAULT_REGION: str = "us-east-1"
    AWS_ENDPOINT_URL: Optional[str] = None  # LocalStack / moto server
    AWS_ROLE_ARN: Optional[str] = None  # Assumed via STS when set
    AWS_CONNECT_TIMEOUT: int = 10
    AWS_READ_TIMEOUT: int = 30

    # Retry budgets handed to botocore, per API
    TAGGING_API_MAX_RETRIES: int = 5
    AUTOSCALING_API_MAX_RETRIES: int = 5
    APIGATEWAY_API_MAX_RETRIES: int = 5
    EC2_API_MAX_RETRIES: int = 10

    # Label naming
    LABELS_SNAKE_CASE: bool = False

    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True)

    @model_validator(mode="after")
    def validate_aws_transport(self) -> "Settings":
        retries = {
            "TAGGING_API_MAX_RETRIES": self.TAGGING_API_MAX_RETRIES,
            "AUTOSCALING_API_MAX_RETRIES": self.AUTOSCALING_API_MAX_RETRIES,
            "APIGATEWAY_API_MAX_RETRIES": self.APIGATEWAY_API_MAX_RETRIES,
            "EC2_API_MAX_RETRIES": self.EC2_API_MAX_RETRIES,
        }
        for name, value in retries.items():
            if value < 0:
                raise ValueError(f"{name} must be >= 0")
        if self.AWS_CONNECT_TIMEOUT <= 0 or self.AWS_READ_TIMEOUT <= 0:
            raise ValueError("AWS_CONNECT_TIMEOUT and AWS_READ_TIMEOUT must be > 0")
        return self
