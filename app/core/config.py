"""
Configuration management for the Sustainability Scanner.
Loads environment variables using Pydantic Settings.
"""

from functools import lru_cache
from typing import List, Union
from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Sustainability Scanner"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # AWS S3 Configuration
    AWS_REGION: str = ""
    S3_BUCKET_NAME: str = ""        # Empty -> /upload answers 500
    UNIQUE_OBJECT_KEYS: bool = True  # Insert a random token between timestamp and filename

    # Gemini Configuration
    GEMINI_API_KEY: str
    GEMINI_MODEL: str = "gemini-1.5-flash"

    # Classification Service (multipart image in, {"categories": [...]} out)
    CLASSIFIER_SERVICE_URL: str = Field(
        default="http://localhost:5000",
        validation_alias=AliasChoices("CLASSIFIER_SERVICE_URL", "FLASK_SERVER_URL")
    )
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # Analyze route behaviour
    ANALYZE_ROUTE_ENABLED: bool = True      # False -> upload-only service
    ANALYZE_PIPELINE_ENABLED: bool = False  # False -> metadata echo only

    # Prompt context
    RECYCLING_LOCALE: str = "Chaithanya Layout, 8th Phase, J. P. Nagar, Bengaluru"
    RESALE_PLATFORMS: Union[str, List[str]] = ["OLX", "Quickr", "Cashify"]

    @model_validator(mode="before")
    @classmethod
    def parse_resale_platforms(cls, values):
        """Parse RESALE_PLATFORMS from comma-separated string to list."""
        if isinstance(values.get("RESALE_PLATFORMS"), str):
            values["RESALE_PLATFORMS"] = [
                platform.strip()
                for platform in values["RESALE_PLATFORMS"].split(",")
                if platform.strip()
            ]
        return values

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


@lru_cache
def get_settings() -> Settings:
    """
    Load settings once per process.
    Used as a FastAPI dependency so tests can override it.
    """
    return Settings()
