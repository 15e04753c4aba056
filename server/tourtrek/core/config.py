"""Configuration settings for the TourTrek server."""

from typing import Annotated, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode


class Settings(BaseSettings):
    """Application settings with Pydantic validation."""

    # Database settings
    mongodb_uri: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection string"
    )

    database_name: str = Field(
        default="tourDB",
        description="MongoDB database holding the users, tourPackages and bookings collections"
    )

    # Environment settings
    environment: str = Field(
        default="development",
        description="Application environment"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Application log level"
    )

    # Security settings
    access_token_secret: str = Field(
        default="your-secret-key-here",
        description="Shared secret used to sign and verify bearer tokens"
    )

    access_token_expires_seconds: int = Field(
        default=3600,
        gt=0,
        description="Lifetime of issued bearer tokens in seconds"
    )

    token_algorithm: str = Field(
        default="HS256",
        description="JWT signing algorithm"
    )

    # CORS settings
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default=["http://localhost:5173"],
        description="Allowed CORS origins"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Server host"
    )

    port: int = Field(
        default=5000,
        description="Server port"
    )

    # Observability settings
    otlp_endpoint: Optional[str] = Field(
        default=None,
        description="OTLP collector endpoint for traces and metrics"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_environments = ["development", "staging", "production"]
        if v.lower() not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @property
    def debug(self) -> bool:
        """Return True if in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Return True if in production mode."""
        return self.environment == "production"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()
