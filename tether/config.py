"""Configuration management using Pydantic settings"""

from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MatchingConfig(BaseSettings):
    """Matching pipeline configuration"""

    default_limit: int = Field(default=5, description="Default number of recommendations returned")
    max_limit: int = Field(default=50, description="Largest limit accepted by the API")
    catalog_path: Optional[str] = Field(default=None, description="JSON resource catalog to load (seed catalog if unset)")
    verified_only: bool = Field(default=False, description="Only match against verified resources")

    model_config = SettingsConfigDict(
        env_prefix="MATCHING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @field_validator("default_limit", "max_limit")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Limits must be positive"""
        if v < 1:
            raise ValueError("limit must be at least 1")
        return v


class APIConfig(BaseSettings):
    """API configuration"""

    host: str = Field(default="0.0.0.0", description="API host")
    port: int = Field(default=8000, description="API port")
    workers: int = Field(default=4, description="Number of workers")

    model_config = SettingsConfigDict(
        env_prefix="API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


class LoggingConfig(BaseSettings):
    """Logging configuration"""

    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(default="json", description="Log format (json or text)")
    output: str = Field(default="stdout", description="Log output (stdout or file path)")

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


class Settings(BaseSettings):
    """Main application settings"""

    environment: str = Field(default="development", description="Environment (development, staging, production)")
    debug: bool = Field(default=False, description="Debug mode")

    # Sub-configurations
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


# Global settings instance
settings = Settings()
