"""
Configuration Management
========================
Loads and validates environment variables using Pydantic Settings.
Provides type-safe access to the object storage configuration.

Features:
- Object storage credentials, region and API version
- Optional custom endpoint (MinIO, R2 and other S3-compatible services)
- Secret masking
- Safe export for debugging
"""

from functools import lru_cache
from typing import List, Optional, Dict, Any

from pydantic import Field, field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from s3facade.core.exceptions import StorageConfigurationError


class Settings(BaseSettings):
    """
    Application Settings

    All settings are loaded from environment variables or .env file.
    Credentials are optional: when unset, the SDK falls back to its own
    credential chain (instance profile, shared config, ...).
    """

    # ========================================================================
    # APPLICATION
    # ========================================================================
    APP_NAME: str = "s3facade"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # ========================================================================
    # LOGGING
    # ========================================================================
    LOG_LEVEL: str = Field(default="INFO")
    LOG_DIR: Optional[str] = Field(default=None)

    # ========================================================================
    # OBJECT STORAGE
    # ========================================================================
    AWS_ACCESS_KEY: Optional[str] = Field(default=None)
    AWS_SECRET_KEY: Optional[str] = Field(default=None)
    AWS_REGION: str = Field(default="us-east-1")
    AWS_API_VERSION: str = Field(default="2006-03-01")
    AWS_ENDPOINT_URL: Optional[str] = Field(default=None)

    @field_validator("AWS_ENDPOINT_URL")
    def strip_endpoint(cls, v):
        """Normalize the endpoint so Location URLs never contain '//'"""
        if v is None:
            return v
        v = v.strip().rstrip("/")
        return v or None

    @field_validator("LOG_LEVEL")
    def upper_log_level(cls, v):
        return v.upper()

    # ========================================================================
    # PYDANTIC CONFIGURATION
    # ========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"  # Ignore extra fields in .env
    )

    # ========================================================================
    # COMPUTED PROPERTIES
    # ========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development mode"""
        return self.ENVIRONMENT.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode"""
        return self.ENVIRONMENT.lower() == "production"

    @computed_field
    @property
    def s3_configured(self) -> bool:
        """Check if explicit credentials are configured"""
        return all([
            self.AWS_ACCESS_KEY,
            self.AWS_SECRET_KEY,
        ])

    @computed_field
    @property
    def uses_custom_endpoint(self) -> bool:
        """Check if a non-AWS endpoint is configured"""
        return bool(self.AWS_ENDPOINT_URL)

    # ========================================================================
    # VALIDATION METHODS
    # ========================================================================

    def validate_required_for_production(self) -> List[str]:
        """
        Validate that all required settings for production are configured

        Returns:
            List[str]: List of missing required settings
        """
        if not self.is_production:
            return []

        missing = []

        if not self.AWS_ACCESS_KEY:
            missing.append("AWS_ACCESS_KEY must be set in production")
        if not self.AWS_SECRET_KEY:
            missing.append("AWS_SECRET_KEY must be set in production")
        if not self.AWS_REGION:
            missing.append("AWS_REGION must not be empty")

        return missing

    def mask_secret(self, secret: Optional[str], show_chars: int = 4) -> str:
        """
        Mask a secret for safe logging

        Args:
            secret: The secret to mask
            show_chars: Number of characters to show at the start

        Returns:
            str: Masked secret
        """
        if not secret:
            return "NOT_SET"

        if len(secret) <= show_chars:
            return "*" * len(secret)

        return secret[:show_chars] + "*" * (len(secret) - show_chars)

    def to_safe_dict(self) -> Dict[str, Any]:
        """
        Export configuration as dictionary with secrets masked

        Returns:
            Dict[str, Any]: Safe configuration dictionary
        """
        config = self.model_dump()

        sensitive_fields = [
            "AWS_ACCESS_KEY",
            "AWS_SECRET_KEY",
        ]

        for field in sensitive_fields:
            if field in config:
                config[field] = self.mask_secret(config[field])

        return config

    def get_storage_config(self) -> Dict[str, Any]:
        """
        Get object storage configuration (no secrets)

        Returns:
            Dict[str, Any]: Storage configuration
        """
        return {
            "region": self.AWS_REGION,
            "api_version": self.AWS_API_VERSION,
            "endpoint_url": self.AWS_ENDPOINT_URL,
            "credentials": "explicit" if self.s3_configured else "sdk-default",
        }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance

    Uses lru_cache to ensure settings are loaded only once.

    Returns:
        Settings: Validated settings instance
    """
    return Settings()


def validate_configuration(settings: Optional[Settings] = None) -> None:
    """
    Validate configuration before building a storage client

    Args:
        settings: Settings to check (defaults to the cached instance)

    Raises:
        StorageConfigurationError: If production configuration is invalid
    """
    settings = settings or get_settings()
    missing = settings.validate_required_for_production()
    if missing:
        error_msg = "Production configuration validation failed:\n" + "\n".join(f"  - {m}" for m in missing)
        raise StorageConfigurationError(error_msg)
