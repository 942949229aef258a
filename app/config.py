"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class StorageBackendType(str, Enum):
    """Where uploaded images and files are kept"""

    LOCAL = "local"
    S3 = "s3"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="KDoc Admin", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # Database settings
    database_url: str = Field(
        default="postgresql+psycopg2://postgres@localhost:5432/kdoc",
        description="SQLAlchemy database URL",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")
    db_init_attempts: int = Field(
        default=8, ge=1, description="Database initialization retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB init attempts"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    # API settings
    api_prefix: str = Field(default="/api", description="API route prefix")
    api_title: str = Field(
        default="KDoc Admin API", description="API documentation title"
    )
    api_description: str = Field(
        default="Back office for hospitals, doctors, reviews and consultations",
        description="API documentation description",
    )
    admin_api_key: Optional[str] = Field(
        default=None,
        description="Static key required in the X-Admin-Key header (disabled when empty)",
    )

    # Storage settings
    storage_backend: StorageBackendType = Field(
        default=StorageBackendType.LOCAL, description="Storage backend (local or s3)"
    )
    storage_local_dir: str = Field(
        default="./.storage", description="Directory used by the local backend"
    )
    storage_public_base_url: str = Field(
        default="http://localhost:8000/static",
        description="Base URL under which locally stored files are served",
    )
    s3_bucket: str = Field(default="kdoc-admin", description="S3 bucket name")
    s3_region: str = Field(default="ap-northeast-2", description="S3 region")
    storage_max_image_bytes: int = Field(
        default=500 * 1024, ge=1, description="Maximum accepted image size"
    )
    storage_max_file_bytes: int = Field(
        default=10 * 1024 * 1024, ge=1, description="Maximum accepted attachment size"
    )
    storage_allowed_image_types: list[str] = Field(
        default=["image/jpeg", "image/png", "image/webp", "image/gif"],
        description="Accepted image content types",
    )

    # Consultation chat
    chat_history_default_limit: int = Field(default=50, ge=1)
    chat_history_max_limit: int = Field(default=100, ge=1)
    chat_message_max_length: int = Field(default=1000, ge=1)

    # Invitation codes
    invitation_code_max_attempts: int = Field(default=10, ge=1)
    invitation_code_default_expiry_days: int = Field(default=30, ge=1, le=365)

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator("storage_backend", mode="before")
    @classmethod
    def validate_storage_backend(cls, v):
        if isinstance(v, str):
            return StorageBackendType(v.lower())
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def is_testing(self) -> bool:
        """Check if running in testing environment"""
        return self.environment == Environment.TESTING

    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


# Global settings instance
settings = Settings()
