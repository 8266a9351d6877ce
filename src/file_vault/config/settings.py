# src/file_vault/config/settings.py
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_DEPLOYMENT_MODES = ["local-dev", "mongo", "memory"]


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from file_vault.config.settings import get_settings
        settings = get_settings()
        origin = settings.frontend_url
    """

    # Application Settings
    app_name: str = Field(
        default="file-vault",
        description="Application name"
    )

    # Deployment Mode
    deployment_mode: str = Field(
        default="local-dev",
        description="Store backend: local-dev (SQLite), mongo, or memory"
    )

    # MongoDB Configuration
    mongo_uri: Optional[str] = Field(
        default=None,
        description="MongoDB connection string, required in mongo mode"
    )

    mongo_database: Optional[str] = Field(
        default=None,
        description="Database name (defaults to the one in the URI, else file_vault)"
    )

    mongo_collection: str = Field(
        default="files",
        description="Collection holding file documents"
    )

    # SQLite Configuration
    sqlite_path: str = Field(
        default="file_vault.db",
        description="SQLite database file for local-dev mode"
    )

    # HTTP Configuration
    frontend_url: str = Field(
        default="http://localhost:3000",
        description="Origin allowed to call the API cross-origin"
    )

    host: str = Field(default="0.0.0.0")

    port: int = Field(default=5000)

    max_request_body_bytes: int = Field(
        default=50 * 1024 * 1024,
        gt=0,
        description="Largest request body accepted, in bytes"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator('deployment_mode', mode='before')
    @classmethod
    def normalize_deployment_mode(cls, v):
        """Normalize deployment mode values for backwards compatibility."""
        if v:
            mode_mapping = {
                "local": "local-dev",
                "sqlite": "local-dev",
                "mongodb": "mongo",
            }
            v = str(v).strip().lower()
            return mode_mapping.get(v, v)
        return v

    @field_validator('deployment_mode')
    @classmethod
    def validate_deployment_mode(cls, v):
        """Validate deployment mode is one of the allowed values."""
        if v not in VALID_DEPLOYMENT_MODES:
            raise ValueError(f"Invalid deployment_mode: {v}. Must be one of {VALID_DEPLOYMENT_MODES}")
        return v

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper()

    @model_validator(mode='after')
    def require_mongo_uri_in_mongo_mode(self):
        if self.deployment_mode == "mongo" and not self.mongo_uri:
            raise ValueError("MONGO_URI must be set when deployment_mode is mongo")
        return self

    @property
    def max_payload_bytes(self) -> int:
        """Largest decoded file a request body of the configured size can carry."""
        return self.max_request_body_bytes * 3 // 4

    def get_environment_dict(self) -> dict:
        """Get configuration as a dictionary suitable for docker-compose or subprocess.

        The connection string is masked.
        """
        return {
            'DEPLOYMENT_MODE': self.deployment_mode,
            'MONGO_URI': '***' if self.mongo_uri else '',
            'MONGO_DATABASE': self.mongo_database or '',
            'MONGO_COLLECTION': self.mongo_collection,
            'SQLITE_PATH': self.sqlite_path,
            'FRONTEND_URL': self.frontend_url,
            'HOST': self.host,
            'PORT': str(self.port),
            'MAX_REQUEST_BODY_BYTES': str(self.max_request_body_bytes),
            'LOG_LEVEL': self.log_level,
        }

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()
