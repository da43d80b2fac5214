"""
API Configuration
Settings and configuration for the FastAPI application.
"""

import json
from typing import Any, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class APISettings(BaseSettings):
    """
    API configuration settings.

    Loaded from environment variables and an optional .env file.
    """

    # API Info
    app_name: str = "ShopSearch API"
    version: str = "0.1.0"
    description: str = "Product search with query understanding and multi-factor ranking"

    # Server settings
    host: str = Field(default="0.0.0.0", alias="API_HOST")
    port: int = Field(default=8000, alias="API_PORT")
    reload: bool = Field(default=False, alias="API_RELOAD")

    # CORS settings
    cors_origins: List[str] = Field(
        default=["http://localhost:3000"],
        alias="API_CORS_ORIGINS",
    )

    # Logging
    log_level: str = Field(default="INFO", alias="API_LOG_LEVEL")

    # Catalog
    catalog_seed_path: Optional[str] = Field(default=None, alias="CATALOG_SEED_PATH")

    # Search limits
    max_query_length: int = Field(default=500, alias="SEARCH_MAX_QUERY_LENGTH")
    default_limit: int = Field(default=10, alias="SEARCH_DEFAULT_LIMIT")
    max_limit: int = Field(default=100, alias="SEARCH_MAX_LIMIT")

    # Performance targets
    slow_request_ms: float = Field(default=300.0, alias="API_SLOW_REQUEST_MS")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Any) -> List[str]:
        """Parse CORS origins from JSON string or list."""
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                # Fall back to comma-separated list
                return [origin.strip() for origin in v.split(",")]
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        validate_default=True,
        populate_by_name=True,
    )


# Global settings instance
_settings: Optional[APISettings] = None


def get_settings() -> APISettings:
    """Get global API settings (singleton)."""
    global _settings
    if _settings is None:
        _settings = APISettings()
    return _settings
