"""Application configuration management using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Nothing is required: a bare checkout runs with email disabled.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="printshop-backend", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/staging/production)")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3000, description="Server port")

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed CORS origins",
    )

    # Storage
    upload_dir: str = Field(default="uploads/designs", description="Directory for uploaded design files")
    orders_file: str = Field(default="orders.json", description="Path of the orders JSON snapshot")
    order_id_start: int = Field(default=1000, description="First order id handed out by an empty store")

    # Limits
    max_design_file_size: int = Field(
        default=10 * 1024 * 1024,
        description="Maximum size of a single uploaded file in bytes (10 MB)",
    )
    max_request_body_size: int = Field(
        default=25 * 1024 * 1024,
        description="Maximum request body size in bytes, checked before parsing",
    )

    # Email (Resend)
    resend_api_key: str = Field(default="", description="Resend API key for sending emails")
    email_from_address: str = Field(
        default="Print Shop <noreply@yourstore.com>",
        description="From address for order emails",
    )
    admin_email: str = Field(default="admin@yourstore.com", description="Operator address for new order alerts")
    support_email: str = Field(default="support@yourstore.com", description="Reply-to address for customer emails")
    admin_panel_url: str = Field(
        default="http://localhost:3000/admin",
        description="Admin panel URL linked from operator emails",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @property
    def is_email_configured(self) -> bool:
        """Check if outbound email can be sent."""
        return bool(self.resend_api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton.

    Returns:
        Settings: Application settings instance.

    Note:
        Settings are cached using lru_cache for performance.
        Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
