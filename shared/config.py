"""
Shared configuration management for the Inventory Access Layer.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="INVENTORY_",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")


class InventoryConfig(BaseConfig):
    """Inventory access layer configuration.

    Every field reads from ``INVENTORY_<FIELD_NAME>``, e.g.
    ``INVENTORY_BACKEND_URL``.
    """

    service_name: str = "inventory"

    # Backend endpoint; empty means "not configured" and is reported at startup
    backend_url: str = Field(default="")
    request_timeout_seconds: float = Field(default=10.0, gt=0)

    # Read cache
    cache_ttl_seconds: float = Field(default=120.0, gt=0)
    cache_max_entries: Optional[int] = Field(default=None, ge=1)

    # E-mail notifications (Brevo)
    brevo_api_url: str = Field(default="https://api.brevo.com/v3/smtp/email")
    brevo_api_key: str = Field(default="")
    admin_email: str = Field(default="")
    from_email: str = Field(default="")
    from_name: str = Field(default="Makerspace Inventory")

    @property
    def backend_configured(self) -> bool:
        return bool(self.backend_url.strip())

    @property
    def email_configured(self) -> bool:
        return bool(self.brevo_api_key and self.admin_email and self.from_email)


def get_config(**overrides) -> InventoryConfig:
    """Get configuration, with keyword overrides taking precedence over the environment."""
    return InventoryConfig(**overrides)
