"""
Configuration management for the Microsoft Planner integration service.

Loads settings from environment variables (and an optional .env file).
Microsoft 365 credentials are optional at load time so the HTTP server can
start and report what is missing.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Field name -> environment variable, in the order they are reported
REQUIRED_ENV_VARS = {
    "client_id": "MICROSOFT_CLIENT_ID",
    "client_secret": "MICROSOFT_CLIENT_SECRET",
    "tenant_id": "MICROSOFT_TENANT_ID",
}

DEFAULT_AUTHORITY_HOST = "https://login.microsoftonline.com"
DEFAULT_GRAPH_BASE_URL = "https://graph.microsoft.com/v1.0"
DEFAULT_GRAPH_SCOPE = "https://graph.microsoft.com/.default"


def build_authority(authority_host: str, tenant_id: Optional[str]) -> str:
    """Tenant-specific authority URL (`{host}/{tenant}`)."""
    return f"{authority_host.rstrip('/')}/{tenant_id}"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Microsoft Entra ID app registration (client credential flow)
    client_id: Optional[str] = Field(default=None, validation_alias="MICROSOFT_CLIENT_ID")
    client_secret: Optional[str] = Field(default=None, validation_alias="MICROSOFT_CLIENT_SECRET")
    tenant_id: Optional[str] = Field(default=None, validation_alias="MICROSOFT_TENANT_ID")

    # Identity authority and Graph API endpoints
    authority_host: str = Field(
        default=DEFAULT_AUTHORITY_HOST,
        validation_alias="MICROSOFT_AUTHORITY_HOST",
    )
    graph_base_url: str = Field(
        default=DEFAULT_GRAPH_BASE_URL,
        validation_alias="MICROSOFT_GRAPH_BASE_URL",
    )
    graph_scope: str = Field(
        default=DEFAULT_GRAPH_SCOPE,
        validation_alias="MICROSOFT_GRAPH_SCOPE",
    )

    # Outbound HTTP timeout (token endpoint and Graph calls)
    http_timeout_seconds: float = Field(default=30.0, validation_alias="HTTP_TIMEOUT_SECONDS")

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # Server configuration
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=3000, validation_alias="PORT")

    # How long uvicorn waits for in-flight requests on SIGTERM/SIGINT
    shutdown_timeout_seconds: int = Field(default=7, validation_alias="SHUTDOWN_TIMEOUT_SECONDS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    @property
    def authority(self) -> str:
        """Tenant-specific authority URL used for token requests."""
        return build_authority(self.authority_host, self.tenant_id)

    def missing_required_env(self) -> list[str]:
        """Return the names of required environment variables that are unset or blank."""
        return [
            env_name
            for field_name, env_name in REQUIRED_ENV_VARS.items()
            if not (getattr(self, field_name) or "").strip()
        ]


# Global settings instance
settings = Settings()
