"""
Process-wide configuration for webflow-tools.

Settings are read once from the environment (and an optional ``.env`` file)
into an immutable object that is passed to every tool through its
ToolContext. Nothing below the CLI reads the environment directly.

Environment variables:
    WEBFLOW_API_KEY: Bearer token for the Webflow Data API (required at first call)
    WEBFLOW_SITE_ID: Default site used when a tool call omits siteId
    WEBFLOW_BASE_URL: API root, defaults to https://api.webflow.com/v2
    WEBFLOW_TIMEOUT_SECONDS: Per-request timeout handed to httpx
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from webflow_tools.errors import MissingApiKeyError, MissingSiteIdError

DEFAULT_BASE_URL = "https://api.webflow.com/v2"


class Settings(BaseSettings):
    """
    Immutable configuration snapshot.

    A missing API key is not an error here; it is reported by the client
    the first time a request is attempted.

    Attributes:
        api_key: Webflow API token
        site_id: Default site ID for site-scoped tools
        base_url: Root URL every API path is appended to
        timeout_seconds: Request timeout for the underlying HTTP client
    """

    model_config = SettingsConfigDict(
        env_prefix="WEBFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    api_key: str | None = Field(
        default=None,
        description="Webflow API token",
    )
    site_id: str | None = Field(
        default=None,
        description="Default site ID used when a call omits siteId",
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Root URL of the Webflow Data API",
    )
    timeout_seconds: float = Field(
        default=30.0,
        description="Request timeout in seconds",
        gt=0,
    )

    def require_api_key(self) -> str:
        """Return the API key or raise MissingApiKeyError."""
        if not self.api_key:
            raise MissingApiKeyError()
        return self.api_key

    def resolve_site_id(self, site_id: str | None = None) -> str:
        """
        Pick the site a call targets.

        An explicit site ID wins, then the configured default.

        Raises:
            MissingSiteIdError: If neither is available
        """
        resolved = site_id or self.site_id
        if not resolved:
            raise MissingSiteIdError()
        return resolved


def get_settings(**overrides: object) -> Settings:
    """Build settings from the environment, with keyword overrides on top."""
    return Settings(**overrides)
