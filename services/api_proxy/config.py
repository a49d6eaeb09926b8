"""
API proxy configuration definition.

Loads configuration from environment variables and provides a Pydantic model.
Uses pydantic-settings for type safety and defaults.
"""

import os

from pydantic import Field, field_validator, model_validator

from services.common.core.config import BaseAppConfig, TrustMode

DEFAULT_CORS_ALLOW_HEADERS = (
    "X-CSRF-Token, X-Requested-With, Accept, Accept-Version, Content-Length, "
    "Content-MD5, Content-Type, Date, X-Api-Version, Authorization"
)


class ProxyConfig(BaseAppConfig):
    """
    Configuration management for the API proxy service.
    """

    # Server settings
    BIND_HOST: str = Field(default="0.0.0.0", description="Listen host")
    BIND_PORT: int = Field(default=8000, description="Listen port")

    # Upstream
    UPSTREAM_BASE_URL: str = Field(..., description="Fixed upstream origin and base path")
    REQUEST_TIMEOUT: float = Field(
        default=30.0, gt=0, description="Upstream round-trip timeout (seconds)"
    )
    FOLLOW_REDIRECTS: bool = Field(default=True, description="Follow upstream redirects")
    MAX_REDIRECTS: int = Field(default=5, ge=0, description="Redirect hop limit")

    # Routing
    MOUNT_PREFIX: str = Field(default="/api/proxy", description="Path prefix served by the proxy")
    ROUTING_ARTIFACT_PARAM: str = Field(
        default="path", description="Query parameter injected by the front rewrite layer"
    )

    # CORS
    CORS_ALLOW_HEADERS: str = Field(
        default=DEFAULT_CORS_ALLOW_HEADERS,
        description="Comma separated Access-Control-Allow-Headers value",
    )

    # Error responses
    EXPOSE_ERROR_TRACEBACK: bool = Field(
        default=False, description="Put the traceback into Proxy Error details"
    )

    @field_validator("UPSTREAM_BASE_URL")
    @classmethod
    def _strip_base_url(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError("UPSTREAM_BASE_URL must be an absolute http:// or https:// URL")
        return value.rstrip("/")

    @field_validator("MOUNT_PREFIX")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        value = "/" + value.strip().strip("/")
        if value == "/":
            raise ValueError("MOUNT_PREFIX must not be the root path")
        return value

    @model_validator(mode="after")
    def _check_trust_mode(self) -> "ProxyConfig":
        mode = self.UPSTREAM_TRUST_MODE
        is_https = self.UPSTREAM_BASE_URL.startswith("https://")

        if mode is TrustMode.PLAINTEXT and is_https:
            raise ValueError("UPSTREAM_TRUST_MODE=plaintext requires an http:// UPSTREAM_BASE_URL")
        if mode is not TrustMode.PLAINTEXT and not is_https:
            raise ValueError(
                f"UPSTREAM_TRUST_MODE={mode.value} requires an https:// UPSTREAM_BASE_URL; "
                "set UPSTREAM_TRUST_MODE=plaintext to talk to an http:// upstream"
            )
        if mode is TrustMode.CA_BUNDLE:
            if not self.UPSTREAM_CA_BUNDLE:
                raise ValueError("UPSTREAM_TRUST_MODE=ca_bundle requires UPSTREAM_CA_BUNDLE")
            if not os.path.isfile(self.UPSTREAM_CA_BUNDLE):
                raise ValueError(f"UPSTREAM_CA_BUNDLE not found: {self.UPSTREAM_CA_BUNDLE}")
        return self
