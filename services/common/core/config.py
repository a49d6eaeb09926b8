"""
Common Configuration
"""

from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class TrustMode(str, Enum):
    """How the identity of an upstream TLS endpoint is validated."""

    VERIFY = "verify"
    CA_BUNDLE = "ca_bundle"
    PLAINTEXT = "plaintext"
    INSECURE = "insecure"


class BaseAppConfig(BaseSettings):
    """
    Common application settings.
    """

    LOG_LEVEL: str = Field(default="INFO", description="Log level")
    LOG_CONFIG_PATH: str = Field(
        default="config/api_proxy_log.yaml", description="YAML logging config path"
    )

    # ===== Upstream transport trust =====
    UPSTREAM_TRUST_MODE: TrustMode = Field(
        default=TrustMode.VERIFY,
        description="verify | ca_bundle | plaintext | insecure (development only)",
    )
    UPSTREAM_CA_BUNDLE: str = Field(
        default="", description="PEM trust anchor used when UPSTREAM_TRUST_MODE=ca_bundle"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )
