import logging
import ssl
from typing import Union

import httpx

from .config import BaseAppConfig, TrustMode

logger = logging.getLogger(__name__)


class HttpClientFactory:
    """
    HTTP Client Factory for centralized upstream trust handling.
    """

    def __init__(self, config: BaseAppConfig):
        self.config = config

    def resolve_verify(self) -> Union[bool, ssl.SSLContext]:
        """
        Translate the configured trust mode into an httpx ``verify`` value.
        """
        mode = self.config.UPSTREAM_TRUST_MODE

        if mode is TrustMode.CA_BUNDLE:
            return ssl.create_default_context(cafile=self.config.UPSTREAM_CA_BUNDLE)
        if mode is TrustMode.INSECURE:
            return False
        # VERIFY, and PLAINTEXT where no handshake ever happens.
        return True

    def log_trust_mode(self) -> None:
        """
        Announce the trust mode once at startup.
        """
        mode = self.config.UPSTREAM_TRUST_MODE

        if mode is TrustMode.INSECURE:
            logger.warning(
                "Upstream certificate validation is DISABLED (UPSTREAM_TRUST_MODE=insecure). "
                "Do not use this mode outside development."
            )
        elif mode is TrustMode.CA_BUNDLE:
            logger.info(
                "Upstream certificates validated against custom trust anchor %s",
                self.config.UPSTREAM_CA_BUNDLE,
            )
        else:
            logger.info("Upstream trust mode: %s", mode.value)

    def create_async_client(self, **kwargs) -> httpx.AsyncClient:
        """
        Create an httpx.AsyncClient with the configured trust mode.

        Args:
            **kwargs: Additional arguments for httpx.AsyncClient
        """
        verify = kwargs.pop("verify", None)

        # If verify is not explicitly provided, use config default
        if verify is None:
            verify = self.resolve_verify()

        # Default limits for high throughput (can be overridden by caller)
        if "limits" not in kwargs:
            kwargs["limits"] = httpx.Limits(max_keepalive_connections=20, max_connections=100)
        # Avoid leaking host HTTP(S)_PROXY/NO_PROXY into upstream calls unless explicitly requested.
        kwargs.setdefault("trust_env", False)

        return httpx.AsyncClient(verify=verify, **kwargs)
