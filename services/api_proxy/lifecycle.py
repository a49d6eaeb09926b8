"""
Where: services/api_proxy/lifecycle.py
What: Startup/shutdown orchestration for shared resources.
Why: Keep main.py focused on app assembly while preserving lifecycle behavior.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from services.common.core.http_client import HttpClientFactory

from .config import ProxyConfig
from .core.cors import CorsPolicy
from .core.exceptions import ErrorClassifier
from .core.normalizer import RequestNormalizer
from .services.forwarder import UpstreamForwarder
from .services.processor import ProxyRequestProcessor

logger = logging.getLogger("api_proxy.main")


def build_processor(client: httpx.AsyncClient, proxy_config: ProxyConfig) -> ProxyRequestProcessor:
    """Wire the request pipeline around an already created HTTP client."""
    return ProxyRequestProcessor(
        cors=CorsPolicy(proxy_config.CORS_ALLOW_HEADERS),
        normalizer=RequestNormalizer(
            proxy_config.UPSTREAM_BASE_URL,
            proxy_config.MOUNT_PREFIX,
            proxy_config.ROUTING_ARTIFACT_PARAM,
        ),
        forwarder=UpstreamForwarder(client, timeout=proxy_config.REQUEST_TIMEOUT),
        classifier=ErrorClassifier(
            proxy_config.UPSTREAM_TRUST_MODE.value,
            expose_traceback=proxy_config.EXPOSE_ERROR_TRACEBACK,
        ),
    )


@asynccontextmanager
async def manage_lifespan(app: FastAPI, proxy_config: ProxyConfig) -> AsyncIterator[None]:
    """Manage application lifecycle."""
    factory = HttpClientFactory(proxy_config)
    factory.log_trust_mode()
    client = factory.create_async_client(
        timeout=proxy_config.REQUEST_TIMEOUT,
        follow_redirects=proxy_config.FOLLOW_REDIRECTS,
        max_redirects=proxy_config.MAX_REDIRECTS,
    )

    try:
        app.state.http_client = client
        app.state.processor = build_processor(client, proxy_config)

        logger.info(
            "API proxy initialized: %s -> %s",
            proxy_config.MOUNT_PREFIX,
            proxy_config.UPSTREAM_BASE_URL,
        )
        yield
    finally:
        logger.info("API proxy shutting down, closing http client.")
        await client.aclose()
