"""
Upstream Forwarder - sends one request to the upstream and reads the reply.

Every status code is a successful exchange at this layer; only transport
failures raise.
"""

import asyncio
import logging
import time
from typing import Dict

import httpx

from ..core.exceptions import (
    InvalidTargetError,
    UpstreamTimeoutError,
    UpstreamTransportError,
    UpstreamTrustError,
    is_certificate_failure,
)
from ..core.headers import mask_authorization
from ..models import InboundRequest, OutboundRequest, UpstreamResponse

logger = logging.getLogger("api_proxy.forwarder")

DEFAULT_CONTENT_TYPE = "application/json"

# Framing headers httpx derives from the URL and body.
_TRANSPORT_HEADERS = frozenset({"host", "content-length", "transfer-encoding"})


def build_upstream_headers(inbound: InboundRequest) -> Dict[str, str]:
    """
    Construct the upstream header set: Content-Type (defaulting to JSON) and
    Authorization when the caller sent one. Nothing else is forwarded.
    """
    headers = {"Content-Type": inbound.header("content-type") or DEFAULT_CONTENT_TYPE}
    authorization = inbound.header("authorization")
    if authorization:
        headers["Authorization"] = authorization
    return headers


class UpstreamForwarder:
    """
    Forwards requests over a shared httpx.AsyncClient.

    The client carries the trust mode and redirect policy; this class owns the
    per-request timeout and makes sure each response is closed.
    """

    def __init__(self, client: httpx.AsyncClient, timeout: float = 30.0):
        self.client = client
        self.timeout = timeout

    def build_outbound(self, inbound: InboundRequest, target_url: str) -> OutboundRequest:
        return OutboundRequest(
            method=inbound.method.upper(),
            url=target_url,
            headers=build_upstream_headers(inbound),
            body=inbound.body,
            inbound_path=inbound.path,
        )

    async def forward(self, outbound: OutboundRequest) -> UpstreamResponse:
        """
        Send ``outbound`` and return the upstream reply.

        Raises:
            UpstreamTimeoutError: round trip exceeded the timeout.
            UpstreamTrustError: the upstream certificate was rejected.
            InvalidTargetError: the URL could not be used by the transport.
            UpstreamTransportError: any other connection-level failure.
        """
        logger.info(
            f"Proxying: {outbound.method} {outbound.inbound_path} -> {outbound.url}",
            extra={
                "method": outbound.method,
                "inbound_path": outbound.inbound_path,
                "target_url": outbound.url,
                "content_type": outbound.headers.get("Content-Type"),
                "authorization": mask_authorization(outbound.headers.get("Authorization")),
                "body_bytes": len(outbound.body),
            },
        )

        start_time = time.perf_counter()
        try:
            upstream = await asyncio.wait_for(self._exchange(outbound), timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            raise UpstreamTimeoutError(self.timeout, exc) from exc
        except httpx.TimeoutException as exc:
            raise UpstreamTimeoutError(self.timeout, exc) from exc
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
            raise InvalidTargetError(outbound.url, exc) from exc
        except httpx.ConnectError as exc:
            if is_certificate_failure(exc):
                raise UpstreamTrustError(exc) from exc
            raise UpstreamTransportError(exc) from exc
        except (httpx.HTTPError, httpx.StreamError) as exc:
            raise UpstreamTransportError(exc) from exc

        latency_ms = round((time.perf_counter() - start_time) * 1000, 2)
        logger.info(
            f"Upstream responded {upstream.status_code} for {outbound.method} {outbound.url}",
            extra={
                "status": upstream.status_code,
                "latency_ms": latency_ms,
                "body_bytes": len(upstream.body),
            },
        )
        return upstream

    async def _exchange(self, outbound: OutboundRequest) -> UpstreamResponse:
        request = self.client.build_request(
            outbound.method,
            outbound.url,
            headers=outbound.headers,
            content=outbound.body or None,
            timeout=self.timeout,
        )
        # Drop client defaults (User-Agent, Accept, ...) so only the constructed set goes out.
        allowed = {name.lower() for name in outbound.headers} | _TRANSPORT_HEADERS
        for name in set(request.headers.keys()):
            if name.lower() not in allowed:
                del request.headers[name]

        response = await self.client.send(request, stream=True)
        try:
            body = b"".join([chunk async for chunk in response.aiter_raw()])
            return UpstreamResponse(
                status_code=response.status_code,
                headers=list(response.headers.multi_items()),
                body=body,
            )
        finally:
            await response.aclose()
