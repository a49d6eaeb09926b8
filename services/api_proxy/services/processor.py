"""
Proxy Request Processor - Service Layer

Standardizes the flow: CORS gate -> normalize -> forward -> relay, with a
single catch-all that turns failures into classified error responses.
"""

import logging

from fastapi import Request
from fastapi.responses import Response

from ..core.cors import CorsPolicy
from ..core.exceptions import ErrorClassifier
from ..core.normalizer import RequestNormalizer
from ..core.relay import build_http_response, relay_response
from ..models import InboundRequest
from .forwarder import UpstreamForwarder

logger = logging.getLogger("api_proxy.processor")


async def read_inbound(request: Request) -> InboundRequest:
    """
    Capture the inbound request. The path is taken from ``raw_path`` so
    percent-encoded characters reach the upstream untouched.
    """
    raw_path = request.scope.get("raw_path")
    path = raw_path.decode("latin-1") if raw_path else request.url.path
    return InboundRequest(
        method=request.method,
        path=path,
        query_string=request.url.query,
        headers={name.lower(): value for name, value in request.headers.items()},
        body=await request.body(),
    )


class ProxyRequestProcessor:
    """
    Orchestrates one proxied request.

    Holds no per-request state; all collaborators are fixed at construction.
    """

    def __init__(
        self,
        cors: CorsPolicy,
        normalizer: RequestNormalizer,
        forwarder: UpstreamForwarder,
        classifier: ErrorClassifier,
    ):
        self.cors = cors
        self.normalizer = normalizer
        self.forwarder = forwarder
        self.classifier = classifier

    async def handle(self, request: Request) -> Response:
        origin = request.headers.get("origin")

        if self.cors.is_preflight(request.method):
            logger.debug(f"Preflight answered for {request.url.path}")
            return self.cors.preflight_response(origin)

        try:
            inbound = await read_inbound(request)
            target_url = self.normalizer.target_url(inbound)
            outbound = self.forwarder.build_outbound(inbound, target_url)
            upstream = await self.forwarder.forward(outbound)
        except Exception as exc:
            response = self.classifier.to_response(exc, request_path=request.url.path)
        else:
            response = build_http_response(relay_response(upstream))

        return self.cors.apply(response, origin)
