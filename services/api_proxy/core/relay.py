"""
Response relay: upstream response -> caller response.
"""

from fastapi.responses import Response

from ..models import OutboundResponse, UpstreamResponse
from .headers import filter_response_headers


def relay_response(upstream: UpstreamResponse) -> OutboundResponse:
    """Keep status and body as-is, drop denylisted headers."""
    return OutboundResponse(
        status_code=upstream.status_code,
        headers=filter_response_headers(upstream.headers),
        body=upstream.body,
    )


def build_http_response(outbound: OutboundResponse) -> Response:
    """
    Translate OutboundResponse -> Starlette Response.

    Content-Length is computed from the relayed bytes; every other header is
    appended so repeated names survive.
    """
    response = Response(content=outbound.body, status_code=outbound.status_code)
    for name, value in outbound.headers:
        if name.lower() == "content-length":
            continue
        response.headers.append(name, value)
    return response
