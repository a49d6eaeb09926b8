"""
Upstream result models.

Header lists keep repeated names (e.g. several Set-Cookie) in upstream order.
"""

from typing import List, Tuple

from pydantic import BaseModel, Field


class UpstreamResponse(BaseModel):
    """Response as received from the upstream, body left undecoded."""

    status_code: int = Field(ge=100, le=599)
    headers: List[Tuple[str, str]] = Field(default_factory=list)
    body: bytes = b""


class OutboundResponse(BaseModel):
    """Response relayed back to the caller."""

    status_code: int
    headers: List[Tuple[str, str]] = Field(default_factory=list)
    body: bytes = b""
