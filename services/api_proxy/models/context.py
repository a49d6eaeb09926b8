"""
Request context models.

Per-request data passed between the normalizer and the forwarder.
Decouples the service layer from FastAPI's Request object.
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field


class InboundRequest(BaseModel):
    """
    Request received from the browser, captured once per call.

    ``path`` is the raw (still percent-encoded) request path and
    ``headers`` uses lower-cased names.
    """

    method: str
    path: str
    query_string: str = ""
    headers: Dict[str, str] = Field(default_factory=dict)
    body: bytes = b""

    def header(self, name: str) -> Optional[str]:
        return self.headers.get(name.lower())


class OutboundRequest(BaseModel):
    """
    Request sent to the upstream. ``inbound_path`` is kept for logging only.
    """

    method: str
    url: str
    headers: Dict[str, str] = Field(default_factory=dict)
    body: bytes = b""
    inbound_path: str = ""
