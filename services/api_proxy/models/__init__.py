"""
Data model definitions package.

Aggregates Pydantic models for use in other modules.
"""

from .context import InboundRequest, OutboundRequest
from .errors import ProxyErrorBody, SSLCertificateErrorBody
from .result import OutboundResponse, UpstreamResponse

__all__ = [
    "InboundRequest",
    "OutboundRequest",
    "UpstreamResponse",
    "OutboundResponse",
    "ProxyErrorBody",
    "SSLCertificateErrorBody",
]
