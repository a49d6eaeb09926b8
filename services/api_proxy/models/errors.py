"""
Error response bodies.
"""

from pydantic import BaseModel


class ProxyErrorBody(BaseModel):
    """Body returned for transport failures and any other unexpected failure."""

    error: str = "Proxy Error"
    message: str
    details: str


class SSLCertificateErrorBody(BaseModel):
    """Body returned when the upstream identity could not be validated."""

    error: str = "SSL Certificate Error"
    message: str
    details: str
    originalError: str
