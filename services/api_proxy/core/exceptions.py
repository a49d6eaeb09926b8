"""
Custom exception classes.

Represent errors raised while forwarding a request to the upstream, and map
them to the JSON bodies returned to the caller.
"""

import logging
import ssl
import traceback
from typing import Optional, Tuple

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..models import ProxyErrorBody, SSLCertificateErrorBody

logger = logging.getLogger(__name__)

# Used when the cause chain carries no ssl.SSLCertVerificationError.
_CERTIFICATE_MARKER = "certificate"


class ProxyError(Exception):
    """Base exception class for proxy forwarding."""

    pass


class UpstreamTransportError(ProxyError):
    """Connection-level failure: DNS, refused, reset, protocol error."""

    def __init__(self, cause: Optional[Exception], message: Optional[str] = None):
        self.cause = cause
        super().__init__(message or str(cause) or type(cause).__name__)


class UpstreamTimeoutError(UpstreamTransportError):
    """The upstream round trip exceeded the configured timeout."""

    def __init__(self, timeout: float, cause: Optional[Exception] = None):
        self.timeout = timeout
        super().__init__(cause, f"Upstream request timed out after {timeout:g}s")


class UpstreamTrustError(ProxyError):
    """The upstream identity could not be validated under the configured trust mode."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(str(cause) or type(cause).__name__)


class InvalidTargetError(ProxyError):
    """The target URL could not be used by the transport."""

    def __init__(self, url: str, cause: Exception):
        self.url = url
        self.cause = cause
        super().__init__(f"Invalid target URL {url!r}: {cause}")


def is_certificate_failure(exc: BaseException) -> bool:
    """
    True when ``exc`` or anything in its cause/context chain is a certificate
    validation failure. Other TLS errors (protocol mismatch, handshake reset)
    return False.
    """
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, ssl.SSLCertVerificationError):
            return True
        if _CERTIFICATE_MARKER in str(current).lower():
            return True
        current = current.__cause__ or current.__context__
    return False


class ErrorClassifier:
    """
    Turns any failure of the forwarding pipeline into a status code and body.

    Trust failures become 502 "SSL Certificate Error", everything else 500
    "Proxy Error". Nothing is retried.
    """

    def __init__(self, trust_mode: str, expose_traceback: bool = False):
        self.trust_mode = trust_mode
        self.expose_traceback = expose_traceback

    def classify(self, exc: Exception) -> Tuple[int, dict]:
        if isinstance(exc, UpstreamTrustError) or (
            not isinstance(exc, ProxyError) and is_certificate_failure(exc)
        ):
            body = SSLCertificateErrorBody(
                message="Upstream SSL certificate verification failed",
                details=(
                    "The upstream certificate could not be validated under trust mode "
                    f"'{self.trust_mode}'. Install a valid certificate on the upstream "
                    "or configure UPSTREAM_CA_BUNDLE."
                ),
                originalError=str(getattr(exc, "cause", None) or exc),
            )
            return status.HTTP_502_BAD_GATEWAY, body.model_dump()

        body = ProxyErrorBody(
            message=str(exc) or type(exc).__name__,
            details=self._details(exc),
        )
        return status.HTTP_500_INTERNAL_SERVER_ERROR, body.model_dump()

    def to_response(self, exc: Exception, request_path: str = "") -> JSONResponse:
        status_code, body = self.classify(exc)
        logger.error(
            f"Proxy error: {body['error']}: {exc}",
            exc_info=exc,
            extra={
                "path": request_path,
                "error_type": type(exc).__name__,
                "is_ssl_error": status_code == status.HTTP_502_BAD_GATEWAY,
            },
        )
        return JSONResponse(status_code=status_code, content=body)

    def _details(self, exc: Exception) -> str:
        if self.expose_traceback:
            return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        cause = getattr(exc, "cause", None)
        if cause is not None:
            return f"{type(exc).__name__} caused by {type(cause).__name__}"
        return type(exc).__name__


# ===========================================
# Exception Handlers
# ===========================================


async def global_exception_handler(request: Request, exc: Exception):
    """
    Catch-all handler for unhandled exceptions.
    """
    error_detail = str(exc)
    logger.error(
        f"Global exception handler caught: {exc}",
        exc_info=True,
        extra={
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal Server Error", "detail": error_detail},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Handler for HTTPException.
    """
    return JSONResponse(
        status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers
    )
