"""
RequestContext management.
Use ContextVar to share the Request ID across async execution.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional


# Context variable for Request ID.
_request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# Inbound ids are reused only when they look like an opaque token.
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{8,128}$")


def get_request_id() -> Optional[str]:
    """Get the current Request ID."""
    return _request_id_var.get()


def set_request_id(request_id: str) -> str:
    """Set the Request ID for the current context."""
    _request_id_var.set(request_id)
    return request_id


def generate_request_id(inbound: Optional[str] = None) -> str:
    """
    Set a Request ID for the current context and return it.

    Args:
        inbound: X-Request-Id header value sent by the caller, if any.
            Reused when well-formed, otherwise a new UUID is generated.
    """
    if inbound and _REQUEST_ID_PATTERN.match(inbound):
        return set_request_id(inbound)
    return set_request_id(str(uuid.uuid4()))


def clear_request_id() -> None:
    """Clear the Request ID context."""
    _request_id_var.set(None)
