"""
Header helpers: response denylist filtering and credential masking for logs.
"""

from typing import Iterable, List, Optional, Tuple

# Values for these are owned by the hosting layer; an upstream copy would
# duplicate or conflict with them.
RESPONSE_HEADER_DENYLIST = frozenset(
    {
        "x-content-type-options",
        "x-frame-options",
        "x-xss-protection",
        "strict-transport-security",
        "content-security-policy",
        "permissions-policy",
        "referrer-policy",
        "cross-origin-opener-policy",
        "cross-origin-resource-policy",
        "server",
        "connection",
        "transfer-encoding",
    }
)


def filter_response_headers(headers: Iterable[Tuple[str, str]]) -> List[Tuple[str, str]]:
    """Return the upstream headers minus the denylist, order and repeats kept."""
    return [
        (name, value)
        for name, value in headers
        if name.lower() not in RESPONSE_HEADER_DENYLIST
    ]


def mask_authorization(value: Optional[str]) -> Optional[str]:
    """
    Hide credentials for logging: ``Bearer abc.def`` -> ``Bearer ***``.
    """
    if not value:
        return None
    scheme, _, credentials = value.partition(" ")
    if not credentials:
        return "***"
    return f"{scheme} ***"
