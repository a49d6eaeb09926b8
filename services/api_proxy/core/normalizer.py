"""
Target URL construction.

Strips the proxy mount prefix from the inbound path, removes the routing
artifact query parameter and joins the result onto the upstream base URL.
"""

import logging
import re
from typing import Optional
from urllib.parse import parse_qsl, urlencode

from ..models import InboundRequest
from .exceptions import InvalidTargetError

logger = logging.getLogger("api_proxy.normalizer")

# One raw path unit: a percent escape or a single literal character.
_RAW_UNIT = re.compile(r"%[0-9A-Fa-f]{2}|.", re.DOTALL)
_ENCODED_SLASH = "%2f"


class RequestNormalizer:
    """
    Rewrites inbound request paths into upstream target URLs.

    Args:
        base_url: Upstream base URL without trailing slash.
        mount_prefix: Path prefix routed to the proxy, e.g. ``/api/proxy``.
        artifact_param: Query parameter to drop before forwarding.
    """

    def __init__(self, base_url: str, mount_prefix: str, artifact_param: str = "path"):
        self.base_url = base_url.rstrip("/")
        self.mount_prefix = mount_prefix.rstrip("/")
        self.artifact_param = artifact_param

    def _strip_prefix(self, path: str) -> Optional[str]:
        """
        Consume the mount prefix from the raw path, comparing decoded
        characters so ``/api/%70roxy`` matches ``/api/proxy`` the same way the
        router does. Returns the raw remainder, or None when the prefix is absent.
        """
        decoded = ""
        consumed = 0
        for match in _RAW_UNIT.finditer(path):
            if len(decoded) >= len(self.mount_prefix):
                break
            unit = match.group()
            decoded += chr(int(unit[1:], 16)) if len(unit) == 3 else unit
            consumed = match.end()
        if decoded != self.mount_prefix:
            return None
        return path[consumed:]

    def rewrite_path(self, path: str) -> str:
        """
        Remove the mount prefix. Only whole segments are stripped, and an
        empty remainder becomes the upstream root.

        Raises:
            InvalidTargetError: the path is not under the mount prefix.
        """
        remainder = self._strip_prefix(path)
        if remainder == "":
            return "/"
        if remainder is not None:
            if remainder.startswith("/"):
                return remainder
            if remainder[:3].lower() == _ENCODED_SLASH:
                return "/" + remainder[3:]

        logger.warning("Path %s is not under mount prefix %s", path, self.mount_prefix)
        raise InvalidTargetError(
            path, ValueError(f"path is outside mount prefix {self.mount_prefix}")
        )

    def rewrite_query(self, query_string: str) -> str:
        """Drop the routing artifact parameter and re-serialize the rest in order."""
        if not query_string:
            return ""
        params = parse_qsl(query_string, keep_blank_values=True)
        kept = [(key, value) for key, value in params if key != self.artifact_param]
        return urlencode(kept)

    def target_url(self, inbound: InboundRequest) -> str:
        path = self.rewrite_path(inbound.path)
        query = self.rewrite_query(inbound.query_string)
        if query:
            path = f"{path}?{query}"
        return f"{self.base_url}{path}"
