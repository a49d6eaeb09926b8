"""
CORS policy applied to every proxied response.

The caller's Origin is echoed back so credentialed requests are accepted
from any front end that reaches the proxy.
"""

from typing import Dict, Optional

from fastapi.responses import Response

ALLOWED_METHODS = "GET,OPTIONS,PATCH,DELETE,POST,PUT"


class CorsPolicy:
    """Builds the four Access-Control-* headers and answers preflights."""

    def __init__(self, allow_headers: str):
        self.allow_headers = allow_headers

    def headers_for(self, origin: Optional[str]) -> Dict[str, str]:
        return {
            "Access-Control-Allow-Credentials": "true",
            "Access-Control-Allow-Origin": origin or "*",
            "Access-Control-Allow-Methods": ALLOWED_METHODS,
            "Access-Control-Allow-Headers": self.allow_headers,
        }

    @staticmethod
    def is_preflight(method: str) -> bool:
        return method.upper() == "OPTIONS"

    def preflight_response(self, origin: Optional[str]) -> Response:
        """Empty 200 answer to an OPTIONS request. Nothing is forwarded."""
        return Response(status_code=200, content=b"", headers=self.headers_for(origin))

    def apply(self, response: Response, origin: Optional[str]) -> Response:
        """
        Set the CORS headers on ``response`` unless it already carries a
        header of the same name (a value relayed from the upstream wins).
        """
        for name, value in self.headers_for(origin).items():
            if name not in response.headers:
                response.headers[name] = value
        return response
