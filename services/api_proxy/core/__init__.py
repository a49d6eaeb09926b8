"""
Core logic package.

Provides the proxy building blocks: CORS policy, path/query normalization,
response relay and error classification.
"""

from .cors import CorsPolicy
from .exceptions import ErrorClassifier
from .normalizer import RequestNormalizer
from .relay import build_http_response, relay_response

__all__ = [
    "CorsPolicy",
    "ErrorClassifier",
    "RequestNormalizer",
    "build_http_response",
    "relay_response",
]
