"""
Service layer: upstream forwarding and request orchestration.
"""

from .forwarder import UpstreamForwarder, build_upstream_headers
from .processor import ProxyRequestProcessor

__all__ = ["UpstreamForwarder", "ProxyRequestProcessor", "build_upstream_headers"]
