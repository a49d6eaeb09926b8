"""
Dependency Injection for the proxy API.

Manage request handler dependencies using FastAPI Depends.
"""

from typing import Annotated

from fastapi import Depends, Request

from ..services.processor import ProxyRequestProcessor


def get_processor(request: Request) -> ProxyRequestProcessor:
    return request.app.state.processor


# Service Dependency Type Aliases
ProcessorDep = Annotated[ProxyRequestProcessor, Depends(get_processor)]
