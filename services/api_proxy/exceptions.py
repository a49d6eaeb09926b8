"""
Where: services/api_proxy/exceptions.py
What: Exception handler registration for routes outside the proxy pipeline.
Why: Keep error handling setup isolated from route and lifecycle concerns.
"""

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.exceptions import global_exception_handler, http_exception_handler


async def cors_http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Framework errors (unknown path, unsupported method such as HEAD) still
    carry the CORS headers so the browser can read the status.
    """
    response = await http_exception_handler(request, exc)
    processor = getattr(request.app.state, "processor", None)
    if processor is not None:
        processor.cors.apply(response, request.headers.get("origin"))
    return response


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(Exception, global_exception_handler)
    app.add_exception_handler(StarletteHTTPException, cors_http_exception_handler)
