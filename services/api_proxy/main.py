"""
API Proxy - single upstream reverse proxy for browser clients

Receives requests under the mount prefix, rewrites path and query, forwards
them to the configured upstream and relays the response with CORS headers.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request

from .api.deps import ProcessorDep
from .config import ProxyConfig
from .core.logging_config import setup_logging
from .exceptions import register_exception_handlers
from .lifecycle import manage_lifespan
from .middleware import request_context_middleware

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}


async def proxy_handler(request: Request, processor: ProcessorDep):
    """
    Catch-all under the mount prefix: forward to the upstream.
    """
    return await processor.handle(request)


def create_app(proxy_config: Optional[ProxyConfig] = None) -> FastAPI:
    """Create and configure the proxy application."""
    proxy_config = proxy_config or ProxyConfig()

    def lifespan(app: FastAPI):
        return manage_lifespan(app, proxy_config)

    app = FastAPI(title="API Proxy", version="1.0.0", lifespan=lifespan)

    app.middleware("http")(request_context_middleware)
    register_exception_handlers(app)

    app.add_api_route("/health", health_check, methods=["GET"])
    prefix = proxy_config.MOUNT_PREFIX
    app.add_api_route(prefix, proxy_handler, methods=PROXY_METHODS)
    app.add_api_route(prefix + "/{path:path}", proxy_handler, methods=PROXY_METHODS)

    return app


def run() -> None:
    """Entry point for the server."""
    import uvicorn

    proxy_config = ProxyConfig()
    setup_logging(proxy_config)
    uvicorn.run(
        create_app(proxy_config),
        host=proxy_config.BIND_HOST,
        port=proxy_config.BIND_PORT,
        log_config=None,
    )


if __name__ == "__main__":
    run()
