"""Pre-audit FastAPI server."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config import AuditConfig
from ..relay import TelegramRelay


def create_app(
    config: AuditConfig | None = None,
    relay: TelegramRelay | None = None,
) -> FastAPI:
    """Create FastAPI app with injected dependencies.

    Args:
        config: AuditConfig with secrets already resolved; defaults to
            loading from the environment once, here
        relay: TelegramRelay to use; built from config when omitted

    Returns:
        Configured FastAPI application
    """
    config = config or AuditConfig.load()
    owns_relay = relay is None
    relay = relay or TelegramRelay(config.telegram)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owns_relay:
            await relay.close()

    app = FastAPI(
        title="Operations Pre-Audit",
        description="Receives pre-audit submissions and relays them to the operator channel",
        version="0.1.0",
        lifespan=lifespan,
    )

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    # Store dependencies in app state
    app.state.config = config
    app.state.relay = relay

    from .routes import submit

    app.include_router(submit.router, prefix="/api", tags=["submit"])

    @app.exception_handler(StarletteHTTPException)
    async def method_not_allowed(request: Request, exc: StarletteHTTPException):
        """Answer every unsupported method on the submit endpoint the same way."""
        if exc.status_code == 405 and request.url.path.rstrip("/") == "/api/submit":
            return JSONResponse(
                status_code=405,
                content={"error": "Method not allowed"},
                headers={"Allow": submit.ALLOWED_METHODS},
            )
        return await http_exception_handler(request, exc)

    @app.get("/health")
    async def health():
        """Quick health check."""
        return {"status": "ok", "service": "operations-audit"}

    return app
