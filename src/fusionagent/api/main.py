"""FastAPI application factory and entry point."""

import argparse
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fusionagent import __version__
from fusionagent.api.routes import ask
from fusionagent.api.schemas import HealthResponse
from fusionagent.core.errors import ValidationError
from fusionagent.utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    from fusionagent.api.deps import (
        get_channel_registry,
        get_config_service,
        get_fusion_engine,
    )

    logger.info("Initializing Fusion Agent API...")
    domains = get_channel_registry().domains()
    logger.info(f"✓ {len(domains)} domains: {', '.join(domains)}")

    yield

    logger.info("Shutting down Fusion Agent API...")
    get_fusion_engine.cache_clear()
    get_config_service.cache_clear()


async def validation_error_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    """Map a missing query to a 400 with {"error": ...}."""
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=400, content={"error": exc.message})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Fusion Agent API",
        description="Fan-out web probing with ranked, cited answer fusion",
        version=__version__,
        lifespan=lifespan,
    )

    # CORS middleware - allow all origins in development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValidationError, validation_error_handler)

    app.include_router(ask.router, prefix="/api", tags=["ask"])

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="ok", version=__version__)

    return app


# Create default app instance
app = create_app()


def run() -> None:
    """Run the API server (CLI entry point)."""
    from fusionagent.api.deps import get_config_service

    server_config = get_config_service().load().server

    parser = argparse.ArgumentParser(description="Fusion Agent API Server")
    parser.add_argument(
        "--host",
        default=server_config.host,
        help=f"Host to bind to (default: {server_config.host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=server_config.port,
        help=f"Port to bind to (default: {server_config.port})",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: $LOG_LEVEL or INFO)",
    )
    args = parser.parse_args()

    configure_logging(args.log_level)

    host = "localhost" if args.host in ("0.0.0.0", "::") else args.host
    print(f"\n  Fusion Agent v{__version__}")
    print(f"  Ask at: http://{host}:{args.port}/api/ask?q=...\n")

    uvicorn.run(
        "fusionagent.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    run()
