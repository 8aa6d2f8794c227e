"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Build the FastAPI application (create_app factory)
  - Configure middleware (CORS, request context)
  - Build the AnalysisContext and attach it to app.state
  - Expose health check and metrics endpoints

Collaborators:
  - routes.router: Analysis, dictionary and cache endpoints
  - container.build_analysis_context: Composition root
  - RequestContextMiddleware: Request ID and logging context

Notes:
  - Middleware order: RequestContext -> CORS -> routes
  - /healthz follows Kubernetes health check convention
  - /metrics exposes Prometheus metrics
  - Run with: uvicorn textwarden.main:app
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .application import AnalysisContext
from .config import Settings, get_settings
from .container import build_analysis_context
from .exception_handlers import register_exception_handlers
from .logger import logger
from .metrics import get_metrics_response
from .middleware import RequestContextMiddleware
from .routes import router


def create_app(
    settings: Optional[Settings] = None,
    context: Optional[AnalysisContext] = None,
) -> FastAPI:
    """
    R: Create a configured FastAPI app.

    Args:
        settings: Settings (defaults to get_settings())
        context: Prebuilt AnalysisContext (tests inject fakes here)
    """
    settings = settings or get_settings()
    analysis_context = context or build_analysis_context(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "TextWarden API starting up",
            extra={
                "remote_detection": (
                    "enabled" if analysis_context.remote_enabled else "disabled"
                ),
                "max_chunk_size": settings.max_chunk_size,
                "chunk_overlap": settings.chunk_overlap,
                "pacing_delay_ms": settings.pacing_delay_ms,
                "cache_capacity": settings.cache_capacity,
            },
        )
        yield
        logger.info("TextWarden API shutting down")

    app = FastAPI(title="TextWarden API", version=__version__, lifespan=lifespan)
    app.state.analysis_context = analysis_context
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-Id"],
    )
    app.add_middleware(RequestContextMiddleware)

    app.include_router(router)
    register_exception_handlers(app)

    @app.get("/healthz", tags=["health"])
    def healthz(request: Request):
        ctx: AnalysisContext = request.app.state.analysis_context
        return {
            "status": "ok",
            "remote_detection": "enabled" if ctx.remote_enabled else "disabled",
            "request_id": getattr(request.state, "request_id", None),
        }

    @app.get("/metrics", tags=["health"])
    def metrics():
        body, content_type = get_metrics_response()
        return Response(content=body, media_type=content_type)

    return app


def __getattr__(name: str):
    # R: Module-level app built lazily so importing create_app has no side effects
    if name == "app":
        application = create_app()
        globals()["app"] = application
        return application
    raise AttributeError(name)
