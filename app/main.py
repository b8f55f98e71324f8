"""FastAPI application factory and startup configuration.

Rotas públicas: GET /properties, GET /properties/{id}, POST /properties/search,
/auth/*, /health e /docs. Criação, atualização e remoção exigem bearer JWT;
a verificação é feita por endpoint (dependency ``AuthenticatedUser``).
"""
import time
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.core.logging import setup_logging, get_logger, set_correlation_id
from app.api.errors import register_exception_handlers
from app.api.v1.auth import router as auth_router
from app.api.v1.properties import router as properties_router
from app.api.responses import ok

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    setup_logging()
    logger.info("Starting %s v%s", settings.app_name, settings.app_version)

    if not settings.google_genai_api_key:
        logger.warning(
            "GOOGLE_GENAI_API_KEY não configurada — POST /api/v1/properties/search vai falhar."
        )

    yield

    from app.database import engine
    await engine.dispose()
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Real estate listings API with filtered search and AI-powered text search.",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.middleware("http")
    async def add_trace_id(request: Request, call_next):
        request.state.trace_id = set_correlation_id(str(uuid4()))
        started = time.perf_counter()
        response = await call_next(request)
        response.headers["X-Trace-Id"] = request.state.trace_id
        logger.debug(
            "%s %s -> %d", request.method, request.url.path, response.status_code,
            extra={"status": response.status_code, "duration": round(time.perf_counter() - started, 4)},
        )
        return response

    register_exception_handlers(application)

    application.include_router(auth_router, prefix="/api/v1/auth", tags=["auth"])
    application.include_router(properties_router, prefix="/api/v1/properties", tags=["properties"])

    @application.get("/health", tags=["system"])
    async def health_check():
        from sqlalchemy import text
        from app.database import async_session_factory

        db_status = "ok"
        try:
            async with async_session_factory() as session:
                await session.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("Health check database probe failed: %s", e)
            db_status = "error"

        return ok(
            {
                "status": "healthy" if db_status == "ok" else "unhealthy",
                "version": settings.app_version,
                "database": db_status,
            },
            "Health check completed",
        )

    return application


app = create_app()
