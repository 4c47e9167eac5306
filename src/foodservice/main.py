import secrets
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.foodservice.api.dependencies import DBSession
from src.foodservice.api.middlewares import setup_middlewares
from src.foodservice.api.v1.router import build_api_router
from src.foodservice.core.config import get_settings
from src.foodservice.core.db import dispose_engine
from src.foodservice.core.exceptions import setup_exception_handlers
from src.foodservice.core.logging import get_logger, setup_logging
from src.foodservice.crud import EntityRegistry
from src.foodservice.entities import build_registry

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(
        f"Starting {settings.app_name}",
        entities=len(app.state.registry),
        env=settings.app_env,
    )

    yield

    logger.info("Closing connections...")
    await dispose_engine()
    logger.info("Shutdown complete")


def create_app(registry: EntityRegistry | None = None) -> FastAPI:
    """Build the application around ``registry`` (the food-service registry by default)."""
    settings = get_settings()
    registry = registry if registry is not None else build_registry()

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant food-service data API",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )
    app.state.registry = registry

    setup_exception_handlers(app)
    setup_middlewares(app, settings)
    app.include_router(build_api_router(registry))

    # Prometheus metrics instrumentation
    instrumentator = Instrumentator().instrument(app)

    # Protect /metrics endpoint if API key is configured
    if settings.metrics_api_key:
        api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

        async def verify_metrics_key(api_key: str | None = Depends(api_key_header)) -> None:
            if (
                api_key is None
                or settings.metrics_api_key is None
                or not secrets.compare_digest(api_key, settings.metrics_api_key)
            ):
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Invalid or missing metrics API key",
                )

        instrumentator.expose(app, endpoint="/metrics", dependencies=[Depends(verify_metrics_key)])
    else:
        instrumentator.expose(app, endpoint="/metrics")

    @app.get("/health")
    async def health(session: DBSession) -> JSONResponse:
        """Health check with database validation."""
        try:
            await session.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.warning("Health check failed", error=str(e))
            return JSONResponse(
                content={"status": "unhealthy", "database": f"unhealthy: {e}"},
                status_code=503,
            )
        return JSONResponse(content={"status": "healthy", "database": "healthy"})

    return app


app = create_app()
