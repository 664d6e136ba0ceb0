"""
FastAPI application entry point for the LUIS router client.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

from luis_router.api.dependencies import get_router_http_client
from luis_router.api.error_handlers import EXCEPTION_HANDLERS
from luis_router.api.middleware import RequestTracingMiddleware
from luis_router.api.routes import router
from luis_router.config import settings
from luis_router.logging_config import configure_logging
from luis_router.persistence.redis_client import RedisClient
from luis_router.recognizers import build_recognizers
from luis_router.security.cipher import check_key

configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Validate configuration on startup; release connections on shutdown."""
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        router_url=settings.LUIS_ROUTER_URL,
        token_cache_backend=settings.TOKEN_CACHE_BACKEND,
        verify_tls=settings.LUIS_ROUTER_VERIFY_TLS,
    )

    # Fail at startup, not per request, on a bad key or application list
    if settings.LUIS_ROUTER_ENCRYPTION_KEY:
        check_key(settings.LUIS_ROUTER_ENCRYPTION_KEY)
    build_recognizers(settings)

    if not settings.LUIS_ROUTER_APPLICATION_CODE or not settings.LUIS_ROUTER_ENCRYPTION_KEY:
        logger.warning("Router identity credentials not configured; /route will return 500")

    yield

    logger.info("Application shutdown")
    await get_router_http_client().close()
    await RedisClient.close_async_pool()
    logger.info("Application shutdown complete")


app = FastAPI(
    title="LUIS Router",
    description="Discovers the LUIS application for an utterance via the router service",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(RequestTracingMiddleware)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(router, tags=["router"])

if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "luis_router.main:app",
        host="0.0.0.0",
        port=8000,
    )
