import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .api import v1_router, v2_router
from .api.error_handlers import register_exception_handlers
from .config import get_settings
from .core.logging import RequestIDMiddleware, setup_logging, stop_queue_logging
from .database import get_engine
from .notifications import configure_resend

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings)
    configure_resend(settings)
    logger.info("app.startup", extra={"env": settings.ENV})
    try:
        yield
    finally:
        logger.info("app.shutdown")
        await get_engine().dispose()
        stop_queue_logging()


def create_app() -> FastAPI:
    """V1 routes live under `/api`, the DTO-based V2 routes under `/api/v2`."""
    app = FastAPI(title="ICMS API", lifespan=lifespan)
    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)
    app.include_router(v1_router, prefix="/api")
    app.include_router(v2_router, prefix="/api/v2")
    return app


app = create_app()
