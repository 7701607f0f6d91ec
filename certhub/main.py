from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from .config import settings
from .infrastructure.logging import configure_logging
from .presentation.api.dependencies import get_database
from .presentation.api.errors import register_exception_handlers
from .presentation.api.v1 import health, training_certificates, user_certificates
from .presentation.middleware import CorrelationIdMiddleware

configure_logging(settings.service_name, debug=settings.debug)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    db = get_database()
    logger.info("Certhub API starting", timezone=settings.timezone, auth_enabled=settings.auth_enabled)

    # Outside development the schema comes from alembic migrations
    if settings.debug:
        await db.create_tables()
        logger.info("Schema created from models", database=settings.db_name)

    try:
        yield
    finally:
        await db.close()
        logger.info("Certhub API stopped")


app = FastAPI(
    title="Certhub API",
    description="Issue, register and validate training certificates",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(CorrelationIdMiddleware)
register_exception_handlers(app)

app.include_router(health.router)
app.include_router(training_certificates.router, prefix="/api/v1")
app.include_router(user_certificates.router, prefix="/api/v1")


@app.get("/")
def root() -> dict:
    return {
        "service": settings.service_name,
        "version": "0.1.0",
        "docs": "/docs",
    }
