"""
Main FastAPI application
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog_api.config import Settings, get_settings
from catalog_api.database import Database
from catalog_api.errors import register_exception_handlers
from catalog_api.api import health, products, terms
from catalog_api import models  # noqa: F401 - register tables on Base.metadata
from catalog_api.utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    database: Database = app.state.database

    try:
        await database.connect()
        if settings.sync_schema:
            await database.create_all()
    except Exception:
        logger.exception("Startup failed, could not prepare the database")
        await database.close()
        raise

    logger.info(f"{settings.APP_NAME} ready ({settings.ENVIRONMENT})")
    try:
        yield
    finally:
        # uvicorn has stopped accepting connections by the time we get here
        await database.close()
        logger.info("Server closed gracefully")


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(products.router, prefix="/api", tags=["Products"])
    app.include_router(terms.router, prefix="/api", tags=["Terms"])

    @app.get("/")
    async def root():
        return {
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "status": "running"
        }

    return app


app = create_app()


def run():
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "catalog_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG and not settings.is_production,
    )


if __name__ == "__main__":
    run()
