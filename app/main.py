from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from sqlalchemy import text

from app.api.exception_handlers import register_exception_handlers
from app.api.routes import health_router, projects_router
from app.config.logging_config import configure_logging
from app.config.settings import settings
from app.db.base import async_session_factory, create_tables, engine


configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    logger.info(f"Starting {settings.APP_NAME}...")

    try:
        async with async_session_factory() as session:
            await session.execute(text("SELECT 1"))
        logger.info("Database connection: OK")
        if settings.DB_CREATE_TABLES:
            await create_tables()
            logger.info("Database tables ensured")
    except Exception as e:
        logger.error(f"Database connection: FAILED - {str(e)}")

    yield
    logger.info(f"Shutting down {settings.APP_NAME}...")
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Course project lifecycle and membership management.",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(health_router)
app.include_router(projects_router, prefix="/api/v1")
