"""Employee Management System — FastAPI Application Factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ems.common.exceptions import register_exception_handlers
from ems.common.rate_limit import limiter
from ems.config import settings
from ems.core_hr.router import departments_router, employees_router
from ems.dashboard.router import router as dashboard_router
from ems.database import engine, get_db
from ems.projects.router import router as projects_router
from ems.records.router import router as records_router

VERSION = "1.0.0"

logger = logging.getLogger(__name__)


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    """Apply the service log level and format to the root logger."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown events."""
    configure_logging()
    logger.info("Starting Employee Management API (%s)", settings.ENVIRONMENT)
    yield
    await engine.dispose()
    logger.info("Database pool closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Employee Management System",
        description="CRUD API for employees, departments, projects and their records",
        version=VERSION,
        docs_url="/api/docs" if settings.ENVIRONMENT != "production" else None,
        redoc_url="/api/redoc" if settings.ENVIRONMENT != "production" else None,
        lifespan=lifespan,
    )

    # Exception handlers ({"error": message})
    register_exception_handlers(app)

    # Rate limiting (slowapi)
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health check (no database)
    @app.get("/api/health", tags=["system"])
    async def health_check():
        return {
            "status": "healthy",
            "version": VERSION,
            "environment": settings.ENVIRONMENT,
        }

    # Database connectivity check
    @app.get("/api/test", tags=["system"])
    async def test_connection(db: AsyncSession = Depends(get_db)):
        result = await db.execute(text("SELECT 1 + 1 AS solution"))
        return {
            "message": "Database connection successful",
            "result": result.scalar(),
        }

    # Register routers
    app.include_router(employees_router, prefix="/api/employees", tags=["employees"])
    app.include_router(records_router, prefix="/api/employees", tags=["employee records"])
    app.include_router(departments_router, prefix="/api/departments", tags=["departments"])
    app.include_router(projects_router, prefix="/api/projects", tags=["projects"])
    app.include_router(dashboard_router, prefix="/api/dashboard", tags=["dashboard"])

    return app


app = create_app()
