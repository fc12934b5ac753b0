"""
Users Service - FastAPI Application

Identity and user administration for the game catalog platform.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from users_svc.config import get_settings
from users_svc.core.exceptions import ConfigurationError, UsersServiceError
from users_svc.core.secrets import get_secret_resolver
from users_svc.database.connections import close_connections, get_database
from users_svc.database.indexes import create_indexes
from users_svc.database.repository import UserRepository
from users_svc.routers import auth, health, users
from users_svc.services.seeder import seed_admin

settings = get_settings()

# ==================== Logging Setup ====================

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("users_svc")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Resolve signing secrets
    - Initialize database connection
    - Create indexes
    - Seed the default administrator

    Shutdown:
    - Close database connection
    """
    logger.info("Starting up Users Service (%s)...", settings.environment)

    try:
        await run_in_threadpool(get_secret_resolver().resolve)
        logger.info("JWT signing secrets resolved")
    except ConfigurationError as e:
        logger.warning("JWT secrets unavailable at startup: %s", e.message)

    try:
        db = await get_database()
        await create_indexes(db)
        await seed_admin(UserRepository(db), settings)
        logger.info("Database indexes created and administrator checked")
    except Exception as e:
        logger.warning("Database initialization warning: %s", e)

    yield

    logger.info("Shutting down Users Service...")
    await close_connections()
    logger.info("Database connections closed")


app = FastAPI(
    title="Users Service API",
    description="""
## Users Service

Registration, authentication and user administration.

### Authentication
Protected endpoints require a JWT in the `Authorization: Bearer <token>` header.
Obtain a token via `POST /api/authentication/login`.

### Audit
Every user query and mutation appends a domain event to the `Events` collection.
    """,
    version=settings.app_version,
    lifespan=lifespan,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request and turn unhandled errors into a 500 problem response."""
    logger.info("Request received: %s %s", request.method, request.url.path)
    try:
        return await call_next(request)
    except Exception as e:
        logger.critical("Unhandled error on %s %s", request.method, request.url.path, exc_info=e)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "status": status.HTTP_500_INTERNAL_SERVER_ERROR,
                "type": "Server Error",
                "title": "An unexpected error occurred",
                "detail": str(e),
            },
        )


@app.exception_handler(UsersServiceError)
async def users_service_error_handler(request: Request, exc: UsersServiceError):
    """Render service errors with the status they carry."""
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Include routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Users Service API",
        "version": settings.app_version,
        "docs": "/docs",
        "health": "/health",
    }
