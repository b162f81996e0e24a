"""Main FastAPI application for GroupCart API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from groupcart.api.v1 import auth, groups, shopping_items, shopping_lists
from groupcart.config import settings
from groupcart.database import Base, engine
from groupcart.services.exceptions import GroupCartError

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Alembic owns the schema in production; this covers fresh SQLite files
    Base.metadata.create_all(bind=engine)
    logger.info("Application startup")
    yield
    logger.info("Application shutdown")


# Create FastAPI application instance
app = FastAPI(
    title=settings.PROJECT_NAME,
    debug=settings.DEBUG,
    lifespan=lifespan,
)


@app.exception_handler(GroupCartError)
async def group_service_exception_handler(request: Request, exc: GroupCartError):
    """Map domain errors to their HTTP status."""
    if exc.internal:
        logger.error("Internal error on %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
        return JSONResponse(status_code=exc.status_code, content={"detail": "Internal server error"})
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.DEBUG:
        return JSONResponse(status_code=500, content={"detail": str(exc)})
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Include API routers
app.include_router(
    auth.router,
    prefix=f"{settings.API_V1_PREFIX}/auth",
    tags=["Authentication"]
)

app.include_router(
    groups.router,
    prefix=f"{settings.API_V1_PREFIX}/groups",
    tags=["Groups"]
)

app.include_router(
    shopping_lists.group_router,
    prefix=f"{settings.API_V1_PREFIX}/groups/{{group_id}}/shopping-lists",
    tags=["Shopping Lists"]
)

app.include_router(
    shopping_lists.router,
    prefix=f"{settings.API_V1_PREFIX}/shopping-lists",
    tags=["Shopping Lists"]
)

app.include_router(
    shopping_items.router,
    prefix=f"{settings.API_V1_PREFIX}/shopping-items",
    tags=["Shopping Items"]
)


@app.get("/")
def root():
    """Root endpoint - API welcome message."""
    return {
        "message": "Welcome to GroupCart API",
        "docs": "/docs",
        "version": "1.0.0"
    }


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
