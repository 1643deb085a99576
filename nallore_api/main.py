"""
FastAPI application entry point.
Main application instance with middleware and route configuration.
"""
from fastapi import FastAPI, Request, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import text
import logging
import asyncio

from nallore_api.config import settings
from nallore_api.database import get_db, init_db, close_db
from nallore_api.routes import admin, blog, contact, events, gallery, team
from nallore_api.utils.rate_limit import limiter
from nallore_api.utils.responses import register_error_handlers

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Create FastAPI application instance
app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
)

# Rate limiter used by the login route
app.state.limiter = limiter

# CORS Middleware Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,  # Must be False when using wildcard origin
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],  # Includes X-Admin-Token
    max_age=3600,  # Cache preflight requests for 1 hour
)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request with its response status."""
    method = request.method
    path = request.url.path
    logger.debug(f"Incoming {method} request to {path}")

    response = await call_next(request)
    logger.info(f"Response status: {response.status_code} for {method} {path}")
    return response


# Include routers
app.include_router(gallery.router, prefix="/api", tags=["gallery"])
app.include_router(events.router, prefix="/api", tags=["events"])
app.include_router(blog.router, prefix="/api", tags=["blog"])
app.include_router(team.router, prefix="/api", tags=["team"])
app.include_router(contact.router, prefix="/api")
app.include_router(admin.router, prefix="/api")

# Exception Handlers
register_error_handlers(app)


# Root Endpoints
@app.get("/")
async def root():
    """Root endpoint - API health check."""
    return {
        "message": f"{settings.API_TITLE} is running",
        "status": "healthy",
        "version": settings.API_VERSION
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/health/db")
async def health_check_db(db: AsyncSession = Depends(get_db)):
    """
    Database health check endpoint.
    Tests database connection and returns status.
    """
    try:
        result = await db.execute(text("SELECT 1"))
        return {
            "database": "connected",
            "status": "healthy",
            "result": result.scalar()
        }
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {str(e)}", exc_info=True)
        return {
            "database": "error",
            "status": "unhealthy",
            "error": "Database connection failed"
        }


@app.on_event("startup")
async def startup_event():
    """
    Initialize database connection on application startup.
    Non-blocking: app will start even if database connection fails.
    """
    logger.info(f"CORS allowed origins: {settings.CORS_ORIGINS}")

    try:
        await init_db()
        logger.info("Database connection established successfully")
    except (SQLAlchemyError, OSError, ValueError) as e:
        logger.error(
            f"Failed to initialize database on startup: {str(e)}\n"
            f"The application will continue to run, but database-dependent endpoints will fail.\n"
            f"Please check your DATABASE_URL configuration and network connectivity."
        )
        # Don't raise - allow app to start without database for health endpoints


@app.on_event("shutdown")
async def shutdown_event():
    """Close database connections on application shutdown."""
    try:
        await close_db()
    except asyncio.CancelledError:
        # Cancellation during shutdown is expected
        pass
