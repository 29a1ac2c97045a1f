from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from media_app.config import settings
from media_app.database.connection import engine, Base
from media_app.errors import MediaAppError
from media_app.log import init_logger
from media_app.api.v1 import media, stream

# Import models to ensure they're registered with Base
from media_app.models import MediaAsset, MediaViewLog


@asynccontextmanager
async def lifespan(server: FastAPI):
    init_logger()
    logger.info("Starting {} ({})", settings.app_name, settings.environment)

    # Create database tables
    Base.metadata.create_all(bind=engine)

    yield

    logger.info("Shutting down {}", settings.app_name)


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Media assets with expiring streaming links and view analytics",
    debug=settings.debug,
    lifespan=lifespan
)


@app.exception_handler(MediaAppError)
async def media_app_error_handler(request: Request, exc: MediaAppError):
    """Render domain errors as {"error": message} with the error's status"""
    log_msg = f"{type(exc).__name__} {request.method} {request.url.path}: {exc.message}"
    if exc.status_code >= 500:
        cause = exc.__cause__ or exc
        logger.error(f"{log_msg} cause={cause!r}")
    else:
        logger.warning(log_msg)

    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "environment": settings.environment}


######## Include routers
# Stream redemption goes first so /media/stream/... never reaches /media/{media_id}
app.include_router(stream.router)
app.include_router(media.router)
