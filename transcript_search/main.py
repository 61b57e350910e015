"""FastAPI application entry point"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from transcript_search.api.endpoints import health, search, transcripts
from transcript_search.config import settings
from transcript_search.utils.logger import setup_logging
from transcript_search.exceptions import TranscriptSearchException, ValidationException
from transcript_search.schemas.response import ErrorResponse

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager
    - Startup: log configuration
    - Shutdown: log
    """
    logger.info(f"Starting {settings.APP_NAME}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Embedding provider: {settings.EMBEDDING_PROVIDER} ({settings.EMBEDDING_DIMENSIONS} dims)")
    logger.info(f"Fixtures: {settings.FIXTURES_DIR}")

    yield

    logger.info(f"Shutting down {settings.APP_NAME}")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="Semantic search over course lesson transcripts",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",  # Vite dev server
        "http://localhost:3000"
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["health"])
app.include_router(search.router, prefix="/api", tags=["search"])
app.include_router(transcripts.router, prefix="/api", tags=["transcripts"])


# Exception handlers
@app.exception_handler(TranscriptSearchException)
async def transcript_search_exception_handler(request: Request, exc: TranscriptSearchException):
    """Handle custom search exceptions"""
    logger.error(f"Transcript search exception: {str(exc)}")
    return JSONResponse(
        status_code=400 if isinstance(exc, ValidationException) else 500,
        content=ErrorResponse(
            error=exc.__class__.__name__,
            detail=str(exc)
        ).model_dump(mode="json")
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle all other exceptions"""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="InternalServerError",
            detail="An unexpected error occurred"
        ).model_dump(mode="json")
    )


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": f"{settings.APP_NAME} API",
        "version": "1.0.0",
        "environment": settings.ENVIRONMENT,
        "docs": "/docs" if settings.DEBUG else "disabled"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "transcript_search.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
