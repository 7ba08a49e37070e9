"""
Main FastAPI application for the Spellcheck Service.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.routes import health, spellcheck
from app.middleware.logging import RequestLoggingMiddleware
from app.services.spellcheck import create_spellcheck_engine
from app.utils.logger import get_logger

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info("Starting Spellcheck Service")
    logger.info(f"Environment: {'DEBUG' if settings.DEBUG else 'PRODUCTION'}")
    logger.info(f"Log level: {settings.LOG_LEVEL}")
    logger.info(f"Dictionary path configured: {settings.SPELLCHECK_DICTIONARY_PATH}")
    logger.info(f"Custom words path configured: {settings.SPELLCHECK_CUSTOM_WORDS_PATH}")

    app.state.spellcheck_engine = create_spellcheck_engine()

    # Spell-check is optional - the engine stays uninitialized (accept-all) when disabled
    if settings.SPELLCHECK_ENABLED:
        try:
            await app.state.spellcheck_engine.initialize()
            logger.info(f"Enabled languages: {app.state.spellcheck_engine.get_enabled_languages()}")
        except Exception as e:
            logger.warning(f"Spell-check initialization error (accepting all words): {e}", exc_info=True)
    else:
        logger.info("Spell-check dictionaries disabled via configuration")

    yield

    # Shutdown
    logger.info("Shutting down Spellcheck Service")
    app.state.spellcheck_engine = None


# Create FastAPI application
app = FastAPI(
    title="Spellcheck Service",
    description="Dictionary-based spell-checking with suggestions and user dictionaries",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(
    spellcheck.router,
    prefix="/api/v1/spellcheck",
    tags=["Spellcheck"]
)


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint redirect to docs."""
    return {
        "message": "Spellcheck Service",
        "docs": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower()
    )
