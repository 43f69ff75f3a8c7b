"""
FastAPI main application.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from core.config import APP_NAME, APP_VERSION, CORS_ORIGINS, LOG_LEVEL
from core.config_validator import config_validator
from api.routes import extract, transcripts

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Validate configuration on application startup."""
    logger.info("Validating configuration...")

    validation_result = config_validator.validate_all()

    for warning in validation_result["warnings"]:
        logger.warning(warning)

    # Fail if invalid
    if not validation_result["valid"]:
        for error in validation_result["errors"]:
            logger.error(error)
        logger.critical("Application startup aborted due to configuration errors.")
        raise SystemExit(1)

    logger.info("Configuration validated successfully")
    yield


app = FastAPI(
    title=APP_NAME,
    description="Extract captions and speech transcripts from Instagram posts",
    version=APP_VERSION,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(extract.router, tags=["extraction"])
app.include_router(transcripts.router, prefix="/transcripts", tags=["transcripts"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": APP_NAME, "version": APP_VERSION}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
