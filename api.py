"""
MentalSpace FastAPI Application

Main entry point for the MentalSpace check-in analytics API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Common library imports
from common.database import MongoDB
from common.utils import success_response

# App-specific imports
from mentalspace.config import settings
from mentalspace.indexes import COLLECTION_INDEXES

# Import routers
from mentalspace.routers import (
    checkin_router,
    predictive_router,
    plans_router,
    summaries_router,
)

# Import service initialization
from mentalspace.dependencies import init_all_services

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


# =============================================================================
# Database Instance
# =============================================================================
main_db = MongoDB()


# =============================================================================
# Application Lifespan
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Connects the database, ensures indexes and initializes services.
    """
    logger.info("Starting MentalSpace API...")
    settings.validate_required()

    await main_db.connect(
        uri=settings.MONGODB_URI,
        database_name=settings.MONGODB_DATABASE,
        indexes=COLLECTION_INDEXES,
        max_pool_size=settings.MONGODB_MAX_POOL_SIZE,
        min_pool_size=settings.MONGODB_MIN_POOL_SIZE,
    )
    logger.info(f"Connected to database: {settings.MONGODB_DATABASE}")

    init_all_services(
        db=main_db.db,
        jwt_secret=settings.JWT_SECRET,
        jwt_algorithm=settings.JWT_ALGORITHM,
        thresholds=settings.thresholds(),
        alert_notifier=settings.ALERT_NOTIFIER,
    )
    logger.info("MentalSpace API started")

    yield

    logger.info("Shutting down MentalSpace API...")
    await main_db.disconnect()


# =============================================================================
# FastAPI Application
# =============================================================================
app = FastAPI(
    title="MentalSpace API",
    description="Daily check-ins, mood predictions, bad-day support and weekly summaries",
    version=VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.is_development() else None,
    redoc_url="/redoc" if settings.is_development() else None,
)

# =============================================================================
# CORS Middleware
# =============================================================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =============================================================================
# Include Routers (all under /api/v1 prefix)
# =============================================================================
API_PREFIX = "/api/v1"

app.include_router(checkin_router, prefix=API_PREFIX, tags=["Check-in"])
app.include_router(predictive_router, prefix=API_PREFIX, tags=["Predictive"])
app.include_router(plans_router, prefix=API_PREFIX, tags=["Plans"])
app.include_router(summaries_router, prefix=API_PREFIX, tags=["Summaries"])


# =============================================================================
# Health Check Endpoint
# =============================================================================
@app.get("/health", tags=["Health"])
async def health():
    """Status of the API and its database connection."""
    return success_response({
        "status": "ok",
        "version": VERSION,
        "database": main_db.is_connected,
    })


# =============================================================================
# Run with Uvicorn
# =============================================================================
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development(),
    )
