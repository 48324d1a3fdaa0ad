"""
FastAPI application - Main entry point
"""

from dotenv import load_dotenv

load_dotenv()

import logging
from datetime import datetime
from urllib.parse import urlparse

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from topup_store.api import dependencies
from topup_store.api.endpoints.auth import auth_api
from topup_store.api.endpoints.payments import payments_api
from topup_store.database.base import TopUpStore
from topup_store.error_handler import register_exception_handlers

app_config = dependencies.app_config

# Setup logging
logging.basicConfig(level=getattr(logging, app_config.server.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=app_config.server.title,
    description="Sandbox API for QA automation practice.",
    version=app_config.server.version,
    docs_url="/api-docs",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth_api, prefix="/api")
app.include_router(payments_api, prefix="/api")


# ============================================================================
# ENDPOINTS
# ============================================================================
@app.get("/", tags=["Health"])
async def root():
    """Health check endpoint."""
    return {"service": app_config.server.title, "status": "healthy", "version": app_config.server.version, "timestamp": datetime.now().isoformat()}


@app.get("/health", tags=["Health"])
async def health_check(store: TopUpStore = Depends(dependencies.get_store)):
    return {"status": "healthy", "store": type(store).__name__, "timestamp": datetime.now().isoformat()}


# ============================================================================
# STARTUP/SHUTDOWN EVENTS
# ============================================================================
@app.on_event("startup")
async def startup_event():
    """Initialize on startup"""
    logger.info("Starting Mobile TopUp Store API on port %s...", app_config.server.port)

    db_url = app_config.storage.database_url
    if db_url:
        parsed = urlparse(db_url)
        logger.info(
            "Database target: scheme=%s host=%s port=%s db=%s",
            parsed.scheme,
            parsed.hostname,
            parsed.port or 5432,
            (parsed.path or "").lstrip("/"),
        )
    else:
        logger.info("DATABASE_URL not set; using in-memory store")

    # Create tables if they don't exist
    try:
        dependencies.get_store().create_tables()
        logger.info("Database tables initialized")
    except Exception as e:
        logger.error("Error initializing database: %s", e, exc_info=True)
        raise


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down Mobile TopUp Store API...")


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run("topup_store.api.main:app", host="0.0.0.0", port=app_config.server.port)
