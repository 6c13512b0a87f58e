"""FastAPI application entry point."""

import logging
import sys
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from .env file
# Must be called before the settings are first read
load_dotenv()

from adapter.mongodb.connection import get_mongodb_client, reset_client
from adapter.mongodb.indexes import ensure_all_indexes
from api.dependencies import get_token_service
from api.errors import register_exception_handlers
from api.routes import auth, donations, health, opportunities, profile, user_opportunities
from utils.config import get_settings
from utils.logging import setup_structured_logging

settings = get_settings()

setup_structured_logging(settings.log_level)

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
# main.py is at <root>/src/api/main.py
_project_root = Path(__file__).parent.parent.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "Volunteer Connect API"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown logic.

    A missing or unreachable database is the one condition that stops the
    process at startup.
    """
    client = get_mongodb_client(settings)
    if client is None:
        logger.critical("MongoDB unavailable at startup, exiting")
        sys.exit(1)

    if ensure_all_indexes(client[settings.database_name]):
        logger.info("MongoDB indexes verified/created successfully")
    else:
        logger.warning("Failed to create some MongoDB indexes")

    if not get_token_service(settings).configured:
        logger.warning("JWT_SECRET is not set; login will fail until it is configured")

    yield  # App runs here

    reset_client()


app = FastAPI(
    title=SERVICE_NAME,
    description="Volunteer coordination API: accounts, donations, opportunities and signups",
    version=VERSION,
    lifespan=lifespan,
)

register_exception_handlers(app)

# Wildcard origins cannot be combined with credentials in browsers
if settings.cors_origins == "*":
    cors_origins = ["*"]
    allow_credentials = False
    logger.warning(
        "CORS configured with wildcard origin ('*'). "
        "For production, set CORS_ORIGINS to specific domains"
    )
else:
    cors_origins = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]
    allow_credentials = True
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(donations.router)
app.include_router(opportunities.router)
app.include_router(user_opportunities.router)
app.include_router(health.router)


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        access_log=False  # access lines go through structured logging instead
    )
