"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from app.config import settings
from app.database import Base, engine
from app.dependencies import require_api_key
from app.error_handlers import register_error_handlers
from app.logging_config import setup_logging

# Import routers
from app.routers import auth, habits, users

# Import all models so Base.metadata knows about them
from app.models.user import User  # noqa: F401

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and create tables on startup (for SQLite dev mode)."""
    setup_logging(settings.LOG_LEVEL)
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
    if not settings.API_KEY:
        logger.warning("API_KEY is not set; API key checks are disabled")
    logger.info("Habit Points API started")
    yield


app = FastAPI(
    title="Habit Points API",
    description="Users and their habits, with points gated to one increment per 24 hours",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.CORS_ORIGINS.split(",")],
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Register routers
api_key = [Depends(require_api_key)]
app.include_router(users.router, prefix="/users", tags=["Users"], dependencies=api_key)
app.include_router(habits.router, prefix="/users", tags=["Habits"], dependencies=api_key)
app.include_router(auth.router, tags=["Auth"], dependencies=api_key)


@app.get("/ip", dependencies=api_key)
def client_ip(request: Request):
    """Echo the caller's address as seen by the server."""
    return {"ip": request.client.host if request.client else None}


@app.get("/health")
def health_check():
    return {"status": "ok"}
