"""Shared FastAPI dependencies: clock, repository, API-key check."""
import hmac
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.errors import InvalidApiKeyError
from app.services.user_repository import UserRepository


def get_now() -> datetime:
    """Current UTC time. Overridden in tests to control the gate window."""
    return datetime.now(timezone.utc)


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def require_api_key(x_api_key: Optional[str] = Header(None)) -> None:
    """Reject requests without the configured X-API-Key. Disabled when API_KEY is empty."""
    if not settings.API_KEY:
        return
    if not x_api_key or not hmac.compare_digest(x_api_key.encode(), settings.API_KEY.encode()):
        raise InvalidApiKeyError()
