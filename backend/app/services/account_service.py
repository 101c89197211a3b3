"""Registration and login."""
import logging
import uuid

from app.config import settings
from app.errors import InvalidCredentialsError
from app.schemas.user import UserRecord
from app.services import habit_engine
from app.services.credentials import hash_password, verify_password
from app.services.user_repository import UserStore

logger = logging.getLogger(__name__)


def register(repo: UserStore, name: str, password: str) -> UserRecord:
    """Create a user with the default habit set. Raises DuplicateNameError."""
    record = UserRecord(
        id=str(uuid.uuid4()),
        name=name,
        password_hash=hash_password(password),
        habits=habit_engine.default_habits(settings.DEFAULT_TIMEZONE),
    )
    created = repo.create(record)
    logger.info("Registered user '%s' (%s) with %d default habits", name, created.id, len(created.habits))
    return created


def authenticate(repo: UserStore, name: str, password: str) -> UserRecord:
    """Return the user for valid credentials.

    Raises UserNotFoundError for an unknown name and InvalidCredentialsError
    for a wrong password.
    """
    user = repo.find_by_name(name)
    if not verify_password(password, user.password_hash):
        logger.warning("Rejected login for user %s", user.id)
        raise InvalidCredentialsError()
    return user
