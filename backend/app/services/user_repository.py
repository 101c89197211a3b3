"""User repository — whole-document persistence for users and their habits.

Responsibilities:
- Lookup by id / by name, listing, creation with unique names
- Atomic save of the full habit list guarded by the ``version`` column
  (optimistic concurrency): a save whose version is stale raises
  ConflictError instead of silently overwriting a concurrent write.
"""
import logging
from typing import Protocol

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.errors import ConflictError, DuplicateNameError, UserNotFoundError
from app.models.user import User
from app.schemas.habit import Habit
from app.schemas.user import UserRecord

logger = logging.getLogger(__name__)


class UserStore(Protocol):
    """Persistence contract the services depend on."""

    def find_by_id(self, user_id: str) -> UserRecord: ...
    def find_by_name(self, name: str) -> UserRecord: ...
    def list_all(self) -> list[UserRecord]: ...
    def create(self, record: UserRecord) -> UserRecord: ...
    def save(self, record: UserRecord) -> UserRecord: ...


def _to_record(user: User) -> UserRecord:
    return UserRecord(
        id=user.user_id,
        name=user.name,
        password_hash=user.password_hash,
        habits=[Habit.model_validate(doc) for doc in (user.habits or [])],
        version=user.version,
    )


class UserRepository:
    """SQLAlchemy-backed UserStore. One instance per session."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, user_id: str) -> UserRecord:
        user = self.db.query(User).filter(User.user_id == user_id).populate_existing().first()
        if not user:
            raise UserNotFoundError()
        return _to_record(user)

    def find_by_name(self, name: str) -> UserRecord:
        user = self.db.query(User).filter(User.name == name).populate_existing().first()
        if not user:
            raise UserNotFoundError()
        return _to_record(user)

    def list_all(self) -> list[UserRecord]:
        return [_to_record(u) for u in self.db.query(User).order_by(User.created_at, User.name).all()]

    def create(self, record: UserRecord) -> UserRecord:
        if self.db.query(User.user_id).filter(User.name == record.name).first():
            raise DuplicateNameError(record.name)

        user = User(
            user_id=record.id,
            name=record.name,
            password_hash=record.password_hash,
            habits=[h.to_document() for h in record.habits],
            version=1,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration of the same name
            self.db.rollback()
            raise DuplicateNameError(record.name)
        self.db.refresh(user)
        logger.info("Created user %s (%s)", user.user_id, user.name)
        return _to_record(user)

    def save(self, record: UserRecord) -> UserRecord:
        """Write the whole habit list iff nobody saved since ``record`` was read."""
        stmt = (
            update(User)
            .where(User.user_id == record.id, User.version == record.version)
            .values(
                habits=[h.to_document() for h in record.habits],
                version=record.version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        if result.rowcount != 1:
            self.db.rollback()
            raise ConflictError(record.id, record.version)
        self.db.commit()
        return record.model_copy(update={"version": record.version + 1})
