"""Tests for the SQLAlchemy user repository."""
import uuid

import pytest

from app.errors import ConflictError, DuplicateNameError, UserNotFoundError
from app.models.user import User
from app.schemas.user import UserRecord
from app.services import habit_engine
from app.services.user_repository import UserRepository


def _record(name: str = "alice") -> UserRecord:
    return UserRecord(
        id=str(uuid.uuid4()),
        name=name,
        password_hash="not-a-real-hash",
        habits=habit_engine.default_habits(),
    )


class TestUserRepository:

    def test_create_and_find(self, db):
        repo = UserRepository(db)
        created = repo.create(_record())
        assert created.version == 1

        by_id = repo.find_by_id(created.id)
        by_name = repo.find_by_name("alice")
        assert by_id == by_name == created
        assert [h.name for h in by_id.habits] == ["Flotari", "Oil Pulling", "Meditare", "Reading"]

    def test_find_missing(self, db):
        repo = UserRepository(db)
        with pytest.raises(UserNotFoundError):
            repo.find_by_id("nope")
        with pytest.raises(UserNotFoundError):
            repo.find_by_name("nobody")

    def test_duplicate_name_rejected_without_second_row(self, db):
        repo = UserRepository(db)
        repo.create(_record("alice"))
        with pytest.raises(DuplicateNameError):
            repo.create(_record("alice"))
        assert db.query(User).filter(User.name == "alice").count() == 1

    def test_list_all(self, db):
        repo = UserRepository(db)
        repo.create(_record("alice"))
        repo.create(_record("bob"))
        assert sorted(u.name for u in repo.list_all()) == ["alice", "bob"]

    def test_save_persists_whole_habit_list_and_bumps_version(self, db):
        repo = UserRepository(db)
        user = repo.create(_record())
        renamed = user.habits[0].model_copy(update={"name": "Cold Shower"})
        saved = repo.save(user.model_copy(update={"habits": [renamed] + user.habits[1:]}))

        assert saved.version == 2
        reloaded = repo.find_by_id(user.id)
        assert reloaded.version == 2
        assert reloaded.habits[0].name == "Cold Shower"
        assert reloaded.habits[0].last_updated == user.habits[0].last_updated

    def test_stale_save_raises_conflict(self, db, session_factory):
        """Two readers of version 1: the second save must not overwrite the first."""
        repo = UserRepository(db)
        user = repo.create(_record())

        other_session = session_factory()
        try:
            other = UserRepository(other_session)
            stale = other.find_by_id(user.id)

            first = user.habits[0].model_copy(update={"points": 1})
            repo.save(user.model_copy(update={"habits": [first] + user.habits[1:]}))

            second = stale.habits[1].model_copy(update={"points": 5})
            with pytest.raises(ConflictError) as exc_info:
                other.save(stale.model_copy(update={"habits": [stale.habits[0], second] + stale.habits[2:]}))
            assert exc_info.value.expected_version == 1
        finally:
            other_session.close()

        reloaded = repo.find_by_id(user.id)
        assert reloaded.version == 2
        assert reloaded.habits[0].points == 1
        assert reloaded.habits[1].points == 0
