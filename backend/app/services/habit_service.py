"""Habit orchestration — fetch, decide, save.

Every mutation runs as one read-modify-write cycle over the whole user
document: fetch the user, locate the habit, let the engine decide, save with
the version that was read. A ConflictError means another request saved in
between; the cycle restarts against fresh state, so the eligibility check is
always re-evaluated and two concurrent increments cannot both commit.
"""
import logging
from datetime import datetime
from typing import Any, Callable

from app.config import settings
from app.errors import ConflictError, HabitNotFoundError
from app.schemas.habit import Habit, HabitStatusOut
from app.schemas.user import UserDetailOut, UserOut, UserRecord
from app.services import habit_engine
from app.services.user_repository import UserStore

logger = logging.getLogger(__name__)


def _locate(user: UserRecord, habit_id: str) -> int:
    for index, habit in enumerate(user.habits):
        if habit.id == habit_id:
            return index
    raise HabitNotFoundError()


def _mutate_habit(
    repo: UserStore,
    user_id: str,
    habit_id: str,
    operation: Callable[[Habit], Habit],
) -> Habit:
    attempts = max(settings.SAVE_MAX_ATTEMPTS, 1)
    attempt = 0
    while True:
        attempt += 1
        user = repo.find_by_id(user_id)
        index = _locate(user, habit_id)
        current = user.habits[index]
        updated = operation(current)  # engine errors propagate, nothing saved
        if updated == current:
            return current

        habits = list(user.habits)
        habits[index] = updated
        try:
            repo.save(user.model_copy(update={"habits": habits}))
            return updated
        except ConflictError:
            if attempt >= attempts:
                raise
            logger.warning(
                "Save conflict on user %s habit %s (attempt %d/%d), retrying",
                user_id, habit_id, attempt, attempts,
            )


def increment_habit(repo: UserStore, user_id: str, habit_id: str, now: datetime) -> Habit:
    """Gated +1. Raises NotEligibleError inside the 24-hour window."""
    habit = _mutate_habit(repo, user_id, habit_id, lambda h: habit_engine.increment(h, now))
    logger.info("Incremented habit %s of user %s to %d points", habit_id, user_id, habit.points)
    return habit


def rename_habit(repo: UserStore, user_id: str, habit_id: str, new_name: str, now: datetime) -> Habit:
    habit = _mutate_habit(repo, user_id, habit_id, lambda h: habit_engine.rename(h, new_name, now))
    logger.info("Renamed habit %s of user %s to '%s'", habit_id, user_id, habit.name)
    return habit


def edit_habit(repo: UserStore, user_id: str, habit_id: str, fields: dict[str, Any], now: datetime) -> Habit:
    """Administrative correction. Not time-gated."""
    if "last_updated" in fields:
        fields = {**fields, "last_updated": habit_engine.localize(fields["last_updated"], settings.DEFAULT_TIMEZONE)}
    habit = _mutate_habit(repo, user_id, habit_id, lambda h: habit_engine.apply_edit(h, fields, now))
    logger.info("Edited habit %s of user %s (fields: %s)", habit_id, user_id, ", ".join(sorted(fields)) or "none")
    return habit


# ─── Read views ─────────────────────────────────────────────────

def to_user_out(user: UserRecord) -> UserOut:
    return UserOut(id=user.id, name=user.name, habits=user.habits)


def to_user_detail(user: UserRecord, now: datetime) -> UserDetailOut:
    """User view with ``has24HoursPassed`` computed from ``now``."""
    return UserDetailOut(
        id=user.id,
        name=user.name,
        habits=[
            HabitStatusOut(
                **habit.model_dump(),
                has_24_hours_passed=habit_engine.is_eligible(habit, now),
            )
            for habit in user.habits
        ],
    )


def get_user_view(repo: UserStore, user_id: str, now: datetime) -> UserDetailOut:
    return to_user_detail(repo.find_by_id(user_id), now)
