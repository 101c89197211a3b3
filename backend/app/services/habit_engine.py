"""Habit engine — the time-gated point rules.

Pure functions over ``Habit`` state; nothing here touches storage or the clock.
Callers pass ``now`` explicitly and persist whatever comes back.

Rules:
- A habit may gain a point only when at least ELIGIBILITY_WINDOW has elapsed
  since ``last_updated`` (continuous duration, not calendar days).
- Every accepted transition returns a new Habit with ``last_updated`` refreshed.
- ``apply_edit`` is an administrative correction and ignores the window.
"""
import math
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import pytz

from app.errors import HabitValidationError, InvalidNameError, NotEligibleError
from app.schemas.habit import Habit

ELIGIBILITY_WINDOW = timedelta(hours=24)

DEFAULT_HABIT_NAMES = ("Flotari", "Oil Pulling", "Meditare", "Reading")
DEFAULT_LAST_UPDATED = datetime(2014, 5, 14)  # localized per deployment timezone


def localize(moment: datetime, tz_name: str = "UTC") -> datetime:
    """Attach ``tz_name`` to a naive datetime; aware datetimes pass through."""
    if moment.tzinfo is not None:
        return moment
    return pytz.timezone(tz_name).localize(moment)


def _elapsed(habit: Habit, now: datetime) -> timedelta:
    # Naive values compare as UTC so absolute instants are always subtracted.
    last = habit.last_updated if habit.last_updated.tzinfo else habit.last_updated.replace(tzinfo=timezone.utc)
    current = now if now.tzinfo else now.replace(tzinfo=timezone.utc)
    return current - last


def is_eligible(habit: Habit, now: datetime) -> bool:
    return _elapsed(habit, now) >= ELIGIBILITY_WINDOW


def time_until_eligible(habit: Habit, now: datetime) -> timedelta:
    """Remaining time in the gate window, or zero once the habit is eligible."""
    return max(ELIGIBILITY_WINDOW - _elapsed(habit, now), timedelta(0))


def increment(habit: Habit, now: datetime) -> Habit:
    """Add one point, or raise NotEligibleError if the window has not elapsed."""
    if not is_eligible(habit, now):
        remaining = time_until_eligible(habit, now)
        minutes = math.ceil(remaining.total_seconds() / 60)
        raise NotEligibleError(
            "Cannot increment. Less than 24 hours have passed since the last update. "
            f"Try again in {minutes // 60}h {minutes % 60}m."
        )
    return habit.model_copy(update={"points": habit.points + 1, "last_updated": now})


def _check_name(name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidNameError()
    return name


def rename(habit: Habit, new_name: str, now: datetime) -> Habit:
    return habit.model_copy(update={"name": _check_name(new_name), "last_updated": now})


def apply_edit(habit: Habit, fields: dict[str, Any], now: datetime) -> Habit:
    """Overwrite any of ``name``, ``points``, ``last_updated`` unconditionally.

    An explicit ``last_updated`` is stored as given, so it may reset or extend
    the gate window. Otherwise a name/points change refreshes it to ``now``.
    An empty ``fields`` returns the habit unchanged.
    """
    unknown = set(fields) - {"name", "points", "last_updated"}
    if unknown:
        raise HabitValidationError(f"Unknown habit fields: {', '.join(sorted(unknown))}")
    if not fields:
        return habit

    update: dict[str, Any] = {}
    if "name" in fields:
        update["name"] = _check_name(fields["name"])
    if "points" in fields:
        points = fields["points"]
        if not isinstance(points, int) or isinstance(points, bool) or points < 0:
            raise HabitValidationError("points must be a non-negative integer")
        update["points"] = points
    update["last_updated"] = fields.get("last_updated", now)
    return habit.model_copy(update=update)


def default_habits(tz_name: str = "UTC") -> list[Habit]:
    """Starter set for a new user: zero points, already eligible, fresh ids."""
    last_updated = localize(DEFAULT_LAST_UPDATED, tz_name)
    return [
        Habit(id=str(uuid.uuid4()), name=name, points=0, last_updated=last_updated)
        for name in DEFAULT_HABIT_NAMES
    ]
