"""Habit API routes — delegates to habit_service for the read-modify-write cycle."""
from datetime import datetime
from fastapi import APIRouter, Depends

from app.dependencies import get_now, get_user_repository
from app.schemas.habit import Habit, HabitEdit, HabitRename
from app.services import habit_service
from app.services.user_repository import UserRepository

router = APIRouter()


@router.put("/{user_id}/habits/{habit_id}", response_model=Habit)
def edit_habit(
    user_id: str,
    habit_id: str,
    payload: HabitEdit,
    repo: UserRepository = Depends(get_user_repository),
    now: datetime = Depends(get_now),
):
    """Overwrite name/points/lastUpdated. Administrative, not subject to the 24h gate."""
    fields = payload.model_dump(exclude_unset=True, exclude_none=True)
    return habit_service.edit_habit(repo, user_id, habit_id, fields, now)


@router.patch("/{user_id}/habits/{habit_id}/increment", response_model=Habit)
def increment_habit(
    user_id: str,
    habit_id: str,
    repo: UserRepository = Depends(get_user_repository),
    now: datetime = Depends(get_now),
):
    """Add one point if 24 hours have passed since the last update, else 400."""
    return habit_service.increment_habit(repo, user_id, habit_id, now)


@router.patch("/{user_id}/habits/{habit_id}/name", response_model=Habit)
def rename_habit(
    user_id: str,
    habit_id: str,
    payload: HabitRename,
    repo: UserRepository = Depends(get_user_repository),
    now: datetime = Depends(get_now),
):
    """Rename a habit; refreshes lastUpdated."""
    return habit_service.rename_habit(repo, user_id, habit_id, payload.name, now)
