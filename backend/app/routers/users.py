"""User API routes."""
from datetime import datetime
from fastapi import APIRouter, Depends

from app.dependencies import get_now, get_user_repository
from app.schemas.user import UserDetailOut, UserOut
from app.services import habit_service
from app.services.user_repository import UserRepository

router = APIRouter()


@router.get("", response_model=list[UserOut])
def list_users(repo: UserRepository = Depends(get_user_repository)):
    """List all users with their habits (credentials omitted)."""
    return [habit_service.to_user_out(u) for u in repo.list_all()]


@router.get("/{user_id}", response_model=UserDetailOut)
def get_user(
    user_id: str,
    repo: UserRepository = Depends(get_user_repository),
    now: datetime = Depends(get_now),
):
    """Fetch a user; each habit carries a freshly computed has24HoursPassed."""
    return habit_service.get_user_view(repo, user_id, now)
