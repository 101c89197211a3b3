"""Registration and login routes."""
from datetime import datetime
from fastapi import APIRouter, Depends, status

from app.dependencies import get_now, get_user_repository
from app.schemas.user import Credentials, UserDetailOut, UserOut
from app.services import account_service, habit_service
from app.services.user_repository import UserRepository

router = APIRouter()


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(payload: Credentials, repo: UserRepository = Depends(get_user_repository)):
    """Create a user with the default habit set. Duplicate names → 400."""
    user = account_service.register(repo, payload.name, payload.password)
    return habit_service.to_user_out(user)


@router.post("/login", response_model=UserDetailOut)
def login(
    payload: Credentials,
    repo: UserRepository = Depends(get_user_repository),
    now: datetime = Depends(get_now),
):
    """Check name/password and return the user with their habits."""
    user = account_service.authenticate(repo, payload.name, payload.password)
    return habit_service.to_user_detail(user, now)
