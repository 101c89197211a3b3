"""Pydantic schemas for Users."""
from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field

from app.schemas.habit import Habit, HabitStatusOut


class Credentials(BaseModel):
    """Body of POST /register and POST /login."""
    name: str = Field(min_length=1)
    password: str = Field(alias="pass", min_length=1)

    model_config = ConfigDict(populate_by_name=True)


class UserRecord(BaseModel):
    """A whole user document as the repository loads and saves it."""
    id: str
    name: str
    password_hash: str
    habits: list[Habit] = []
    version: int = 1


class UserOut(BaseModel):
    id: str
    name: str
    habits: list[Habit]


class UserDetailOut(BaseModel):
    id: str
    name: str
    habits: list[HabitStatusOut]
