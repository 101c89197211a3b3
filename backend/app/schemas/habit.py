"""Pydantic schemas for Habits.

``Habit`` is the domain state the engine works on; it is frozen so every
transition produces a new instance. Field aliases keep the camelCase wire
format (``lastUpdated``, ``has24HoursPassed``) of the stored documents.
"""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class Habit(BaseModel):
    id: str
    name: str
    points: int = Field(0, ge=0)
    last_updated: datetime = Field(alias="lastUpdated")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_document(self) -> dict:
        """Serialize for the embedded JSON column."""
        return self.model_dump(mode="json", by_alias=True)


class HabitStatusOut(Habit):
    """Habit plus the read-time eligibility flag. Never persisted."""
    has_24_hours_passed: bool = Field(alias="has24HoursPassed")


class HabitEdit(BaseModel):
    """Generic habit correction — every field optional, none time-gated."""
    name: Optional[str] = None
    points: Optional[int] = Field(None, ge=0)
    last_updated: Optional[datetime] = Field(None, alias="lastUpdated")

    model_config = ConfigDict(populate_by_name=True)


class HabitRename(BaseModel):
    name: str
