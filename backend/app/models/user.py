"""User ORM model — one document per user with its habits embedded."""
import uuid
from sqlalchemy import Column, String, Integer, DateTime, JSON
from sqlalchemy.sql import func
from app.database import Base


class User(Base):
    __tablename__ = "users"

    user_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    habits = Column(JSON, nullable=False, default=list)  # list of habit documents
    version = Column(Integer, nullable=False, default=1)  # optimistic concurrency
    created_at = Column(DateTime(timezone=True), server_default=func.now())
