"""SQLModel data models.

This module defines the application's database tables using SQLModel.
Every per-user table references `user.id` with ``ON DELETE CASCADE`` so
removing an account removes everything it owns.
"""

from typing import Any, Dict, List, Optional
from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    """A registered user.

    Fields:
    - `email`: unique login name, stored trimmed and lower-cased
    - `password_hash`: hashed password string (never store plaintext)
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(index=True, nullable=False, unique=True)
    password_hash: str
    email_verified: bool = False
    image: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class Profile(SQLModel, table=True):
    """Career profile of a user; `skills` and `interests` are JSON lists."""
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key='user.id', ondelete='CASCADE', index=True)
    experience_level: str
    education: str
    skills: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    interests: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    resume_url: Optional[str] = None
    resume_text: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class UserInteraction(SQLModel, table=True):
    """An activity event; `details` is exposed as `metadata` by the API."""
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key='user.id', ondelete='CASCADE', index=True)
    interaction_type: str = Field(index=True)
    details: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON, nullable=True))
    timestamp: datetime = Field(default_factory=_utcnow)


class JobApplication(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key='user.id', ondelete='CASCADE', index=True)
    job_title: str
    company: str
    location: str
    salary: int
    job_description: str
    status: str = 'Applied'
    applied_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class CourseView(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key='user.id', ondelete='CASCADE', index=True)
    course_name: str
    course_category: str
    viewed_at: datetime = Field(default_factory=_utcnow)


class Job(SQLModel, table=True):
    """A locally stored job posting merged into search results.

    `posted_date` is kept as an ISO-8601 string so it sorts lexically and
    matches the external search API's shape.
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(index=True)
    company: str
    location: str
    salary: int = Field(index=True)
    description: str
    job_type: str = 'Full-time'
    posted_date: str = Field(default_factory=lambda: _utcnow().isoformat())
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class ChatMessage(SQLModel, table=True):
    """A stored advisor exchange (user message plus model response)."""
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key='user.id', ondelete='CASCADE', index=True)
    message: str
    response: str
    created_at: datetime = Field(default_factory=_utcnow)
