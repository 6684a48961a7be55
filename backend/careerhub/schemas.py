"""Pydantic request schemas used by the API.

Schemas keep API input shapes stable. Inputs forbid unknown keys, so a
client can never smuggle `user_id` into a body; ownership always comes
from the bearer token. Required-ness and blank checks live in the
services so they can answer with a specific error code.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Literal, Optional


class _StrictIn(BaseModel):
    model_config = ConfigDict(extra='forbid')


class RegisterIn(_StrictIn):
    """Payload for user registration."""
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginIn(_StrictIn):
    email: str
    password: str


class TokenOut(BaseModel):
    """Authentication response containing an access token."""
    access_token: str
    token_type: str = 'bearer'


class UserUpdateIn(_StrictIn):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class ProfileIn(_StrictIn):
    experience_level: Optional[str] = None
    education: Optional[str] = None
    skills: Optional[List[str]] = None
    interests: Optional[List[str]] = None
    resume_url: Optional[str] = None
    resume_text: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None


class JobApplicationIn(_StrictIn):
    job_title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    salary: Optional[int] = None
    job_description: Optional[str] = None
    status: Optional[str] = None


class CourseViewIn(_StrictIn):
    course_name: Optional[str] = None
    course_category: Optional[str] = None


class UserInteractionIn(_StrictIn):
    interaction_type: Optional[str] = None
    metadata: Optional[Any] = None


class CourseRecommendIn(BaseModel):
    """Inputs for course recommendations; every field is optional."""
    education: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    interests: List[str] = Field(default_factory=list)


class SkillRecommendIn(BaseModel):
    resume_text: Optional[str] = None
    education: Optional[str] = None


class ChatTurn(BaseModel):
    """One earlier chat turn; the system prompt is never client-supplied."""
    role: Literal['user', 'assistant']
    content: str


class ChatIn(BaseModel):
    message: Optional[str] = None
    conversation_history: List[ChatTurn] = Field(default_factory=list)


class JobSearchResult(BaseModel):
    """Normalized job listing returned by `/jobs/search`."""
    id: Any
    title: str
    company: Optional[str] = None
    location: Optional[str] = None
    salary: int
    description: str
    type: str
    posted_date: str
    source: str
    apply_link: Optional[str] = None
    thumbnail: Optional[str] = None
    extensions: List[Any] = Field(default_factory=list)


class JobSearchOut(BaseModel):
    jobs: List[JobSearchResult]
    total_jobs: int

