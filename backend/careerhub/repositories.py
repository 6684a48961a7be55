"""Repository classes encapsulating database operations.

Each repository is small and focused on a single aggregate (users,
profiles, applications, course views, interactions, jobs, chat
messages). Repositories return SQLModel objects and perform
commits/refreshes where appropriate. Per-user repositories always take
the owner id so a query can never leak another user's rows.
"""

from typing import List, Optional, Type
from sqlmodel import Session, SQLModel, select
from sqlalchemy import func, or_
from . import models


def _like(value: str) -> str:
    return f"%{value}%"


class _Repository:
    model: Type[SQLModel]

    def __init__(self, session: Session):
        self.session = session

    def save(self, obj):
        """Insert or update `obj` and return the refreshed instance."""
        self.session.add(obj)
        self.session.commit()
        self.session.refresh(obj)
        return obj

    def delete(self, obj) -> None:
        self.session.delete(obj)
        self.session.commit()


class _OwnedRepository(_Repository):
    """Shared lookups for tables keyed by `user_id`."""

    def get_for_user(self, record_id: int, user_id: int):
        stmt = select(self.model).where(self.model.id == record_id, self.model.user_id == user_id)
        return self.session.exec(stmt).first()

    def count_for_user(self, user_id: int) -> int:
        stmt = select(func.count()).select_from(self.model).where(self.model.user_id == user_id)
        return self.session.exec(stmt).one()


class UserRepository(_Repository):
    """CRUD operations for `User` objects."""
    model = models.User

    def create(self, user: models.User) -> models.User:
        """Persist a new user and return the managed instance."""
        return self.save(user)

    def get_by_email(self, email: str) -> Optional[models.User]:
        """Return a `User` by email or `None` if not found."""
        stmt = select(models.User).where(models.User.email == email)
        return self.session.exec(stmt).first()

    def get(self, user_id: int) -> Optional[models.User]:
        """Get a `User` by primary key."""
        return self.session.get(models.User, user_id)

    def list_users(self, search: Optional[str] = None, limit: int = 10, offset: int = 0) -> List[models.User]:
        stmt = select(models.User)
        if search:
            stmt = stmt.where(or_(models.User.name.like(_like(search)), models.User.email.like(_like(search))))
        stmt = stmt.order_by(models.User.id).limit(limit).offset(offset)
        return self.session.exec(stmt).all()


class ProfileRepository(_OwnedRepository):
    model = models.Profile

    def list_for_user(self, user_id: int, limit: int = 10, offset: int = 0) -> List[models.Profile]:
        stmt = (
            select(models.Profile)
            .where(models.Profile.user_id == user_id)
            .order_by(models.Profile.id)
            .limit(limit)
            .offset(offset)
        )
        return self.session.exec(stmt).all()

    def first_for_user(self, user_id: int) -> Optional[models.Profile]:
        """Return the oldest profile of a user; the UI treats it as *the* profile."""
        stmt = select(models.Profile).where(models.Profile.user_id == user_id).order_by(models.Profile.id)
        return self.session.exec(stmt).first()


class JobApplicationRepository(_OwnedRepository):
    model = models.JobApplication

    def list_for_user(
        self,
        user_id: int,
        search: Optional[str] = None,
        status: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[models.JobApplication]:
        """List applications newest first, optionally filtered by text and status."""
        ja = models.JobApplication
        stmt = select(ja).where(ja.user_id == user_id)
        if search:
            stmt = stmt.where(or_(
                ja.job_title.like(_like(search)),
                ja.company.like(_like(search)),
                ja.location.like(_like(search)),
            ))
        if status:
            stmt = stmt.where(ja.status == status)
        stmt = stmt.order_by(ja.applied_at.desc(), ja.id.desc()).limit(limit).offset(offset)
        return self.session.exec(stmt).all()


class CourseViewRepository(_OwnedRepository):
    model = models.CourseView

    def list_for_user(
        self,
        user_id: int,
        search: Optional[str] = None,
        course_category: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[models.CourseView]:
        cv = models.CourseView
        stmt = select(cv).where(cv.user_id == user_id)
        if search:
            stmt = stmt.where(or_(cv.course_name.like(_like(search)), cv.course_category.like(_like(search))))
        if course_category:
            stmt = stmt.where(cv.course_category == course_category)
        stmt = stmt.order_by(cv.viewed_at.desc(), cv.id.desc()).limit(limit).offset(offset)
        return self.session.exec(stmt).all()


class InteractionRepository(_OwnedRepository):
    model = models.UserInteraction

    def list_for_user(
        self,
        user_id: int,
        interaction_type: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[models.UserInteraction]:
        ui = models.UserInteraction
        stmt = select(ui).where(ui.user_id == user_id)
        if interaction_type:
            stmt = stmt.where(ui.interaction_type == interaction_type)
        stmt = stmt.order_by(ui.id).limit(limit).offset(offset)
        return self.session.exec(stmt).all()


class JobRepository(_Repository):
    """Queries over the local job store."""
    model = models.Job

    def create_many(self, jobs: List[models.Job]) -> int:
        for job in jobs:
            self.session.add(job)
        self.session.commit()
        return len(jobs)

    def search(
        self,
        search: Optional[str] = None,
        location: Optional[str] = None,
        min_salary: int = 0,
        max_salary: int = 10_000_000,
    ) -> List[models.Job]:
        """Substring search over title/company/description within a salary band."""
        job = models.Job
        stmt = select(job).where(job.salary >= min_salary, job.salary <= max_salary)
        if location:
            stmt = stmt.where(job.location.like(_like(location)))
        if search:
            stmt = stmt.where(or_(
                job.title.like(_like(search)),
                job.company.like(_like(search)),
                job.description.like(_like(search)),
            ))
        stmt = stmt.order_by(job.posted_date.desc())
        return self.session.exec(stmt).all()


class ChatMessageRepository(_Repository):
    model = models.ChatMessage

    def list_for_user(self, user_id: int, limit: int = 50, offset: int = 0) -> List[models.ChatMessage]:
        cm = models.ChatMessage
        stmt = (
            select(cm)
            .where(cm.user_id == user_id)
            .order_by(cm.created_at.desc(), cm.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return self.session.exec(stmt).all()
