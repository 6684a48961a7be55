"""Business logic services used by HTTP controllers.

This module holds small service classes that coordinate repositories
and the pure helpers in `careerhub.utils`. Services validate input,
apply domain rules and persist aggregates via repositories. Validation
problems are raised as `ServiceError` (a `ValueError`) carrying the HTTP
status and a machine-readable code, which the controllers translate into
`HTTPException`s.
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional
from urllib.parse import quote
import logging

import jwt
from passlib.context import CryptContext
from sqlmodel import Session

from . import models, repositories
from .config import settings
from .utils.advisor import AdvisorNotConfigured, AdvisorUnavailable, CareerAdvisor
from .utils.course_catalog import COURSE_LISTINGS, recommend_courses
from .utils.job_formatting import local_job_to_listing, within_salary_range
from .utils.resume_parser import ALLOWED_TYPES, extract_resume_text
from .utils.skills import MAX_SKILLS, detect_skills

PWD_CTX = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
DEFAULT_MAX_SALARY = 10_000_000
INTERACTION_TYPES = ('profile_update', 'course_view', 'job_search', 'job_apply', 'resume_upload')
PROFILE_COMPLETENESS_FIELDS = (
    'experience_level', 'education', 'skills', 'interests', 'resume_url', 'phone', 'location',
)

logger = logging.getLogger("careerhub.services")


class ServiceError(ValueError):
    """A domain error with an HTTP status and a stable error code."""

    def __init__(self, message: str, code: str, status_code: int = 400):
        super().__init__(message)
        self.code = code
        self.status_code = status_code


class NotFoundError(ServiceError):
    def __init__(self, message: str, code: str = 'NOT_FOUND'):
        super().__init__(message, code, status_code=404)


def page_params(limit: Optional[int], offset: Optional[int], default_limit: int = DEFAULT_PAGE_SIZE):
    """Validate pagination input and cap `limit` at `MAX_PAGE_SIZE`."""
    limit = default_limit if limit is None else limit
    offset = 0 if offset is None else offset
    if limit < 1:
        raise ServiceError('Invalid limit parameter', 'INVALID_LIMIT')
    if offset < 0:
        raise ServiceError('Invalid offset parameter', 'INVALID_OFFSET')
    return min(limit, MAX_PAGE_SIZE), offset


def _required_text(value: Optional[str], message: str, code: str) -> str:
    if value is None or not value.strip():
        raise ServiceError(message, code)
    return value.strip()


def _optional_text(value: Optional[str]) -> Optional[str]:
    return value.strip() if isinstance(value, str) else value


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands datetimes back naive; they were written as UTC.
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def user_to_dict(user: models.User) -> Dict[str, Any]:
    """Public user representation (never includes the password hash)."""
    return user.model_dump(exclude={'password_hash'})


def interaction_to_dict(interaction: models.UserInteraction) -> Dict[str, Any]:
    out = interaction.model_dump(exclude={'details'})
    out['metadata'] = interaction.details
    return out


class AuthService:
    """Authentication related operations (register + authenticate)."""
    def __init__(self, session: Session):
        self.session = session
        self.user_repo = repositories.UserRepository(session)

    def register(self, name: Optional[str], email: Optional[str], password: Optional[str]) -> models.User:
        """Create a new user with a hashed password.

        Emails are trimmed and lower-cased; a duplicate email is rejected.
        """
        email = _required_text(email, 'Email is required', 'MISSING_EMAIL').lower()
        password = _required_text(password, 'Password is required', 'MISSING_PASSWORD')
        name = _required_text(name, 'Name is required', 'MISSING_NAME')
        if self.user_repo.get_by_email(email):
            raise ServiceError('Email already exists', 'EMAIL_EXISTS')
        user = models.User(name=name, email=email, password_hash=PWD_CTX.hash(password))
        return self.user_repo.create(user)

    def authenticate(self, email: str, password: str) -> Optional[str]:
        """Verify credentials and return a signed JWT token on success.

        Returns `None` if authentication fails.
        """
        user = self.user_repo.get_by_email((email or '').strip().lower())
        if not user:
            return None
        if not PWD_CTX.verify(password, user.password_hash):
            return None
        return self.issue_token(user)

    @staticmethod
    def issue_token(user: models.User) -> str:
        expire = _utcnow() + timedelta(hours=settings.JWT_EXPIRE_HOURS)
        payload = {"user_id": user.id, "email": user.email, "exp": int(expire.timestamp())}
        return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


class UserService:
    """Account listing and self-service account management."""
    def __init__(self, session: Session):
        self.session = session
        self.user_repo = repositories.UserRepository(session)

    def list_users(self, search: Optional[str], limit: int, offset: int) -> List[models.User]:
        return self.user_repo.list_users(search=search, limit=limit, offset=offset)

    def get(self, user_id: int) -> models.User:
        user = self.user_repo.get(user_id)
        if not user:
            raise NotFoundError('User not found', 'USER_NOT_FOUND')
        return user

    def _own_account(self, actor: models.User, user_id: int) -> models.User:
        user = self.get(user_id)
        if user.id != actor.id:
            raise ServiceError('You can only modify your own account', 'FORBIDDEN', status_code=403)
        return user

    def update(self, actor: models.User, user_id: int, changes: Dict[str, Any]) -> models.User:
        """Apply name/email/password changes to the caller's own account."""
        user = self._own_account(actor, user_id)
        if 'email' in changes:
            email = _required_text(changes['email'], 'Email cannot be empty', 'INVALID_EMAIL').lower()
            other = self.user_repo.get_by_email(email)
            if other and other.id != user.id:
                raise ServiceError('Email already exists', 'EMAIL_EXISTS')
            user.email = email
        if 'name' in changes:
            user.name = _required_text(changes['name'], 'Name cannot be empty', 'INVALID_NAME')
        if 'password' in changes:
            password = _required_text(changes['password'], 'Password cannot be empty', 'INVALID_PASSWORD')
            user.password_hash = PWD_CTX.hash(password)
        user.updated_at = _utcnow()
        return self.user_repo.save(user)

    def delete(self, actor: models.User, user_id: int) -> Dict[str, Any]:
        """Delete the caller's account; owned rows go with it via FK cascade."""
        user = self._own_account(actor, user_id)
        snapshot = user_to_dict(user)
        self.user_repo.delete(user)
        logger.info("user_deleted user_id=%s", user_id)
        return snapshot


class ProfileService:
    """Create, update and remove career profiles owned by a user."""
    def __init__(self, session: Session):
        self.session = session
        self.repo = repositories.ProfileRepository(session)

    def get(self, user_id: int, profile_id: int) -> models.Profile:
        profile = self.repo.get_for_user(profile_id, user_id)
        if not profile:
            raise NotFoundError('Profile not found', 'PROFILE_NOT_FOUND')
        return profile

    def list(self, user_id: int, limit: int, offset: int) -> List[models.Profile]:
        return self.repo.list_for_user(user_id, limit=limit, offset=offset)

    def create(self, user_id: int, data: Dict[str, Any]) -> models.Profile:
        experience_level = _required_text(
            data.get('experience_level'), 'Experience level is required', 'MISSING_EXPERIENCE_LEVEL')
        education = _required_text(data.get('education'), 'Education is required', 'MISSING_EDUCATION')
        if not isinstance(data.get('skills'), list):
            raise ServiceError('Skills must be provided as an array', 'INVALID_SKILLS')
        if not isinstance(data.get('interests'), list):
            raise ServiceError('Interests must be provided as an array', 'INVALID_INTERESTS')
        profile = models.Profile(
            user_id=user_id,
            experience_level=experience_level,
            education=education,
            skills=list(data['skills']),
            interests=list(data['interests']),
            resume_url=_optional_text(data.get('resume_url')),
            resume_text=_optional_text(data.get('resume_text')),
            phone=_optional_text(data.get('phone')),
            location=_optional_text(data.get('location')),
        )
        return self.repo.save(profile)

    def update(self, user_id: int, profile_id: int, changes: Dict[str, Any]) -> models.Profile:
        """Apply only the supplied fields; `None` clears an optional field."""
        profile = self.get(user_id, profile_id)
        if 'experience_level' in changes:
            profile.experience_level = _required_text(
                changes['experience_level'], 'Experience level cannot be empty', 'INVALID_EXPERIENCE_LEVEL')
        if 'education' in changes:
            profile.education = _required_text(changes['education'], 'Education cannot be empty', 'INVALID_EDUCATION')
        for key, code in (('skills', 'INVALID_SKILLS'), ('interests', 'INVALID_INTERESTS')):
            if key in changes:
                if not isinstance(changes[key], list):
                    raise ServiceError(f'{key.capitalize()} must be provided as an array', code)
                setattr(profile, key, list(changes[key]))
        for key in ('resume_url', 'resume_text', 'phone', 'location'):
            if key in changes:
                setattr(profile, key, _optional_text(changes[key]))
        profile.updated_at = _utcnow()
        return self.repo.save(profile)

    def delete(self, user_id: int, profile_id: int) -> Dict[str, Any]:
        profile = self.get(user_id, profile_id)
        snapshot = profile.model_dump()
        self.repo.delete(profile)
        return snapshot


class JobApplicationService:
    """Track jobs the user has applied to."""
    _TEXT_FIELDS = (
        ('job_title', 'Job title', 'JOB_TITLE'),
        ('company', 'Company', 'COMPANY'),
        ('location', 'Location', 'LOCATION'),
        ('job_description', 'Job description', 'JOB_DESCRIPTION'),
    )

    def __init__(self, session: Session):
        self.session = session
        self.repo = repositories.JobApplicationRepository(session)

    @staticmethod
    def _salary(value: Any) -> int:
        if value is None or isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ServiceError('Valid salary is required (must be positive number)', 'INVALID_SALARY')
        return value

    def get(self, user_id: int, application_id: int) -> models.JobApplication:
        application = self.repo.get_for_user(application_id, user_id)
        if not application:
            raise NotFoundError('Job application not found')
        return application

    def list(self, user_id: int, search: Optional[str], status: Optional[str], limit: int, offset: int):
        return self.repo.list_for_user(user_id, search=search, status=status, limit=limit, offset=offset)

    def create(self, user_id: int, data: Dict[str, Any]) -> models.JobApplication:
        values = {}
        for key, label, code in self._TEXT_FIELDS:
            values[key] = _required_text(data.get(key), f'{label} is required', f'MISSING_{code}')
        values['salary'] = self._salary(data.get('salary'))
        status = _optional_text(data.get('status')) or 'Applied'
        application = models.JobApplication(user_id=user_id, status=status, **values)
        return self.repo.save(application)

    def update(self, user_id: int, application_id: int, changes: Dict[str, Any]) -> models.JobApplication:
        application = self.get(user_id, application_id)
        for key, label, code in self._TEXT_FIELDS:
            if key in changes:
                setattr(application, key, _required_text(changes[key], f'{label} cannot be empty', f'INVALID_{code}'))
        if 'salary' in changes:
            application.salary = self._salary(changes['salary'])
        if 'status' in changes:
            application.status = _required_text(changes['status'], 'Status cannot be empty', 'INVALID_STATUS')
        application.updated_at = _utcnow()
        return self.repo.save(application)

    def delete(self, user_id: int, application_id: int) -> Dict[str, Any]:
        application = self.get(user_id, application_id)
        snapshot = application.model_dump()
        self.repo.delete(application)
        return snapshot


class CourseViewService:
    """Record which courses a user opened."""
    def __init__(self, session: Session):
        self.session = session
        self.repo = repositories.CourseViewRepository(session)

    def get(self, user_id: int, view_id: int) -> models.CourseView:
        view = self.repo.get_for_user(view_id, user_id)
        if not view:
            raise NotFoundError('Course view not found')
        return view

    def list(self, user_id: int, search: Optional[str], course_category: Optional[str], limit: int, offset: int):
        return self.repo.list_for_user(
            user_id, search=search, course_category=course_category, limit=limit, offset=offset)

    def create(self, user_id: int, data: Dict[str, Any]) -> models.CourseView:
        view = models.CourseView(
            user_id=user_id,
            course_name=_required_text(
                data.get('course_name'), 'course_name is required and must be a non-empty string',
                'MISSING_COURSE_NAME'),
            course_category=_required_text(
                data.get('course_category'), 'course_category is required and must be a non-empty string',
                'MISSING_COURSE_CATEGORY'),
        )
        return self.repo.save(view)

    def update(self, user_id: int, view_id: int, changes: Dict[str, Any]) -> models.CourseView:
        view = self.get(user_id, view_id)
        if not changes:
            raise ServiceError('No valid fields to update', 'NO_UPDATES')
        if 'course_name' in changes:
            view.course_name = _required_text(
                changes['course_name'], 'course_name must be a non-empty string', 'INVALID_COURSE_NAME')
        if 'course_category' in changes:
            view.course_category = _required_text(
                changes['course_category'], 'course_category must be a non-empty string', 'INVALID_COURSE_CATEGORY')
        return self.repo.save(view)

    def delete(self, user_id: int, view_id: int) -> Dict[str, Any]:
        view = self.get(user_id, view_id)
        snapshot = view.model_dump()
        self.repo.delete(view)
        return snapshot


class InteractionService:
    """Append-only log of user activity events."""
    def __init__(self, session: Session):
        self.session = session
        self.repo = repositories.InteractionRepository(session)

    def get(self, user_id: int, interaction_id: int) -> models.UserInteraction:
        interaction = self.repo.get_for_user(interaction_id, user_id)
        if not interaction:
            raise NotFoundError('User interaction not found')
        return interaction

    def list(self, user_id: int, interaction_type: Optional[str], limit: int, offset: int):
        return self.repo.list_for_user(user_id, interaction_type=interaction_type, limit=limit, offset=offset)

    def record(self, user_id: int, interaction_type: Optional[str], metadata: Any = None) -> models.UserInteraction:
        interaction_type = _required_text(interaction_type, 'interaction_type is required', 'MISSING_INTERACTION_TYPE')
        if interaction_type not in INTERACTION_TYPES:
            raise ServiceError(
                f"interaction_type must be one of: {', '.join(INTERACTION_TYPES)}", 'INVALID_INTERACTION_TYPE')
        if metadata is not None and not isinstance(metadata, dict):
            raise ServiceError('metadata must be a valid JSON object', 'INVALID_METADATA')
        interaction = models.UserInteraction(user_id=user_id, interaction_type=interaction_type, details=metadata)
        return self.repo.save(interaction)


ExternalJobFetcher = Callable[[str, str], List[Dict[str, Any]]]


class JobSearchService:
    """Merge the local job store with an external job search source.

    External results come first, both lists are filtered to the same
    salary band, and local descriptions are reformatted into bullet
    points so both sources read alike.
    """
    def __init__(self, session: Session, fetch_external: Optional[ExternalJobFetcher] = None):
        self.session = session
        self.job_repo = repositories.JobRepository(session)
        self.fetch_external = fetch_external

    def search(
        self,
        search: str = '',
        location: str = '',
        min_salary: int = 0,
        max_salary: int = DEFAULT_MAX_SALARY,
    ) -> Dict[str, Any]:
        search = (search or '').strip()
        location = (location or '').strip()
        if min_salary < 0 or max_salary < min_salary:
            raise ServiceError('Salary range is invalid', 'INVALID_SALARY_RANGE')
        local = [
            local_job_to_listing(job)
            for job in self.job_repo.search(
                search=search, location=location, min_salary=min_salary, max_salary=max_salary)
        ]
        external: List[Dict[str, Any]] = []
        if self.fetch_external is not None:
            external = [
                job for job in self.fetch_external(search, location)
                if within_salary_range(job, min_salary, max_salary)
            ]
        jobs = external + local
        logger.info("job_search local=%d external=%d", len(local), len(external))
        return {'jobs': jobs, 'total_jobs': len(jobs)}


class CourseService:
    """Static course listings and education/skill based recommendations."""

    @staticmethod
    def list_courses() -> List[Dict[str, Any]]:
        return [dict(c) for c in COURSE_LISTINGS]

    @staticmethod
    def recommend(education: Optional[str], skills: Iterable[str], interests: Iterable[str]) -> Dict[str, Any]:
        courses = recommend_courses(education, skills, interests)
        return {'courses': courses, 'total_courses': len(courses)}


class SkillService:
    @staticmethod
    def recommend(resume_text: Optional[str], education: Optional[str]) -> Dict[str, Any]:
        """Detect skills mentioned in a resume; the message reports the full count."""
        if not resume_text or not resume_text.strip():
            raise ServiceError('Resume text is required', 'MISSING_RESUME_TEXT')
        detected = detect_skills(resume_text, education)
        return {
            'skills': detected[:MAX_SKILLS],
            'message': f'Detected {len(detected)} relevant skills from your resume',
        }


class ResumeService:
    """Store uploaded resumes on disk and extract their text."""
    def __init__(self, session: Session, storage_dir: Optional[Path] = None):
        self.session = session
        self.storage_dir = Path(storage_dir or settings.RESUME_STORAGE_DIR)
        self.interactions = InteractionService(session)

    @staticmethod
    def validate_filename(filename: Optional[str]) -> str:
        if not filename or len(filename) > 200:
            raise ServiceError('Invalid filename', 'INVALID_FILENAME')
        if '/' in filename or '\\' in filename or filename in ('.', '..'):
            raise ServiceError('Invalid filename path', 'INVALID_FILENAME')
        return filename

    def path_for(self, user_id: int, filename: str) -> Path:
        return self.storage_dir / str(user_id) / self.validate_filename(filename)

    def upload(self, user_id: int, filename: Optional[str], content_type: Optional[str], payload: bytes,
               max_bytes: Optional[int] = None) -> Dict[str, Any]:
        filename = self.validate_filename(filename)
        if content_type not in ALLOWED_TYPES:
            raise ServiceError('Invalid file type. Only PDF and Word documents are allowed.', 'INVALID_FILE_TYPE')
        limit = max_bytes or settings.MAX_RESUME_BYTES
        if len(payload) > limit:
            raise ServiceError(f'File size exceeds {limit // (1024 * 1024)}MB limit', 'FILE_TOO_LARGE')
        target = self.path_for(user_id, filename)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(payload)
        resume_text = extract_resume_text(payload, filename, content_type)
        self.interactions.record(user_id, 'resume_upload', {
            'file_name': filename,
            'file_size': f'{len(payload) / 1024:.2f}KB',
            'file_type': content_type,
        })
        return {
            'success': True,
            'resume_url': f'/resumes/{user_id}/{quote(filename)}',
            'resume_text': resume_text,
            'file_name': filename,
            'file_size': len(payload),
        }


def profile_completeness(profile: Optional[models.Profile]) -> int:
    """Percentage of the completeness fields that hold a non-empty value."""
    if profile is None:
        return 0
    filled = sum(1 for field in PROFILE_COMPLETENESS_FIELDS if getattr(profile, field, None))
    return round(filled * 100 / len(PROFILE_COMPLETENESS_FIELDS))


class DashboardService:
    """Aggregate a user's activity into the dashboard summary."""
    RECENT = 5
    ACTIVITY = 10

    def __init__(self, session: Session):
        self.session = session
        self.applications = repositories.JobApplicationRepository(session)
        self.course_views = repositories.CourseViewRepository(session)
        self.profiles = repositories.ProfileRepository(session)

    def stats(self, user_id: int) -> Dict[str, Any]:
        applications = self.applications.list_for_user(user_id, limit=self.RECENT)
        courses = self.course_views.list_for_user(user_id, limit=self.RECENT)
        profile = self.profiles.first_for_user(user_id)
        activity = [
            {
                'type': 'application',
                'title': f'Applied to {a.job_title}',
                'company': a.company,
                'status': a.status,
                'date': _as_utc(a.applied_at),
            }
            for a in applications
        ] + [
            {
                'type': 'course',
                'title': f'Viewed {c.course_name}',
                'category': c.course_category,
                'date': _as_utc(c.viewed_at),
            }
            for c in courses
        ]
        activity.sort(key=lambda item: item['date'], reverse=True)
        return {
            'stats': {
                'total_applications': self.applications.count_for_user(user_id),
                'total_course_views': self.course_views.count_for_user(user_id),
                'profile_completeness': profile_completeness(profile),
                'skills_count': len(profile.skills or []) if profile else 0,
            },
            'recent_applications': [a.model_dump() for a in applications],
            'recent_courses': [c.model_dump() for c in courses],
            'recent_activity': activity[:self.ACTIVITY],
            'profile': profile.model_dump() if profile else None,
        }


class ChatService:
    """Relay a message to the career advisor and persist the exchange."""
    def __init__(self, session: Session, advisor: CareerAdvisor):
        self.session = session
        self.advisor = advisor
        self.repo = repositories.ChatMessageRepository(session)

    @staticmethod
    def clean_message(message: Optional[str]) -> str:
        return _required_text(message, 'Message is required', 'MISSING_MESSAGE')

    def reply(self, user_id: int, message: Optional[str], history: List[Dict[str, str]]) -> Dict[str, Any]:
        message = self.clean_message(message)
        try:
            answer = self.advisor.reply(message, history)
        except AdvisorNotConfigured as exc:
            raise ServiceError('Chat advisor is not configured', 'AI_NOT_CONFIGURED', status_code=503) from exc
        except AdvisorUnavailable as exc:
            raise ServiceError('Failed to get response from AI', 'AI_UNAVAILABLE', status_code=502) from exc
        self.repo.save(models.ChatMessage(user_id=user_id, message=message, response=answer))
        return {
            'message': answer,
            'conversation_history': [
                *history,
                {'role': 'user', 'content': message},
                {'role': 'assistant', 'content': answer},
            ],
        }

    def history(self, user_id: int, limit: int, offset: int) -> List[models.ChatMessage]:
        return self.repo.list_for_user(user_id, limit=limit, offset=offset)
