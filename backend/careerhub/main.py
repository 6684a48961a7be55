"""FastAPI application entrypoint and HTTP controllers.

Controllers are thin: they accept requests, delegate to services, and
return JSON responses. Domain errors raised by the services
(`services.ServiceError`) are translated into `HTTPException`s whose
detail is `{"error": ..., "code": ...}`.

Endpoints implemented:
- POST /auth/register, POST /auth/login, GET /auth/me
- GET/PUT/DELETE /users, /users/{id}
- CRUD /profiles, /job-applications, /course-views
- GET/POST /user-interactions
- GET /jobs/search
- GET /courses, POST /courses/recommend
- POST /skills/recommend
- POST /resume/upload, GET /resumes/{user_id}/{filename}
- GET /dashboard/stats
- POST /chatbot, GET /chatbot/messages
- GET /health
"""

from fastapi import FastAPI, Depends, UploadFile, File, HTTPException, Request
from fastapi.responses import FileResponse, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session
from typing import Optional
import json
import logging
import time
import uuid
from .database import create_db_and_tables, get_session
from . import services, models
from .auth import get_current_user
from .schemas import (
    ChatIn,
    CourseRecommendIn,
    CourseViewIn,
    JobApplicationIn,
    JobSearchOut,
    LoginIn,
    ProfileIn,
    RegisterIn,
    SkillRecommendIn,
    TokenOut,
    UserInteractionIn,
    UserUpdateIn,
)
from .utils.advisor import CareerAdvisor
from .utils.rate_limit import InMemoryRateLimiter
from .utils.serpapi import fetch_jobs_from_serpapi
from .config import settings

app = FastAPI(title="CareerHub API")
logger = logging.getLogger("careerhub.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)
_chat_rate_limiter = InMemoryRateLimiter()
_advisor = CareerAdvisor(settings.GROQ_API_KEY, settings.GROQ_MODEL)

if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

create_db_and_tables()


def _log_payload(request: Request, req_id: str, elapsed_ms: float, status_code: Optional[int] = None) -> str:
    payload = {
        "request_id": req_id,
        "path": request.url.path,
        "method": request.method,
        "duration_ms": elapsed_ms,
        "client": request.client.host if request.client else "unknown",
    }
    if status_code is not None:
        payload["status_code"] = status_code
    return json.dumps(payload, ensure_ascii=True)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    response: Response
    try:
        response = await call_next(request)
    except Exception:
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
        logger.exception("request_failed %s", _log_payload(request, req_id, elapsed_ms))
        raise
    response.headers["X-Request-ID"] = req_id
    elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
    logger.info("request_done %s", _log_payload(request, req_id, elapsed_ms, response.status_code))
    return response


def _raise(exc: services.ServiceError):
    raise HTTPException(status_code=exc.status_code, detail={'error': str(exc), 'code': exc.code})


def _page(limit: Optional[int], offset: Optional[int], default_limit: int = services.DEFAULT_PAGE_SIZE):
    try:
        return services.page_params(limit, offset, default_limit)
    except services.ServiceError as e:
        _raise(e)


def _fetch_external_jobs(search: str, location: str):
    return fetch_jobs_from_serpapi(search, location, settings.SERPAPI_KEY, settings.SERPAPI_TIMEOUT_SECONDS)


def _enforce_chat_rate_limit(user: models.User) -> None:
    key = f"chat:{user.id}"
    allowed, retry_after = _chat_rate_limiter.allow(
        key, settings.CHAT_RATE_LIMIT_PER_MIN, settings.CHAT_RATE_LIMIT_WINDOW_SECONDS
    )
    if not allowed:
        raise HTTPException(
            status_code=429,
            detail={'error': f'rate limit exceeded; retry after {retry_after}s', 'code': 'RATE_LIMITED'},
            headers={"Retry-After": str(retry_after)},
        )


@app.get('/health')
def health():
    return {'status': 'ok'}


@app.post('/auth/register', status_code=201)
def register(payload: RegisterIn, db: Session = Depends(get_session)):
    """Register a new user and return it without the password hash."""
    try:
        user = services.AuthService(db).register(payload.name, payload.email, payload.password)
    except services.ServiceError as e:
        _raise(e)
    logger.info("user_registered user_id=%s", user.id)
    return services.user_to_dict(user)


@app.post('/auth/login', response_model=TokenOut)
def login(payload: LoginIn, db: Session = Depends(get_session)):
    """Authenticate a user and return a signed JWT token.

    The token contains `user_id` and `email` and expires after
    `JWT_EXPIRE_HOURS`.
    """
    token = services.AuthService(db).authenticate(payload.email, payload.password)
    if not token:
        raise HTTPException(status_code=401, detail={'error': 'Invalid email or password', 'code': 'INVALID_CREDENTIALS'})
    return {'access_token': token}


@app.get('/auth/me')
def me(user: models.User = Depends(get_current_user)):
    return services.user_to_dict(user)


@app.get('/users')
def list_users(search: Optional[str] = None, limit: Optional[int] = None, offset: Optional[int] = None,
               db: Session = Depends(get_session), user: models.User = Depends(get_current_user)):
    limit, offset = _page(limit, offset)
    users = services.UserService(db).list_users(search, limit, offset)
    return [services.user_to_dict(u) for u in users]


@app.get('/users/{user_id}')
def get_user(user_id: int, db: Session = Depends(get_session), user: models.User = Depends(get_current_user)):
    try:
        return services.user_to_dict(services.UserService(db).get(user_id))
    except services.ServiceError as e:
        _raise(e)


@app.put('/users/{user_id}')
def update_user(user_id: int, payload: UserUpdateIn, db: Session = Depends(get_session),
                user: models.User = Depends(get_current_user)):
    try:
        updated = services.UserService(db).update(user, user_id, payload.model_dump(exclude_unset=True))
    except services.ServiceError as e:
        _raise(e)
    return services.user_to_dict(updated)


@app.delete('/users/{user_id}')
def delete_user(user_id: int, db: Session = Depends(get_session), user: models.User = Depends(get_current_user)):
    """Delete your own account together with everything it owns."""
    try:
        deleted = services.UserService(db).delete(user, user_id)
    except services.ServiceError as e:
        _raise(e)
    return {'message': 'User deleted successfully', 'user': deleted}


@app.get('/profiles')
def list_profiles(limit: Optional[int] = None, offset: Optional[int] = None,
                  db: Session = Depends(get_session), user: models.User = Depends(get_current_user)):
    limit, offset = _page(limit, offset)
    return services.ProfileService(db).list(user.id, limit, offset)


@app.get('/profiles/{profile_id}')
def get_profile(profile_id: int, db: Session = Depends(get_session), user: models.User = Depends(get_current_user)):
    try:
        return services.ProfileService(db).get(user.id, profile_id)
    except services.ServiceError as e:
        _raise(e)


@app.post('/profiles', status_code=201)
def create_profile(payload: ProfileIn, db: Session = Depends(get_session),
                   user: models.User = Depends(get_current_user)):
    try:
        return services.ProfileService(db).create(user.id, payload.model_dump())
    except services.ServiceError as e:
        _raise(e)


@app.put('/profiles/{profile_id}')
def update_profile(profile_id: int, payload: ProfileIn, db: Session = Depends(get_session),
                   user: models.User = Depends(get_current_user)):
    try:
        return services.ProfileService(db).update(user.id, profile_id, payload.model_dump(exclude_unset=True))
    except services.ServiceError as e:
        _raise(e)


@app.delete('/profiles/{profile_id}')
def delete_profile(profile_id: int, db: Session = Depends(get_session),
                   user: models.User = Depends(get_current_user)):
    try:
        deleted = services.ProfileService(db).delete(user.id, profile_id)
    except services.ServiceError as e:
        _raise(e)
    return {'message': 'Profile deleted successfully', 'profile': deleted}


@app.get('/job-applications')
def list_job_applications(search: Optional[str] = None, status: Optional[str] = None,
                          limit: Optional[int] = None, offset: Optional[int] = None,
                          db: Session = Depends(get_session), user: models.User = Depends(get_current_user)):
    """List the caller's applications, newest first."""
    limit, offset = _page(limit, offset)
    return services.JobApplicationService(db).list(user.id, search, status, limit, offset)


@app.get('/job-applications/{application_id}')
def get_job_application(application_id: int, db: Session = Depends(get_session),
                        user: models.User = Depends(get_current_user)):
    try:
        return services.JobApplicationService(db).get(user.id, application_id)
    except services.ServiceError as e:
        _raise(e)


@app.post('/job-applications', status_code=201)
def create_job_application(payload: JobApplicationIn, db: Session = Depends(get_session),
                           user: models.User = Depends(get_current_user)):
    try:
        return services.JobApplicationService(db).create(user.id, payload.model_dump())
    except services.ServiceError as e:
        _raise(e)


@app.put('/job-applications/{application_id}')
def update_job_application(application_id: int, payload: JobApplicationIn, db: Session = Depends(get_session),
                           user: models.User = Depends(get_current_user)):
    try:
        return services.JobApplicationService(db).update(
            user.id, application_id, payload.model_dump(exclude_unset=True))
    except services.ServiceError as e:
        _raise(e)


@app.delete('/job-applications/{application_id}')
def delete_job_application(application_id: int, db: Session = Depends(get_session),
                           user: models.User = Depends(get_current_user)):
    try:
        deleted = services.JobApplicationService(db).delete(user.id, application_id)
    except services.ServiceError as e:
        _raise(e)
    return {'message': 'Job application deleted successfully', 'deleted_record': deleted}


@app.get('/course-views')
def list_course_views(search: Optional[str] = None, course_category: Optional[str] = None,
                      limit: Optional[int] = None, offset: Optional[int] = None,
                      db: Session = Depends(get_session), user: models.User = Depends(get_current_user)):
    limit, offset = _page(limit, offset)
    return services.CourseViewService(db).list(user.id, search, course_category, limit, offset)


@app.get('/course-views/{view_id}')
def get_course_view(view_id: int, db: Session = Depends(get_session), user: models.User = Depends(get_current_user)):
    try:
        return services.CourseViewService(db).get(user.id, view_id)
    except services.ServiceError as e:
        _raise(e)


@app.post('/course-views', status_code=201)
def create_course_view(payload: CourseViewIn, db: Session = Depends(get_session),
                       user: models.User = Depends(get_current_user)):
    try:
        return services.CourseViewService(db).create(user.id, payload.model_dump())
    except services.ServiceError as e:
        _raise(e)


@app.put('/course-views/{view_id}')
def update_course_view(view_id: int, payload: CourseViewIn, db: Session = Depends(get_session),
                       user: models.User = Depends(get_current_user)):
    try:
        return services.CourseViewService(db).update(user.id, view_id, payload.model_dump(exclude_unset=True))
    except services.ServiceError as e:
        _raise(e)


@app.delete('/course-views/{view_id}')
def delete_course_view(view_id: int, db: Session = Depends(get_session),
                       user: models.User = Depends(get_current_user)):
    try:
        deleted = services.CourseViewService(db).delete(user.id, view_id)
    except services.ServiceError as e:
        _raise(e)
    return {'message': 'Course view deleted successfully', 'deleted_record': deleted}


@app.get('/user-interactions')
def list_interactions(interaction_type: Optional[str] = None, limit: Optional[int] = None,
                      offset: Optional[int] = None, db: Session = Depends(get_session),
                      user: models.User = Depends(get_current_user)):
    limit, offset = _page(limit, offset)
    rows = services.InteractionService(db).list(user.id, interaction_type, limit, offset)
    return [services.interaction_to_dict(r) for r in rows]


@app.get('/user-interactions/{interaction_id}')
def get_interaction(interaction_id: int, db: Session = Depends(get_session),
                    user: models.User = Depends(get_current_user)):
    try:
        return services.interaction_to_dict(services.InteractionService(db).get(user.id, interaction_id))
    except services.ServiceError as e:
        _raise(e)


@app.post('/user-interactions', status_code=201)
def create_interaction(payload: UserInteractionIn, db: Session = Depends(get_session),
                       user: models.User = Depends(get_current_user)):
    try:
        row = services.InteractionService(db).record(user.id, payload.interaction_type, payload.metadata)
    except services.ServiceError as e:
        _raise(e)
    return services.interaction_to_dict(row)


@app.get('/jobs/search', response_model=JobSearchOut)
def search_jobs(search: str = '', location: str = '', min_salary: int = 0,
                max_salary: int = services.DEFAULT_MAX_SALARY,
                db: Session = Depends(get_session), user: models.User = Depends(get_current_user)):
    """Search external listings and the local job store.

    External (SerpAPI) results come first, then local rows. Both are
    filtered to the `[min_salary, max_salary]` band.
    """
    svc = services.JobSearchService(db, fetch_external=_fetch_external_jobs)
    try:
        return svc.search(search, location, min_salary, max_salary)
    except services.ServiceError as e:
        _raise(e)


@app.get('/courses')
def list_courses():
    return {'success': True, 'courses': services.CourseService.list_courses()}


@app.post('/courses/recommend')
def recommend_courses(payload: CourseRecommendIn, user: models.User = Depends(get_current_user)):
    return services.CourseService.recommend(payload.education, payload.skills, payload.interests)


@app.post('/skills/recommend')
def recommend_skills(payload: SkillRecommendIn, user: models.User = Depends(get_current_user)):
    try:
        return services.SkillService.recommend(payload.resume_text, payload.education)
    except services.ServiceError as e:
        _raise(e)


@app.post('/resume/upload')
def upload_resume(file: UploadFile = File(...), db: Session = Depends(get_session),
                  user: models.User = Depends(get_current_user)):
    """Store a PDF/DOC/DOCX resume and return its extracted text.

    The stored file is served back to its owner at the returned
    `resume_url`.
    """
    content = file.file.read(settings.MAX_RESUME_BYTES + 1)
    try:
        return services.ResumeService(db).upload(user.id, file.filename, file.content_type, content)
    except services.ServiceError as e:
        _raise(e)


@app.get('/resumes/{user_id}/{filename}')
def download_resume(user_id: int, filename: str, db: Session = Depends(get_session),
                    user: models.User = Depends(get_current_user)):
    if user_id != user.id:
        _raise(services.ServiceError('You can only access your own resumes', 'FORBIDDEN', status_code=403))
    try:
        path = services.ResumeService(db).path_for(user_id, filename)
    except services.ServiceError as e:
        _raise(e)
    if not path.is_file():
        _raise(services.NotFoundError('Resume not found'))
    return FileResponse(path, filename=filename)


@app.get('/dashboard/stats')
def dashboard_stats(db: Session = Depends(get_session), user: models.User = Depends(get_current_user)):
    return services.DashboardService(db).stats(user.id)


@app.post('/chatbot')
def chatbot(payload: ChatIn, db: Session = Depends(get_session), user: models.User = Depends(get_current_user)):
    """Ask the career advisor a question.

    The reply is stored and returned together with the conversation
    history extended by the new user/assistant turns.
    """
    try:
        message = services.ChatService.clean_message(payload.message)
    except services.ServiceError as e:
        _raise(e)
    _enforce_chat_rate_limit(user)
    history = [turn.model_dump() for turn in payload.conversation_history]
    try:
        return services.ChatService(db, _advisor).reply(user.id, message, history)
    except services.ServiceError as e:
        _raise(e)


@app.get('/chatbot/messages')
def chat_messages(limit: Optional[int] = None, offset: Optional[int] = None,
                  db: Session = Depends(get_session), user: models.User = Depends(get_current_user)):
    limit, offset = _page(limit, offset, default_limit=50)
    return services.ChatService(db, _advisor).history(user.id, limit, offset)
