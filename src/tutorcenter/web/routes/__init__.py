"""Route handlers for the Web API."""

from tutorcenter.web.routes.auth import router as auth_router
from tutorcenter.web.routes.debug import router as debug_router
from tutorcenter.web.routes.health import router as health_router
from tutorcenter.web.routes.pages import router as pages_router
from tutorcenter.web.routes.reports import router as reports_router
from tutorcenter.web.routes.sessions import router as sessions_router
from tutorcenter.web.routes.settings import router as settings_router
from tutorcenter.web.routes.students import router as students_router
from tutorcenter.web.routes.tutors import router as tutors_router
from tutorcenter.web.routes.users import router as users_router

__all__ = [
    "auth_router",
    "debug_router",
    "health_router",
    "pages_router",
    "reports_router",
    "sessions_router",
    "settings_router",
    "students_router",
    "tutors_router",
    "users_router",
]
