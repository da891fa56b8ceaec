"""
Edge admin gate: presence check for the session cookie

This is the coarse first tier only. Token signature, expiry and the
allow-list are checked by `require_admin` and `/api/verify-admin`.
"""
import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import RedirectResponse

logger = logging.getLogger(__name__)


def is_admin_path(path: str) -> bool:
    return path == "/admin" or path.startswith("/admin/")


class AdminGateMiddleware(BaseHTTPMiddleware):
    """Redirects cookie-less requests for `/admin` paths to the login page"""

    def __init__(self, app, login_path: str = "/login", cookie_name: str = "token"):
        super().__init__(app)
        self.login_path = login_path
        self.cookie_name = cookie_name

    async def dispatch(self, request, call_next):
        if is_admin_path(request.url.path) and not request.cookies.get(self.cookie_name):
            logger.info(f"Redirecting unauthenticated admin request {request.url.path}")
            return RedirectResponse(url=self.login_path, status_code=307)
        return await call_next(request)
