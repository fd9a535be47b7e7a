# authstash/app/api/deps.py
from fastapi import HTTPException, Request, status

from authstash.app.core.config import Settings
from authstash.app.db.store import LoginDb


def get_db(request: Request) -> LoginDb:
    """The store this app instance was built with (see create_app)."""
    return request.app.state.db


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def require_online(request: Request) -> None:
    """Fail every login route while the fake server is switched offline."""
    if request.app.state.offline:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Login server is offline",
        )
