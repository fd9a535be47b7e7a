import json
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from authstash.app.api.v2.router import api_router
from authstash.app.core.config import Settings, get_settings
from authstash.app.core.logging import configure_logging
from authstash.app.db.store import LoginDb
from authstash.app.models.fake_user import FakeUser

logger = logging.getLogger(__name__)


def load_fake_users(path: str) -> List[FakeUser]:
    """Read a JSON list of fixture users."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return [FakeUser.model_validate(item) for item in data]


def create_app(
    db: Optional[LoginDb] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build a fake login server around `db`.

    Each app owns exactly one store; tests pass their own pre-seeded
    LoginDb, otherwise a fresh one is created and seeded from
    FAKE_USERS_FILE at startup.
    """
    settings = settings or get_settings()
    db = db if db is not None else LoginDb()

    # --- LIFESPAN: SEED FIXTURES WHEN THE SERVER STARTS ---
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.LOG_LEVEL)
        if settings.FAKE_USERS_FILE:
            for user in load_fake_users(settings.FAKE_USERS_FILE):
                app.state.db.setup_fake_user(user)
        logger.info(
            "%s ready (%d logins)", settings.PROJECT_NAME, len(app.state.db.logins)
        )
        yield

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        openapi_url=f"{settings.API_V2_STR}/openapi.json",
        lifespan=lifespan,
    )
    app.state.db = db
    app.state.settings = settings
    app.state.offline = settings.FAKE_SERVER_OFFLINE

    # Set up CORS
    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.BACKEND_CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(api_router, prefix=settings.API_V2_STR)

    @app.get("/")
    def root():
        return {"message": f"Welcome to {settings.PROJECT_NAME} fake login server"}

    return app
