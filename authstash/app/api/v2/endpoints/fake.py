# authstash/app/api/v2/endpoints/fake.py
"""
Test-only controls for the fake login server.

Endpoints:
- GET /fake/users/{login_id} - Dump a root login (and repos) as a fixture
- POST /fake/offline - Switch the login routes offline / back online
"""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from authstash.app.api.deps import get_db
from authstash.app.core.errors import LoginNotFoundError, NotRootLoginError
from authstash.app.db.store import LoginDb
from authstash.app.models.fake_user import FakeUser
from authstash.app.schemas.login import OfflineRequest, OfflineResponse

router = APIRouter()


@router.get("/users/{login_id}", response_model=FakeUser)
async def dump_fake_user(
    login_id: str,
    username: str = Query(...),
    login_key: str = Query(..., alias="loginKey"),
    last_login: Optional[datetime] = Query(None, alias="lastLogin"),
    sync_keys: Optional[List[str]] = Query(None, alias="syncKey"),
    db: LoginDb = Depends(get_db),
):
    """
    Dump the login tree under `login_id` so it can be replayed with
    LoginDb.setup_fake_user. Only root logins can be dumped.
    """
    try:
        return db.dump_fake_user(
            login_id,
            username=username,
            login_key=login_key,
            last_login=last_login,
            sync_keys=sync_keys or (),
        )
    except LoginNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except NotRootLoginError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/offline", response_model=OfflineResponse)
async def go_offline(body: OfflineRequest, request: Request):
    request.app.state.offline = body.offline
    return OfflineResponse(offline=body.offline)
