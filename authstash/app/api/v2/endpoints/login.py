# authstash/app/api/v2/endpoints/login.py
"""
v2 login endpoints.

Endpoints:
- POST /login - Log in by key, password, PIN or recovery answers
- POST /login/create - Create a login (optionally under a parent)

Security:
- Auth proofs compared in constant time
- Logins with an otpKey also need a current TOTP code
- Unknown ids and bad proofs are told apart (this is a test server)
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError

from authstash.app.api.deps import get_app_settings, get_db, require_online
from authstash.app.core.config import Settings
from authstash.app.core.errors import (
    DuplicateLoginError,
    InvalidLoginError,
    LoginNotFoundError,
)
from authstash.app.db.store import LoginDb
from authstash.app.login.reply import make_login_reply
from authstash.app.schemas.login import CreateLoginRequest, LoginReply, LoginRequest
from authstash.app.security.compare import check_auth, check_recovery2_auth
from authstash.app.security.otp import verify_otp

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_online)])


@router.post("", response_model=LoginReply, response_model_exclude_none=True)
async def login(
    request: LoginRequest,
    db: LoginDb = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """
    Look up the login by whichever id the client sent, check the matching
    proof, then return the full reply tree for that login.
    """
    if request.login_id is not None:
        login = db.get_login_by_id(request.login_id)
        authenticated = login is not None and (
            check_auth(login.login_auth, request.login_auth)
            or check_auth(login.password_auth, request.password_auth)
        )
    elif request.pin2_id is not None:
        login = db.get_login_by_pin2_id(request.pin2_id)
        authenticated = login is not None and check_auth(
            login.pin2_auth, request.pin2_auth
        )
    else:
        login = db.get_login_by_recovery2_id(request.recovery2_id)
        authenticated = login is not None and check_recovery2_auth(
            login.recovery2_auth, request.recovery2_auth
        )

    if login is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Login not found"
        )

    if not authenticated:
        logger.warning("Rejected login attempt for %s", login.login_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

    if login.otp_key is not None and not verify_otp(
        login.otp_key, request.otp or "", settings.OTP_VALID_WINDOW
    ):
        logger.warning("OTP check failed for %s", login.login_id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="OTP code required"
        )

    return make_login_reply(db, login)


@router.post(
    "/create",
    response_model=LoginReply,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_login(
    request: CreateLoginRequest,
    db: LoginDb = Depends(get_db),
):
    """
    Create a new login row.

    Only creation columns are stored; mnemonicBox, rootKeyBox and
    syncKeyBox are dropped here.
    """
    try:
        row = db.create_login(request.data, parent=request.parent)
    except (ValidationError, InvalidLoginError) as e:
        raise HTTPException(
            status_code=422,
            detail=str(e)
        )
    except DuplicateLoginError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except LoginNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    logger.info("Created login %s (parent=%s)", row.login_id, row.parent)
    return make_login_reply(db, row)
