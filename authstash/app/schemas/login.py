# authstash/app/schemas/login.py
"""
Pydantic schemas for the v2 login endpoints.

LoginReply is what a client receives after logging in: the row's boxes,
passed through untouched, plus the same for every child login.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from authstash.app.models.login import Box, Snrp


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoginReply(CamelModel):
    """
    One node of the login reply tree.

    children and pending_vouchers are always present, possibly empty.
    otp_reset_date is parsed from the stored text; a malformed value
    fails validation.
    """

    # Identity:
    app_id: Optional[str] = None
    login_id: str
    parent_box: Optional[Box] = None

    # Login methods:
    login_auth_box: Optional[Box] = None
    password_auth_box: Optional[Box] = None
    password_auth_snrp: Optional[Snrp] = None
    password_box: Optional[Box] = None
    password_key_snrp: Optional[Snrp] = None
    pin2_box: Optional[Box] = None
    pin2_key_box: Optional[Box] = None
    pin2_text_box: Optional[Box] = None
    question2_box: Optional[Box] = None
    recovery2_box: Optional[Box] = None
    recovery2_key_box: Optional[Box] = None
    otp_key: Optional[str] = None
    otp_reset_date: Optional[datetime] = None
    otp_timeout: Optional[int] = None
    pending_vouchers: List[Dict[str, Any]] = Field(default_factory=list)

    # Resources:
    key_boxes: Optional[List[Box]] = None
    mnemonic_box: Optional[Box] = None
    root_key_box: Optional[Box] = None
    sync_key_box: Optional[Box] = None
    children: List["LoginReply"] = Field(default_factory=list)


class LoginRequest(CamelModel):
    """
    Body of POST /login.

    Exactly one identity (login_id, pin2_id or recovery2_id) is allowed.
    A login_id may be proven with either login_auth or password_auth.
    """

    login_id: Optional[str] = None
    login_auth: Optional[str] = None
    password_auth: Optional[str] = None

    pin2_id: Optional[str] = None
    pin2_auth: Optional[str] = None

    recovery2_id: Optional[str] = None
    recovery2_auth: Optional[List[str]] = None

    otp: Optional[str] = None

    @model_validator(mode="after")
    def check_single_identity(self) -> "LoginRequest":
        ids = [
            value
            for value in (self.login_id, self.pin2_id, self.recovery2_id)
            if value is not None
        ]
        if len(ids) != 1:
            raise ValueError(
                "Exactly one of loginId, pin2Id or recovery2Id is required"
            )
        return self


class CreateLoginRequest(CamelModel):
    """Body of POST /login/create: a new row plus an optional owner."""

    parent: Optional[str] = None
    data: Dict[str, Any]


class OfflineRequest(BaseModel):
    offline: bool = True


class OfflineResponse(BaseModel):
    offline: bool
