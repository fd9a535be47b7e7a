# authstash/app/schemas/stash.py
"""
Client-side login stash.

A stash is the part of a login reply tree that a device keeps on disk so
it can show the available login methods without asking the server.
Each node belongs to one appId; the root node also carries the username.
"""
import base64
import binascii
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from authstash.app.models.login import Box, Snrp


class StashTree(BaseModel):
    # Unknown keys survive a load / save cycle untouched.
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    # Identity:
    app_id: str = ""
    login_id: Optional[str] = None
    user_id: Optional[str] = None
    username: Optional[str] = None
    last_login: Optional[datetime] = None
    parent_box: Optional[Box] = None

    # Key login:
    login_auth_box: Optional[Box] = None

    # Password login:
    password_auth_box: Optional[Box] = None
    password_auth_snrp: Optional[Snrp] = None
    password_box: Optional[Box] = None
    password_key_snrp: Optional[Snrp] = None

    # PIN v2:
    pin2_key: Optional[str] = None  # base64
    pin2_id: Optional[str] = None
    pin2_box: Optional[Box] = None
    pin2_text_box: Optional[Box] = None

    # Login recovery v2:
    recovery2_key: Optional[str] = None  # base64

    # OTP:
    otp_key: Optional[str] = None
    otp_reset_date: Optional[datetime] = None
    otp_timeout: Optional[int] = None

    # Keys and resources:
    key_boxes: Optional[List[Box]] = None
    mnemonic_box: Optional[Box] = None
    root_key_box: Optional[Box] = None
    sync_key_box: Optional[Box] = None

    children: List["StashTree"] = Field(default_factory=list)

    @field_validator("recovery2_key")
    @classmethod
    def check_recovery2_key(cls, v: Optional[str]) -> Optional[str]:
        """Reject recovery keys that are not strict base64."""
        if v is not None:
            try:
                base64.b64decode(v, validate=True)
            except binascii.Error:
                raise ValueError("recovery2Key must be base64")
        return v


class UserSummary(BaseModel):
    """What the login screen needs to know about one local user."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    username: str
    key_login_enabled: bool
    pin_login_enabled: bool
    recovery2_key: Optional[str] = None  # base58
    last_login: Optional[datetime] = None


LoginStashMap = Dict[str, StashTree]

__all__ = ["LoginStashMap", "StashTree", "UserSummary"]
