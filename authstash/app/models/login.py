# authstash/app/models/login.py
"""
Stored login record.

One row per authentication identity. Child logins (one per application)
point at their owner through `parent`, which holds the owner's loginId.

Security: boxes are opaque encrypted blobs produced by the client.
The server never decrypts or re-encodes them, so they are typed as plain
JSON objects and passed through untouched.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Opaque crypto payloads: {"encryptionType", "data_base64", "iv_hex"} for
# boxes, {"salt_hex", "n", "r", "p"} for scrypt parameters.
Box = Dict[str, Any]
Snrp = Dict[str, Any]


class LoginRecord(BaseModel):
    """
    A login server database row.

    Every field except login_id is optional and presence matters:
    a field that was never supplied is absent from model_fields_set and is
    dropped from dumps, which is different from a field explicitly set.
    Wire / column names are the camelCase aliases.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    # Identity:
    app_id: Optional[str] = None
    login_id: str
    parent: Optional[str] = None
    parent_box: Optional[Box] = None

    # Key login:
    login_auth: Optional[str] = None
    login_auth_box: Optional[Box] = None

    # Password login:
    password_auth: Optional[str] = None
    password_auth_box: Optional[Box] = None
    password_auth_snrp: Optional[Snrp] = None
    password_box: Optional[Box] = None
    password_key_snrp: Optional[Snrp] = None

    # PIN v2:
    pin2_id: Optional[str] = None
    pin2_auth: Optional[str] = None
    pin2_box: Optional[Box] = None
    pin2_key_box: Optional[Box] = None
    pin2_text_box: Optional[Box] = None

    # Login recovery v2:
    recovery2_id: Optional[str] = None
    recovery2_auth: Optional[List[str]] = None
    recovery2_box: Optional[Box] = None
    recovery2_key_box: Optional[Box] = None
    question2_box: Optional[Box] = None

    # OTP:
    otp_key: Optional[str] = None
    otp_reset_date: Optional[str] = None  # stored as text, parsed on reply
    otp_timeout: Optional[int] = None

    # Keys and resources:
    key_boxes: Optional[List[Box]] = None
    mnemonic_box: Optional[Box] = None
    root_key_box: Optional[Box] = None
    sync_key_box: Optional[Box] = None

    # Legacy PIN v1:
    pin_box: Optional[Box] = None
    pin_id: Optional[str] = None
    pin_key_box: Optional[Box] = None

    def to_row(self) -> Dict[str, Any]:
        """Present fields only, keyed by column name."""
        return self.model_dump(by_alias=True, exclude_unset=True)
