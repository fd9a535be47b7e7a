# authstash/app/login/reply.py
from authstash.app.db.store import LoginDb
from authstash.app.models.login import LoginRecord
from authstash.app.schemas.login import LoginReply


def make_login_reply(db: LoginDb, login: LoginRecord) -> LoginReply:
    """
    Recursively builds up a login reply tree,
    which the server sends back in response to a v2 login request.

    Children come out in store order, so an unchanged store always
    produces the same reply. Raises pydantic.ValidationError if the
    stored otpResetDate is not a date.
    """
    children = [
        make_login_reply(db, child) for child in db.get_logins_by_parent(login)
    ]

    return LoginReply(
        # Identity:
        app_id=login.app_id,
        login_id=login.login_id,
        parent_box=login.parent_box,
        # Login methods:
        login_auth_box=login.login_auth_box,
        password_auth_box=login.password_auth_box,
        password_auth_snrp=login.password_auth_snrp,
        password_box=login.password_box,
        password_key_snrp=login.password_key_snrp,
        pin2_box=login.pin2_box,
        pin2_key_box=login.pin2_key_box,
        pin2_text_box=login.pin2_text_box,
        question2_box=login.question2_box,
        recovery2_box=login.recovery2_box,
        recovery2_key_box=login.recovery2_key_box,
        otp_key=login.otp_key,
        otp_reset_date=login.otp_reset_date,
        otp_timeout=login.otp_timeout,
        pending_vouchers=[],
        # Resources:
        key_boxes=login.key_boxes,
        mnemonic_box=login.mnemonic_box,
        root_key_box=login.root_key_box,
        sync_key_box=login.sync_key_box,
        children=children,
    )
