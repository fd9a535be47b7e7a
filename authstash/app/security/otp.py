# authstash/app/security/otp.py
"""
TOTP checks for logins that have an otpKey.

RFC 6238, as pyotp implements it:
- 6-digit codes
- 30-second time step
- HMAC-SHA1
- Base32 secret encoding
"""
import pyotp


def verify_otp(secret: str, code: str, valid_window: int = 1) -> bool:
    """
    Verify a 6-digit TOTP code.

    Returns False for empty input, anything that is not six digits, or a
    secret that is not valid base32.
    """
    if not secret or not code:
        return False

    code = code.strip().replace(" ", "")
    if len(code) != 6 or not code.isdigit():
        return False

    try:
        totp = pyotp.TOTP(secret)
        return totp.verify(code, valid_window=valid_window)
    except ValueError:
        # binascii.Error from the base32 decode
        return False


def get_current_otp(secret: str) -> str:
    """
    Get the current TOTP code for a secret.
    Useful for testing only.
    """
    return pyotp.TOTP(secret).now()
