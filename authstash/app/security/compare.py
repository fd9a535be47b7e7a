# authstash/app/security/compare.py
"""
Constant-time checks of the auth proofs stored on a login row.

The row keeps loginAuth, passwordAuth, pin2Auth and recovery2Auth as
opaque base64 strings; the client sends the same strings back.
"""
import secrets
from typing import List, Optional


def constant_time_compare(a: str, b: str) -> bool:
    """
    Compare two strings in constant time to prevent timing attacks.

    Args:
        a: Expected value (from the database)
        b: Provided value (from the client)

    Returns:
        True if strings match, False otherwise
    """
    if len(a) != len(b):
        # Still do the comparison to maintain constant time
        secrets.compare_digest(a, a)
        return False
    return secrets.compare_digest(a, b)


def check_auth(stored: Optional[str], provided: Optional[str]) -> bool:
    """A proof matches only when both sides exist and are equal."""
    if stored is None or provided is None:
        return False
    return constant_time_compare(stored, provided)


def check_recovery2_auth(
    stored: Optional[List[str]], provided: Optional[List[str]]
) -> bool:
    """Every recovery answer must match, in order."""
    if stored is None or provided is None or len(stored) != len(provided):
        return False
    results = [constant_time_compare(a, b) for a, b in zip(stored, provided)]
    return all(results)
