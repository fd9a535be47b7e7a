# authstash/app/core/errors.py
"""
Domain errors raised by the record store and the login reducer.

Lookups never raise; these cover broken caller contracts and the
server-side creation/dump paths. The HTTP layer maps them to status codes.
"""


class AuthStashError(Exception):
    """Base class for all authstash errors."""


class LoginNotFoundError(AuthStashError):
    """A login id (or parent id) does not exist in the store."""

    def __init__(self, login_id: str):
        super().__init__(f"Cannot find login {login_id}")
        self.login_id = login_id


class NotRootLoginError(AuthStashError):
    """Only root logins (appId == "") can be dumped as fake users."""

    def __init__(self, login_id: str, app_id: str):
        super().__init__(
            f"Only root logins are dumpable ({login_id} belongs to '{app_id}')"
        )
        self.login_id = login_id
        self.app_id = app_id


class DuplicateLoginError(AuthStashError):
    """A unique column (loginId, pin2Id, recovery2Id) is already taken."""

    def __init__(self, column: str, value: str):
        super().__init__(f"Duplicate {column}: {value}")
        self.column = column
        self.value = value


class MissingUsernameError(AuthStashError, ValueError):
    """A saved stash carries no username."""

    def __init__(self) -> None:
        super().__init__("Missing username")


class InvalidLoginError(AuthStashError):
    """A login row carries a value that cannot be stored as-is."""

    def __init__(self, column: str, value: object):
        super().__init__(f"Invalid {column}: {value!r}")
        self.column = column
        self.value = value
