# authstash/app/db/store.py
"""
In-memory login server database.

Rows live in a single list in insertion order ("store order"). Children
reference their owner by loginId, never by object, so every tree walk
goes back through the store and always sees children in store order.

Concurrency: the store assumes one writer at a time, but a re-entrant lock
still wraps every mutation and every multi-step read so a reader never
observes a half-inserted tree.
"""
import logging
import threading
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import TypeAdapter, ValidationError

from authstash.app.core.errors import (
    DuplicateLoginError,
    InvalidLoginError,
    LoginNotFoundError,
    NotRootLoginError,
)
from authstash.app.db.columns import (
    LOGIN_CREATE_COLUMNS,
    LOGIN_DB_COLUMNS,
    filter_columns,
    project_record,
)
from authstash.app.models.fake_user import FakeUser
from authstash.app.models.login import LoginRecord

logger = logging.getLogger(__name__)

_reset_date = TypeAdapter(datetime)


class LoginDb:
    """
    Emulates the login server database.

    Usage:
        db = LoginDb()
        db.setup_fake_user(fake_user)
        root = db.get_login_by_id(fake_user.login_id)
        reply = make_login_reply(db, root)
    """

    def __init__(self) -> None:
        self.logins: List[LoginRecord] = []
        self.repos: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.RLock()

    # ─────────────────────────────────────────────────────────────
    # Lookups (linear scans, first match wins, never raise)
    # ─────────────────────────────────────────────────────────────

    def get_login_by_id(self, login_id: str) -> Optional[LoginRecord]:
        with self._lock:
            return next(
                (login for login in self.logins if login.login_id == login_id),
                None,
            )

    def get_login_by_pin2_id(self, pin2_id: str) -> Optional[LoginRecord]:
        with self._lock:
            return next(
                (login for login in self.logins if login.pin2_id == pin2_id),
                None,
            )

    def get_login_by_recovery2_id(self, recovery2_id: str) -> Optional[LoginRecord]:
        with self._lock:
            return next(
                (
                    login
                    for login in self.logins
                    if login.recovery2_id == recovery2_id
                ),
                None,
            )

    def get_logins_by_parent(self, parent: LoginRecord) -> List[LoginRecord]:
        with self._lock:
            return [
                child for child in self.logins if child.parent == parent.login_id
            ]

    # ─────────────────────────────────────────────────────────────
    # Writes
    # ─────────────────────────────────────────────────────────────

    def insert_login(self, login: LoginRecord) -> None:
        """
        Append a row as-is.

        No uniqueness checks happen here; callers that need them go
        through create_login.
        """
        with self._lock:
            self.logins.append(login)
        logger.debug("Inserted login %s (parent=%s)", login.login_id, login.parent)

    def create_login(
        self,
        login: Union[LoginRecord, Mapping[str, Any]],
        parent: Optional[str] = None,
    ) -> LoginRecord:
        """
        Server-side account creation.

        Only creation columns are kept. Unlike insert_login, this checks the
        unique columns and the parent link before writing.

        Raises:
            DuplicateLoginError: loginId, pin2Id or recovery2Id already used
            LoginNotFoundError: parent does not exist
            InvalidLoginError: otpResetDate is not a date
        """
        row = project_record(login, LOGIN_CREATE_COLUMNS)
        if row.otp_reset_date is not None:
            try:
                _reset_date.validate_python(row.otp_reset_date)
            except ValidationError:
                raise InvalidLoginError("otpResetDate", row.otp_reset_date)
        with self._lock:
            if self.get_login_by_id(row.login_id) is not None:
                raise DuplicateLoginError("loginId", row.login_id)
            if (
                row.pin2_id is not None
                and self.get_login_by_pin2_id(row.pin2_id) is not None
            ):
                raise DuplicateLoginError("pin2Id", row.pin2_id)
            if (
                row.recovery2_id is not None
                and self.get_login_by_recovery2_id(row.recovery2_id) is not None
            ):
                raise DuplicateLoginError("recovery2Id", row.recovery2_id)
            if parent is not None:
                if self.get_login_by_id(parent) is None:
                    raise LoginNotFoundError(parent)
                row.parent = parent
            self.insert_login(row)
        return row

    # ─────────────────────────────────────────────────────────────
    # Dumping & restoration
    # ─────────────────────────────────────────────────────────────

    def setup_fake_login(
        self,
        user: Mapping[str, Any],
        parent: Optional[str] = None,
    ) -> LoginRecord:
        """
        Insert a nested login tree, depth first.

        Each node is filtered down to the database columns, linked to
        `parent` and inserted before its children are visited. The tree
        must be well formed (unique ids, no cycles); that is not checked.
        """
        row = project_record(user, LOGIN_DB_COLUMNS)
        if parent is not None:
            row.parent = parent

        with self._lock:
            self.insert_login(row)
            for child in user.get("children") or []:
                self.setup_fake_login(child, row.login_id)
        return row

    def setup_fake_user(self, user: FakeUser) -> LoginRecord:
        """Seed the login tree and the sync repos of a fixture user."""
        with self._lock:
            root = self.setup_fake_login(user.server)

            # Create fake repos:
            for sync_key, repo in user.repos.items():
                self.repos[sync_key] = dict(repo)

        logger.info(
            "Seeded fake user %s (%d repos)", user.username, len(user.repos)
        )
        return root

    def dump_login(self, login: LoginRecord) -> Dict[str, Any]:
        """The inverse of setup_fake_login: a row plus its nested children."""
        with self._lock:
            out = filter_columns(login.to_row(), LOGIN_DB_COLUMNS)
            out["children"] = [
                self.dump_login(child) for child in self.get_logins_by_parent(login)
            ]
        return out

    def dump_fake_user(
        self,
        login_id: str,
        *,
        username: str,
        login_key: str,
        last_login: Optional[datetime] = None,
        sync_keys: Iterable[str] = (),
    ) -> FakeUser:
        """
        Package a root login and the requested repos as a fixture.

        Raises:
            LoginNotFoundError: no login with this id
            NotRootLoginError: the login belongs to an app scope
        """
        with self._lock:
            login = self.get_login_by_id(login_id)
            if login is None:
                raise LoginNotFoundError(login_id)
            if login.app_id:
                raise NotRootLoginError(login_id, login.app_id)

            repos = {
                sync_key: dict(self.repos[sync_key])
                for sync_key in sync_keys
                if sync_key in self.repos
            }
            server = self.dump_login(login)

        return FakeUser(
            username=username,
            login_id=login_id,
            login_key=login_key,
            last_login=last_login,
            server=server,
            repos=repos,
        )
