# authstash/app/login/state.py
import logging
import threading
from typing import Any, List, Optional

from authstash.app.login.reducer import LoginState, reduce_login
from authstash.app.login.selectors import make_local_users_selector
from authstash.app.schemas.stash import UserSummary

logger = logging.getLogger(__name__)


class LoginStateStore:
    """
    Owner of the login state.

    Actions are applied one at a time, in the order received. The lock
    keeps a concurrent reader from seeing state between two dispatches.
    """

    def __init__(self, state: Optional[LoginState] = None):
        self._state = state if state is not None else LoginState()
        self._lock = threading.Lock()
        self._local_users = make_local_users_selector()

    @property
    def state(self) -> LoginState:
        return self._state

    def dispatch(self, action: Any) -> LoginState:
        with self._lock:
            self._state = reduce_login(self._state, action)
            logger.debug(
                "Applied %s (%d stashes)",
                type(action).__name__,
                len(self._state.stashes),
            )
            return self._state

    @property
    def local_users(self) -> List[UserSummary]:
        with self._lock:
            state = self._state
            return self._local_users(state.app_id, state.stashes)
