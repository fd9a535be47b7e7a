# authstash/app/login/reducer.py
"""
Pure login state transitions.

Reducers never mutate their input: they return a new map / state, or the
same object when the action changes nothing. That identity is what the
local-users selector keys its cache on.
"""
import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from authstash.app.core.errors import MissingUsernameError
from authstash.app.login.actions import Initialize, StashDeleted, StashSaved
from authstash.app.schemas.stash import LoginStashMap

logger = logging.getLogger(__name__)


def reduce_stashes(state: LoginStashMap, action: Any) -> LoginStashMap:
    if isinstance(action, Initialize):
        out: LoginStashMap = {}

        # Extract the usernames from the top-level objects:
        for stash in action.stashes:
            if stash.username:
                out[stash.username] = stash
        return out

    if isinstance(action, StashDeleted):
        if action.username not in state:
            return state
        copy = dict(state)
        del copy[action.username]
        return copy

    if isinstance(action, StashSaved):
        username = action.stash.username
        if not username:
            logger.warning("Refusing to save a login stash without a username")
            raise MissingUsernameError()

        out = dict(state)
        out[username] = action.stash
        return out

    return state


@dataclass(frozen=True)
class LoginState:
    api_key: str = ""
    app_id: str = ""
    device_description: Optional[str] = None
    server_uri: str = ""
    stashes: LoginStashMap = field(default_factory=dict)


def reduce_login(state: LoginState, action: Any) -> LoginState:
    """Apply one action to the whole login state."""
    stashes = reduce_stashes(state.stashes, action)

    if isinstance(action, Initialize):
        return LoginState(
            api_key=action.api_key,
            app_id=action.app_id,
            device_description=action.device_description,
            server_uri=action.auth_server,
            stashes=stashes,
        )

    if stashes is state.stashes:
        return state
    return dataclasses.replace(state, stashes=stashes)
