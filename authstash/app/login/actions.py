# authstash/app/login/actions.py
"""Actions that drive the login state reducer."""
from dataclasses import dataclass, field
from typing import List, Optional, Union

from authstash.app.schemas.stash import StashTree


@dataclass(frozen=True)
class Initialize:
    """
    Context start-up: every stash found on disk, plus the app settings.

    Only `stashes` feeds the stash map; the other fields are init-only
    parts of the login state.
    """

    stashes: List[StashTree] = field(default_factory=list)
    app_id: str = ""
    api_key: str = ""
    auth_server: str = ""
    device_description: Optional[str] = None


@dataclass(frozen=True)
class StashSaved:
    """A stash tree was written to disk (after login, signup, PIN change...)."""

    stash: StashTree


@dataclass(frozen=True)
class StashDeleted:
    """The stash for `username` was removed from disk."""

    username: str


LoginAction = Union[Initialize, StashSaved, StashDeleted]
