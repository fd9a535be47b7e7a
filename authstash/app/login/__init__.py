from authstash.app.login.actions import (
    Initialize,
    LoginAction,
    StashDeleted,
    StashSaved,
)
from authstash.app.login.reducer import LoginState, reduce_login, reduce_stashes
from authstash.app.login.reply import make_login_reply
from authstash.app.login.selectors import (
    IdentityMemo,
    derive_local_users,
    find_pin2_stash,
    get_recovery2_key,
    make_local_users_selector,
    search_tree,
)
from authstash.app.login.state import LoginStateStore

__all__ = [
    "IdentityMemo",
    "Initialize",
    "LoginAction",
    "LoginState",
    "LoginStateStore",
    "StashDeleted",
    "StashSaved",
    "derive_local_users",
    "find_pin2_stash",
    "get_recovery2_key",
    "make_local_users_selector",
    "make_login_reply",
    "reduce_login",
    "reduce_stashes",
    "search_tree",
]
