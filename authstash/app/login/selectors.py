# authstash/app/login/selectors.py
"""
Derived login state: which login methods each local user has for an app.

Everything here is read-only over stash trees. The capability search is
parent-first depth-first; the first node for the target appId wins.
"""
import base64
from typing import Any, Callable, Generic, List, Optional, Tuple, TypeVar

import base58

from authstash.app.schemas.stash import LoginStashMap, StashTree, UserSummary

T = TypeVar("T")


def search_tree(
    node: StashTree, predicate: Callable[[StashTree], bool]
) -> Optional[StashTree]:
    """Return the first node (the node itself, then each child subtree in order) matching `predicate`."""
    if predicate(node):
        return node

    for child in node.children:
        found = search_tree(child, predicate)
        if found is not None:
            return found
    return None


def find_app_stash(stash_tree: StashTree, app_id: str) -> Optional[StashTree]:
    return search_tree(stash_tree, lambda stash: stash.app_id == app_id)


def find_pin2_stash(stash_tree: StashTree, app_id: str) -> Optional[StashTree]:
    """The node for `app_id`, if it carries a PIN factor."""
    stash = find_app_stash(stash_tree, app_id)
    if stash is None:
        return None
    if stash.pin2_key is None and stash.pin2_id is None and stash.pin2_box is None:
        return None
    return stash


def get_recovery2_key(stash_tree: StashTree) -> Optional[bytes]:
    """
    The recovery key lives on the root login only.
    """
    if stash_tree.recovery2_key is None:
        return None
    return base64.b64decode(stash_tree.recovery2_key, validate=True)


def derive_local_users(app_id: str, stashes: LoginStashMap) -> List[UserSummary]:
    out: List[UserSummary] = []
    for username, stash_tree in stashes.items():
        stash = find_app_stash(stash_tree, app_id)
        key_login_enabled = stash is not None and (
            stash.password_auth_box is not None or stash.login_auth_box is not None
        )
        recovery2_key = get_recovery2_key(stash_tree)

        out.append(
            UserSummary(
                username=username,
                key_login_enabled=key_login_enabled,
                pin_login_enabled=find_pin2_stash(stash_tree, app_id) is not None,
                recovery2_key=(
                    base58.b58encode(recovery2_key).decode("ascii")
                    if recovery2_key is not None
                    else None
                ),
                last_login=stash_tree.last_login,
            )
        )
    return out


class IdentityMemo(Generic[T]):
    """
    One-slot cache keyed on argument identity.

    The wrapped function reruns only when some argument is a different
    object than last time. Equal-but-distinct arguments still recompute.
    """

    def __init__(self, func: Callable[..., T]):
        self._func = func
        self._args: Optional[Tuple[Any, ...]] = None
        self._result: Optional[T] = None

    def __call__(self, *args: Any) -> T:
        last = self._args
        if (
            last is not None
            and len(last) == len(args)
            and all(a is b for a, b in zip(args, last))
        ):
            return self._result  # type: ignore[return-value]

        result = self._func(*args)
        self._args = args
        self._result = result
        return result

    def clear(self) -> None:
        self._args = None
        self._result = None


def make_local_users_selector() -> IdentityMemo[List[UserSummary]]:
    """A memoized derive_local_users(app_id, stashes)."""
    return IdentityMemo(derive_local_users)
