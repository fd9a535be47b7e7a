"""Tests for derived login state (local users) and its memoization."""

import base64
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from authstash.app.login import (
    IdentityMemo,
    Initialize,
    LoginStateStore,
    StashDeleted,
    StashSaved,
    derive_local_users,
    find_pin2_stash,
    get_recovery2_key,
    search_tree,
)
from authstash.app.schemas.stash import StashTree

from conftest import make_box

RECOVERY_KEY = b"hello world"
RECOVERY_KEY_B58 = "StV1DL6CwTryKyV"


def tree(data) -> StashTree:
    return StashTree.model_validate(data)


def pin_tree() -> StashTree:
    """Root without password; money child with a PIN."""
    return tree(
        {
            "appId": "",
            "loginId": "L1",
            "username": "u1",
            "children": [
                {
                    "appId": "money",
                    "loginId": "L2",
                    "pin2Id": "P1",
                    "pin2Box": make_box("pin2"),
                }
            ],
        }
    )


def recovery_tree() -> StashTree:
    """
    Recovery on the root; the money child has none.

    A stash holds the decoded recovery2Key itself, not the server-side
    recovery2Id or recovery2Box.
    """
    return tree(
        {
            "appId": "",
            "loginId": "L1",
            "username": "u2",
            "lastLogin": "2024-05-01T12:00:00Z",
            "recovery2Key": base64.b64encode(RECOVERY_KEY).decode(),
            "passwordAuthBox": make_box("passwordAuth"),
            "children": [{"appId": "money", "loginId": "L2"}],
        }
    )


# =============================================================================
# Tree Search Tests
# =============================================================================


class TestSearchTree:
    """Tests for search_tree and the factor finders."""

    def test_root_matches_first(self):
        node = tree({"appId": "a", "loginId": "root", "children": [{"appId": "a"}]})
        assert search_tree(node, lambda s: s.app_id == "a").login_id == "root"

    def test_depth_first_order(self):
        """A deep match in an earlier subtree beats a shallow match later."""
        node = tree(
            {
                "appId": "",
                "children": [
                    {
                        "appId": "x",
                        "children": [{"appId": "y", "loginId": "deep"}],
                    },
                    {"appId": "y", "loginId": "shallow"},
                ],
            }
        )
        assert search_tree(node, lambda s: s.app_id == "y").login_id == "deep"

    def test_no_match(self):
        assert search_tree(pin_tree(), lambda s: s.app_id == "nope") is None

    def test_find_pin2_stash(self):
        assert find_pin2_stash(pin_tree(), "money").login_id == "L2"
        assert find_pin2_stash(pin_tree(), "") is None

    def test_find_pin2_stash_by_pin2_key(self):
        node = tree({"appId": "", "pin2Key": base64.b64encode(b"pin").decode()})
        assert find_pin2_stash(node, "") is node

    def test_recovery2_key_root_only(self):
        assert get_recovery2_key(recovery_tree()) == RECOVERY_KEY

        child_only = tree(
            {
                "appId": "",
                "children": [
                    {
                        "appId": "money",
                        "recovery2Key": base64.b64encode(RECOVERY_KEY).decode(),
                    }
                ],
            }
        )
        assert get_recovery2_key(child_only) is None

    def test_recovery2_key_must_be_base64(self):
        for bad in ("abc", "ab!c", "not base64"):
            with pytest.raises(ValidationError):
                tree({"appId": "", "username": "u", "recovery2Key": bad})

    def test_bad_recovery2_key_never_reaches_local_users(self):
        with pytest.raises(ValidationError):
            StashSaved(tree({"username": "u", "recovery2Key": "ab!c"}))


# =============================================================================
# Local Users Tests
# =============================================================================


class TestDeriveLocalUsers:
    """Tests for derive_local_users."""

    def test_pin_only_child(self):
        [user] = derive_local_users("money", {"u1": pin_tree()})

        assert user.username == "u1"
        assert user.pin_login_enabled is True
        assert user.key_login_enabled is False
        assert user.recovery2_key is None

    def test_recovery_key_from_root(self):
        [user] = derive_local_users("money", {"u2": recovery_tree()})

        assert user.recovery2_key == RECOVERY_KEY_B58
        assert user.key_login_enabled is False
        assert user.pin_login_enabled is False

    def test_key_login_on_matching_node(self):
        [user] = derive_local_users("", {"u2": recovery_tree()})
        assert user.key_login_enabled is True

    def test_key_login_via_login_auth_box(self):
        node = tree(
            {
                "appId": "",
                "children": [
                    {"appId": "money", "loginAuthBox": make_box("loginAuth")}
                ],
            }
        )
        [user] = derive_local_users("money", {"u3": node})
        assert user.key_login_enabled is True

    def test_unknown_app_id(self):
        [user] = derive_local_users("elsewhere", {"u1": pin_tree()})
        assert user.key_login_enabled is False
        assert user.pin_login_enabled is False

    def test_last_login_passthrough(self):
        [user] = derive_local_users("money", {"u2": recovery_tree()})
        assert user.last_login == datetime(2024, 5, 1, 12, tzinfo=timezone.utc)

    def test_map_order(self):
        stashes = {"zed": pin_tree(), "amy": recovery_tree(), "bob": pin_tree()}
        users = derive_local_users("money", stashes)
        assert [user.username for user in users] == ["zed", "amy", "bob"]

    def test_empty(self):
        assert derive_local_users("money", {}) == []

    def test_serializes_camel_case(self):
        [user] = derive_local_users("money", {"u1": pin_tree()})
        body = user.model_dump(by_alias=True)
        assert body["pinLoginEnabled"] is True
        assert body["keyLoginEnabled"] is False


# =============================================================================
# Memoization Tests
# =============================================================================


class TestIdentityMemo:
    """Tests for IdentityMemo."""

    def test_same_references_hit_cache(self):
        func = MagicMock(side_effect=derive_local_users)
        memo = IdentityMemo(func)
        stashes = {"u1": pin_tree()}

        first = memo("money", stashes)
        second = memo("money", stashes)

        assert first is second
        assert func.call_count == 1

    def test_new_map_recomputes(self):
        """Deep equality is not enough: a new map object recomputes."""
        func = MagicMock(side_effect=derive_local_users)
        memo = IdentityMemo(func)
        stashes = {"u1": pin_tree()}

        memo("money", stashes)
        memo("money", dict(stashes))

        assert func.call_count == 2

    def test_new_app_id_recomputes(self):
        func = MagicMock(side_effect=derive_local_users)
        memo = IdentityMemo(func)
        stashes = {"u1": pin_tree()}

        memo("money", stashes)
        result = memo("other", stashes)

        assert func.call_count == 2
        assert result[0].pin_login_enabled is False

    def test_only_last_arguments_are_kept(self):
        func = MagicMock(side_effect=derive_local_users)
        memo = IdentityMemo(func)
        a, b = {"u1": pin_tree()}, {"u2": recovery_tree()}

        memo("money", a)
        memo("money", b)
        memo("money", a)

        assert func.call_count == 3

    def test_clear(self):
        func = MagicMock(side_effect=derive_local_users)
        memo = IdentityMemo(func)
        stashes = {}

        memo("money", stashes)
        memo.clear()
        memo("money", stashes)

        assert func.call_count == 2


class TestLoginStateStore:
    """Tests for dispatching actions and reading local users."""

    def test_local_users_cached_between_noops(self):
        store = LoginStateStore()
        store.dispatch(Initialize([pin_tree()], app_id="money"))

        users = store.local_users
        store.dispatch(StashDeleted("unknown"))

        assert store.local_users is users
        assert users[0].pin_login_enabled is True

    def test_local_users_follow_changes(self):
        store = LoginStateStore()
        store.dispatch(Initialize([pin_tree()], app_id="money"))
        before = store.local_users

        store.dispatch(StashSaved(recovery_tree()))
        after = store.local_users

        assert after is not before
        assert [user.username for user in after] == ["u1", "u2"]

        store.dispatch(StashDeleted("u1"))
        assert [user.username for user in store.local_users] == ["u2"]

    def test_dispatch_returns_new_state(self):
        store = LoginStateStore()
        state = store.dispatch(Initialize([], app_id="money"))
        assert store.state is state
        assert state.app_id == "money"
