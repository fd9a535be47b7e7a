"""Pytest configuration for authstash tests."""

import copy
from typing import Any

import pytest

from authstash.app.db import LoginDb, LOGIN_DB_COLUMNS, filter_columns
from authstash.app.models.fake_user import FakeUser


def make_box(tag: str) -> dict[str, Any]:
    """An opaque box; the contents only need to be recognisable."""
    return {
        "encryptionType": 0,
        "data_base64": f"{tag}-data",
        "iv_hex": f"{tag}-iv",
    }


SNRP = {"salt_hex": "00ff", "n": 16384, "r": 1, "p": 1}


# =============================================================================
# Fixture login tree
# =============================================================================
#
#   L1 (root, password + key login)
#   ├── L2 (money, PIN)
#   │   └── L4 (money.sub)
#   └── L3 (other, recovery + OTP reset date)

FAKE_TREE: dict[str, Any] = {
    "appId": "",
    "loginId": "L1",
    "username": "not-a-column",
    "loginAuth": "login-auth-L1",
    "loginAuthBox": make_box("loginAuth"),
    "passwordAuth": "password-auth-L1",
    "passwordAuthBox": make_box("passwordAuth"),
    "passwordAuthSnrp": SNRP,
    "passwordBox": make_box("password"),
    "passwordKeySnrp": SNRP,
    "keyBoxes": [make_box("key0"), make_box("key1")],
    "mnemonicBox": make_box("mnemonic"),
    "rootKeyBox": make_box("rootKey"),
    "syncKeyBox": make_box("syncKey"),
    "children": [
        {
            "appId": "money",
            "loginId": "L2",
            "parentBox": make_box("parent-L2"),
            "pin2Id": "P1",
            "pin2Auth": "pin2-auth-L2",
            "pin2Box": make_box("pin2"),
            "pin2KeyBox": make_box("pin2Key"),
            "pin2TextBox": make_box("pin2Text"),
            "children": [
                {"appId": "money.sub", "loginId": "L4"},
            ],
        },
        {
            "appId": "other",
            "loginId": "L3",
            "parentBox": make_box("parent-L3"),
            "recovery2Id": "R1",
            "recovery2Auth": ["answer-1", "answer-2"],
            "recovery2Box": make_box("recovery2"),
            "recovery2KeyBox": make_box("recovery2Key"),
            "question2Box": make_box("question2"),
            "otpResetDate": "2019-01-01T00:00:00.000Z",
            "otpTimeout": 604800,
        },
    ],
}


def expected_dump(tree: dict[str, Any]) -> dict[str, Any]:
    """What dump_login should give back for a fixture tree."""
    out = filter_columns(tree, LOGIN_DB_COLUMNS)
    out["children"] = [expected_dump(child) for child in tree.get("children", [])]
    return out


@pytest.fixture
def fake_tree() -> dict[str, Any]:
    return copy.deepcopy(FAKE_TREE)


@pytest.fixture
def db(fake_tree) -> LoginDb:
    """A store seeded with FAKE_TREE."""
    store = LoginDb()
    store.setup_fake_login(fake_tree)
    return store


@pytest.fixture
def fake_user(fake_tree) -> FakeUser:
    return FakeUser.model_validate(
        {
            "username": "alice",
            "loginId": "L1",
            "loginKey": "bG9naW4ta2V5",
            "lastLogin": "2024-05-01T12:00:00Z",
            "server": fake_tree,
            "repos": {
                "abcd": {"Wallets/1.json": make_box("wallet1")},
                "ef01": {"Wallets/2.json": make_box("wallet2")},
            },
        }
    )
