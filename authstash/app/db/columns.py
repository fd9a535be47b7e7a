# authstash/app/db/columns.py
"""
Column whitelists for login rows.

LOGIN_DB_COLUMNS is everything the store keeps. `parent` is not listed:
the store attaches it itself when a row is inserted under an owner.
"""
from typing import Any, Dict, Iterable, Mapping, Union

from authstash.app.models.login import LoginRecord

# The database just includes these fields:
LOGIN_DB_COLUMNS = (
    # Identity:
    "appId",
    "loginId",
    # Login methods:
    "loginAuth",
    "loginAuthBox",
    "passwordAuth",
    "passwordAuthBox",
    "passwordAuthSnrp",
    "passwordBox",
    "passwordKeySnrp",
    "pin2Auth",
    "pin2Box",
    "pin2Id",
    "pin2KeyBox",
    "pin2TextBox",
    "recovery2Auth",
    "recovery2Box",
    "recovery2Id",
    "recovery2KeyBox",
    "question2Box",
    "otpKey",
    "otpResetDate",
    "otpTimeout",
    # Resources:
    "keyBoxes",
    "mnemonicBox",
    "parentBox",
    "rootKeyBox",
    "syncKeyBox",
    # Legacy:
    "pinBox",
    "pinId",
    "pinKeyBox",
)

# Resources a client may only attach after the account exists:
POST_CREATE_COLUMNS = frozenset({"mnemonicBox", "rootKeyBox", "syncKeyBox"})

# The v2 account creation endpoint doesn't accept legacy keys:
LOGIN_CREATE_COLUMNS = tuple(
    column for column in LOGIN_DB_COLUMNS if column not in POST_CREATE_COLUMNS
)


def filter_columns(data: Mapping[str, Any], columns: Iterable[str]) -> Dict[str, Any]:
    """Copy the keys of `data` that appear in `columns`, in column order."""
    return {column: data[column] for column in columns if column in data}


def project_record(
    record: Union[LoginRecord, Mapping[str, Any]],
    columns: Iterable[str],
) -> LoginRecord:
    """
    Build a new record holding only the whitelisted fields.

    Absent fields stay absent. Projecting twice with the same columns
    gives the same record.
    """
    row = record.to_row() if isinstance(record, LoginRecord) else record
    return LoginRecord.model_validate(filter_columns(row, columns))
