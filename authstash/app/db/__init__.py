from authstash.app.db.columns import (
    LOGIN_CREATE_COLUMNS,
    LOGIN_DB_COLUMNS,
    filter_columns,
    project_record,
)
from authstash.app.db.store import LoginDb

__all__ = [
    "LOGIN_CREATE_COLUMNS",
    "LOGIN_DB_COLUMNS",
    "LoginDb",
    "filter_columns",
    "project_record",
]
