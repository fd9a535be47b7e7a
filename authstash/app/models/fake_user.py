# authstash/app/models/fake_user.py
"""
Fixture format for seeding a login server with a ready-made account.

`server` is the nested login tree exactly as LoginDb.dump_login produces it:
row columns plus a `children` list. `repos` maps a hex sync key to the
files of that repo ({path: box}).
"""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FakeUser(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    username: str
    login_id: str
    login_key: str
    last_login: Optional[datetime] = None
    server: Dict[str, Any]
    repos: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
