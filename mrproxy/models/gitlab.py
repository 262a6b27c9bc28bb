"""GitLab REST API objects, reduced to the fields callers rely on.

Unknown fields in upstream JSON are ignored.
"""

from datetime import datetime
from typing import Any, Dict, List

from pydantic import BaseModel, Field


class BasicUser(BaseModel):
    """User reference embedded in merge requests and notes."""

    id: int
    username: str = ""
    name: str = ""
    state: str = ""
    avatar_url: str | None = None
    web_url: str | None = None


class Note(BaseModel):
    """Single message of a discussion."""

    id: int
    type: str | None = None
    body: str = ""
    author: BasicUser | None = None
    system: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    resolvable: bool = False
    resolved: bool = False
    position: Dict[str, Any] | None = None
    noteable_id: int | None = None
    noteable_iid: int | None = None
    noteable_type: str | None = None


class Discussion(BaseModel):
    """Thread of notes on a merge request."""

    id: str
    individual_note: bool = False
    notes: List[Note] = Field(default_factory=list)


class MergeRequest(BaseModel):
    """Merge request as returned by the update endpoint."""

    id: int
    iid: int
    project_id: int | None = None
    title: str = ""
    state: str = ""
    web_url: str | None = None
    assignees: List[BasicUser] = Field(default_factory=list)
