"""Abstract base for merge request API clients."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from pydantic import BaseModel

from mrproxy.models import Discussion, MergeRequest, Note


class GitLabError(Exception):
    """Raised when a GitLab API call fails.

    status_code is the upstream HTTP status when GitLab answered, None
    when the request never completed (connection error, timeout).
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProjectInfo(BaseModel):
    """Project and merge request every handler operates on."""

    project_id: int | str
    merge_request_iid: int


class MergeRequestClient(ABC):
    """Operations on a single merge request used by the HTTP handlers."""

    @abstractmethod
    def update_merge_request_assignees(self, project: ProjectInfo, assignee_ids: List[int]) -> MergeRequest:
        """Replace the merge request assignees."""
        ...

    @abstractmethod
    def create_merge_request_discussion(self, project: ProjectInfo, options: Dict[str, Any]) -> Discussion:
        """Start a discussion (body and optional diff position)."""
        ...

    @abstractmethod
    def update_merge_request_discussion_note(
        self,
        project: ProjectInfo,
        discussion_id: str,
        note_id: int,
        body: str,
    ) -> Note:
        """Change the body of a note in a discussion."""
        ...

    @abstractmethod
    def delete_merge_request_discussion_note(self, project: ProjectInfo, discussion_id: str, note_id: int) -> None:
        """Delete a note from a discussion."""
        ...
