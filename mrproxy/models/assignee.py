"""Assignee endpoint bodies."""

from typing import List

from pydantic import BaseModel, Field

from mrproxy.models.envelope import SuccessResponse
from mrproxy.models.gitlab import BasicUser


class AssigneeUpdateRequest(BaseModel):
    """PUT /mr/assignee body: full replacement list of assignee user ids."""

    ids: List[int]


class AssigneeUpdateResponse(SuccessResponse):
    assignees: List[BasicUser] = Field(default_factory=list)
