"""Request, response and upstream data models (Pydantic)."""

from mrproxy.models.assignee import AssigneeUpdateRequest, AssigneeUpdateResponse
from mrproxy.models.comment import (
    CommentResponse,
    DeleteCommentRequest,
    EditCommentRequest,
    LinePosition,
    LineRange,
    PostCommentRequest,
)
from mrproxy.models.envelope import ErrorResponse, SuccessResponse
from mrproxy.models.gitlab import BasicUser, Discussion, MergeRequest, Note

__all__ = [
    "AssigneeUpdateRequest",
    "AssigneeUpdateResponse",
    "BasicUser",
    "CommentResponse",
    "DeleteCommentRequest",
    "Discussion",
    "EditCommentRequest",
    "ErrorResponse",
    "LinePosition",
    "LineRange",
    "MergeRequest",
    "Note",
    "PostCommentRequest",
    "SuccessResponse",
]
