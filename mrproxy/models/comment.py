"""Comment endpoint bodies."""

from pydantic import BaseModel

from mrproxy.models.envelope import SuccessResponse
from mrproxy.models.gitlab import Discussion, Note


class LinePosition(BaseModel):
    """One end of a commented line range.

    Unlike GitLab's own line position this carries no line_code; it is
    derived from the file name when the discussion is created.
    """

    type: str = ""
    old_line: int = 0
    new_line: int = 0


class LineRange(BaseModel):
    """Multi-line comment range."""

    start: LinePosition
    end: LinePosition


class PostCommentRequest(BaseModel):
    """POST /comment body.

    With file_name set the comment is attached to a diff position,
    otherwise it becomes a standalone note on the merge request.
    """

    comment: str
    file_name: str = ""
    new_line: int | None = None
    old_line: int | None = None
    head_commit_sha: str = ""
    base_commit_sha: str = ""
    start_commit_sha: str = ""
    type: str = ""
    line_range: LineRange | None = None


class DeleteCommentRequest(BaseModel):
    """DELETE /comment body."""

    note_id: int
    discussion_id: str


class EditCommentRequest(BaseModel):
    """PATCH /comment body."""

    comment: str
    note_id: int
    discussion_id: str
    # Accepted for client compatibility; not forwarded upstream.
    resolved: bool = False


class CommentResponse(SuccessResponse):
    note: Note | None = None
    discussion: Discussion | None = None
