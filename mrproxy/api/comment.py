"""/comment: create, edit and delete merge request discussion notes.

POST starts a discussion, either attached to a diff position (when a
file name is given) or as a standalone note. PATCH edits a note body and
DELETE removes a note.
"""

import hashlib
import logging
from typing import Any, Callable, Dict

from mrproxy.adapters import GitLabError, MergeRequestClient, ProjectInfo
from mrproxy.api.errors import ApiError, method_not_allowed, read_json, upstream_error
from mrproxy.api.request import ApiRequest, ApiResponse, json_response
from mrproxy.models import (
    CommentResponse,
    DeleteCommentRequest,
    EditCommentRequest,
    LinePosition,
    PostCommentRequest,
    SuccessResponse,
)

LOG = logging.getLogger("mrproxy.api.comment")

ENDPOINT = "/comment"

Handler = Callable[[ApiRequest, MergeRequestClient, ProjectInfo], ApiResponse]


def line_code(file_name: str, old_line: int, new_line: int) -> str:
    """GitLab line code: sha1 of the path, then old and new line numbers."""
    digest = hashlib.sha1(file_name.encode("utf-8")).hexdigest()
    return f"{digest}_{old_line}_{new_line}"


def _range_end(file_name: str, pos: LinePosition) -> Dict[str, Any]:
    return {"type": pos.type, "line_code": line_code(file_name, pos.old_line, pos.new_line)}


def build_discussion_options(req: PostCommentRequest) -> Dict[str, Any]:
    """Translate a POST /comment body into GitLab discussion options."""
    options: Dict[str, Any] = {"body": req.comment}
    if not req.file_name:
        return options

    position: Dict[str, Any] = {
        "position_type": req.type,
        "start_sha": req.start_commit_sha,
        "head_sha": req.head_commit_sha,
        "base_sha": req.base_commit_sha,
        "new_path": req.file_name,
        "old_path": req.file_name,
    }
    if req.new_line is not None:
        position["new_line"] = req.new_line
    if req.old_line is not None:
        position["old_line"] = req.old_line
    if req.line_range is not None:
        position["line_range"] = {
            "start": _range_end(req.file_name, req.line_range.start),
            "end": _range_end(req.file_name, req.line_range.end),
        }
    options["position"] = position
    return options


def post_comment(request: ApiRequest, client: MergeRequestClient, project: ProjectInfo) -> ApiResponse:
    req = read_json(request, PostCommentRequest, "Could not unmarshal data from request body")
    try:
        discussion = client.create_merge_request_discussion(project, build_discussion_options(req))
    except GitLabError as e:
        raise upstream_error(e, ENDPOINT, "Could not create comment") from e

    LOG.info("Created discussion %s on !%s", discussion.id, project.merge_request_iid)
    return json_response(
        CommentResponse(
            message="Comment created successfully",
            status=200,
            note=discussion.notes[0] if discussion.notes else None,
            discussion=discussion,
        )
    )


def edit_comment(request: ApiRequest, client: MergeRequestClient, project: ProjectInfo) -> ApiResponse:
    req = read_json(request, EditCommentRequest, "Could not unmarshal data from request body")
    try:
        note = client.update_merge_request_discussion_note(project, req.discussion_id, req.note_id, req.comment)
    except GitLabError as e:
        raise upstream_error(e, ENDPOINT, "Could not update comment") from e

    LOG.info("Updated note %s in discussion %s", req.note_id, req.discussion_id)
    return json_response(CommentResponse(message="Comment updated successfully", status=200, note=note))


def delete_comment(request: ApiRequest, client: MergeRequestClient, project: ProjectInfo) -> ApiResponse:
    req = read_json(request, DeleteCommentRequest, "Could not read JSON from request")
    try:
        client.delete_merge_request_discussion_note(project, req.discussion_id, req.note_id)
    except GitLabError as e:
        raise upstream_error(e, ENDPOINT, "Could not delete comment") from e

    LOG.info("Deleted note %s in discussion %s", req.note_id, req.discussion_id)
    return json_response(SuccessResponse(message="Comment deleted successfully", status=200))


METHODS: Dict[str, Handler] = {
    "DELETE": delete_comment,
    "POST": post_comment,
    "PATCH": edit_comment,
}


def handle_comment(request: ApiRequest, client: MergeRequestClient, project: ProjectInfo) -> ApiResponse:
    """Dispatch /comment by HTTP method."""
    handler = METHODS.get(request.method)
    try:
        if handler is None:
            raise method_not_allowed(
                "Expected DELETE, POST or PATCH",
                {"Access-Control-Allow-Methods": ", ".join(METHODS)},
            )
        return handler(request, client, project)
    except ApiError as e:
        return e.to_response()
