"""PUT /mr/assignee: replace merge request assignees."""

import logging

from mrproxy.adapters import GitLabError, MergeRequestClient, ProjectInfo
from mrproxy.api.errors import ApiError, method_not_allowed, read_json, upstream_error
from mrproxy.api.request import ApiRequest, ApiResponse, json_response
from mrproxy.models import AssigneeUpdateRequest, AssigneeUpdateResponse

LOG = logging.getLogger("mrproxy.api.assignee")

ENDPOINT = "/mr/assignee"


def handle_assignees(request: ApiRequest, client: MergeRequestClient, project: ProjectInfo) -> ApiResponse:
    try:
        return _update_assignees(request, client, project)
    except ApiError as e:
        return e.to_response()


def _update_assignees(request: ApiRequest, client: MergeRequestClient, project: ProjectInfo) -> ApiResponse:
    if request.method != "PUT":
        raise method_not_allowed("Expected PUT", {"Allow": "PUT"})

    update = read_json(request, AssigneeUpdateRequest, "Could not read JSON from request")

    try:
        mr = client.update_merge_request_assignees(project, update.ids)
    except GitLabError as e:
        raise upstream_error(
            e,
            ENDPOINT,
            "Could not modify merge request assignees",
            status_message="Gitlab returned non-200 status",
        ) from e

    LOG.info("Assignees of !%s set to %s", project.merge_request_iid, update.ids)
    return json_response(
        AssigneeUpdateResponse(
            message="Assignees updated",
            status=200,
            assignees=mr.assignees,
        )
    )
