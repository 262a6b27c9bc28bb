"""GitLab REST API (v4) adapter."""

import logging
from typing import Any, Dict, List
from urllib.parse import quote

import requests

from mrproxy.adapters.base import GitLabError, MergeRequestClient, ProjectInfo
from mrproxy.models import Discussion, MergeRequest, Note

LOG = logging.getLogger("mrproxy.adapters.gitlab")


def _mr_path(project: ProjectInfo) -> str:
    # Namespaced paths (group/project) must be URL-encoded as a single segment
    project_id = quote(str(project.project_id), safe="")
    return f"/projects/{project_id}/merge_requests/{project.merge_request_iid}"


def _note_path(project: ProjectInfo, discussion_id: str, note_id: int) -> str:
    return f"{_mr_path(project)}/discussions/{quote(discussion_id, safe='')}/notes/{note_id}"


def _error_message(resp: requests.Response) -> str:
    msg = resp.text or resp.reason or str(resp.status_code)
    try:
        data = resp.json()
    except ValueError:
        return msg
    if isinstance(data, dict):
        detail = data.get("message") or data.get("error")
        if detail:
            return str(detail)
    return msg


class GitLabAdapter(MergeRequestClient):
    """GitLab API implementation."""

    def __init__(self, token: str | None, api_url: str = "https://gitlab.com/api/v4", timeout: float = 30) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()
        if token:
            self._session.headers["PRIVATE-TOKEN"] = token
        self._session.headers["Accept"] = "application/json"

    def _request(
        self,
        method: str,
        path: str,
        json: Dict[str, Any] | None = None,
    ) -> requests.Response:
        url = f"{self._api_url}{path}"
        try:
            resp = self._session.request(method, url, json=json, timeout=self._timeout)
        except requests.RequestException as e:
            LOG.warning("GitLab %s %s failed: %s", method, path, e)
            raise GitLabError(str(e)) from e
        if resp.status_code >= 300:
            msg = _error_message(resp)
            LOG.warning("GitLab %s %s returned %s: %s", method, path, resp.status_code, msg)
            raise GitLabError(f"{resp.status_code}: {msg}", status_code=resp.status_code)
        return resp

    def update_merge_request_assignees(self, project: ProjectInfo, assignee_ids: List[int]) -> MergeRequest:
        resp = self._request("PUT", _mr_path(project), json={"assignee_ids": assignee_ids})
        return MergeRequest.model_validate(resp.json())

    def create_merge_request_discussion(self, project: ProjectInfo, options: Dict[str, Any]) -> Discussion:
        resp = self._request("POST", f"{_mr_path(project)}/discussions", json=options)
        return Discussion.model_validate(resp.json())

    def update_merge_request_discussion_note(
        self,
        project: ProjectInfo,
        discussion_id: str,
        note_id: int,
        body: str,
    ) -> Note:
        resp = self._request("PUT", _note_path(project, discussion_id, note_id), json={"body": body})
        return Note.model_validate(resp.json())

    def delete_merge_request_discussion_note(self, project: ProjectInfo, discussion_id: str, note_id: int) -> None:
        self._request("DELETE", _note_path(project, discussion_id, note_id))
