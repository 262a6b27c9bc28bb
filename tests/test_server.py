"""Tests for the HTTP server (real socket, mocked GitLab client)."""

import threading
from typing import Iterator
from unittest.mock import Mock

import pytest
import requests

from mrproxy.adapters import GitLabError, MergeRequestClient, ProjectInfo
from mrproxy.api.server import build_server
from mrproxy.models import BasicUser, Discussion, MergeRequest, Note


@pytest.fixture
def client() -> Mock:
    return Mock(spec=MergeRequestClient)


@pytest.fixture
def base_url(client: Mock) -> Iterator[str]:
    project = ProjectInfo(project_id=3, merge_request_iid=5)
    server = build_server("127.0.0.1", 0, client, project)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}"
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)


def test_health(base_url: str) -> None:
    resp = requests.get(f"{base_url}/health", timeout=5)
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "service": "mrproxy"}


def test_unknown_path_is_404_json(base_url: str) -> None:
    resp = requests.post(f"{base_url}/nope", json={}, timeout=5)
    assert resp.status_code == 404
    assert resp.headers["Content-Type"] == "application/json"
    assert resp.json()["message"] == "Not found"


def test_assignee_put(base_url: str, client: Mock) -> None:
    client.update_merge_request_assignees.return_value = MergeRequest(
        id=11, iid=5, assignees=[BasicUser(id=2, username="bob")]
    )
    resp = requests.put(f"{base_url}/mr/assignee", json={"ids": [2]}, timeout=5)

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Assignees updated"
    assert body["assignees"][0]["username"] == "bob"


def test_assignee_get_is_405(base_url: str) -> None:
    resp = requests.get(f"{base_url}/mr/assignee", timeout=5)
    assert resp.status_code == 405
    assert resp.headers["Allow"] == "PUT"
    assert resp.json()["message"] == "Expected PUT"


def test_comment_put_is_405(base_url: str) -> None:
    resp = requests.put(f"{base_url}/comment", json={}, timeout=5)
    assert resp.status_code == 405
    assert resp.headers["Access-Control-Allow-Methods"] == "DELETE, POST, PATCH"


def test_comment_post_malformed_is_400(base_url: str) -> None:
    resp = requests.post(
        f"{base_url}/comment",
        data=b"{broken",
        headers={"Content-Type": "application/json"},
        timeout=5,
    )
    assert resp.status_code == 400
    assert resp.json()["status"] == 400


def test_comment_post_and_query_string(base_url: str, client: Mock) -> None:
    """Query strings and trailing slashes do not affect routing."""
    client.create_merge_request_discussion.return_value = Discussion(id="d1", notes=[Note(id=1, body="hi")])
    resp = requests.post(f"{base_url}/comment/?x=1", json={"comment": "hi"}, timeout=5)
    assert resp.status_code == 200
    assert resp.json()["note"]["body"] == "hi"


def test_comment_delete_upstream_status(base_url: str, client: Mock) -> None:
    client.delete_merge_request_discussion_note.side_effect = GitLabError("404: Not Found", status_code=404)
    resp = requests.delete(f"{base_url}/comment", json={"note_id": 1, "discussion_id": "d1"}, timeout=5)
    assert resp.status_code == 404
    assert resp.json()["details"] == "An error occurred on the /comment endpoint"


def test_unexpected_error_is_500(base_url: str, client: Mock) -> None:
    client.update_merge_request_discussion_note.side_effect = RuntimeError("boom")
    resp = requests.patch(
        f"{base_url}/comment",
        json={"comment": "x", "note_id": 1, "discussion_id": "d1"},
        timeout=5,
    )
    assert resp.status_code == 500
    assert resp.json() == {"message": "Internal server error", "details": "boom", "status": 500}


@pytest.mark.parametrize(
    ("method", "path", "header", "allowed"),
    [
        ("OPTIONS", "/comment", "Access-Control-Allow-Methods", "DELETE, POST, PATCH"),
        ("HEAD", "/comment", "Access-Control-Allow-Methods", "DELETE, POST, PATCH"),
        ("HEAD", "/mr/assignee", "Allow", "PUT"),
        ("OPTIONS", "/mr/assignee", "Allow", "PUT"),
    ],
)
def test_verbs_without_handler_method_get_405(base_url: str, method: str, path: str, header: str, allowed: str) -> None:
    """Verbs outside GET/POST/PUT/PATCH/DELETE reach the endpoint's method check."""
    resp = requests.request(method, f"{base_url}{path}", timeout=5)
    assert resp.status_code == 405
    assert resp.headers[header] == allowed
    assert resp.headers["Content-Type"] == "application/json"
    if method == "OPTIONS":
        assert resp.json()["details"] == "Invalid request type"


def test_head_has_no_body(base_url: str) -> None:
    resp = requests.head(f"{base_url}/health", timeout=5)
    assert resp.status_code == 200
    assert int(resp.headers["Content-Length"]) > 0
    assert resp.content == b""
