"""HTTP server exposing the merge request endpoints.

Serves GET /health plus /mr/assignee and /comment. Every response body
is JSON. Any HTTP verb is routed to the endpoint handlers, which answer
unsupported ones with a 405 envelope. HEAD responses carry headers only.
"""

import json
import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Callable, Dict
from urllib.parse import urlsplit

from mrproxy.adapters import MergeRequestClient, ProjectInfo
from mrproxy.api.assignee import handle_assignees
from mrproxy.api.comment import handle_comment
from mrproxy.api.errors import error_response
from mrproxy.api.request import ApiRequest, ApiResponse

LOG = logging.getLogger("mrproxy.api.server")
ACCESS_LOG = logging.getLogger("mrproxy.access")

Endpoint = Callable[[ApiRequest, MergeRequestClient, ProjectInfo], ApiResponse]

ROUTES: Dict[str, Endpoint] = {
    "/mr/assignee": handle_assignees,
    "/comment": handle_comment,
}


class MrProxyHandler(BaseHTTPRequestHandler):
    """Route requests to endpoint handlers and write their JSON result."""

    client: MergeRequestClient
    project: ProjectInfo

    def __getattr__(self, name: str) -> Any:
        # http.server looks up do_<VERB>; every verb goes through _dispatch
        if name.startswith("do_"):
            return self._dispatch
        raise AttributeError(name)

    def _route_path(self) -> str:
        return urlsplit(self.path).path.rstrip("/") or "/"

    def _read_request(self) -> ApiRequest:
        path = self._route_path()
        try:
            length = int(self.headers.get("Content-Length", 0))
            if length < 0:
                raise ValueError(f"negative Content-Length: {length}")
            body = self.rfile.read(length) if length else b""
        except (ValueError, OSError) as e:
            return ApiRequest(method=self.command, path=path, body_error=str(e))
        return ApiRequest(method=self.command, path=path, body=body)

    def _dispatch(self) -> None:
        request = self._read_request()
        if request.method in ("GET", "HEAD") and request.path in ("/health", "/"):
            self._send(ApiResponse(status=200, body={"status": "ok", "service": "mrproxy"}))
            return
        endpoint = ROUTES.get(request.path)
        if endpoint is None:
            self._send(error_response(f"No route for {request.path}", "Not found", 404))
            return
        try:
            response = endpoint(request, self.client, self.project)
        except Exception as e:
            LOG.exception("Unhandled error on %s %s", request.method, request.path)
            response = error_response(e, "Internal server error", 500)
        if response.status >= 400:
            LOG.warning(
                "%s %s -> %s: %s",
                request.method,
                request.path,
                response.status,
                response.body.get("message"),
            )
        self._send(response)

    def _send(self, response: ApiResponse) -> None:
        payload = json.dumps(response.body).encode()
        self.send_response(response.status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        for key, value in response.headers.items():
            self.send_header(key, value)
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(payload)

    def log_message(self, format: str, *args: Any) -> None:
        ACCESS_LOG.debug(format, *args)


def build_server(host: str, port: int, client: MergeRequestClient, project: ProjectInfo) -> ThreadingHTTPServer:
    """Create a server bound to host:port; handler state is set per server."""
    handler = type(
        "BoundMrProxyHandler",
        (MrProxyHandler,),
        {"client": client, "project": project},
    )
    return ThreadingHTTPServer((host, port), handler)


def run_server(host: str, port: int, client: MergeRequestClient, project: ProjectInfo) -> None:
    """Serve until interrupted."""
    server = build_server(host, port, client, project)
    LOG.info(
        "mrproxy listening on %s:%s (project=%s, mr=!%s)",
        host,
        server.server_address[1],
        project.project_id,
        project.merge_request_iid,
    )
    try:
        server.serve_forever()
    finally:
        server.server_close()
