"""HTTP endpoint handlers and server."""

from mrproxy.api.assignee import handle_assignees
from mrproxy.api.comment import handle_comment, line_code
from mrproxy.api.server import build_server, run_server

__all__ = ["build_server", "handle_assignees", "handle_comment", "line_code", "run_server"]
