"""Transport-independent request and response values used by handlers."""

from typing import Any, Dict

from pydantic import BaseModel, Field


class ApiRequest(BaseModel):
    """Inbound request as seen by a handler.

    body_error is set instead of body when the body could not be read.
    """

    method: str
    path: str = "/"
    body: bytes = b""
    body_error: str | None = None


class ApiResponse(BaseModel):
    """Handler result: status, extra headers and JSON body."""

    status: int
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Dict[str, Any] = Field(default_factory=dict)


def json_response(payload: BaseModel, status: int = 200) -> ApiResponse:
    return ApiResponse(status=status, body=payload.model_dump(mode="json"))
