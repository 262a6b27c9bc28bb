"""Error kinds surfaced to callers and their JSON envelope."""

from typing import Dict, Type, TypeVar

from pydantic import BaseModel, ValidationError

from mrproxy.adapters import GitLabError
from mrproxy.api.request import ApiRequest, ApiResponse
from mrproxy.models import ErrorResponse

T = TypeVar("T", bound=BaseModel)


class InvalidRequestError(Exception):
    """Request used an HTTP method the endpoint does not accept."""

    def __init__(self) -> None:
        super().__init__("Invalid request type")


class GenericError(Exception):
    """Upstream answered with a non-success status."""

    def __init__(self, endpoint: str) -> None:
        super().__init__(f"An error occurred on the {endpoint} endpoint")


class ApiError(Exception):
    """Raised inside handlers; converted to an error envelope at the edge."""

    def __init__(
        self,
        message: str,
        status: int,
        cause: BaseException | str,
        headers: Dict[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.details = str(cause)
        self.headers = headers or {}

    def to_response(self) -> ApiResponse:
        return error_response(self.details, self.message, self.status, self.headers)


def error_response(
    cause: BaseException | str,
    message: str,
    status: int,
    headers: Dict[str, str] | None = None,
) -> ApiResponse:
    """Build a JSON error envelope with the given status."""
    body = ErrorResponse(message=message, details=str(cause), status=status)
    return ApiResponse(status=status, headers=headers or {}, body=body.model_dump(mode="json"))


def method_not_allowed(message: str, headers: Dict[str, str]) -> ApiError:
    return ApiError(message, 405, InvalidRequestError(), headers)


def upstream_error(
    err: GitLabError,
    endpoint: str,
    message: str,
    status_message: str | None = None,
) -> ApiError:
    """Map an adapter failure: transport errors become 500, upstream
    statuses are passed through verbatim."""
    if err.status_code is None:
        return ApiError(message, 500, err)
    return ApiError(status_message or message, err.status_code, GenericError(endpoint))


def read_json(request: ApiRequest, model: Type[T], message: str) -> T:
    """Decode the request body into model, raising ApiError (400) on failure."""
    if request.body_error is not None:
        raise ApiError("Could not read request body", 400, request.body_error)
    try:
        return model.model_validate_json(request.body)
    except ValidationError as e:
        raise ApiError(message, 400, e) from e
