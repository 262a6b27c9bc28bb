"""JSON envelopes returned to callers."""

from pydantic import BaseModel


class SuccessResponse(BaseModel):
    """Base body of every 200 response; endpoints extend it with payload fields."""

    message: str
    status: int


class ErrorResponse(BaseModel):
    """Body of every error response."""

    message: str
    details: str
    status: int
