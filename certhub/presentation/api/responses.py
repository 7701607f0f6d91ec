from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class SuccessResponse(BaseModel, Generic[T]):
    """Envelope for successful responses."""

    status: Literal["success"] = "success"
    message: str
    data: T | None = None


class ErrorResponse(BaseModel):
    """Envelope for failed responses."""

    status: Literal["error"] = "error"
    message: str
    error: Any = None


def success(message: str, data: Any = None) -> dict:
    return {"status": "success", "message": message, "data": data}
