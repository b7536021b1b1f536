"""Shared response utilities for function handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from typing import Mapping
from typing import Optional

from pydantic import BaseModel


class GrantResponseBody(BaseModel):
    """Response body returned by the label grant function."""

    success: bool
    message: str
    user: Optional[dict[str, Any]] = None


@dataclass(frozen=True)
class FunctionResponse:
    """JSON body plus HTTP status code handed back to the runtime."""

    status_code: int
    body: dict[str, Any]


def json_response(status_code: int, body: Any) -> FunctionResponse:
    """Create a JSON function response.

    Args:
        status_code: HTTP status code.
        body: Response body (dict or Pydantic model).

    Returns:
        The function response.
    """
    return FunctionResponse(status_code=status_code, body=_serialize_body(body))


def _serialize_body(body: Any) -> dict[str, Any]:
    if isinstance(body, BaseModel):
        return body.model_dump(exclude_unset=True)
    return dict(body)


def success_response(message: str, user: Mapping[str, Any]) -> FunctionResponse:
    """Create a 200 response carrying the updated user."""
    return json_response(
        200,
        GrantResponseBody(success=True, message=message, user=dict(user)),
    )


def error_response(status_code: int, message: str) -> FunctionResponse:
    """Create a failure response.

    Status codes outside the HTTP error range are reported as 500.
    """
    if not 400 <= status_code <= 599:
        status_code = 500
    return json_response(
        status_code,
        GrantResponseBody(success=False, message=message),
    )
