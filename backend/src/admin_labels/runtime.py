"""Adapters between the Appwrite Functions runtime and the handler."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from admin_labels.utils.responses import FunctionResponse


def _discard(_message: str) -> None:
    return None


@dataclass(frozen=True)
class FunctionRequest:
    """One invocation: runtime variables, raw body and logging sinks."""

    variables: Mapping[str, str] = field(default_factory=dict)
    body_raw: Optional[str] = None
    log: Callable[[str], Any] = _discard
    error: Callable[[str], Any] = _discard
    execution_id: Optional[str] = None


def request_from_context(
    context: Any,
    variables: Optional[Mapping[str, str]] = None,
) -> FunctionRequest:
    """Build a FunctionRequest from an Appwrite runtime context.

    Appwrite exposes function variables as environment variables, so
    ``os.environ`` is used when ``variables`` is not given.
    """
    req = context.req
    body_raw = getattr(req, "body_raw", None)
    if body_raw is None:
        body = getattr(req, "body", None)
        body_raw = body if isinstance(body, str) else None

    headers = getattr(req, "headers", None) or {}
    execution_id = headers.get("x-appwrite-execution-id") if isinstance(headers, Mapping) else None

    return FunctionRequest(
        variables=dict(os.environ if variables is None else variables),
        body_raw=body_raw,
        log=context.log,
        error=context.error,
        execution_id=execution_id,
    )


def send_response(context: Any, response: FunctionResponse) -> Any:
    """Write a FunctionResponse through the runtime's JSON responder."""
    return context.res.json(response.body, response.status_code)
