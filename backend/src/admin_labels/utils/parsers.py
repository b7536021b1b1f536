"""Shared parsing utilities for request handling."""

from __future__ import annotations

import json
from typing import Any
from typing import Mapping
from typing import Optional

from admin_labels.exceptions import ValidationError
from admin_labels.utils.logging import get_logger

logger = get_logger(__name__)


def parse_json_body(raw: Optional[str]) -> Any:
    """Parse a raw JSON request body.

    Args:
        raw: The raw body string, or None.

    Returns:
        The decoded JSON document.

    Raises:
        ValidationError: If the body is absent, empty, or not valid JSON.
    """
    if not raw:
        logger.error("Request body is empty.")
        raise ValidationError("Missing request body.")
    try:
        return json.loads(raw)
    except (TypeError, ValueError, RecursionError) as exc:
        logger.error(f"Invalid JSON payload: {exc}")
        raise ValidationError("Invalid JSON payload provided.") from exc


def require_string_field(payload: Any, name: str) -> str:
    """Return a required non-empty string field from a JSON object.

    Whitespace is not trimmed; only the empty string is rejected.

    Raises:
        ValidationError: If the payload is not an object, or the field is
            missing, not a string, or empty.
    """
    value = payload.get(name) if isinstance(payload, Mapping) else None
    if not isinstance(value, str) or value == "":
        logger.error(f"Missing {name} in request payload.")
        raise ValidationError(f"Missing required field: {name}", field=name)
    return value
