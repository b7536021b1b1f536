"""Utility modules for the label grant function."""

from admin_labels.utils.logging import (
    clear_request_context,
    configure_logging,
    get_logger,
    hash_for_correlation,
    runtime_logging,
    set_request_context,
)
from admin_labels.utils.parsers import parse_json_body, require_string_field
from admin_labels.utils.responses import (
    FunctionResponse,
    error_response,
    json_response,
    success_response,
)

__all__ = [
    "FunctionResponse",
    "clear_request_context",
    "configure_logging",
    "error_response",
    "get_logger",
    "hash_for_correlation",
    "json_response",
    "parse_json_body",
    "require_string_field",
    "runtime_logging",
    "set_request_context",
    "success_response",
]
