"""Grant the ``admin`` label to an identity-service user.

Input: JSON request body

    {"userId": "USER_ID_TO_UPDATE"}

Output:
    200  {"success": true, "message": "...", "user": {...updated user...}}
    400  missing body, invalid JSON, or missing userId
    404  user not found
    500  misconfiguration or unexpected error
    any other error code reported by the identity service is passed through

The label set is read, merged and written back as a whole. Two concurrent
invocations for the same user can still overwrite each other's update.
"""

from __future__ import annotations

import time
from typing import Callable, Optional

from admin_labels.config import FunctionConfig, load_config
from admin_labels.exceptions import ConfigurationError, NotFoundError, ValidationError
from admin_labels.labels import ADMIN_LABEL, has_label, merge_label
from admin_labels.runtime import FunctionRequest
from admin_labels.services.identity import (
    ErrorKind,
    IdentityService,
    ServiceError,
)
from admin_labels.utils import (
    FunctionResponse,
    clear_request_context,
    error_response,
    get_logger,
    hash_for_correlation,
    parse_json_body,
    require_string_field,
    runtime_logging,
    set_request_context,
    success_response,
)
from admin_labels.utils.logging import log_response

logger = get_logger(__name__)

ServiceFactory = Callable[[FunctionConfig], IdentityService]

MISCONFIGURATION_MESSAGE = "Function misconfiguration."
UNEXPECTED_ERROR_MESSAGE = "Failed to add admin label due to an unexpected error."


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def handle(
    request: FunctionRequest,
    service_factory: Optional[ServiceFactory] = None,
) -> FunctionResponse:
    """Ensure the requested user carries the admin label.

    Every failure in the grant flow is converted to a response. The
    request context is cleared even if response logging raises.
    """
    started = time.perf_counter()
    try:
        set_request_context(req_id=request.execution_id)
        with runtime_logging(request.log, request.error):
            try:
                response = _handle(
                    request, service_factory or IdentityService.from_config
                )
            except Exception as exc:
                logger.exception(f"Unexpected error while granting admin label: {exc}")
                response = error_response(500, UNEXPECTED_ERROR_MESSAGE)
            log_response(
                logger,
                response.status_code,
                duration_ms=(time.perf_counter() - started) * 1000,
            )
    finally:
        clear_request_context()
    return response


def _handle(
    request: FunctionRequest,
    service_factory: ServiceFactory,
) -> FunctionResponse:
    # --- Configuration ---
    try:
        config = load_config(request.variables)
    except ConfigurationError as exc:
        logger.error(
            f"Missing required environment variables: {', '.join(exc.config_names)}"
        )
        return error_response(exc.status_code, MISCONFIGURATION_MESSAGE)

    # --- Input ---
    try:
        payload = parse_json_body(request.body_raw)
        user_id = require_string_field(payload, "userId")
    except ValidationError as exc:
        return error_response(exc.status_code, exc.message)

    return _grant_admin_label(service_factory(config), user_id)


# ---------------------------------------------------------------------------
# Label grant
# ---------------------------------------------------------------------------


def _grant_admin_label(service: IdentityService, user_id: str) -> FunctionResponse:
    user_ref = hash_for_correlation(user_id)
    logger.info(
        f"Attempting to add '{ADMIN_LABEL}' label to user: {user_id}",
        extra={"user_ref": user_ref},
    )

    current = service.get_user(user_id)
    if current.error is not None:
        return _error_response(user_id, current.error)

    labels = (current.user or {}).get("labels")
    if has_label(labels, ADMIN_LABEL):
        logger.info(f"User {user_id} already has the '{ADMIN_LABEL}' label.")

    updated = service.update_labels(user_id, merge_label(labels, ADMIN_LABEL))
    if updated.error is not None:
        return _error_response(user_id, updated.error)

    logger.info(
        f"Successfully added '{ADMIN_LABEL}' label to user {user_id}.",
        extra={"user_ref": user_ref},
    )
    return success_response(
        f"Admin label added successfully to user {user_id}.",
        updated.user or {},
    )


def _error_response(user_id: str, error: ServiceError) -> FunctionResponse:
    """Map an identity service error to a failure response."""
    if error.kind is ErrorKind.NOT_FOUND:
        not_found = NotFoundError("User", user_id)
        return error_response(not_found.status_code, not_found.message)

    if error.kind is ErrorKind.SERVICE:
        return error_response(
            error.code or 500,
            f"Failed to add admin label: {error.message or 'Appwrite Error'}",
        )

    return error_response(500, UNEXPECTED_ERROR_MESSAGE)
