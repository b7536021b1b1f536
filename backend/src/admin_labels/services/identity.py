"""Identity service client built on the Appwrite Users API.

Remote failures are returned as structured ``ServiceError`` values inside
a ``ServiceResult`` instead of being raised, so callers can dispatch on
the error kind with a plain conditional.

Each call is attempted exactly once. The label update replaces the whole
label set, so callers must always send the complete list.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Sequence

from appwrite.client import Client
from appwrite.exception import AppwriteException
from appwrite.services.users import Users

from admin_labels.config import FunctionConfig
from admin_labels.utils.logging import get_logger

logger = get_logger(__name__)


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    SERVICE = "service"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class ServiceError:
    """A failure reported by, or while talking to, the identity service."""

    kind: ErrorKind
    code: Optional[int] = None
    message: Optional[str] = None


@dataclass(frozen=True)
class ServiceResult:
    """Outcome of an identity service call: a user mapping or an error."""

    user: Optional[dict[str, Any]] = None
    error: Optional[ServiceError] = None


def build_users_service(config: FunctionConfig) -> Users:
    """Create an Appwrite Users service for the configured project."""
    client = Client()
    client.set_endpoint(config.endpoint)
    client.set_project(config.project_id)
    client.set_key(config.api_key)
    if config.self_signed:
        # Development instances only.
        client.set_self_signed(True)
    return Users(client)


class IdentityService:
    """Read and rewrite user labels in the identity service."""

    def __init__(self, users: Any):
        self._users = users

    @classmethod
    def from_config(cls, config: FunctionConfig) -> "IdentityService":
        return cls(build_users_service(config))

    def get_user(self, user_id: str) -> ServiceResult:
        return self._call("get_user", user_id, lambda: self._users.get(user_id))

    def update_labels(self, user_id: str, labels: Sequence[str]) -> ServiceResult:
        return self._call(
            "update_labels",
            user_id,
            lambda: self._users.update_labels(user_id, list(labels)),
        )

    def _call(
        self,
        operation: str,
        user_id: str,
        func: Callable[[], Any],
    ) -> ServiceResult:
        try:
            return ServiceResult(user=to_mapping(func()))
        except AppwriteException as exc:
            code = _error_code(exc)
            logger.error(
                f"Appwrite Error for user {user_id}: [{code}] {exc.message}",
                extra={"operation": operation, "user_id": user_id, "code": code},
            )
            kind = ErrorKind.NOT_FOUND if code == 404 else ErrorKind.SERVICE
            return ServiceResult(
                error=ServiceError(kind=kind, code=code, message=exc.message or None)
            )
        except Exception as exc:
            logger.error(
                f"Unexpected error for user {user_id}: {exc}",
                extra={"operation": operation, "user_id": user_id},
                exc_info=True,
            )
            return ServiceResult(
                error=ServiceError(kind=ErrorKind.UNEXPECTED, message=str(exc))
            )


def to_mapping(value: Any) -> dict[str, Any]:
    """Convert an SDK result (dict or model) to a plain dict."""
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return dict(value)
    for attr in ("model_dump", "to_dict"):
        method = getattr(value, attr, None)
        if callable(method):
            return dict(method())
    return dict(vars(value))


def _error_code(exc: AppwriteException) -> Optional[int]:
    code = getattr(exc, "code", None)
    if code in (None, ""):
        return None
    try:
        return int(code)
    except (TypeError, ValueError):
        return None
