"""Function configuration loaded from runtime variables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping
from typing import Optional

from admin_labels.exceptions import ConfigurationError

ENDPOINT_KEY = "APPWRITE_ENDPOINT"
PROJECT_ID_KEY = "APPWRITE_PROJECT_ID"
API_KEY_KEY = "APPWRITE_API_KEY"
SELF_SIGNED_KEY = "APPWRITE_SELF_SIGNED"

# Unprefixed names accepted when the prefixed variable is not set.
_FALLBACK_KEYS = {
    ENDPOINT_KEY: "ENDPOINT",
    PROJECT_ID_KEY: "PROJECT_ID",
    API_KEY_KEY: "API_KEY",
}

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class FunctionConfig:
    """Connection settings for the identity service."""

    endpoint: str
    project_id: str
    api_key: str
    self_signed: bool = False


def load_config(variables: Mapping[str, str]) -> FunctionConfig:
    """Build the function configuration from runtime variables.

    Args:
        variables: Mapping of variable names to string values.

    Returns:
        The validated configuration.

    Raises:
        ConfigurationError: If any required value is absent or empty.
    """
    values: dict[str, str] = {}
    missing: list[str] = []
    for key in (ENDPOINT_KEY, PROJECT_ID_KEY, API_KEY_KEY):
        value = _lookup(variables, key)
        if value:
            values[key] = value
        else:
            missing.append(key)

    if missing:
        raise ConfigurationError(missing)

    return FunctionConfig(
        endpoint=values[ENDPOINT_KEY],
        project_id=values[PROJECT_ID_KEY],
        api_key=values[API_KEY_KEY],
        self_signed=_parse_bool(variables.get(SELF_SIGNED_KEY)),
    )


def _lookup(variables: Mapping[str, str], key: str) -> Optional[str]:
    value = variables.get(key)
    if not value:
        value = variables.get(_FALLBACK_KEYS[key])
    return value or None


def _parse_bool(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in _TRUTHY
