"""Appwrite Functions entrypoint for the admin label grant.

Function variables:
    APPWRITE_ENDPOINT     API endpoint of the Appwrite instance
    APPWRITE_PROJECT_ID   Project the users belong to
    APPWRITE_API_KEY      Server API key with users.read and users.write
    APPWRITE_SELF_SIGNED  Accept self-signed certificates (development only)
    LOG_LEVEL             Optional log level, defaults to INFO
"""

from __future__ import annotations

from typing import Any

from admin_labels.api.grant_admin_label import handle
from admin_labels.runtime import request_from_context, send_response
from admin_labels.utils.logging import configure_logging

configure_logging(stream=False)


def main(context: Any) -> Any:
    return send_response(context, handle(request_from_context(context)))
