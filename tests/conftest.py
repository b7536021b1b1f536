"""Pytest configuration and fixtures for function tests.

This module provides shared fixtures for testing the label grant function,
including runtime variables, fake runtime contexts, and mocked identity
services.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any
from typing import Optional

import pytest

# Add backend source to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / 'backend' / 'src'))


# --- Configuration Fixtures ---


@pytest.fixture
def function_variables() -> dict[str, str]:
    """Runtime variables for a correctly configured function."""
    return {
        'APPWRITE_ENDPOINT': 'https://appwrite.example.com/v1',
        'APPWRITE_PROJECT_ID': 'project-123',
        'APPWRITE_API_KEY': 'secret-key',
    }


# --- Runtime Fixtures ---


class FakeRuntimeRequest:
    """Stand-in for the Appwrite runtime request object."""

    def __init__(self, body_raw: Optional[str] = None, headers: Optional[dict] = None):
        self.body_raw = body_raw
        self.body = body_raw
        self.headers = headers or {}


class FakeRuntimeResponse:
    """Stand-in for the Appwrite runtime response object."""

    def __init__(self) -> None:
        self.sent: Optional[tuple[Any, int]] = None

    def json(self, body: Any, status_code: int = 200) -> dict[str, Any]:
        self.sent = (body, status_code)
        return {'body': json.dumps(body), 'statusCode': status_code}


class FakeRuntimeContext:
    """Stand-in for the Appwrite runtime context passed to ``main``."""

    def __init__(self, body_raw: Optional[str] = None, headers: Optional[dict] = None):
        self.req = FakeRuntimeRequest(body_raw, headers)
        self.res = FakeRuntimeResponse()
        self.logs: list[str] = []
        self.errors: list[str] = []

    def log(self, message: str) -> None:
        self.logs.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


@pytest.fixture
def runtime_context():
    """Factory for fake runtime contexts."""

    def _make(body_raw: Optional[str] = None, headers: Optional[dict] = None):
        return FakeRuntimeContext(body_raw, headers)

    return _make


# --- Mock Fixtures ---


@pytest.fixture
def mock_users(mocker):
    """Mocked Appwrite Users service holding a user with the editor label."""
    users = mocker.Mock()
    users.get.return_value = {'$id': 'u1', 'name': 'Test User', 'labels': ['editor']}
    users.update_labels.side_effect = lambda user_id, labels: {
        '$id': user_id,
        'name': 'Test User',
        'labels': list(labels),
    }
    return users


@pytest.fixture
def service_factory(mock_users):
    """Identity service factory wired to the mocked Users service."""
    from admin_labels.services.identity import IdentityService

    configs = []

    def _factory(config):
        configs.append(config)
        return IdentityService(mock_users)

    _factory.configs = configs
    return _factory

