"""Tests for function configuration loading."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / 'backend' / 'src'))

from admin_labels.config import FunctionConfig, load_config  # noqa: E402
from admin_labels.exceptions import ConfigurationError  # noqa: E402


class TestLoadConfig:
    """Tests for load_config function."""

    def test_loads_prefixed_variables(self, function_variables) -> None:
        config = load_config(function_variables)
        assert config == FunctionConfig(
            endpoint='https://appwrite.example.com/v1',
            project_id='project-123',
            api_key='secret-key',
        )

    def test_self_signed_defaults_to_false(self, function_variables) -> None:
        assert load_config(function_variables).self_signed is False

    @pytest.mark.parametrize('value', ['true', 'TRUE', '1', 'yes'])
    def test_self_signed_truthy_values(self, function_variables, value) -> None:
        function_variables['APPWRITE_SELF_SIGNED'] = value
        assert load_config(function_variables).self_signed is True

    def test_self_signed_falsy_value(self, function_variables) -> None:
        function_variables['APPWRITE_SELF_SIGNED'] = 'false'
        assert load_config(function_variables).self_signed is False

    def test_accepts_unprefixed_names(self) -> None:
        config = load_config(
            {'ENDPOINT': 'https://e/v1', 'PROJECT_ID': 'p', 'API_KEY': 'k'}
        )
        assert config.endpoint == 'https://e/v1'
        assert config.project_id == 'p'
        assert config.api_key == 'k'

    def test_prefixed_name_wins(self, function_variables) -> None:
        function_variables['PROJECT_ID'] = 'other'
        assert load_config(function_variables).project_id == 'project-123'

    def test_empty_value_counts_as_missing(self, function_variables) -> None:
        function_variables['APPWRITE_API_KEY'] = ''
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(function_variables)
        assert exc_info.value.config_names == ['APPWRITE_API_KEY']

    def test_reports_every_missing_name(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            load_config({})
        assert exc_info.value.config_names == [
            'APPWRITE_ENDPOINT',
            'APPWRITE_PROJECT_ID',
            'APPWRITE_API_KEY',
        ]
        assert exc_info.value.status_code == 500

    def test_config_is_immutable(self, function_variables) -> None:
        config = load_config(function_variables)
        with pytest.raises(AttributeError):
            config.api_key = 'changed'  # type: ignore[misc]
