"""
Tests for configuration loading.
"""

import json

import pytest

from registrar.config import DEFAULT_CONFIG, load_config
from registrar.core.exceptions import ConfigurationError


def test_defaults_without_file_or_environment():
    assert load_config(environ={}) == DEFAULT_CONFIG


def test_file_values_override_defaults(tmp_path):
    path = tmp_path / "registrar.json"
    path.write_text(json.dumps({"gpa_workers": 8, "rest_port": 9000}))

    config = load_config(str(path), environ={})

    assert config['gpa_workers'] == 8
    assert config['rest_port'] == 9000
    assert config['gpa_threshold'] == DEFAULT_CONFIG['gpa_threshold']


def test_environment_overrides_file(tmp_path):
    path = tmp_path / "registrar.json"
    path.write_text(json.dumps({"rest_port": 9000}))

    config = load_config(str(path), environ={"REGISTRAR_REST_PORT": "9100", "REGISTRAR_LOG_LEVEL": "debug"})

    assert config['rest_port'] == 9100
    assert config['log_level'] == "debug"


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_unreadable_file(tmp_path, content):
    path = tmp_path / "registrar.json"
    path.write_text(content)
    with pytest.raises(ConfigurationError):
        load_config(str(path), environ={})


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_config(str(tmp_path / "absent.json"), environ={})


@pytest.mark.parametrize("environ", [
    {"REGISTRAR_REST_PORT": "eighty"},
    {"REGISTRAR_GPA_WORKERS": "0"},
    {"REGISTRAR_LOG_LEVEL": "chatty"},
])
def test_invalid_values(environ):
    with pytest.raises(ConfigurationError):
        load_config(environ=environ)
