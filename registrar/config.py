"""
Configuration for the registrar platform.

Configuration is a plain dict. Values come from DEFAULT_CONFIG, then an
optional JSON file, then environment variables.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from .core.exceptions import ConfigurationError

DEFAULT_CONFIG: Dict[str, Any] = {
    'gpa_workers': 4,
    'gpa_threshold': 3,
    'log_level': 'INFO',
    'rest_host': '0.0.0.0',
    'rest_port': 8000,
}

ENV_OVERRIDES = {
    'REGISTRAR_LOG_LEVEL': ('log_level', str),
    'REGISTRAR_REST_PORT': ('rest_port', int),
    'REGISTRAR_GPA_WORKERS': ('gpa_workers', int),
}


def load_config(path: Optional[str] = None, environ: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """Build the effective configuration."""
    config = dict(DEFAULT_CONFIG)
    
    if path:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read configuration file {path}: {e}")
        if not isinstance(loaded, dict):
            raise ConfigurationError(f"Configuration file {path} must contain a JSON object")
        config.update(loaded)
    
    environ = os.environ if environ is None else environ
    for variable, (key, cast) in ENV_OVERRIDES.items():
        if variable in environ:
            try:
                config[key] = cast(environ[variable])
            except ValueError:
                raise ConfigurationError(f"Invalid value for {variable}: {environ[variable]!r}")
    
    validate_config(config)
    return config


def validate_config(config: Dict[str, Any]) -> None:
    if not isinstance(config.get('gpa_workers'), int) or config['gpa_workers'] < 1:
        raise ConfigurationError("gpa_workers must be a positive integer")
    if not isinstance(config.get('gpa_threshold'), int) or config['gpa_threshold'] < 1:
        raise ConfigurationError("gpa_threshold must be a positive integer")
    if not isinstance(logging.getLevelName(str(config.get('log_level')).upper()), int):
        raise ConfigurationError(f"Unknown log level: {config.get('log_level')!r}")
