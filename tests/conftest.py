"""Pytest fixtures for test configuration.

Global test safety measures:
 - .env loading is disabled unless a test opts in via LSM_ENABLE_DOTENV
"""
import pytest
from pathlib import Path
from typing import Dict, Any

from tests.mocks.fixtures import *  # noqa: F401,F403


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Drop LSM__* variables inherited from the developer's shell."""
    import os
    for key in list(os.environ):
        if key.startswith('LSM__') or key == 'LSM_ENABLE_DOTENV':
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def test_config(tmp_path: Path) -> Dict[str, Any]:
    """Provide a minimal test configuration as a dict.

    Tests should pass cfg to CLI/modules directly (CliRunner.invoke(obj=cfg)),
    rather than creating .env files or setting environment variables.
    """
    return {
        'log_level': 'DEBUG',
        'matching': {
            'threshold': 0.5,
            'separators': ' .,;:',
            'distance_backend': 'native',
            'on_field_error': 'abort',
        },
        'logging': {
            'progress_enabled': False,
            'progress_interval': 1000,
        },
        'database': {
            'path': str(tmp_path / 'db.sqlite'),
            'collection': 'records',
        },
    }
