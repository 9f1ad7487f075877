"""
Pytest configuration and shared fixtures for the RetireSmart tests.
"""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from retiresmart import create_app
from retiresmart.config import reset_global_settings
from retiresmart.models.scenario import Scenario

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def default_scenario_data():
    """Load the default scenario fixture (camelCase payload)."""
    with open(FIXTURES / "default_scenario.json", "r") as f:
        return json.load(f)


@pytest.fixture
def default_scenario(default_scenario_data):
    """Create the default Scenario from the fixture payload."""
    return Scenario.model_validate(default_scenario_data)


@pytest.fixture
def app():
    """Create an application with a clean, test-only environment."""
    reset_global_settings()
    with patch.dict(
        os.environ,
        {"SECRET_KEY": "test-secret-key-123", "APP_ENV": "testing"},
        clear=True,
    ):
        yield create_app()
    reset_global_settings()


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()
