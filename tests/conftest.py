"""
Pytest configuration and shared fixtures for all tests.
"""

import sys
from pathlib import Path

import pytest
import json

# Add the project root to sys.path so we can import from src
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

_CONFIG_ENV_VARS = (
    "CONFIG_FILE",
    "LOG_FILE",
    "ENVIRONMENT",
    "IRRIGATION_AREA_UNIT",
    "IRRIGATION_RAINFALL_POLICY",
    "IRRIGATION_VALIDATION_POLICY",
    "IRRIGATION_TIMEZONE",
)


@pytest.fixture(scope="session")
def fixtures_dir():
    """Get the fixtures directory path."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def sample_design(fixtures_dir):
    """Load sample raw design input from fixtures."""
    data_file = fixtures_dir / "sample_design.json"
    with open(data_file, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove configuration environment variables for the test."""
    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test running the full application"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test (no external dependencies)"
    )
