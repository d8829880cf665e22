"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gutti.config import Config, ConfigModel  # noqa: E402
from gutti.storage import Storage  # noqa: E402


@pytest.fixture(autouse=True)
def reset_config():
    """Never leak the cached configuration between tests."""
    Config._instance = None
    yield
    Config._instance = None


@pytest.fixture
def config(tmp_path):
    """Configuration pointing at a task file inside tmp_path."""
    return ConfigModel(data_file=str(tmp_path / "data" / "gutti.txt"))


@pytest.fixture
def storage(config):
    return Storage(config)
