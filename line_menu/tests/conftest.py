"""Shared test fixtures for line-menu."""

import pytest
from pathlib import Path

from line_menu.services.config import ConfigManager


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Create an empty config directory."""
    directory = tmp_path / "config"
    directory.mkdir()
    return directory


@pytest.fixture
def config_manager(config_dir: Path) -> ConfigManager:
    """Create a ConfigManager with temp directory."""
    return ConfigManager(config_dir=config_dir)


@pytest.fixture
def fruit_lines() -> list[str]:
    """Candidates from the picker's canonical example."""
    return ["apple pie", "banana split", "grape juice"]


@pytest.fixture
def readme_lines() -> list[str]:
    """Candidates differing in case and length."""
    return ["Readme.md", "main.go", "README"]
