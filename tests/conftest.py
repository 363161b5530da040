"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from design_tokens.config import Config, DesignTokensConfig  # noqa: E402
from design_tokens.engine import (  # noqa: E402
    ColorSchemeResolver,
    PaletteRegistry,
    ThemeModeState,
    TokenEngine,
)


@pytest.fixture
def theme_state():
    """A theme-mode cell private to one test."""
    return ThemeModeState()


@pytest.fixture
def resolver(theme_state):
    return ColorSchemeResolver(theme_state)


@pytest.fixture
def registry():
    """Registry over the bundled presets only."""
    return PaletteRegistry(strict=True, seed=1234)


@pytest.fixture
def engine(registry):
    return TokenEngine(registry=registry)


@pytest.fixture
def config(tmp_path):
    """Config rooted in a temporary data directory."""
    return DesignTokensConfig(data_dir=str(tmp_path / "data"))


@pytest.fixture(autouse=True)
def reset_config_cache():
    Config._instance = None
    yield
    Config._instance = None
