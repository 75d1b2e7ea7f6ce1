"""Fixtures for CLI tests."""

from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def _isolate_cli(monkeypatch, tmp_path):
    """Keep CLI tests away from user config and the root logger."""
    monkeypatch.setenv("ATEM_CONFIG_PATH", str(tmp_path / "no-config.toml"))
    for var in ("ATEM_TARGET_SIZE", "ATEM_OUTPUT_STRATEGY", "ATEM_RUNNER"):
        monkeypatch.delenv(var, raising=False)
    with patch("atem.logging.configure_logging"):
        yield
