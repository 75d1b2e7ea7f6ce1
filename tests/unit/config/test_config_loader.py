"""Tests for configuration loading with precedence."""

from __future__ import annotations

from pathlib import Path

import pytest

from atem.config import ConfigSource, EnvReader, get_config, get_default_config_path
from atem.config.loader import DEFAULT_CONFIG_FILE


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.toml"
    path.write_text(
        "[tools]\n"
        'ffmpeg = "/file/ffmpeg"\n'
        "\n"
        "[encode]\n"
        "target_size_mb = 8.0\n"
        'output_strategy = "videos"\n'
    )
    return path


class TestGetDefaultConfigPath:
    def test_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ATEM_CONFIG_PATH", raising=False)
        assert get_default_config_path() == DEFAULT_CONFIG_FILE

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.setenv("ATEM_CONFIG_PATH", str(tmp_path / "custom.toml"))
        assert get_default_config_path() == tmp_path / "custom.toml"


class TestGetConfig:
    def test_file_values(self, config_file: Path) -> None:
        config = get_config(config_file, env_reader=EnvReader(env={}))

        assert config.tools.ffmpeg == Path("/file/ffmpeg")
        assert config.encode.target_size_mb == 8.0
        assert config.encode.output_strategy == "videos"

    def test_env_overrides_file(self, config_file: Path) -> None:
        reader = EnvReader(env={"ATEM_TARGET_SIZE": "12"})

        config = get_config(config_file, env_reader=reader)

        assert config.encode.target_size_mb == 12.0
        assert config.tools.ffmpeg == Path("/file/ffmpeg")

    def test_cli_overrides_env(self, config_file: Path) -> None:
        reader = EnvReader(env={"ATEM_TARGET_SIZE": "12"})

        config = get_config(
            config_file,
            cli_source=ConfigSource(target_size_mb=4.0, ffmpeg_path=Path("/cli/ffmpeg")),
            env_reader=reader,
        )

        assert config.encode.target_size_mb == 4.0
        assert config.tools.ffmpeg == Path("/cli/ffmpeg")

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        config = get_config(tmp_path / "none.toml", env_reader=EnvReader(env={}))
        assert config.encode.target_size_mb == 15.5

    def test_invalid_merged_value_raises(self, tmp_path: Path) -> None:
        reader = EnvReader(env={"ATEM_TARGET_SIZE": "-1"})
        with pytest.raises(ValueError, match="target_size_mb"):
            get_config(tmp_path / "none.toml", env_reader=reader)
