"""Test configuration management."""

import logging
import tomllib
from pathlib import Path

import pytest

from albumsync.config.config import Config
from albumsync.platform.logging import DEFAULT_LOG_FILE, LogSettings


def _write_config(repo_root: Path, text: str) -> Path:
    path = repo_root / "config" / "config.toml"
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(text, encoding="utf-8")
    # Drop any instance cached for this path before the file existed.
    Config._instance = None  # pyright: ignore[reportPrivateUsage]
    Config._loaded_from = None  # pyright: ignore[reportPrivateUsage]
    return path


def test_defaults_without_config_file(config_runtime_env: Path) -> None:
    config = Config.load()

    assert config.log_file is None
    assert config.manifest_dir_name == "extras"
    assert config.manifest_file_name == "album.yaml"
    assert config.cover_file_stem == "cover"
    assert config.audio_extensions == [".mp3"]
    assert config.max_filename_bytes == 240
    assert not (config_runtime_env / "config" / "config.toml").exists()


def test_load_toml_values(config_runtime_env: Path) -> None:
    _ = _write_config(
        config_runtime_env,
        'log_file = "~/logs/albumsync.log"\n'
        'manifest_dir_name = "meta"\n'
        'audio_extensions = ["MP3", ".mp2"]\n'
        "max_filename_bytes = 120\n",
    )
    Config._instance = None  # pyright: ignore[reportPrivateUsage] - reset singleton for test

    config = Config.load()

    assert config.log_file == Path("~/logs/albumsync.log").expanduser()
    assert config.manifest_dir_name == "meta"
    assert config.audio_extensions == [".mp3", ".mp2"]
    assert config.max_filename_bytes == 120


def test_unknown_keys_are_ignored(config_runtime_env: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = _write_config(config_runtime_env, 'base_path = "/music"\n')

    config = Config.load(path)

    assert not hasattr(config, "base_path")
    assert "base_path" in caplog.text


def test_load_is_cached_per_file(config_runtime_env: Path) -> None:
    path = _write_config(config_runtime_env, 'cover_file_stem = "folder"\n')

    first = Config.load(path)
    assert Config.load(path) is first
    assert first.cover_file_stem == "folder"


def test_invalid_toml_raises(config_runtime_env: Path) -> None:
    path = _write_config(config_runtime_env, "this is = = not toml\n")

    with pytest.raises(tomllib.TOMLDecodeError):
        _ = Config.load(path)


def test_log_settings_follow_configuration(config_runtime_env: Path) -> None:
    path = _write_config(
        config_runtime_env,
        'log_file = "/var/log/albumsync.log"\n'
        'log_level = "warning"\n'
        "log_max_bytes = 2048\n"
        "log_backup_count = 1\n",
    )

    settings = Config.load(path).log_settings(logging.ERROR)

    assert settings == LogSettings(
        console_level=logging.ERROR,
        file=Path("/var/log/albumsync.log"),
        file_level=logging.WARNING,
        max_bytes=2048,
        backup_count=1,
    )


def test_log_settings_default_to_the_repository_log_file(config_runtime_env: Path) -> None:
    settings = Config.load().log_settings(logging.INFO)

    assert settings.file == DEFAULT_LOG_FILE
    assert settings.file_level == logging.DEBUG


def test_unknown_log_level_falls_back_to_debug(caplog: pytest.LogCaptureFixture) -> None:
    settings = Config(log_level="chatty").log_settings(logging.INFO)

    assert settings.file_level == logging.DEBUG
    assert "chatty" in caplog.text
