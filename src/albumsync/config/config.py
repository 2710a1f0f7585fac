"""Configuration management for albumsync."""

import logging
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

from albumsync.config.paths import default_config_path
from albumsync.platform.logging import DEFAULT_LOG_FILE, LogSettings, logger, parse_level


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion.

    Args:
        default: Default value for the field.

    Returns:
        Field with proper metadata for path handling.
    """
    return field(default=default, metadata={"path": True})


def _default_audio_extensions() -> list[str]:
    return [".mp3"]


@dataclass
class Config:
    """Application configuration."""

    # Log file path and rotation
    log_file: Path | None = _path_field()
    log_level: str = "DEBUG"
    log_max_bytes: int = 10 * 1024 * 1024
    log_backup_count: int = 5

    # Album directory layout
    manifest_dir_name: str = "extras"
    manifest_file_name: str = "album.yaml"
    cover_file_stem: str = "cover"

    # File handling
    audio_extensions: list[str] = field(default_factory=_default_audio_extensions)
    max_filename_bytes: int = 240

    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects and normalise extensions."""
        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value).expanduser() if value.strip() else None)

        self.audio_extensions = [
            ext.lower() if ext.startswith(".") else f".{ext.lower()}"
            for ext in self.audio_extensions
            if ext
        ]

    def log_settings(self, console_level: int) -> LogSettings:
        """Logging setup for this configuration with the given console threshold.

        ``log_file`` falls back to ``DEFAULT_LOG_FILE``. An unknown
        ``log_level`` is reported and replaced by DEBUG.
        """
        try:
            file_level = parse_level(self.log_level)
        except ValueError as e:
            logger.warning("%s, logging everything to the file", e)
            file_level = logging.DEBUG
        return LogSettings(
            console_level=console_level,
            file=self.log_file or DEFAULT_LOG_FILE,
            file_level=file_level,
            max_bytes=self.log_max_bytes,
            backup_count=self.log_backup_count,
        )

    @classmethod
    def load(cls, config_file: Path | None = None) -> "Config":
        """Load configuration from file.

        Args:
            config_file: Explicit TOML file. Defaults to ``default_config_path()``.

        Returns:
            Config: Loaded configuration object, or defaults when the file is absent.

        Raises:
            tomllib.TOMLDecodeError: If the file exists but is not valid TOML.
        """
        target = config_file or default_config_path()
        if cls._instance is not None and cls._loaded_from == target:
            return cls._instance

        if not target.exists():
            logger.debug("No configuration at %s, using defaults", target)
            instance = cls()
        else:
            try:
                with open(target, "rb") as f:
                    config_dict = tomllib.load(f)
            except Exception as e:
                logger.error("Failed to load configuration: %s", e)
                raise

            known = {f.name for f in fields(cls)}
            unknown = sorted(set(config_dict) - known)
            if unknown:
                logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))

            instance = cls(**{k: v for k, v in config_dict.items() if k in known})
            logger.debug("Configuration loaded from %s", target)

        cls._instance = instance
        cls._loaded_from = target
        return instance


# Global configuration instance
config = Config.load()
