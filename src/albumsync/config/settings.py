"""Where: src/albumsync/config/settings.py
What: Derived runtime settings sourced from persisted configuration.
Why: Expose validated constants to feature layers without file I/O.
"""

from __future__ import annotations

from albumsync.config.config import config as app_config

# Filenames are bounded well below the common 255-byte filesystem limit.
MAX_FILENAME_BYTES_DEFAULT: int = 240
_MIN_FILENAME_BYTES: int = 32

MANIFEST_DIR_NAME: str = app_config.manifest_dir_name or "extras"
MANIFEST_FILE_NAME: str = app_config.manifest_file_name or "album.yaml"
COVER_FILE_STEM: str = app_config.cover_file_stem or "cover"

AUDIO_EXTENSIONS: frozenset[str] = frozenset(app_config.audio_extensions or [".mp3"])

_max_bytes = getattr(app_config, "max_filename_bytes", MAX_FILENAME_BYTES_DEFAULT)
MAX_FILENAME_BYTES: int = (
    _max_bytes
    if isinstance(_max_bytes, int) and _max_bytes >= _MIN_FILENAME_BYTES
    else MAX_FILENAME_BYTES_DEFAULT
)


__all__ = [
    "AUDIO_EXTENSIONS",
    "COVER_FILE_STEM",
    "MANIFEST_DIR_NAME",
    "MANIFEST_FILE_NAME",
    "MAX_FILENAME_BYTES",
    "MAX_FILENAME_BYTES_DEFAULT",
]
