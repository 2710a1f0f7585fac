"""Summary: List the audio files of an album directory with their tag snapshots.
Why: Build the per-run FileEntry list every operation starts from.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from albumsync.config.settings import AUDIO_EXTENSIONS
from albumsync.features.tags import read_snapshot
from albumsync.platform.logging import logger
from albumsync.shared.errors import IoError, TagReadError

from ..domain.models import FileEntry

# Files parked by an interrupted rename; hidden, but still part of the album.
PARKED_PREFIX = ".albumsync-rename-"


def _is_listed(path: Path) -> bool:
    return not path.name.startswith(".") or path.name.startswith(PARKED_PREFIX)


def list_audio_files(directory: Path, extensions: Iterable[str] | None = None) -> list[Path]:
    """Audio files directly inside ``directory``, sorted by file name.

    Hidden files are skipped, except the temporary names the renamer parks
    files under, so a later run can finish an interrupted rename.

    Raises:
        IoError: If the directory is missing or cannot be listed.
    """
    if not directory.is_dir():
        raise IoError("Album directory not found", directory)

    allowed = {ext.lower() for ext in (extensions if extensions is not None else AUDIO_EXTENSIONS)}
    try:
        candidates = [
            path
            for path in directory.iterdir()
            if path.is_file() and _is_listed(path) and path.suffix.lower() in allowed
        ]
    except OSError as exc:
        raise IoError(f"Couldn't list directory ({exc})", directory) from exc
    return sorted(candidates, key=lambda path: path.name)


def scan_directory(directory: Path, extensions: Iterable[str] | None = None) -> list[FileEntry]:
    """Read the tags of every audio file in ``directory``.

    Files whose tags cannot be decoded are kept with ``read_error`` set and an
    empty snapshot, so they still take part in positional matching.
    """
    entries: list[FileEntry] = []
    for path in list_audio_files(directory, extensions):
        try:
            entries.append(FileEntry(path=path, snapshot=read_snapshot(path)))
        except TagReadError as exc:
            logger.warning("%s", exc)
            entries.append(FileEntry(path=path, read_error=exc))
    logger.debug("Scanned %d audio files in %s", len(entries), directory)
    return entries


__all__ = ["PARKED_PREFIX", "list_audio_files", "scan_directory"]
