"""Summary: Locate, load and save the album manifest and its cover image.
Why: Keep the ``extras/album.yaml`` layout and cover resolution in one place.
"""

from __future__ import annotations

from pathlib import Path

from albumsync.config.settings import COVER_FILE_STEM, MANIFEST_DIR_NAME, MANIFEST_FILE_NAME
from albumsync.features.tags import CoverImage
from albumsync.platform.filesystem import write_bytes_file, write_text_file
from albumsync.platform.logging import logger
from albumsync.shared.album import Album
from albumsync.shared.errors import IoError, ManifestFormatError

from ..domain.codec import ManifestCodec

_MIME_BY_SUFFIX: dict[str, str] = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
}


def extras_path(directory: Path) -> Path:
    """Directory holding the manifest and the cover image."""
    return directory / MANIFEST_DIR_NAME


def manifest_path(directory: Path) -> Path:
    return extras_path(directory) / MANIFEST_FILE_NAME


def _require_directory(directory: Path) -> None:
    if not directory.is_dir():
        raise IoError("Album directory not found", directory)


def load_manifest(directory: Path) -> Album:
    """Read and parse the manifest of ``directory``.

    Raises:
        IoError: If the directory or the manifest file is missing or unreadable.
        ManifestFormatError: If the manifest cannot be parsed.
    """
    _require_directory(directory)
    path = manifest_path(directory)
    if not path.is_file():
        raise IoError("Manifest not found", path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise IoError(f"Couldn't read manifest ({exc})", path) from exc

    album = ManifestCodec.parse(text)
    logger.debug("Loaded manifest %s with %d tracks", path, len(album.tracks))
    return album


def save_manifest(directory: Path, album: Album) -> Path:
    """Serialize ``album`` to the manifest of ``directory``, creating ``extras/``.

    Raises:
        IoError: If the manifest cannot be written.
    """
    path = manifest_path(directory)
    try:
        write_text_file(path, ManifestCodec.serialize(album))
    except OSError as exc:
        raise IoError(f"Couldn't write manifest ({exc})", path) from exc
    return path


def resolve_cover_path(directory: Path, album: Album) -> Path | None:
    """Absolute path of the album cover, relative paths resolving against ``extras/``."""
    if not album.cover:
        return None
    cover = Path(album.cover).expanduser()
    if cover.is_absolute():
        return cover
    return extras_path(directory) / cover


def load_cover(directory: Path, album: Album) -> CoverImage | None:
    """Load the cover image declared by ``album``, if any.

    Raises:
        IoError: If the declared file is missing or unreadable.
        ManifestFormatError: If the file is neither a PNG nor a JPEG image.
    """
    path = resolve_cover_path(directory, album)
    if path is None:
        return None
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise IoError(f"Couldn't read cover image ({exc})", path) from exc
    try:
        return CoverImage.from_bytes(data, _MIME_BY_SUFFIX.get(path.suffix.lower()))
    except ValueError as exc:
        raise ManifestFormatError(f"{exc}: {path}", key="cover") from exc


def export_cover(directory: Path, cover: CoverImage) -> str:
    """Write ``cover`` next to the manifest and return its manifest-relative name.

    Raises:
        IoError: If the image cannot be written.
    """
    name = f"{COVER_FILE_STEM}{cover.extension}"
    path = extras_path(directory) / name
    try:
        write_bytes_file(path, cover.data)
    except OSError as exc:
        raise IoError(f"Couldn't write cover image ({exc})", path) from exc
    return name


__all__ = [
    "export_cover",
    "extras_path",
    "load_cover",
    "load_manifest",
    "manifest_path",
    "resolve_cover_path",
    "save_manifest",
]
