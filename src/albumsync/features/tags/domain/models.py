"""Tag snapshot data structures.

Where: src/albumsync/features/tags/domain/models.py
What: Immutable view of the fields albumsync reads from and writes to a tag container.
Why: Compare desired and actual state without holding a mutagen object open.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import ClassVar, Final

JPEG_MIME: Final[str] = "image/jpeg"
PNG_MIME: Final[str] = "image/png"


@dataclass(slots=True, frozen=True)
class CoverImage:
    """An embedded picture: MIME type plus raw bytes."""

    mime: str
    data: bytes

    EXTENSIONS: ClassVar[dict[str, str]] = {JPEG_MIME: ".jpg", PNG_MIME: ".png"}

    @property
    def extension(self) -> str:
        return self.EXTENSIONS.get(self.mime, ".jpg")

    @property
    def digest(self) -> str:
        return hashlib.sha256(self.data).hexdigest()

    @classmethod
    def from_bytes(cls, data: bytes, fallback_mime: str | None = None) -> "CoverImage":
        """Build an image, detecting the MIME type from its magic bytes.

        Raises:
            ValueError: If the bytes are neither PNG nor JPEG and no usable
                fallback was given.
        """
        return cls(mime=infer_mime(data, fallback_mime), data=data)


def infer_mime(data: bytes, fallback: str | None = None) -> str:
    """Detect PNG or JPEG data, falling back to a declared MIME type."""

    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return PNG_MIME
    if data[:3] == b"\xff\xd8\xff":
        return JPEG_MIME
    if fallback and fallback.lower() in {PNG_MIME, JPEG_MIME, "image/jpg"}:
        return JPEG_MIME if fallback.lower() == "image/jpg" else fallback.lower()
    raise ValueError("Unsupported image format (expected PNG or JPEG)")


@dataclass(slots=True, frozen=True)
class TagSnapshot:
    """Tag fields as read from one file. Absent frames are None."""

    title: str | None = None
    artist: str | None = None
    album_artist: str | None = None
    album: str | None = None
    track_number: int | None = None
    disc_number: int | None = None
    year: int | None = None
    genre: str | None = None
    comment: str | None = None
    lyrics: str | None = None
    cover: CoverImage | None = None
    cover_count: int = 0

    @property
    def is_empty(self) -> bool:
        return self == TagSnapshot()


__all__ = ["CoverImage", "JPEG_MIME", "PNG_MIME", "TagSnapshot", "infer_mime"]
