"""Shared pytest fixtures for albumsync tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Protocol

import pytest
from mutagen.id3 import APIC, COMM, ID3, TALB, TCON, TDRC, TIT2, TPE1, TPE2, TPOS, TRCK, USLT

JPEG_BYTES: bytes = b"\xff\xd8\xff\xe0" + b"fake-jpeg-payload"
PNG_BYTES: bytes = b"\x89PNG\r\n\x1a\n" + b"fake-png-payload"

# Arbitrary audio payload; mutagen prepends the ID3 tag without decoding it.
AUDIO_PAYLOAD: bytes = b"\x00" * 128


class TrackFileFactory(Protocol):
    def __call__(
        self,
        name: str,
        *,
        title: str | None = None,
        artist: str | None = None,
        album_artist: str | None = None,
        album: str | None = None,
        track: int | str | None = None,
        disc: int | str | None = None,
        year: int | None = None,
        genre: str | None = None,
        comment: str | None = None,
        lyrics: str | None = None,
        covers: list[bytes] | None = None,
        cover_mime: str | None = None,
        directory: Path | None = None,
    ) -> Path: ...


def write_track_file(
    path: Path,
    *,
    title: str | None = None,
    artist: str | None = None,
    album_artist: str | None = None,
    album: str | None = None,
    track: int | str | None = None,
    disc: int | str | None = None,
    year: int | None = None,
    genre: str | None = None,
    comment: str | None = None,
    lyrics: str | None = None,
    covers: list[bytes] | None = None,
    cover_mime: str | None = None,
) -> Path:
    """Write a throwaway "mp3" and tag it through mutagen."""

    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_bytes(AUDIO_PAYLOAD)

    tags = ID3()
    text_frames: list[tuple[type, object]] = [
        (TIT2, title),
        (TPE1, artist),
        (TPE2, album_artist),
        (TALB, album),
        (TRCK, track),
        (TPOS, disc),
        (TDRC, year),
        (TCON, genre),
    ]
    for frame_cls, value in text_frames:
        if value is not None:
            tags.add(frame_cls(encoding=3, text=[str(value)]))
    if comment is not None:
        tags.add(COMM(encoding=3, lang="eng", desc="", text=[comment]))
    if lyrics is not None:
        tags.add(USLT(encoding=3, lang="eng", desc="", text=lyrics))
    for index, data in enumerate(covers or []):
        mime = cover_mime or ("image/png" if data.startswith(b"\x89PNG") else "image/jpeg")
        tags.add(APIC(encoding=3, mime=mime, type=3, desc=f"Cover {index}", data=data))

    if len(tags):
        tags.save(path, v2_version=4)
    return path


@pytest.fixture
def album_dir(tmp_path: Path) -> Path:
    """Empty album directory."""

    directory = tmp_path / "album"
    directory.mkdir()
    return directory


@pytest.fixture
def make_track_file(album_dir: Path) -> TrackFileFactory:
    """Factory creating tagged files inside ``album_dir`` by default."""

    def _make(name: str, *, directory: Path | None = None, **fields: object) -> Path:
        return write_track_file((directory or album_dir) / name, **fields)  # pyright: ignore[reportArgumentType]

    return _make


@pytest.fixture
def read_tags() -> Callable[[Path], ID3]:
    """Load the raw ID3 container of a file for assertions."""

    def _read(path: Path) -> ID3:
        return ID3(path)

    return _read


@pytest.fixture
def jpeg_bytes() -> bytes:
    return JPEG_BYTES


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES
