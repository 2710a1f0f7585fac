"""ID3 tag container access.

Where: src/albumsync/features/tags/adapters/id3_container.py
What: Read snapshots from, write fields to, and clear ID3v2 tags via mutagen.
Why: Confine mutagen frame handling to one adapter behind small functions.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Final, final

from mutagen import MutagenError
from mutagen.id3 import (
    APIC,
    COMM,
    ID3,
    ID3NoHeaderError,
    PictureType,
    TALB,
    TCON,
    TDRC,
    TIT2,
    TPE1,
    TPE2,
    TPOS,
    TRCK,
    USLT,
)

from albumsync.platform.logging import logger
from albumsync.shared.errors import AlbumSyncError, TagReadError, TagWriteError

from ..domain._frame_utils import first_text, parse_slash_separated, parse_year
from ..domain.models import CoverImage, TagSnapshot

# UTF-8 text encoding for every frame we write.
_UTF8: Final[int] = 3
_ID3_VERSION: Final[int] = 4
# Language of the comment and lyrics frames we write.
_LANG: Final[str] = "eng"

__all__ = [
    "Id3TagEditor",
    "clear_tags",
    "open_tags",
    "read_snapshot",
]


def _text(tags: ID3, frame_id: str) -> str | None:
    frame = tags.get(frame_id)
    if frame is None:
        return None
    return first_text(getattr(frame, "text", None))


def _genre(tags: ID3) -> str | None:
    frame = tags.get("TCON")
    if frame is None:
        return None
    genres = getattr(frame, "genres", None)
    return first_text(genres) if genres else first_text(getattr(frame, "text", None))


def _plain_frames(tags: ID3, frame_id: str) -> list[Any]:
    """COMM or USLT frames without a description.

    Described frames (``iTunNORM`` and the like) belong to other tools.
    """
    return [frame for frame in tags.getall(frame_id) if not getattr(frame, "desc", "")]


def _plain_text(tags: ID3, frame_id: str) -> str | None:
    frames = _plain_frames(tags, frame_id)
    return first_text(getattr(frames[0], "text", None)) if frames else None


def _snapshot(tags: ID3) -> TagSnapshot:
    pictures: list[Any] = tags.getall("APIC")
    cover: CoverImage | None = None
    if pictures:
        first = pictures[0]
        cover = CoverImage(mime=first.mime or "image/jpeg", data=bytes(first.data))

    return TagSnapshot(
        title=_text(tags, "TIT2"),
        artist=_text(tags, "TPE1"),
        album_artist=_text(tags, "TPE2"),
        album=_text(tags, "TALB"),
        track_number=parse_slash_separated(_text(tags, "TRCK"))[0],
        disc_number=parse_slash_separated(_text(tags, "TPOS"))[0],
        year=parse_year(_text(tags, "TDRC")),
        genre=_genre(tags),
        comment=_plain_text(tags, "COMM"),
        lyrics=_plain_text(tags, "USLT"),
        cover=cover,
        cover_count=len(pictures),
    )


def read_snapshot(path: Path) -> TagSnapshot:
    """Read the tag fields of ``path``.

    A file without an ID3 header yields an empty snapshot.

    Raises:
        TagReadError: If the file or its tag container cannot be decoded.
    """
    try:
        tags = ID3(path)
    except ID3NoHeaderError:
        return TagSnapshot()
    except (MutagenError, OSError) as exc:
        raise TagReadError(path, str(exc)) from exc
    return _snapshot(tags)


@final
class Id3TagEditor:
    """Field-level editor over a loaded ID3 container.

    Setters compare against the current frame value and only touch the
    container when the value differs, so ``changed`` tells whether a save is
    needed.
    """

    path: Path
    changed_fields: list[str]
    _tags: ID3

    def __init__(self, path: Path, tags: ID3) -> None:
        self.path = path
        self._tags = tags
        self.changed_fields = []

    @property
    def changed(self) -> bool:
        return bool(self.changed_fields)

    def _mark(self, field: str) -> None:
        if field not in self.changed_fields:
            self.changed_fields.append(field)

    def snapshot(self) -> TagSnapshot:
        return _snapshot(self._tags)

    def _remove(self, frame_id: str, field: str) -> None:
        if self._tags.getall(frame_id):
            self._tags.delall(frame_id)
            self._mark(field)

    def _set_text(self, frame_id: str, frame_cls: type[Any], value: str | None, field: str) -> None:
        # Frame text is read back stripped, so compare and write it stripped too.
        value = value.strip() if value else None
        if not value:
            self._remove(frame_id, field)
            return
        if _text(self._tags, frame_id) == value and len(self._tags.getall(frame_id)) == 1:
            return
        self._tags.setall(frame_id, [frame_cls(encoding=_UTF8, text=[value])])
        self._mark(field)

    def _set_plain(self, frame_id: str, frame_cls: type[Any], value: str | None, field: str) -> None:
        """Write a description-less COMM or USLT frame, leaving described ones alone."""
        value = value.strip() if value else None
        current = _plain_frames(self._tags, frame_id)
        if not value:
            if current:
                for frame in current:
                    self._tags.delall(frame.HashKey)
                self._mark(field)
            return
        if len(current) == 1 and first_text(getattr(current[0], "text", None)) == value:
            return
        for frame in current:
            self._tags.delall(frame.HashKey)
        text: Any = [value] if frame_id == "COMM" else value
        self._tags.add(frame_cls(encoding=_UTF8, lang=_LANG, desc="", text=text))
        self._mark(field)

    def _set_number(self, frame_id: str, frame_cls: type[Any], value: int | None, field: str) -> None:
        if value is None:
            self._remove(frame_id, field)
            return
        current, _total = parse_slash_separated(_text(self._tags, frame_id))
        if current == value:
            return
        self._tags.setall(frame_id, [frame_cls(encoding=_UTF8, text=[str(value)])])
        self._mark(field)

    def set_title(self, title: str | None) -> None:
        self._set_text("TIT2", TIT2, title, "title")

    def set_artist(self, artist: str | None) -> None:
        self._set_text("TPE1", TPE1, artist, "artist")

    def set_album_artist(self, album_artist: str | None, *, implied: str | None = None) -> None:
        """Write TPE2, or drop it when ``album_artist`` is None.

        An existing TPE2 equal to ``implied`` (the track's own artist) is kept
        when nothing is requested, since it says the same thing.
        """
        if album_artist is None and implied and _text(self._tags, "TPE2") == implied.strip():
            return
        self._set_text("TPE2", TPE2, album_artist, "album_artist")

    def set_album(self, album: str | None) -> None:
        self._set_text("TALB", TALB, album, "album")

    def set_genre(self, genre: str | None) -> None:
        if genre and _genre(self._tags) == genre.strip():
            return
        self._set_text("TCON", TCON, genre, "genre")

    def set_track_number(self, number: int | None) -> None:
        self._set_number("TRCK", TRCK, number, "track")

    def set_disc_number(self, number: int | None) -> None:
        self._set_number("TPOS", TPOS, number, "disc")

    def set_year(self, year: int | None) -> None:
        if year is None:
            self._remove("TDRC", "year")
            return
        if parse_year(_text(self._tags, "TDRC")) == year:
            return
        self._tags.setall("TDRC", [TDRC(encoding=_UTF8, text=[str(year)])])
        self._mark("year")

    def set_comment(self, comment: str | None) -> None:
        self._set_plain("COMM", COMM, comment, "comment")

    def set_lyrics(self, lyrics: str | None) -> None:
        self._set_plain("USLT", USLT, lyrics, "lyrics")

    def replace_cover(self, cover: CoverImage) -> None:
        """Make ``cover`` the only embedded picture.

        Only the picture bytes are compared: the declared MIME type of an
        existing frame (``image/jpg`` and the like) is not rewritten on its own.
        """
        pictures: list[Any] = self._tags.getall("APIC")
        if len(pictures) == 1 and bytes(pictures[0].data) == cover.data:
            return
        self._tags.delall("APIC")
        self._tags.add(
            APIC(
                encoding=_UTF8,
                mime=cover.mime,
                type=PictureType.COVER_FRONT,
                desc="Cover",
                data=cover.data,
            )
        )
        self._mark("cover")


@contextmanager
def open_tags(path: Path, *, dry_run: bool = False) -> Iterator[Id3TagEditor]:
    """Load the tag container of ``path`` for editing.

    The container is saved once when the block exits cleanly and a field
    changed. When the block raises, or with ``dry_run``, nothing is written.

    Raises:
        TagWriteError: If loading, editing or saving the container fails.
    """
    try:
        tags = ID3(path)
    except ID3NoHeaderError:
        tags = ID3()
    except (MutagenError, OSError) as exc:
        raise TagWriteError(path, str(exc)) from exc

    editor = Id3TagEditor(path, tags)
    try:
        yield editor
    except AlbumSyncError:
        raise
    except Exception as exc:
        raise TagWriteError(path, str(exc)) from exc

    if dry_run or not editor.changed:
        return
    try:
        tags.save(path, v2_version=_ID3_VERSION)
    except (MutagenError, OSError) as exc:
        raise TagWriteError(path, str(exc)) from exc
    logger.debug("Saved ID3 tag to %s", path)


def clear_tags(path: Path) -> bool:
    """Remove the ID3 tag from ``path``.

    Returns:
        bool: ``True`` when a tag was removed, ``False`` if there was none.

    Raises:
        TagWriteError: If the tag cannot be removed.
    """
    try:
        tags = ID3(path)
    except ID3NoHeaderError:
        return False
    except (MutagenError, OSError) as exc:
        raise TagWriteError(path, str(exc)) from exc

    try:
        tags.delete(path)
    except (MutagenError, OSError) as exc:
        raise TagWriteError(path, str(exc)) from exc
    return True
