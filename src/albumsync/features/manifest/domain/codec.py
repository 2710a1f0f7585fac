"""Manifest text codec.

Where: src/albumsync/features/manifest/domain/codec.py
What: Parse YAML manifest text into an Album and serialize an Album back to YAML.
Why: Keep the human-editable format at the edge; every operation works on Album objects.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, final

import yaml

from albumsync.shared.album import Album, Track
from albumsync.shared.errors import ManifestFormatError

_Path = tuple[str | int, ...]


def _describe(path: _Path) -> str:
    """Render ``("tracks", 2, "number")`` as ``tracks[2].number``."""
    out = ""
    for part in path:
        if isinstance(part, int):
            out += f"[{part}]"
        else:
            out += f".{part}" if out else part
    return out


class _LineIndex:
    """Map key paths of a composed YAML document to 1-based line numbers."""

    def __init__(self, node: yaml.Node | None) -> None:
        self._lines: dict[_Path, int] = {}
        if node is not None:
            self._walk(node, ())

    def _walk(self, node: yaml.Node, path: _Path) -> None:
        self._lines[path] = node.start_mark.line + 1
        if isinstance(node, yaml.MappingNode):
            for key_node, value_node in node.value:
                key = key_node.value if isinstance(key_node, yaml.ScalarNode) else str(key_node.value)
                self._walk(value_node, (*path, key))
                self._lines[(*path, key)] = key_node.start_mark.line + 1
        elif isinstance(node, yaml.SequenceNode):
            for index, item in enumerate(node.value):
                self._walk(item, (*path, index))

    def line(self, path: _Path) -> int | None:
        while path:
            if path in self._lines:
                return self._lines[path]
            path = path[:-1]
        return self._lines.get(())


@final
class ManifestCodec:
    """Convert between manifest text and :class:`Album`."""

    LIST_SEPARATOR: ClassVar[str] = ", "

    # Parsing -----------------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> Album:
        """Parse manifest text.

        Raises:
            ManifestFormatError: On YAML syntax errors, wrong types, missing
                keys or duplicate (disc, number) pairs.
        """
        loader = yaml.SafeLoader(text)
        try:
            node = loader.get_single_node()
            data = loader.construct_document(node) if node is not None else None
        except yaml.MarkedYAMLError as exc:
            mark = exc.problem_mark or exc.context_mark
            line = mark.line + 1 if mark is not None else None
            raise ManifestFormatError(f"Invalid YAML: {exc.problem or exc}", line=line) from exc
        except yaml.YAMLError as exc:
            raise ManifestFormatError(f"Invalid YAML: {exc}") from exc
        finally:
            loader.dispose()

        return _AlbumParser(_LineIndex(node)).parse(data)

    # Serialization -----------------------------------------------------------

    @staticmethod
    def _title_value(text: str, ascii_title: str | None) -> str | dict[str, str]:
        return {"text": text, "ascii": ascii_title} if ascii_title else text

    @classmethod
    def to_dict(cls, album: Album) -> dict[str, Any]:
        data: dict[str, Any] = {
            "title": cls._title_value(album.title, album.ascii_title),
            "artist": album.artist,
        }
        if album.year is not None:
            data["year"] = album.year
        if album.genre:
            data["genre"] = album.genre
        if album.cover:
            data["cover"] = album.cover

        tracks: list[dict[str, Any]] = []
        for track in album.ordered_tracks():
            entry: dict[str, Any] = {"title": cls._title_value(track.title, track.ascii_title)}
            if track.artist and track.artist != album.artist:
                entry["artist"] = track.artist
            if track.disc is not None:
                entry["disc"] = track.disc
            entry["number"] = track.number
            if track.year is not None and track.year != album.year:
                entry["year"] = track.year
            if track.genre and track.genre != album.genre:
                entry["genre"] = track.genre
            if track.comment:
                entry["comment"] = track.comment
            if track.lyrics:
                entry["lyrics"] = track.lyrics
            tracks.append(entry)
        data["tracks"] = tracks
        return data

    @classmethod
    def serialize(cls, album: Album) -> str:
        """Render ``album`` as manifest text, tracks in (disc, number) order."""
        return yaml.safe_dump(
            cls.to_dict(album),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )


class _AlbumParser:
    """Validate the loaded YAML structure and build the Album."""

    def __init__(self, lines: _LineIndex) -> None:
        self._lines = lines

    def _error(self, message: str, path: _Path) -> ManifestFormatError:
        return ManifestFormatError(message, key=_describe(path) or None, line=self._lines.line(path))

    def _text(self, value: Any, path: _Path, *, required: bool = False) -> str | None:
        if value is None:
            if required:
                raise self._error("Missing value", path)
            return None
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise self._error("Expected a string", path)
        return str(value).strip()

    def _positive_int(self, value: Any, path: _Path) -> int | None:
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise self._error("Expected a positive integer", path)
        return value

    def _year(self, value: Any, path: _Path) -> int | None:
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int):
            raise self._error("Expected a year", path)
        return value

    def _artist(self, data: Mapping[str, Any], path: _Path) -> str | None:
        """Read ``artist`` or the list form ``artists``."""
        if "artists" in data:
            artists = data["artists"]
            if not isinstance(artists, list) or not artists:
                raise self._error("Expected a non-empty list", (*path, "artists"))
            names = [
                self._text(name, (*path, "artists", index), required=True) or ""
                for index, name in enumerate(artists)
            ]
            return ManifestCodec.LIST_SEPARATOR.join(names)
        return self._text(data.get("artist"), (*path, "artist"))

    def _title(self, value: Any, path: _Path) -> tuple[str, str | None]:
        if isinstance(value, Mapping):
            text = self._text(value.get("text"), (*path, "text"), required=True) or ""
            ascii_title = self._text(value.get("ascii"), (*path, "ascii"))
            return text, ascii_title
        return self._text(value, path, required=True) or "", None

    def parse(self, data: Any) -> Album:
        if not isinstance(data, Mapping):
            raise self._error("Manifest must be a mapping", ())

        for key in ("title", "tracks"):
            if key not in data:
                raise self._error(f"Missing required key '{key}'", (key,))
        if "artist" not in data and "artists" not in data:
            raise self._error("Missing required key 'artist'", ("artist",))

        title, ascii_title = self._title(data["title"], ("title",))
        album = Album(
            title=title,
            ascii_title=ascii_title,
            artist=self._artist(data, ()) or "",
            cover=self._text(data.get("cover"), ("cover",)),
            year=self._year(data.get("year"), ("year",)),
            genre=self._text(data.get("genre"), ("genre",)),
        )

        raw_tracks = data["tracks"]
        if raw_tracks is None:
            raw_tracks = []
        if not isinstance(raw_tracks, list):
            raise self._error("Expected a list of tracks", ("tracks",))

        pending: list[tuple[int, Track]] = []
        for index, raw in enumerate(raw_tracks):
            track, explicit_number = self._track(raw, ("tracks", index))
            album.tracks.append(track)
            if not explicit_number:
                pending.append((index, track))

        self._assign_positions(album, pending)

        seen: set[tuple[int, int]] = set()
        for index, track in enumerate(album.tracks):
            if track.key in seen:
                raise self._error(
                    f"Duplicate disc {track.disc_key} track {track.number}",
                    ("tracks", index),
                )
            seen.add(track.key)
        return album

    def _track(self, raw: Any, path: _Path) -> tuple[Track, bool]:
        if isinstance(raw, (str, int, float)) and not isinstance(raw, bool):
            return Track(title=str(raw), number=0), False
        if not isinstance(raw, Mapping):
            raise self._error("Expected a track title or mapping", path)
        if "title" not in raw:
            raise self._error("Missing required key 'title'", (*path, "title"))

        title, ascii_title = self._title(raw["title"], (*path, "title"))
        number = self._positive_int(raw.get("number"), (*path, "number"))
        track = Track(
            title=title,
            ascii_title=ascii_title,
            number=number or 0,
            artist=self._artist(raw, path),
            disc=self._positive_int(raw.get("disc"), (*path, "disc")),
            year=self._year(raw.get("year"), (*path, "year")),
            genre=self._text(raw.get("genre"), (*path, "genre")),
            comment=self._text(raw.get("comment"), (*path, "comment")),
            lyrics=self._text(raw.get("lyrics"), (*path, "lyrics")),
        )
        return track, number is not None

    @staticmethod
    def _assign_positions(album: Album, pending: list[tuple[int, Track]]) -> None:
        """Number tracks that omit ``number`` by their position on their disc."""
        if not pending:
            return
        pending_ids = {id(track) for _, track in pending}
        claimed: dict[int, set[int]] = {}
        for track in album.tracks:
            if id(track) not in pending_ids:
                claimed.setdefault(track.disc_key, set()).add(track.number)

        positions: dict[int, int] = {}
        for track in album.tracks:
            position = positions.get(track.disc_key, 0) + 1
            positions[track.disc_key] = position
            if id(track) not in pending_ids:
                continue
            taken = claimed.setdefault(track.disc_key, set())
            candidate = position
            while candidate in taken:
                candidate += 1
            track.number = candidate
            taken.add(candidate)


__all__ = ["ManifestCodec"]
