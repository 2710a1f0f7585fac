"""Summary: Tests for building an Album from existing tags.
Why: Generated manifests must capture what the files already say.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from albumsync.features.reconcile import extract, scan_directory, shared_cover
from albumsync.features.tags import CoverImage
from albumsync.shared.errors import IoError


def test_album_values_use_the_most_common_tag(album_dir: Path, make_track_file: Callable[..., Path]) -> None:
    _ = make_track_file("a.mp3", title="One", artist="Band", album="Demo", track=1, year=2001, genre="Rock")
    _ = make_track_file("b.mp3", title="Two", artist="Band", album="Demo", track=2, year=2001, genre="Rock")
    _ = make_track_file("c.mp3", title="Three", artist="Guest", album="Demo (Bonus)", track=3, year=2002)

    album = extract(album_dir)

    assert album.title == "Demo"
    assert album.artist == "Band"
    assert album.year == 2001
    assert album.genre == "Rock"
    assert [(t.title, t.number, t.artist, t.year) for t in album.tracks] == [
        ("One", 1, None, None),
        ("Two", 2, None, None),
        ("Three", 3, "Guest", 2002),
    ]


def test_ties_go_to_the_first_file_name(album_dir: Path, make_track_file: Callable[..., Path]) -> None:
    _ = make_track_file("b.mp3", artist="Second", album="Later", track=1)
    _ = make_track_file("a.mp3", artist="First", album="Earlier", track=2)

    album = extract(album_dir)

    assert album.artist == "First"
    assert album.title == "Earlier"


def test_missing_fields_fall_back_to_file_name_and_position(
    album_dir: Path,
    make_track_file: Callable[..., Path],
) -> None:
    _ = make_track_file("b.mp3", title="Tagged", track=1)
    _ = make_track_file("a.mp3", artist="Band")
    _ = (album_dir / "c.mp3").write_bytes(b"\x00" * 16)

    album = extract(album_dir)

    assert [(t.title, t.number) for t in album.tracks] == [
        ("Tagged", 1),
        ("a", 2),
        ("c", 3),
    ]


def test_duplicate_tag_numbers_get_the_next_free_number(
    album_dir: Path,
    make_track_file: Callable[..., Path],
) -> None:
    _ = make_track_file("a.mp3", title="A", track=1)
    _ = make_track_file("b.mp3", title="B", track=1)
    _ = make_track_file("c.mp3", title="C", track=2)

    album = extract(album_dir)

    assert [(t.title, t.number) for t in album.ordered_tracks()] == [("A", 1), ("C", 2), ("B", 3)]
    assert album.duplicate_keys() == []


def test_disc_numbers_are_kept(album_dir: Path, make_track_file: Callable[..., Path]) -> None:
    _ = make_track_file("a.mp3", title="A", track=1, disc="2/2")
    _ = make_track_file("b.mp3", title="B", track=1, disc="1/2")

    album = extract(album_dir)

    assert [(t.title, t.key) for t in album.tracks] == [("B", (1, 1)), ("A", (2, 1))]
    assert album.is_multi_disc


def test_non_audio_files_are_ignored(album_dir: Path, make_track_file: Callable[..., Path]) -> None:
    _ = make_track_file("01 - Song.mp3", title="Song", track=1)
    _ = (album_dir / "notes.txt").write_text("liner notes")
    _ = (album_dir / "folder.jpg").write_bytes(b"\xff\xd8\xff")
    _ = make_track_file("hidden.mp3", title="Nope", directory=album_dir / "extras")

    album = extract(album_dir)

    assert [t.title for t in album.tracks] == ["Song"]


def test_empty_directory_gives_empty_album(album_dir: Path) -> None:
    album = extract(album_dir)

    assert album.tracks == []
    assert album.title == ""


def test_missing_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(IoError):
        _ = extract(tmp_path / "missing")


class TestSharedCover:
    def test_identical_single_pictures_are_shared(
        self,
        album_dir: Path,
        make_track_file: Callable[..., Path],
        jpeg_bytes: bytes,
    ) -> None:
        _ = make_track_file("a.mp3", covers=[jpeg_bytes])
        _ = make_track_file("b.mp3", covers=[jpeg_bytes])

        assert shared_cover(scan_directory(album_dir)) == CoverImage(mime="image/jpeg", data=jpeg_bytes)

    @pytest.mark.parametrize(
        "second",
        [[], [b"\xff\xd8\xff\xe0other"], "two"],
        ids=["missing", "different", "several"],
    )
    def test_anything_else_is_not_shared(
        self,
        album_dir: Path,
        make_track_file: Callable[..., Path],
        jpeg_bytes: bytes,
        second: list[bytes] | str,
    ) -> None:
        covers = [jpeg_bytes, jpeg_bytes + b"!"] if second == "two" else second
        _ = make_track_file("a.mp3", title="A", covers=[jpeg_bytes])
        _ = make_track_file("b.mp3", title="B", covers=covers)

        assert shared_cover(scan_directory(album_dir)) is None

    def test_empty_directory_has_no_cover(self) -> None:
        assert shared_cover([]) is None


def test_album_artist_frame_wins_over_track_artists(
    album_dir: Path,
    make_track_file: Callable[..., Path],
) -> None:
    _ = make_track_file("a.mp3", title="One", artist="Guest A", album_artist="Various", track=1)
    _ = make_track_file("b.mp3", title="Two", artist="Guest A", album_artist="Various", track=2)

    album = extract(album_dir)

    assert album.artist == "Various"
    assert [t.artist for t in album.tracks] == ["Guest A", "Guest A"]


def test_comment_and_lyrics_stay_on_their_track(album_dir: Path, make_track_file: Callable[..., Path]) -> None:
    _ = make_track_file("a.mp3", title="One", track=1, comment="Live", lyrics="words")
    _ = make_track_file("b.mp3", title="Two", track=2)

    album = extract(album_dir)

    assert [(t.comment, t.lyrics) for t in album.tracks] == [("Live", "words"), (None, None)]
