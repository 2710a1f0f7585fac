"""Summary: Tests for manifest parsing and serialization.
Why: Malformed manifests must fail with a location, valid ones must survive a round trip.
"""

from __future__ import annotations

import textwrap

import pytest

from albumsync.features.manifest import ManifestCodec
from albumsync.shared.album import Album, Track
from albumsync.shared.errors import ManifestFormatError


def _parse(text: str) -> Album:
    return ManifestCodec.parse(textwrap.dedent(text))


class TestParse:
    def test_plain_string_tracks_are_numbered_by_position(self) -> None:
        album = _parse(
            """
            title: Demo
            artist: Someone
            tracks:
              - Intro
              - title: Outro
            """
        )

        assert album.title == "Demo"
        assert album.artist == "Someone"
        assert [(t.title, t.number, t.disc) for t in album.tracks] == [
            ("Intro", 1, None),
            ("Outro", 2, None),
        ]

    def test_missing_numbers_skip_explicitly_claimed_ones(self) -> None:
        album = _parse(
            """
            title: Demo
            artist: Someone
            tracks:
              - First
              - title: Claimed
                number: 1
              - Third
            """
        )

        assert [(t.title, t.number) for t in album.tracks] == [
            ("First", 2),
            ("Claimed", 1),
            ("Third", 3),
        ]

    def test_positions_are_counted_per_disc(self) -> None:
        album = _parse(
            """
            title: Double
            artist: Band
            tracks:
              - {title: A, disc: 1}
              - {title: B, disc: 2}
              - {title: C, disc: 2}
            """
        )

        assert [t.key for t in album.tracks] == [(1, 1), (2, 1), (2, 2)]

    def test_optional_fields(self) -> None:
        album = _parse(
            """
            title: 1989
            artists: [Alpha, Beta]
            year: 2001
            genre: Rock
            cover: cover.jpg
            tracks:
              - title: {text: 夜に駆ける, ascii: Yoru ni Kakeru}
                artist: Guest
                disc: 2
                number: 4
                year: 2002
            """
        )

        assert album.title == "1989"
        assert album.artist == "Alpha, Beta"
        assert album.year == 2001
        assert album.genre == "Rock"
        assert album.cover == "cover.jpg"
        track = album.tracks[0]
        assert track.title == "夜に駆ける"
        assert track.ascii_title == "Yoru ni Kakeru"
        assert track.artist == "Guest"
        assert track.key == (2, 4)
        assert track.year == 2002

    def test_empty_track_list(self) -> None:
        album = _parse(
            """
            title: Nothing
            artist: Nobody
            tracks:
            """
        )
        assert album.tracks == []


class TestParseErrors:
    def test_duplicate_disc_and_number_reports_the_second_track(self) -> None:
        text = (
            "title: Demo\n"
            "artist: X\n"
            "tracks:\n"
            "  - title: A\n"
            "    number: 1\n"
            "  - title: B\n"
            "    number: 1\n"
        )
        with pytest.raises(ManifestFormatError) as excinfo:
            _ = ManifestCodec.parse(text)

        assert excinfo.value.key == "tracks[1]"
        assert excinfo.value.line == 6

    @pytest.mark.parametrize("value", ['"two"', "0", "-3", "true"])
    def test_invalid_track_number(self, value: str) -> None:
        text = f"title: Demo\nartist: X\ntracks:\n  - title: A\n    number: {value}\n"
        with pytest.raises(ManifestFormatError) as excinfo:
            _ = ManifestCodec.parse(text)

        assert excinfo.value.key == "tracks[0].number"
        assert excinfo.value.line == 5
        assert "line 5" in str(excinfo.value)

    def test_missing_required_key(self) -> None:
        with pytest.raises(ManifestFormatError) as excinfo:
            _ = ManifestCodec.parse("artist: X\ntracks: []\n")
        assert excinfo.value.key == "title"

    def test_missing_track_title(self) -> None:
        with pytest.raises(ManifestFormatError) as excinfo:
            _ = ManifestCodec.parse("title: T\nartist: X\ntracks:\n  - number: 3\n")
        assert excinfo.value.key == "tracks[0].title"

    def test_yaml_syntax_error_carries_line(self) -> None:
        with pytest.raises(ManifestFormatError) as excinfo:
            _ = ManifestCodec.parse("title: Demo\nartist: [unclosed\ntracks: []\n")
        assert excinfo.value.line is not None

    @pytest.mark.parametrize("text", ["", "- just\n- a list\n", "plain scalar\n"])
    def test_top_level_must_be_a_mapping(self, text: str) -> None:
        with pytest.raises(ManifestFormatError):
            _ = ManifestCodec.parse(text)

    def test_tracks_must_be_a_list(self) -> None:
        with pytest.raises(ManifestFormatError) as excinfo:
            _ = ManifestCodec.parse("title: T\nartist: X\ntracks: nope\n")
        assert excinfo.value.key == "tracks"


class TestSerialize:
    def test_parse_restores_serialized_album(self) -> None:
        album = Album(
            title="Demo",
            artist="Band",
            cover="cover.png",
            year=1999,
            genre="Jazz",
            tracks=[
                Track(title="One", number=1, disc=1),
                Track(title="二", ascii_title="Ni", number=2, disc=1, artist="Guest"),
                Track(title="Three", number=1, disc=2, year=2000, genre="Blues"),
            ],
        )

        assert ManifestCodec.parse(ManifestCodec.serialize(album)) == album

    def test_tracks_are_written_in_disc_and_number_order(self) -> None:
        album = Album(
            title="Demo",
            artist="Band",
            tracks=[Track(title="B", number=2), Track(title="A", number=1)],
        )

        data = ManifestCodec.to_dict(album)
        assert [entry["title"] for entry in data["tracks"]] == ["A", "B"]

    def test_album_values_are_not_repeated_per_track(self) -> None:
        album = Album(
            title="Demo",
            artist="Band",
            year=2010,
            tracks=[Track(title="A", number=1, artist="Band", year=2010)],
        )

        entry = ManifestCodec.to_dict(album)["tracks"][0]
        assert entry == {"title": "A", "number": 1}

    def test_unicode_is_written_verbatim(self) -> None:
        album = Album(title="夜", artist="ヨルシカ", tracks=[Track(title="夜行", number=1)])
        assert "夜行" in ManifestCodec.serialize(album)


class TestTextValues:
    def test_surrounding_whitespace_is_stripped(self) -> None:
        album = _parse(
            """
            title: " Demo "
            artist: "Band "
            tracks:
              - title: "Intro "
                comment: "  liner notes "
            """
        )

        assert (album.title, album.artist) == ("Demo", "Band")
        assert album.tracks[0].title == "Intro"
        assert album.tracks[0].comment == "liner notes"

    def test_album_ascii_title_survives_serialization(self) -> None:
        album = _parse(
            """
            title: {text: 夜, ascii: Yoru}
            artist: ヨルシカ
            tracks: [夜行]
            """
        )

        assert (album.title, album.ascii_title) == ("夜", "Yoru")
        assert ManifestCodec.to_dict(album)["title"] == {"text": "夜", "ascii": "Yoru"}
        assert ManifestCodec.parse(ManifestCodec.serialize(album)) == album

    def test_comment_and_lyrics_round_trip(self) -> None:
        album = Album(
            title="Demo",
            artist="Band",
            tracks=[Track(title="A", number=1, comment="Live take", lyrics="first line\nsecond line")],
        )

        entry = ManifestCodec.to_dict(album)["tracks"][0]
        assert entry["comment"] == "Live take"
        assert entry["lyrics"] == "first line\nsecond line"
        assert ManifestCodec.parse(ManifestCodec.serialize(album)) == album
