# Where: albumsync.shared.album
# What: Album and Track dataclasses describing the desired state of an album.
# Why: Every operation reads the same manifest representation.

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Track:
    """A track entry of the manifest.

    ``artist``, ``year`` and ``genre`` fall back to the album values when None;
    ``comment`` and ``lyrics`` belong to the track alone.
    A ``disc`` of None means the album's only (first) disc.
    """

    title: str
    number: int
    artist: str | None = None
    disc: int | None = None
    ascii_title: str | None = None
    year: int | None = None
    genre: str | None = None
    comment: str | None = None
    lyrics: str | None = None

    @property
    def disc_key(self) -> int:
        return self.disc if self.disc is not None else 1

    @property
    def key(self) -> tuple[int, int]:
        """The (disc, number) pair identifying this track within its album."""
        return (self.disc_key, self.number)


@dataclass
class Album:
    """Desired metadata for one album directory."""

    title: str
    artist: str
    tracks: list[Track] = field(default_factory=list)
    cover: str | None = None
    year: int | None = None
    genre: str | None = None
    ascii_title: str | None = None

    def ordered_tracks(self) -> list[Track]:
        """Tracks sorted by (disc, number)."""
        return sorted(self.tracks, key=lambda track: track.key)

    def disc_numbers(self) -> list[int]:
        return sorted({track.disc_key for track in self.tracks})

    @property
    def is_multi_disc(self) -> bool:
        return len(self.disc_numbers()) > 1

    def max_track_number(self, disc: int) -> int:
        """Highest track number on ``disc`` (0 when the disc has no tracks)."""
        return max((t.number for t in self.tracks if t.disc_key == disc), default=0)

    def duplicate_keys(self) -> list[tuple[int, int]]:
        seen: set[tuple[int, int]] = set()
        duplicates: list[tuple[int, int]] = []
        for track in self.tracks:
            if track.key in seen and track.key not in duplicates:
                duplicates.append(track.key)
            seen.add(track.key)
        return duplicates

    def artist_for(self, track: Track) -> str:
        return track.artist if track.artist else self.artist

    def album_artist_for(self, track: Track) -> str | None:
        """The album artist to tag ``track`` with, or None when its own artist is the album's."""
        if self.artist and self.artist_for(track) != self.artist:
            return self.artist
        return None

    def year_for(self, track: Track) -> int | None:
        return track.year if track.year is not None else self.year

    def genre_for(self, track: Track) -> str | None:
        return track.genre if track.genre else self.genre


__all__ = ["Album", "Track"]
