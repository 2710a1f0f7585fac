"""Frame value helpers.

Where: src/albumsync/features/tags/domain/_frame_utils.py
What: Pure parsing routines for textual ID3 frame values.
Why: Keep the mutagen adapter focused on container access.
"""

from __future__ import annotations

__all__ = [
    "first_text",
    "parse_slash_separated",
    "parse_year",
]


def first_text(value: object) -> str | None:
    """Return the first non-empty string of a frame ``text`` attribute."""

    if isinstance(value, (list, tuple)):
        for item in value:
            text = str(item).strip()
            if text:
                return text
        return None
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_slash_separated(value: str | None) -> tuple[int | None, int | None]:
    """Parse a string in 'number/total' format.

    Returns a tuple (number, total); zero or non-numeric parts become None.
    """
    parts: list[str] = value.strip().split(sep="/") if value else []
    num = int(parts[0]) if parts and parts[0].strip().isdigit() else None
    total = int(parts[1]) if len(parts) > 1 and parts[1].strip().isdigit() else None
    return (num or None), (total or None)


def parse_year(date_str: str | None) -> int | None:
    """Parse a year from a string (expects the first 4 characters to be digits)."""
    return int(date_str[:4]) if date_str and len(date_str) >= 4 and date_str[:4].isdigit() else None
