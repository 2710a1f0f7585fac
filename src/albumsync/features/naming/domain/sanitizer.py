"""File name sanitization functionality."""

from __future__ import annotations

import re
import unicodedata
from typing import ClassVar, Final, final


PLACEHOLDER_TITLE: Final[str] = "Untitled"


@final
class Sanitizer:
    """Make titles safe to use as file names.

    Reserved punctuation is replaced with a look-alike rather than dropped so
    names stay readable: ``"Foo: Bar?"`` becomes ``"Foo - Bar"``.
    """

    SUBSTITUTIONS: ClassVar[dict[str, str]] = {
        "<": "[",
        ">": "]",
        '"': "'",
        "/": "-",
        "|": "-",
        "~": "-",
        "\\": "_",
        "*": "_",
        "?": "",
    }

    # Colon followed by whitespace reads as a separator, a bare colon as a hyphen.
    SPACED_COLON: ClassVar[re.Pattern[str]] = re.compile(r":(?=\s)")
    WHITESPACE: ClassVar[re.Pattern[str]] = re.compile(r"\s+")

    # Explicit bidi controls; other format characters (ZWJ in emoji sequences) stay.
    BIDI_CONTROLS: ClassVar[frozenset[str]] = frozenset(
        "\u061c\u200e\u200f\u202a\u202b\u202c\u202d\u202e\u2066\u2067\u2068\u2069"
    )

    @classmethod
    def _is_control(cls, char: str) -> bool:
        return unicodedata.category(char) == "Cc" or char in cls.BIDI_CONTROLS

    @classmethod
    def clean(cls, text: str | None) -> str:
        """Replace reserved characters, drop control characters and tidy whitespace.

        Returns an empty string when nothing usable remains.
        """
        if not text:
            return ""

        text = unicodedata.normalize("NFC", str(text))
        text = cls.SPACED_COLON.sub(" -", text).replace(":", "-")

        chars: list[str] = []
        for char in text:
            if cls._is_control(char) and not char.isspace():
                continue
            chars.append(cls.SUBSTITUTIONS.get(char, char))
        text = "".join(chars)

        text = cls.WHITESPACE.sub(" ", text).strip()
        # Windows refuses names ending in a dot or a space.
        return text.rstrip(". ")

    @staticmethod
    def truncate_bytes(text: str, max_bytes: int) -> str:
        """Cut ``text`` to at most ``max_bytes`` UTF-8 bytes on a character boundary."""
        if max_bytes <= 0:
            return ""
        encoded = text.encode("utf-8")
        if len(encoded) <= max_bytes:
            return text
        return encoded[:max_bytes].decode("utf-8", errors="ignore").rstrip(". ")

    @classmethod
    def sanitize_filename(cls, stem: str | None, extension: str, max_bytes: int) -> str:
        """Build ``stem + extension`` within ``max_bytes``, keeping the extension whole.

        An unusable stem degrades to ``PLACEHOLDER_TITLE``.
        """
        cleaned = cls.clean(stem) or PLACEHOLDER_TITLE
        budget = max_bytes - len(extension.encode("utf-8"))
        truncated = cls.truncate_bytes(cleaned, budget) or cls.truncate_bytes(PLACEHOLDER_TITLE, budget)
        return f"{truncated}{extension}"


__all__ = ["PLACEHOLDER_TITLE", "Sanitizer"]
