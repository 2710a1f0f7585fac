"""Summary: Export the canonical naming helpers and the file name sanitizer.
Why: Provide a stable import surface for the renamer and tests.
"""

from .domain.sanitizer import PLACEHOLDER_TITLE, Sanitizer
from .usecases.canonical_name import (
    DEFAULT_EXTENSION,
    canonical_name,
    disc_folder_name,
    track_number_width,
)

__all__ = [
    "DEFAULT_EXTENSION",
    "PLACEHOLDER_TITLE",
    "Sanitizer",
    "canonical_name",
    "disc_folder_name",
    "track_number_width",
]
