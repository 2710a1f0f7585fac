"""Summary: Export the tag snapshot types and ID3 container helpers.
Why: Give reconcile use cases one import surface for tag access.
"""

from .adapters.id3_container import Id3TagEditor, clear_tags, open_tags, read_snapshot
from .domain.models import CoverImage, TagSnapshot, infer_mime

__all__ = [
    "CoverImage",
    "Id3TagEditor",
    "TagSnapshot",
    "clear_tags",
    "infer_mime",
    "open_tags",
    "read_snapshot",
]
