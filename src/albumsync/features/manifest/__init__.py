"""Summary: Export the manifest codec and manifest store helpers.
Why: Give the reconcile feature one import surface for manifest access.
"""

from .domain.codec import ManifestCodec
from .usecases.store import (
    export_cover,
    extras_path,
    load_cover,
    load_manifest,
    manifest_path,
    resolve_cover_path,
    save_manifest,
)

__all__ = [
    "ManifestCodec",
    "export_cover",
    "extras_path",
    "load_cover",
    "load_manifest",
    "manifest_path",
    "resolve_cover_path",
    "save_manifest",
]
