"""User interfaces for albumsync."""
