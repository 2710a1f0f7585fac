"""albumsync - reconcile album folders with a YAML manifest."""

__version__ = "0.1.0"
