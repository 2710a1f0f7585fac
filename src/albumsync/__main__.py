"""Allow ``python -m albumsync``."""

from albumsync.ui.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
