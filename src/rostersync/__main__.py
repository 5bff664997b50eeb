"""Allow running rostersync as ``python -m rostersync``."""

from rostersync.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
