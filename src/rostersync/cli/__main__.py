"""Allow running the CLI as ``python -m rostersync.cli``."""

from rostersync.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
