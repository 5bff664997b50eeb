"""CLI app entrypoint and error mapping."""

from __future__ import annotations

import sys

from rostersync import (
    AuthenticationError,
    ConfigError,
    ProviderError,
    RosterLoadError,
    RosterValidationError,
    SchemaRegistrationError,
    StateError,
)


def main(argv: list[str] | None = None) -> int:
    import rostersync.cli as cli

    parser = cli.build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        cli.logging.basicConfig(level=cli.logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    try:
        if args.command == "diff":
            cli.asyncio.run(cli._run_diff(args))
        elif args.command == "enrich":
            cli.asyncio.run(cli._run_enrich(args))
        return 0
    except (ConfigError, RosterLoadError, RosterValidationError, SchemaRegistrationError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except (AuthenticationError, ProviderError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 4
    except StateError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 5
    except Exception as exc:  # pragma: no cover - defensive fallback
        print(f"error: {exc}", file=sys.stderr)
        return 1


__all__ = ["main"]
