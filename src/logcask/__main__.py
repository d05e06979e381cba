# Command-line access to a logcask log file: put and get single keys.
import argparse
import os
import sys
from typing import Optional

from .const import DEFAULT_PATH
from .errors import LogcaskError
from .logcask import Logcask
from .logging import configure_logging

TYPES = {"text": str, "int": int, "float": float}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="logcask", description="Append-only key-value store")
    p.add_argument(
        "--path",
        default=os.getenv("LOGCASK_PATH", DEFAULT_PATH),
        help=f"Log file (default: $LOGCASK_PATH or {DEFAULT_PATH})",
    )
    p.add_argument(
        "--log-level",
        default=os.getenv("LOGCASK_LOG_LEVEL", "WARNING"),
        help="Logging level (default: $LOGCASK_LOG_LEVEL or WARNING)",
    )
    p.add_argument(
        "--log-format",
        choices=["json", "console"],
        default="console",
        help="Log output format (default: console)",
    )

    commands = p.add_subparsers(dest="command", required=True)

    put = commands.add_parser("put", help="Store a value")
    put.add_argument("key")
    put.add_argument("value")
    put.add_argument("--type", choices=sorted(TYPES), default="text", help="Value type (default: text)")

    get = commands.add_parser("get", help="Print a value")
    get.add_argument("key")
    return p


def main(argv: Optional[list[str]] = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, args.log_format)

    if args.command == "put":
        try:
            value = TYPES[args.type](args.value)
        except ValueError:
            print(f"Invalid {args.type} value: {args.value}", file=sys.stderr)
            return 2

    try:
        with Logcask(args.path, replay=True) as store:
            if args.command == "put":
                store.put(args.key, value)
                return 0

            value = store.get(args.key)
            if value is None:
                print(f"Key '{args.key}' not found.", file=sys.stderr)
                return 1
            print(value)
            return 0
    except LogcaskError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
