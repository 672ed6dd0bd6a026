"""edward command line entry point.

Usage::

    python -m edward generate [-f] [-g GROUP] [-s NAME ...] [targets ...]
"""

from __future__ import annotations

import argparse
import logging
import sys


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m edward",
        description="Manage local development services",
    )
    parser.add_argument(
        "-c", "--config",
        metavar="PATH",
        default="edward.json",
        help="Config file to generate (default: ./edward.json)",
    )
    parser.add_argument(
        "--home",
        metavar="PATH",
        default=None,
        help="Override the edward home directory (default: ~/.edward or EDWARD_HOME env var)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    generate = sub.add_parser(
        "generate",
        help="Find services under the targets and add them to the config",
    )
    generate.add_argument(
        "targets",
        nargs="*",
        help="Directories to scan (default: current directory)",
    )
    generate.add_argument(
        "-f", "--force",
        action="store_true",
        help="Write without asking for confirmation",
    )
    generate.add_argument(
        "-g", "--group",
        default="",
        help="Add the new services to this group",
    )
    generate.add_argument(
        "-s", "--service",
        dest="services",
        action="append",
        default=[],
        metavar="NAME",
        help="Only add the named service (repeatable)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    from edward.client import Client
    from edward.errors import EdwardError
    from edward.home import initialize_home

    initialize_home(args.home)
    client = Client(config_path=args.config)

    try:
        client.generate(args.services, args.force, args.group, args.targets)
    except EdwardError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\n\nGeneration cancelled.", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
