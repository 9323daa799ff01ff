"""Subcommand dispatcher for clipcast.

Usage:
    clipcast create  --manifest recording.yaml --output project.yaml
    clipcast split   project.yaml --at 5000 [--track TRACK_ID]
    clipcast zoom    project.yaml [--events events.json] [--preview zoom.png]
"""

import argparse
import logging
import sys


def main(args=None):
    parser = argparse.ArgumentParser(
        prog="clipcast",
        description="Timeline editing and auto-zoom for screen recordings.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log edit and scheduling decisions to stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    # Register subcommands. Each delegates to its own module's main().
    subparsers.add_parser("create", help="Create a project from a recording manifest")
    subparsers.add_parser("split", help="Split clips under the playhead")
    subparsers.add_parser("zoom", help="Show or recompute the zoom schedule")

    # Parse only the subcommand name, pass the rest to the subcommand's parser.
    parsed, remaining = parser.parse_known_args(args)

    if parsed.command is None:
        parser.print_help()
        sys.exit(1)

    if parsed.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if parsed.command == "create":
        from .create_cli import main as create_main
        create_main(remaining)
    elif parsed.command == "split":
        from .split_cli import main as split_main
        split_main(remaining)
    elif parsed.command == "zoom":
        from .zoom_cli import main as zoom_main
        zoom_main(remaining)


if __name__ == "__main__":
    main()
