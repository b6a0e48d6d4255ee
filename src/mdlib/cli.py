"""Command-line entrypoint for mdlib."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from . import __version__
from .config.parser import ConfigurationError, load_config
from .library import MarkdownLibrary
from .models.config import MdlibConfig, OpenErrorPolicy
from .tools.tag_extractor import TagReadError


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="mdlib",
        description="Explore the tags declared on the first line of markdown files.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-t", "--tag-char", default=None, help="Tag marker character (default: '#')")
    common.add_argument("-c", "--config", type=Path, default=None, help="Explicit YAML config file")
    common.add_argument(
        "--skip-unreadable",
        action="store_true",
        help="Skip markdown files that cannot be opened instead of failing",
    )
    common.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    tags = subparsers.add_parser("tags", parents=[common], help="List every distinct tag in a library")
    tags.add_argument("root", type=Path, help="Library root directory")

    files = subparsers.add_parser("files", parents=[common], help="List the files carrying a tag")
    files.add_argument("root", type=Path, help="Library root directory")
    files.add_argument("tag", help="Tag to look for (without marker character)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        result = load_config(args.config, root=args.root)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    for warning in result.warnings:
        logger.warning(warning)

    overrides = {}
    if args.tag_char is not None:
        overrides['tag_char'] = args.tag_char
    if args.skip_unreadable:
        overrides['on_open_error'] = OpenErrorPolicy.SKIP.value
    try:
        config = MdlibConfig.from_dict({**result.config.to_dict(), **overrides})
    except ValidationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    library = MarkdownLibrary(args.root, config)
    try:
        if args.command == "tags":
            output = library.list_all_tags()
        else:
            output = [record.to_dict() for record in library.list_files_with_tag(args.tag)]
    except TagReadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
