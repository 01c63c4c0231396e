"""Command line interface for permtree.

Usage:
    permtree DIRECTORY [DIRECTORY ...]              # annotated tree
    permtree --commands DIRECTORY [DIRECTORY ...]   # reproduction commands
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .api import run
from .config import OutputMode, PermtreeConfig, ProbeConfig, RenderConfig
from .errors import ConfigurationError, PathResolutionError

logger = logging.getLogger(__name__)

PROG = "permtree"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="List file owners and permissions in a compact tree view, "
                    "showing only what differs from the parent directory.",
    )
    parser.add_argument("directories", nargs="+", metavar="DIRECTORY",
                        help="Root of a subtree to inspect")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("-t", "--tree", dest="mode", action="store_const",
                      const=OutputMode.TREE, help="Show the annotated tree (default)")
    mode.add_argument("-c", "--commands", dest="mode", action="store_const",
                      const=OutputMode.COMMANDS,
                      help="Print chown/chgrp/chmod commands reproducing the layout")
    parser.set_defaults(mode=OutputMode.TREE)

    parser.add_argument("--numeric-ids", action="store_true",
                        help="Use numeric uid/gid in commands instead of names")
    parser.add_argument("--no-follow", action="store_true",
                        help="Report symbolic links themselves rather than their targets")
    parser.add_argument("--indent", type=int, default=2, metavar="N",
                        help="Spaces per level in the tree display (default: 2)")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Log progress (-v) or every probe (-vv) to stderr")
    parser.add_argument("--version", action="version", version=f"{PROG} {__version__}")
    return parser


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr at a level chosen by ``-v`` count."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )


def config_from_args(args: argparse.Namespace) -> PermtreeConfig:
    return PermtreeConfig(
        mode=args.mode,
        probe=ProbeConfig(follow_symlinks=not args.no_follow),
        render=RenderConfig(indent_width=args.indent, numeric_ids=args.numeric_ids),
        warn_on_errors=args.verbose > 0,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        lines = run(args.directories, config_from_args(args))
    except PathResolutionError as e:
        print(f"{PROG}: error: {e}", file=sys.stderr)
        return 1
    except ConfigurationError as e:
        parser.print_usage(sys.stderr)
        print(f"{PROG}: error: {e}", file=sys.stderr)
        return 2

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
