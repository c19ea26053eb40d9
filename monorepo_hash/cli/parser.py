import argparse
from typing import List, Optional

from monorepo_hash import __version__
from monorepo_hash.core.models import MODE_COMPARE, MODE_GENERATE, RunConfig


EXIT_OK = 0
EXIT_CHANGED = 1
EXIT_USAGE = 2
EXIT_UNKNOWN_OPTION = 3
EXIT_WORKSPACE = 4
EXIT_UNEXPECTED = 5


DESCRIPTION = """\
Generate or compare .hash files for the packages of a JS monorepo
(pnpm, npm, yarn, bun or deno workspaces). The goal is to avoid
rebuilding Docker images when nothing changed.
"""


class UsageError(Exception):
    def __init__(self, message: str, code: int):
        super().__init__(message)
        self.code = code


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message, EXIT_UNKNOWN_OPTION)


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog="monorepo-hash", description=DESCRIPTION)
    parser.add_argument(
        "-g", "--generate", action="store_true",
        help="Generate or update .hash files for all workspaces.",
    )
    parser.add_argument(
        "-c", "--compare", action="store_true",
        help="Compare current state with existing .hash files. "
             "Exit code is 1 when something changed.",
    )
    parser.add_argument(
        "-t", "--target", action="append", default=None, metavar="PATHS",
        help="Comma-separated package paths to generate/compare (repeatable).",
    )
    parser.add_argument("-s", "--silent", action="store_true", help="Suppress output messages.")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug mode (per-file hashes).")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def normalize_targets(values: Optional[List[str]]) -> Optional[tuple]:
    """Flatten comma lists into posix repo-relative paths."""
    if values is None:
        return None
    targets = []
    for value in values:
        for part in value.split(","):
            part = part.strip().replace("\\", "/").rstrip("/")
            while part.startswith("./"):
                part = part[2:]
            if part and part not in targets:
                targets.append(part)
    return tuple(targets)


def parse_args(argv: Optional[List[str]] = None) -> RunConfig:
    args = build_parser().parse_args(argv)

    if args.generate and args.compare:
        raise UsageError("Cannot specify both --generate and --compare", EXIT_USAGE)
    if not args.generate and not args.compare:
        raise UsageError("Must specify either --generate (-g) or --compare (-c)", EXIT_USAGE)

    return RunConfig(
        mode=MODE_GENERATE if args.generate else MODE_COMPARE,
        targets=normalize_targets(args.target),
        debug=args.debug,
        silent=args.silent,
    )
