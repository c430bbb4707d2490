"""CLI entry point for segglob — I/O boundary only."""

from __future__ import annotations

import argparse
import logging
import sys

from segpath import SegpathError, fs
from segpath.filter import PatternFilter
from segpath.formatter.plain import PlainOptions, format_plain
from segpath.path import Path, Paths
from segpath.result import ErrorKind
from segpath.walker import WalkOptions, walk


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser for the ``segglob`` command.
    """
    parser = argparse.ArgumentParser(
        prog="segglob",
        description="find files whose name matches a shell-style wildcard pattern",
    )
    parser.add_argument(
        "pattern",
        help="Wildcard pattern matched against file names (quote it)",
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Root directory to search (default: current directory)",
    )
    parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        help="Search subdirectories too",
    )
    parser.add_argument(
        "-L",
        "--level",
        type=int,
        default=None,
        dest="max_depth",
        help="Max directory depth to descend into with -r (0 = root only)",
    )
    parser.add_argument(
        "-I",
        "--exclude",
        action="append",
        default=[],
        dest="patterns",
        help="Skip entries matching pattern (can be specified multiple times)",
    )
    parser.add_argument(
        "--gitignore",
        action="store_true",
        help="Skip entries ignored by the root .gitignore",
    )
    parser.add_argument(
        "--follow-symlinks",
        action="store_true",
        dest="follow_symlinks",
        help="Descend into symlinked directories",
    )
    parser.add_argument(
        "--sort",
        choices=["none", "asc", "desc"],
        default="asc",
        dest="order",
        help="Output order (default: asc); none keeps directory order",
    )
    parser.add_argument(
        "--relative",
        action="store_true",
        help="Print paths relative to the search root",
    )
    parser.add_argument(
        "--csv",
        action="store_true",
        dest="csv_mode",
        help="Output as CSV (parent_dir, filename, fullpath, depth)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        dest="output_file",
        help="Write output to a file instead of stdout",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log filesystem diagnostics to stderr",
    )
    return parser


def run_segglob(argv: list[str] | None = None) -> str:
    """Run segglob with provided CLI args and return formatted output.

    This function is intentionally side-effect free and is the primary
    test target for CLI behavior.

    Args:
        argv: Command-line argument list without program name. If ``None``,
            uses process arguments via ``argparse`` defaults.

    Returns:
        str: Final rendered output.

    Raises:
        SegpathError: On any user-facing validation or I/O error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    return _run_with_args(args)


def _resolve_root(directory: str) -> Path:
    """Parse directory and validate it is a directory.

    Raises:
        SegpathError: If directory does not exist or is not a directory.
    """
    root = Path.parse(directory)
    if not fs.is_dir(root):
        raise SegpathError(f"'{directory}' is not a directory")
    return root


def _validate_option_combinations(args: argparse.Namespace) -> None:
    """Validate incompatible CLI option combinations.

    Raises:
        SegpathError: If incompatible options are combined.
    """
    if args.max_depth is not None and not args.recursive:
        raise SegpathError("--level requires --recursive (-r)")
    if args.max_depth is not None and args.max_depth < 0:
        raise SegpathError("Invalid level, must not be negative.")
    if args.csv_mode and args.relative:
        raise SegpathError("--csv is incompatible with --relative")


def _format_output(args: argparse.Namespace, root: Path, paths: Paths) -> str:
    if args.csv_mode:
        from segpath.formatter.csv_ import CsvOptions, format_csv

        return format_csv(paths, CsvOptions(root_path=root, order=args.order))

    plain_opts = PlainOptions(
        root_path=root if args.relative else None,
        order=args.order,
    )
    return format_plain(paths, plain_opts)


def _run_with_args(args: argparse.Namespace) -> str:
    """Run the walk/format pipeline for parsed arguments.

    Raises:
        SegpathError: On any user-facing validation or I/O error.
    """
    _validate_option_combinations(args)
    root = _resolve_root(args.directory)

    entry_filter = PatternFilter(args.patterns) if args.patterns else None
    walk_opts = WalkOptions(
        max_depth=args.max_depth,
        follow_symlinks=args.follow_symlinks,
        gitignore=args.gitignore,
    )

    result = walk(root, args.pattern, args.recursive, walk_opts, entry_filter)
    if result.error is ErrorKind.NOT_EXISTS:
        raise SegpathError(f"'{args.directory}' is not a directory")
    if result.error is ErrorKind.OS_ERROR:
        raise SegpathError(f"cannot read directory tree under '{args.directory}'")

    return _format_output(args, root, result.value)


def main() -> None:
    """Run the CLI entry point with process arguments.

    Parses args exactly once and writes output to stdout or ``-o`` file.
    Exits with code 1 on user-facing errors.
    """
    parser = build_parser()
    args = parser.parse_args()  # single parse

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s | %(levelname)s | %(name)s: %(message)s",
        )

    try:
        output = _run_with_args(args)
    except SegpathError as exc:
        sys.stderr.write(f"segglob: {exc}\n")
        sys.exit(1)

    text = output + "\n" if output else ""
    if args.output_file:
        written = fs.write_text(Path.parse(args.output_file), text)
        if not written.value:
            sys.stderr.write(
                f"segglob: cannot write to '{args.output_file}': {written.error.name}\n"
            )
            sys.exit(1)
    else:
        sys.stdout.write(text)
