"""Command-line options."""

import argparse
from pathlib import Path
from typing import List, Optional

from .renderers import OutputFormat
from .renderers.columns import DEFAULT_COLUMNS, EXTENDED_COLUMNS, Column, parse_columns


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mlsblk",
        description="List block devices (disks, partitions, APFS containers and volumes).",
    )
    parser.add_argument("-f", "--fs", action="store_true", help="include FSTYPE, LABEL and UUID (queries each device)")
    parser.add_argument("-o", "--output", metavar="COLS", help="output columns, e.g. NAME,SIZE,FSTYPE,MOUNTPOINT")
    parser.add_argument("-J", "--json", action="store_true", help="JSON output")
    parser.add_argument("-l", "--list", action="store_true", help="list format instead of tree")
    parser.add_argument(
        "--from-listing",
        type=Path,
        metavar="PATH",
        help="read a saved 'diskutil list -plist' capture instead of running diskutil",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.output and not parse_columns(args.output):
        parser.error("invalid -o columns")
    return args


def resolve_columns(args: argparse.Namespace) -> List[Column]:
    """-o wins; otherwise -f selects the extended set."""
    if args.output:
        return parse_columns(args.output)
    if args.fs:
        return list(EXTENDED_COLUMNS)
    return list(DEFAULT_COLUMNS)


def output_format(args: argparse.Namespace) -> OutputFormat:
    if args.json:
        return OutputFormat.JSON
    if args.list:
        return OutputFormat.LIST
    return OutputFormat.TREE
