"""Entry point: mlsblk [-f] [-o COLS] [-J] [-l] [--from-listing PATH] [-v]."""

import logging
import sys
from typing import List, Optional

from .cli import output_format, parse_args, resolve_columns
from .errors import TopologyParseError
from .executor import Executor, make_executor
from .pipeline import collect
from .renderers import render
from .sources import load_listing_file

logger = logging.getLogger("mlsblk")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="mlsblk: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None, executor: Optional[Executor] = None) -> int:
    args = parse_args(argv)
    _configure_logging(args.verbose)
    if executor is None:
        executor = make_executor()

    try:
        listing = load_listing_file(args.from_listing) if args.from_listing else None
        topology = collect(executor, listing=listing, enrich=args.fs)
    except TopologyParseError as e:
        logger.error("%s", e)
        return 1

    sys.stdout.write(render(topology, resolve_columns(args), output_format(args)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
