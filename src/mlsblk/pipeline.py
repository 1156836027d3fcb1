"""
Phase sequence: listing -> build -> sort -> mounts -> (enrich).
Each phase runs to completion before the next; nothing is re-run.
"""

import logging
from typing import Iterable, Optional, Tuple

from .enrich import enrich_topology
from .executor import Executor
from .mounts import resolve_mounts
from .ordering import sort_topology
from .sources import fetch_listing, read_mount_table
from .topology import Topology, build_topology

logger = logging.getLogger(__name__)


def collect(
    executor: Executor,
    *,
    listing: Optional[dict] = None,
    mount_entries: Optional[Iterable[Tuple[str, str]]] = None,
    enrich: bool = False,
) -> Topology:
    """
    Assemble the sorted, mount-resolved (and optionally enriched) device forest.
    Raises TopologyParseError if the disk list cannot be obtained or parsed.
    """
    if listing is None:
        listing = fetch_listing(executor)
    topology = build_topology(listing)
    sort_topology(topology)

    if mount_entries is None:
        mount_entries = read_mount_table()
    n = resolve_mounts(topology, mount_entries)
    logger.debug("resolved %d mount point(s)", n)

    if enrich:
        n = enrich_topology(topology, executor)
        logger.debug("enriched %d of %d device(s)", n, len(topology))
    return topology
