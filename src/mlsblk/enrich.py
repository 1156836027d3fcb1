"""
Metadata enricher (-f): per-device `diskutil info -plist` lookups.

Fills fstype, label, uuid and mountpoint from each device's own report. A
failed lookup leaves the node exactly as it was.
"""

import logging

from .errors import LookupFailure
from .executor import Executor
from .schema import DeviceNode, DiskInfoRecord
from .sources import fetch_disk_info
from .topology import Topology

logger = logging.getLogger(__name__)


def apply_disk_info(node: DeviceNode, info: DiskInfoRecord) -> None:
    """Merge one info record into a node, field by field."""
    if info.filesystem_type is not None:
        node.fstype = info.filesystem_type
    if info.volume_name:
        node.label = info.volume_name
    if not node.label and info.media_name:
        node.label = info.media_name
    uuid = info.volume_uuid if info.volume_uuid is not None else info.disk_uuid
    if uuid is not None:
        node.uuid = uuid
    # The device's own report beats the mount table
    if info.mount_point:
        node.mountpoint = info.mount_point


def enrich_topology(topology: Topology, executor: Executor) -> int:
    """Look up every node once, in creation order. Returns how many were enriched."""
    enriched = 0
    for node in topology.nodes:
        try:
            info = fetch_disk_info(executor, node.name)
        except LookupFailure as e:
            logger.debug("no info for %s: %s", node.name, e.reason)
            continue
        apply_disk_info(node, info)
        enriched += 1
    return enriched
