"""Mount resolver: attach mount points from the live mount table to forest nodes."""

import logging
from typing import Iterable, Optional, Tuple

from .schema import DeviceNode
from .topology import Topology

logger = logging.getLogger(__name__)

# Only this spelling is matched; raw-device paths (/dev/rdisk*) are not.
DEVICE_PATH_PREFIX = "/dev/"


def _find(topology: Topology, identifier: str) -> Optional[DeviceNode]:
    for node in topology.walk():
        if node.name == identifier:
            return node
    return None


def resolve_mounts(topology: Topology, entries: Iterable[Tuple[str, str]]) -> int:
    """
    Set mountpoint on the first node (depth-first, current child order) whose
    identifier matches each /dev/ source. Non-device sources and unknown devices
    are ignored. Returns the number of updates applied.
    """
    updated = 0
    for source, target in entries:
        if not source or not target or not source.startswith(DEVICE_PATH_PREFIX):
            continue
        identifier = source[len(DEVICE_PATH_PREFIX):]
        node = _find(topology, identifier)
        if node is None:
            continue
        node.mountpoint = target
        updated += 1
        logger.debug("%s mounted on %s", identifier, target)
    return updated
