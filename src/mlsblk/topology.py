"""
Topology builder: `diskutil list -plist` -> rooted forest of DeviceNodes.

Whole disks and APFS containers become roots; partitions and APFS volumes hang
directly beneath them. Every node is registered once, by identifier, in the
Topology arena so later phases can address it without re-walking the tree.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import ValidationError

from .errors import TopologyParseError
from .schema import ApfsVolumeRecord, DeviceKind, DeviceNode, DiskListing, PartitionRecord

logger = logging.getLogger(__name__)

APFS_CONTAINER_MARKER = "Apple_APFS_Container"
WHOLE_DISK_MARKER = "GUID_partition_scheme"

# (substrings, fstype). Order matters: container/scheme markers first, then signatures.
CONTENT_RULES: List[Tuple[Tuple[str, ...], str]] = [
    ((APFS_CONTAINER_MARKER, WHOLE_DISK_MARKER, "FDisk_partition_scheme", "Apple_partition_scheme"), ""),
    (("APFS", "41504653"), "apfs"),
    (("HFS", "Apple_HFS"), "hfs"),
    (("EFI", "C12A7328"), "vfat"),
]
MAX_FSTYPE_LEN = 31


def content_to_fstype(content: Optional[str]) -> str:
    """Map a diskutil Content string to a short fstype for display."""
    if not content:
        return ""
    for markers, fstype in CONTENT_RULES:
        if any(m in content for m in markers):
            return fstype
    return content[:MAX_FSTYPE_LEN]


class Topology:
    """Forest of device nodes plus a flat, non-owning identifier index."""

    def __init__(self) -> None:
        self.roots: List[DeviceNode] = []
        self.nodes: List[DeviceNode] = []
        self.index: Dict[str, DeviceNode] = {}

    def __len__(self) -> int:
        return len(self.nodes)

    def get_or_create(self, name: str, size: int, kind: DeviceKind) -> Tuple[DeviceNode, bool]:
        """Return (node, created). An existing node is returned untouched."""
        node = self.index.get(name)
        if node is not None:
            return node, False
        node = DeviceNode(name=name, size=size, kind=kind)
        self.nodes.append(node)
        self.index[name] = node
        return node, True

    def lookup(self, name: str) -> Optional[DeviceNode]:
        return self.index.get(name)

    def add_root(self, node: DeviceNode) -> None:
        if node.parent is None and not any(r is node for r in self.roots):
            self.roots.append(node)

    def attach(self, parent: DeviceNode, child: DeviceNode) -> bool:
        """Make child owned by parent. A node keeps the first parent it gets and never nests under itself."""
        if child is parent or child.parent is not None:
            return False
        if any(r is child for r in self.roots):
            return False
        child.parent = parent.name
        parent.children.append(child)
        return True

    def walk(self) -> Iterator[DeviceNode]:
        """Pre-order walk across all roots in root order."""
        for root in self.roots:
            yield from root.walk()


def _validate(listing: Any) -> DiskListing:
    if listing is None:
        raise TopologyParseError("no disk list")
    if not isinstance(listing, dict):
        raise TopologyParseError("disk list is not a dictionary")
    try:
        return DiskListing.model_validate(listing)
    except ValidationError as e:
        raise TopologyParseError(f"failed to parse disk list: {e.errors()[0]['msg']}") from e


def _add_partition(topology: Topology, disk: DeviceNode, part: PartitionRecord) -> None:
    if not part.device_identifier:
        return
    node, created = topology.get_or_create(part.device_identifier, part.size, DeviceKind.PARTITION)
    if created:
        node.fstype = content_to_fstype(part.content)
    topology.attach(disk, node)


def _add_apfs_volume(topology: Topology, container: DeviceNode, vol: ApfsVolumeRecord) -> None:
    if not vol.device_identifier:
        return
    node, created = topology.get_or_create(vol.device_identifier, vol.size, DeviceKind.PARTITION)
    topology.attach(container, node)
    if not created:
        return
    node.fstype = "apfs"
    if vol.mount_point:
        node.mountpoint = vol.mount_point
    if vol.volume_name:
        node.label = vol.volume_name
    if vol.volume_uuid is not None:
        node.uuid = vol.volume_uuid


def build_topology(listing: Any) -> Topology:
    """
    Build the device forest from a parsed `diskutil list -plist` dictionary.
    Raises TopologyParseError if AllDisksAndPartitions is missing or not an array;
    nothing partial is returned in that case.
    """
    parsed = _validate(listing)
    topology = Topology()

    for entry in parsed.all_disks_and_partitions:
        if not entry.device_identifier:
            logger.debug("skipping disk entry without DeviceIdentifier")
            continue
        content = entry.content or ""
        is_container = APFS_CONTAINER_MARKER in content
        is_whole = WHOLE_DISK_MARKER in content or is_container
        kind = DeviceKind.DISK if is_whole else DeviceKind.PARTITION

        disk, created = topology.get_or_create(entry.device_identifier, entry.size, kind)
        if created:
            disk.fstype = content_to_fstype(entry.content)
            topology.add_root(disk)

        for part in entry.partitions:
            _add_partition(topology, disk, part)
        for vol in entry.apfs_volumes:
            _add_apfs_volume(topology, disk, vol)

    logger.debug("built %d device(s) under %d root(s)", len(topology), len(topology.roots))
    return topology
