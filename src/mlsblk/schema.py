"""
Device topology schema.

Typed contract between the diskutil record adapters, the topology builder and
the renderers. Input records mirror the plist keys of `diskutil list -plist`
and `diskutil info -plist`; DeviceNode is the single in-memory entity.
"""

from enum import Enum
from typing import Any, Iterator, List, Optional

from pydantic import BaseModel, Field, field_validator


def _string_or_none(value: Any) -> Optional[str]:
    """Non-string plist values count as absent."""
    return value if isinstance(value, str) else None


def _byte_count(value: Any) -> int:
    """Plist sizes are integers; anything else (or negative) reads as 0."""
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(value, 0)


def _mapping_list(value: Any) -> List[dict]:
    """Child sequences: non-lists read as empty, non-dict entries are dropped."""
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, dict)]


# --- Device nodes ---


class DeviceKind(str, Enum):
    DISK = "disk"
    PARTITION = "part"


class DeviceNode(BaseModel):
    """One disk, APFS container, partition or APFS volume."""

    name: str
    size: int = 0
    kind: DeviceKind = DeviceKind.DISK
    mountpoint: str = ""
    fstype: str = ""
    label: str = ""
    uuid: str = ""
    # Identifier of the owning node; set once when attached, never used for ownership
    parent: Optional[str] = Field(default=None, exclude=True)
    children: List["DeviceNode"] = Field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def walk(self) -> Iterator["DeviceNode"]:
        """Pre-order walk of this node and its subtree, in current child order."""
        yield self
        for child in self.children:
            yield from child.walk()


# --- diskutil list -plist ---


class _Record(BaseModel):
    model_config = {"extra": "ignore", "populate_by_name": True}

    @field_validator("device_identifier", mode="before", check_fields=False)
    @classmethod
    def _identifier(cls, v: Any) -> Optional[str]:
        return _string_or_none(v)

    @field_validator("size", mode="before", check_fields=False)
    @classmethod
    def _size(cls, v: Any) -> int:
        return _byte_count(v)


class PartitionRecord(_Record):
    """Entry of a whole disk's Partitions array."""

    device_identifier: Optional[str] = Field(default=None, alias="DeviceIdentifier")
    size: int = Field(default=0, alias="Size")
    content: Optional[str] = Field(default=None, alias="Content")

    @field_validator("content", mode="before")
    @classmethod
    def _content(cls, v: Any) -> Optional[str]:
        return _string_or_none(v)


class ApfsVolumeRecord(_Record):
    """Entry of an APFS container's APFSVolumes array. Carries inline volume metadata."""

    device_identifier: Optional[str] = Field(default=None, alias="DeviceIdentifier")
    size: int = Field(default=0, alias="Size")
    mount_point: Optional[str] = Field(default=None, alias="MountPoint")
    volume_name: Optional[str] = Field(default=None, alias="VolumeName")
    volume_uuid: Optional[str] = Field(default=None, alias="VolumeUUID")

    @field_validator("mount_point", "volume_name", "volume_uuid", mode="before")
    @classmethod
    def _strings(cls, v: Any) -> Optional[str]:
        return _string_or_none(v)


class DiskRecord(_Record):
    """Entry of AllDisksAndPartitions: a whole disk or an APFS container."""

    device_identifier: Optional[str] = Field(default=None, alias="DeviceIdentifier")
    size: int = Field(default=0, alias="Size")
    content: Optional[str] = Field(default=None, alias="Content")
    partitions: List[PartitionRecord] = Field(default_factory=list, alias="Partitions")
    apfs_volumes: List[ApfsVolumeRecord] = Field(default_factory=list, alias="APFSVolumes")

    @field_validator("content", mode="before")
    @classmethod
    def _content(cls, v: Any) -> Optional[str]:
        return _string_or_none(v)

    @field_validator("partitions", "apfs_volumes", mode="before")
    @classmethod
    def _children(cls, v: Any) -> List[dict]:
        return _mapping_list(v)


class DiskListing(BaseModel):
    """Top level of `diskutil list -plist`. AllDisksAndPartitions is required."""

    model_config = {"extra": "ignore", "populate_by_name": True}

    all_disks_and_partitions: List[DiskRecord] = Field(alias="AllDisksAndPartitions")

    @field_validator("all_disks_and_partitions", mode="before")
    @classmethod
    def _entries(cls, v: Any) -> List[dict]:
        if not isinstance(v, list):
            raise ValueError("AllDisksAndPartitions is not an array")
        return [e for e in v if isinstance(e, dict)]


# --- diskutil info -plist <id> ---


class DiskInfoRecord(BaseModel):
    """Per-device metadata. Every field is optional."""

    model_config = {"extra": "ignore", "populate_by_name": True}

    filesystem_type: Optional[str] = Field(default=None, alias="FilesystemType")
    volume_name: Optional[str] = Field(default=None, alias="VolumeName")
    media_name: Optional[str] = Field(default=None, alias="MediaName")
    volume_uuid: Optional[str] = Field(default=None, alias="VolumeUUID")
    disk_uuid: Optional[str] = Field(default=None, alias="DiskUUID")
    mount_point: Optional[str] = Field(default=None, alias="MountPoint")

    @field_validator("*", mode="before")
    @classmethod
    def _strings(cls, v: Any) -> Optional[str]:
        return _string_or_none(v)
