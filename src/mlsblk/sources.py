"""
Structured-record sources: diskutil plists and the live mount table.

Turns external tool output into plain dicts / typed records so the topology
engine never touches the serialization format. All commands go through the
executor.
"""

import logging
import plistlib
from pathlib import Path
from typing import Any, List, Tuple, Union
from xml.parsers.expat import ExpatError

import psutil
from pydantic import ValidationError

from .errors import LookupFailure, TopologyParseError
from .executor import OUTPUT_ENCODING, Executor
from .schema import DiskInfoRecord

logger = logging.getLogger(__name__)

LIST_COMMAND = ["diskutil", "list", "-plist"]
INFO_COMMAND = ["diskutil", "info", "-plist"]


def parse_plist(data: Union[str, bytes]) -> Any:
    """
    Parse XML or binary plist data. Raises ValueError on anything unreadable.
    Text from the executor is turned back into the exact bytes diskutil wrote.
    """
    try:
        if isinstance(data, str):
            data = data.encode(OUTPUT_ENCODING, errors="surrogateescape")
        return plistlib.loads(data)
    except (plistlib.InvalidFileException, ExpatError, ValueError, TypeError) as e:
        raise ValueError(f"invalid plist: {e}") from e


def _listing_dict(data: Union[str, bytes], source: str) -> dict:
    if not data or not data.strip():
        raise TopologyParseError(f"{source} produced no output")
    try:
        plist = parse_plist(data)
    except ValueError as e:
        raise TopologyParseError(f"failed to parse disk list from {source}: {e}") from e
    if not isinstance(plist, dict):
        raise TopologyParseError(f"failed to parse disk list from {source}: top level is not a dictionary")
    return plist


def fetch_listing(executor: Executor) -> dict:
    """Run `diskutil list -plist` and return the top-level dictionary."""
    r = executor(LIST_COMMAND)
    if r.returncode != 0:
        detail = r.stderr.strip() or f"exit status {r.returncode}"
        raise TopologyParseError(f"failed to run diskutil list -plist ({detail})")
    return _listing_dict(r.stdout, "diskutil list -plist")


def load_listing_file(path: Path) -> dict:
    """Read a saved `diskutil list -plist` capture (XML or binary)."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise TopologyParseError(f"cannot read {path}: {e.strerror or e}") from e
    return _listing_dict(data, str(path))


def fetch_disk_info(executor: Executor, identifier: str) -> DiskInfoRecord:
    """Run `diskutil info -plist <identifier>`. Raises LookupFailure on any failure."""
    r = executor(INFO_COMMAND + [identifier])
    if r.returncode != 0:
        raise LookupFailure(identifier, r.stderr.strip() or f"exit status {r.returncode}")
    try:
        plist = parse_plist(r.stdout)
    except ValueError as e:
        raise LookupFailure(identifier, str(e)) from e
    if not isinstance(plist, dict):
        raise LookupFailure(identifier, "info plist is not a dictionary")
    try:
        return DiskInfoRecord.model_validate(plist)
    except ValidationError as e:
        raise LookupFailure(identifier, str(e)) from e


def read_mount_table() -> List[Tuple[str, str]]:
    """(device, mount point) pairs for every mounted filesystem. Empty on failure."""
    try:
        partitions = psutil.disk_partitions(all=True)
    except (OSError, psutil.Error) as e:
        logger.debug("mount table unavailable: %s", e)
        return []
    return [(p.device, p.mountpoint) for p in partitions if p.device and p.mountpoint]
