"""Column projection shared by the tree and list renderers."""

import logging
from enum import Enum
from typing import List

from ..schema import DeviceNode

logger = logging.getLogger(__name__)


class Column(str, Enum):
    NAME = "NAME"
    SIZE = "SIZE"
    TYPE = "TYPE"
    MOUNTPOINT = "MOUNTPOINT"
    FSTYPE = "FSTYPE"
    LABEL = "LABEL"
    UUID = "UUID"


DEFAULT_COLUMNS: List[Column] = [Column.NAME, Column.SIZE, Column.TYPE, Column.MOUNTPOINT]
EXTENDED_COLUMNS: List[Column] = [
    Column.NAME,
    Column.SIZE,
    Column.TYPE,
    Column.FSTYPE,
    Column.MOUNTPOINT,
    Column.LABEL,
    Column.UUID,
]

SIZE_UNITS = ("B", "K", "M", "G", "T", "P")


def parse_columns(text: str) -> List[Column]:
    """Parse "name,size,MOUNTPOINT". Case-insensitive; duplicates kept; unknown names skipped."""
    columns = []
    for token in text.split(","):
        token = token.strip()
        if not token:
            continue
        try:
            columns.append(Column(token.upper()))
        except ValueError:
            logger.warning("ignoring unknown column %r", token)
    return columns


def human_size(size: int) -> str:
    """Binary-scaled size with one decimal: 121332826112 -> '113.0G'."""
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{value:.1f}{SIZE_UNITS[unit]}"


def cell(node: DeviceNode, column: Column) -> str:
    if column is Column.NAME:
        return node.name
    if column is Column.SIZE:
        return human_size(node.size)
    if column is Column.TYPE:
        return node.kind.value
    if column is Column.MOUNTPOINT:
        return node.mountpoint
    if column is Column.FSTYPE:
        return node.fstype
    if column is Column.LABEL:
        return node.label
    return node.uuid


def join_cells(cells: List[str]) -> str:
    """Space-join cells, dropping trailing empty ones. Values keep their own whitespace."""
    cells = list(cells)
    while cells and not cells[-1]:
        cells.pop()
    return " ".join(cells)


def header(columns: List[Column]) -> str:
    return " ".join(c.value for c in columns)


def row(node: DeviceNode, columns: List[Column]) -> str:
    return join_cells([cell(node, c) for c in columns])
