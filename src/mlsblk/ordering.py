"""Natural ordering of device identifiers: disk2 < disk10, disk2s9 < disk2s10."""

import functools
from typing import List

from .schema import DeviceNode
from .topology import Topology

WHOLE_DISK_PREFIX = "disk"
SLICE_SEPARATOR = "s"


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def _digit_run(s: str, i: int) -> int:
    """Index just past the run of ASCII digits starting at i."""
    j = i
    while j < len(s) and _is_digit(s[j]):
        j += 1
    return j


def compare_names(a: str, b: str) -> int:
    """cmp-style comparison of two device identifiers (negative, zero, positive)."""
    if a.startswith(WHOLE_DISK_PREFIX):
        a = a[len(WHOLE_DISK_PREFIX):]
    if b.startswith(WHOLE_DISK_PREFIX):
        b = b[len(WHOLE_DISK_PREFIX):]

    i = j = 0
    while i < len(a) and j < len(b):
        ca, cb = a[i], b[j]
        # Whole runs, so disk19 < disk100 even though both start with "1"
        if _is_digit(ca) and _is_digit(cb):
            end_a, end_b = _digit_run(a, i), _digit_run(b, j)
            na, nb = int(a[i:end_a]), int(b[j:end_b])
            if na != nb:
                return (na > nb) - (na < nb)
            i, j = end_a, end_b
            continue
        if ca == cb:
            i += 1
            j += 1
            continue
        if ca == SLICE_SEPARATOR:
            return 1
        if cb == SLICE_SEPARATOR:
            return -1
        return (ca > cb) - (ca < cb)
    # One side exhausted: the shorter remainder sorts first
    return (len(a) - i > 0) - (len(b) - j > 0)


name_key = functools.cmp_to_key(compare_names)


def _sort_nodes(nodes: List[DeviceNode]) -> None:
    nodes.sort(key=lambda n: name_key(n.name))
    for node in nodes:
        _sort_nodes(node.children)


def sort_topology(topology: Topology) -> None:
    """Sort roots and, recursively, every node's children in place."""
    _sort_nodes(topology.roots)
