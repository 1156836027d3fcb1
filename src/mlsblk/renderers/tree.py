"""Tree renderer: lsblk-style indented output with box-drawing connectors."""

from typing import List

from jinja2 import Environment

from ..schema import DeviceNode
from .columns import Column, cell, header, join_cells

ROOT_INDENT = "  "
BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "


def _label(node: DeviceNode, columns: List[Column]) -> str:
    parts = [node.name] + [cell(node, c) for c in columns if c is not Column.NAME]
    return join_cells(parts)


def _children_lines(node: DeviceNode, columns: List[Column], prefix: str, lines: List[str]) -> None:
    for i, child in enumerate(node.children):
        last = i == len(node.children) - 1
        lines.append(f"{prefix}{LAST_BRANCH if last else BRANCH}{_label(child, columns)}")
        _children_lines(child, columns, prefix + (SPACE if last else PIPE), lines)


def render(roots: List[DeviceNode], columns: List[Column], env: Environment) -> str:
    lines: List[str] = []
    for root in roots:
        lines.append(_label(root, columns))
        _children_lines(root, columns, ROOT_INDENT, lines)
    return env.get_template("table.txt").render(header=header(columns), lines=lines)
