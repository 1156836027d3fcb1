"""Flat list renderer (-l): one row per device, pre-order across all roots."""

from typing import List

from jinja2 import Environment

from ..schema import DeviceNode
from .columns import Column, header, row


def render(roots: List[DeviceNode], columns: List[Column], env: Environment) -> str:
    lines = [row(node, columns) for root in roots for node in root.walk()]
    return env.get_template("table.txt").render(header=header(columns), lines=lines)
