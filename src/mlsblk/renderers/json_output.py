"""JSON renderer (-J): {"blockdevices": [...]} with fixed keys per device."""

import json
from typing import List

from ..schema import DeviceNode


def device_dict(node: DeviceNode) -> dict:
    """Fixed-key object for one device; "children" only when it has any."""
    out = {
        "name": node.name,
        "size": node.size,
        "type": node.kind.value,
        "mountpoint": node.mountpoint,
        "fstype": node.fstype,
        "label": node.label,
        "uuid": node.uuid,
    }
    if node.children:
        out["children"] = [device_dict(c) for c in node.children]
    return out


def render(roots: List[DeviceNode]) -> str:
    document = {"blockdevices": [device_dict(r) for r in roots]}
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"
