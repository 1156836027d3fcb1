"""
Renderers turn a sorted Topology into text.
The tree and list renderers receive the roots, the column projection and a
jinja2 Environment; JSON output goes straight through json.dumps.
"""

from enum import Enum
from typing import List, Optional

from jinja2 import DictLoader, Environment

from ..topology import Topology
from .columns import Column
from .json_output import render as render_json
from .listing import render as render_list
from .tree import render as render_tree

TABLE_TEMPLATE = "{{ header }}\n{% for line in lines %}{{ line }}\n{% endfor %}"


class OutputFormat(str, Enum):
    TREE = "tree"
    LIST = "list"
    JSON = "json"


def make_environment() -> Environment:
    return Environment(
        loader=DictLoader({"table.txt": TABLE_TEMPLATE}),
        autoescape=False,
        keep_trailing_newline=True,
    )


def render(
    topology: Topology,
    columns: List[Column],
    fmt: OutputFormat = OutputFormat.TREE,
    env: Optional[Environment] = None,
) -> str:
    """Render the forest in the requested format."""
    if fmt is OutputFormat.JSON:
        return render_json(topology.roots)
    if env is None:
        env = make_environment()
    if fmt is OutputFormat.LIST:
        return render_list(topology.roots, columns, env)
    return render_tree(topology.roots, columns, env)
