"""
Node detail view.

Builds the label/value rows shown when a node is inspected. Dispatch is on
GraphNode.type; each branch knows exactly which payload its tag carries.
"""

from typing import List, Tuple

from rich.table import Table
from rich.text import Text

from ..core.types import GraphNode, NodeType

DetailRows = List[Tuple[str, str]]


def _or_none(value) -> str:
    return "None" if value is None else str(value)


def node_details(node: GraphNode) -> DetailRows:
    """Return the (label, value) rows describing a node."""
    data = node.data

    if node.type == NodeType.COLLECTION:
        return [("Status", data.text)]

    if node.type == NodeType.PAGE:
        rows = [
            ("Title", data.title),
            ("Unique ID", data.unique_id),
            ("Chunk Count", str(len(data.chunks))),
            ("Copyright", data.copyright),
        ]
        if data.summary:
            rows.append(("Summary", data.summary))
        if data.keywords:
            rows.append(("Keywords", ", ".join(data.keywords)))
        return rows

    if node.type == NodeType.CHUNK:
        return [
            ("ID", str(data.id)),
            ("Unique ID", data.unique_id),
            ("Parent ID", _or_none(data.parent_id)),
            ("Parent Unique ID", _or_none(data.parent_unique_id)),
            ("Content", data.content),
        ]

    if node.type == NodeType.URL_LINK:
        return [("URL", node.id)]

    return [("Details", "No details available.")]


def render_details(node: GraphNode) -> Table:
    """Detail rows as a two-column rich table titled after the node."""
    table = Table(title=Text(f"{node.name} Details"), show_header=False, title_justify="left")
    table.add_column("Field", style="bold dim", no_wrap=True)
    table.add_column("Value", overflow="fold")
    for label, value in node_details(node):
        table.add_row(label, Text(value))
    return table
