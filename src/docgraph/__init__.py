"""
docgraph - Document Collection Visualizer.

Loads a line-delimited JSON document collection and projects it into a
node/link graph of pages, chunks and referenced URLs.

Key Components:
- loading: JSONL parsing and orphan-chunk pruning
- graph: projection, detail views and the HTML renderer
- state: page selection and the session actor

Usage:
    from docgraph import parse_collection, project

    pages = parse_collection(text)
    graph = project(pages)
"""

__version__ = "0.1.0"

from .core.errors import (
    DocGraphError, EmptyInputError, FileReadError, LineParseError, LoadError,
)
from .core.types import (
    Chunk, DocumentPage, GraphData, GraphLink, GraphNode, LinkLabel, NodeType, UrlLink,
)
from .graph.projector import project
from .loading.loader import parse_collection, read_collection
from .state.session import CollectionSession, SelectionState

__all__ = [
    "__version__",
    "Chunk",
    "CollectionSession",
    "DocGraphError",
    "DocumentPage",
    "EmptyInputError",
    "FileReadError",
    "GraphData",
    "GraphLink",
    "GraphNode",
    "LineParseError",
    "LinkLabel",
    "LoadError",
    "NodeType",
    "SelectionState",
    "UrlLink",
    "parse_collection",
    "project",
    "read_collection",
]
