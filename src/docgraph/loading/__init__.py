"""
Loading module for docgraph.

Converts JSONL text into validated DocumentPage records.
"""

from .loader import parse_collection, parse_line, prune_orphans, read_collection

__all__ = ["parse_collection", "parse_line", "prune_orphans", "read_collection"]
