"""
Global Configuration and Display Defaults.

docgraph reads no config files and no environment variables; everything
tunable lives here as a module constant.
"""

from typing import Dict

# --- Node identity ---
# Reserved id of the synthetic node that stands for the whole collection
COLLECTION_NODE_ID = "collection"
COLLECTION_NODE_NAME = "Collection"

# Composite ids are "<type-tag><SEP><key>[<SEP><key>]", e.g. "chunk:p1:0"
ID_SEPARATOR = ":"
PAGE_ID_PREFIX = "page"
CHUNK_ID_PREFIX = "chunk"

# Chunk id that, by convention, is linked straight to its page
ROOT_CHUNK_ID = 0

URL_NODE_NAME = "Link"

# --- Sizing ---
# Relative node sizes handed to the renderer as size_hint
NODE_SIZE_HINTS: Dict[str, float] = {
    "collection": 25,
    "page": 20,
    "chunk": 5,
    "url_link": 1,
}

# Radius in px = sqrt(size_hint) * NODE_REL_SIZE
NODE_REL_SIZE = 4

# --- Colors ---
NODE_COLORS: Dict[str, str] = {
    "collection": "#f97316",  # orange
    "page": "#a855f7",  # purple
    "chunk": "#3b82f6",  # blue
    "url_link": "#22c55e",  # green
}
FALLBACK_NODE_COLOR = "#ffffff"
BACKGROUND_COLOR = "#111827"

# --- Output ---
DEFAULT_HTML_OUTPUT = "docgraph.html"
JSONL_SUFFIXES = (".jsonl", ".ndjson", ".json")

# --- Logging ---
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "[%X]"
