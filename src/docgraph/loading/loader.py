"""
Collection Loader.

Turns raw JSONL text into validated DocumentPage records.

Loading is all-or-nothing: one bad line aborts the whole collection. After
parsing, each page is pruned of orphan chunks (non-root chunks whose parent id
is not on the page).
"""

import json
import logging
from pathlib import Path
from typing import List

from pydantic import ValidationError

from ..core.errors import EmptyInputError, FileReadError, LineParseError
from ..core.types import DocumentPage

logger = logging.getLogger(__name__)


def prune_orphans(page: DocumentPage) -> DocumentPage:
    """
    Drop chunks whose declared parent does not exist on the page.

    A chunk survives if it is a root (falsy parent_id) or its parent_id is one
    of the page's chunk ids. The id set is taken from the original chunk list
    and the filter runs once, so a chunk whose parent is itself dropped here
    is kept.
    """
    present = page.chunk_ids
    kept = [c for c in page.chunks if c.is_root or c.parent_id in present]

    dropped = len(page.chunks) - len(kept)
    if dropped == 0:
        return page

    logger.debug(f"Pruned {dropped} orphan chunk(s) from page {page.unique_id}")
    return page.model_copy(update={"chunks": kept})


def _describe_validation_error(e: ValidationError) -> str:
    first = e.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    if location:
        return f"{location}: {first['msg']}"
    return first["msg"]


def parse_line(line: str, line_number: int) -> DocumentPage:
    """Parse one JSONL line into a page, raising LineParseError on failure."""
    try:
        raw = json.loads(line)
    except (ValueError, RecursionError) as e:
        # Oversized integer literals raise a plain ValueError, deep nesting RecursionError
        raise LineParseError(line_number, str(e) or type(e).__name__) from e

    if not isinstance(raw, dict):
        raise LineParseError(
            line_number, f"expected a JSON object, got {type(raw).__name__}"
        )

    try:
        return DocumentPage.model_validate(raw)
    except ValidationError as e:
        raise LineParseError(line_number, _describe_validation_error(e)) from e


def parse_collection(text: str) -> List[DocumentPage]:
    """
    Parse a whole JSONL document into pages.

    Blank and whitespace-only lines are skipped and do not count towards line
    numbers in error messages.

    Raises:
        EmptyInputError: If the text has no readable content.
        LineParseError: If any line is not a valid page object.
    """
    if not text or not text.strip():
        raise EmptyInputError()

    lines = [line for line in text.split("\n") if line.strip()]
    logger.debug(f"Parsing {len(lines)} non-blank line(s)")

    pages = [parse_line(line, index) for index, line in enumerate(lines, start=1)]
    return [prune_orphans(page) for page in pages]


def read_collection(path: str | Path) -> List[DocumentPage]:
    """
    Read a collection file in full and parse it. A leading UTF-8 BOM is dropped.

    Raises:
        FileReadError: If the file cannot be opened or decoded as UTF-8.
        EmptyInputError, LineParseError: As for parse_collection.
    """
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(str(file_path), str(e)) from e

    pages = parse_collection(text)
    logger.debug(f"Loaded {len(pages)} page(s) from {file_path}")
    return pages
