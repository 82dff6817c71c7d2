"""
Error taxonomy for docgraph.

Every LoadError is terminal to a single load attempt: the session surfaces it
as one message and commits no pages.
"""

from typing import Optional


class DocGraphError(Exception):
    """Base class for all docgraph errors."""


class LoadError(DocGraphError):
    """A collection could not be loaded."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line_number = line_number


class EmptyInputError(LoadError):
    """The input contained no readable content."""

    def __init__(self, message: str = "File is empty or could not be read."):
        super().__init__(message)


class LineParseError(LoadError):
    """One line of the collection could not be parsed into a page."""

    def __init__(self, line_number: int, underlying_message: str):
        self.underlying_message = underlying_message
        super().__init__(
            f"Error parsing JSON on line {line_number}: {underlying_message}",
            line_number=line_number,
        )


class FileReadError(LoadError):
    """The collection file itself could not be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read the file {path}: {reason}")


class LoadInProgressError(LoadError):
    """A load was requested while another one is still pending."""

    def __init__(self):
        super().__init__("A collection is already being parsed.")


class UnknownNodeError(DocGraphError):
    """A node id does not exist in the current projection."""

    def __init__(self, node_id: str):
        super().__init__(f"Node not found in the current graph: {node_id}")
        self.node_id = node_id
