"""
Session State.

SelectionState tracks which pages are active in the projection and which single
node has its detail view open. CollectionSession is the one actor that owns the
loaded pages, the selection and the load status; every user event (file load,
checkbox toggle, node click) goes through it and runs to completion before the
next one.
"""

import asyncio
import logging
from pathlib import Path
from typing import FrozenSet, List, Optional, Sequence, Set

from ..core.errors import LoadError, LoadInProgressError
from ..core.result import Err, Ok, Result
from ..core.types import DocumentPage, GraphData, GraphNode
from ..graph.projector import project
from ..loading.loader import parse_collection, read_collection

logger = logging.getLogger(__name__)


class SelectionState:
    """
    Selected page ids plus one optional inspected node.

    The two are independent: narrowing the selection does not close the detail
    view, even when the inspected node drops out of the projected graph.
    """

    def __init__(self, pages: Sequence[DocumentPage] = ()):
        self._pages: List[DocumentPage] = list(pages)
        self._selected: Set[str] = set()
        self._inspected: Optional[GraphNode] = None

    @property
    def pages(self) -> List[DocumentPage]:
        return list(self._pages)

    @property
    def selected_ids(self) -> FrozenSet[str]:
        return frozenset(self._selected)

    @property
    def inspected(self) -> Optional[GraphNode]:
        return self._inspected

    @property
    def all_selected(self) -> bool:
        return len(self._selected) == len(self._pages)

    def is_selected(self, page_id: str) -> bool:
        return page_id in self._selected

    def toggle(self, page_id: str) -> None:
        """Flip membership of a page id. Ids not in the collection are accepted."""
        if page_id in self._selected:
            self._selected.discard(page_id)
        else:
            self._selected.add(page_id)

    def select_all(self) -> None:
        """Select every page, or clear the selection if everything is selected."""
        if self.all_selected:
            self._selected = set()
        else:
            self._selected = {page.unique_id for page in self._pages}

    def none(self) -> None:
        self._selected = set()

    def set_inspected(self, node: Optional[GraphNode]) -> None:
        """Open the detail view for `node`; None closes it."""
        self._inspected = node

    def on_new_collection_loaded(self, pages: Sequence[DocumentPage]) -> None:
        """A new collection starts with nothing selected and nothing inspected."""
        self._pages = list(pages)
        self._selected = set()
        self._inspected = None

    def selected_pages(self) -> List[DocumentPage]:
        """Selected pages, in load order."""
        return [page for page in self._pages if page.unique_id in self._selected]


class CollectionSession:
    """
    The event-handling actor of one UI session.

    Loads are all-or-nothing: a failed load records the error and leaves the
    previously committed collection and selection untouched.
    """

    def __init__(self):
        self.selection = SelectionState()
        self.is_loading = False
        self.error: Optional[LoadError] = None
        self.source: Optional[str] = None

    @property
    def pages(self) -> List[DocumentPage]:
        return self.selection.pages

    @property
    def error_message(self) -> Optional[str]:
        return self.error.message if self.error else None

    def _commit(self, pages: List[DocumentPage], source: Optional[str]) -> None:
        self.selection.on_new_collection_loaded(pages)
        self.source = source
        self.error = None
        logger.info(f"Loaded {len(pages)} page(s) from {source or '<text>'}")

    def _fail(self, error: LoadError) -> Err[LoadError]:
        self.error = error
        logger.warning(f"Load failed: {error.message}")
        return Err(error)

    def load_text(
        self, text: str, source: Optional[str] = None
    ) -> Result[List[DocumentPage], LoadError]:
        """Parse `text` and, on success, replace the current collection."""
        if self.is_loading:
            return Err(LoadInProgressError())

        self.is_loading = True
        self.error = None
        try:
            pages = parse_collection(text)
        except LoadError as e:
            return self._fail(e)
        finally:
            self.is_loading = False

        self._commit(pages, source)
        return Ok(pages)

    async def load_file(self, path: str | Path) -> Result[List[DocumentPage], LoadError]:
        """
        Read and parse a collection file without blocking the event loop.

        While the read is pending `is_loading` is True and any further load is
        rejected with LoadInProgressError. There is no cancellation.
        """
        if self.is_loading:
            return Err(LoadInProgressError())

        self.is_loading = True
        self.error = None
        try:
            pages = await asyncio.to_thread(read_collection, path)
        except LoadError as e:
            return self._fail(e)
        finally:
            self.is_loading = False

        self._commit(pages, str(path))
        return Ok(pages)

    def graph(self) -> GraphData:
        """Project the currently selected pages."""
        return project(self.selection.selected_pages())

    def status_line(self) -> str:
        selected = len(self.selection.selected_pages())
        return f"{selected} of {len(self.pages)} page(s) selected."
