"""Cursor-driven pagination over HTML pages."""

import logging
from enum import Enum
from typing import Callable, Generic, List, Optional, Set, Tuple, TypeVar

from codehub_trending.domain.showcase import PaginationCursor

logger = logging.getLogger(__name__)

T = TypeVar("T")


class WalkState(Enum):
    HAS_CURSOR = "has_cursor"
    DONE = "done"


class PaginationWalker(Generic[T]):
    """
    Walks a paginated listing until the page stops offering a cursor.

    The walk also ends when a page offers a cursor that was already followed,
    so a listing whose cursor never advances cannot loop forever.
    """

    def __init__(
        self,
        fetch_page: Callable[[PaginationCursor], str],
        extract_page: Callable[[str], Tuple[List[T], PaginationCursor]],
        max_pages: Optional[int] = None,
        logger: logging.Logger = logger,
    ):
        """
        Initialize pagination walker.

        Args:
            fetch_page: Returns the document for a cursor (None for the first page)
            extract_page: Returns the page's records and its next cursor
            max_pages: Upper bound on page fetches; None walks until the end
            logger: Sink for loop-guard warnings
        """
        self.fetch_page = fetch_page
        self.extract_page = extract_page
        self.max_pages = max_pages
        self.logger = logger
        self.pages_fetched = 0

    def walk(self) -> List[T]:
        """
        Fetch every page and concatenate their records in page order.

        Returns:
            All records, in page order and document order within a page
        """
        records: List[T] = []
        seen_cursors: Set[str] = set()
        self.pages_fetched = 0

        page_records, cursor = self._fetch(None)
        records.extend(page_records)
        state = self._next_state(cursor, seen_cursors)

        while state is WalkState.HAS_CURSOR:
            seen_cursors.add(cursor)
            page_records, cursor = self._fetch(cursor)
            records.extend(page_records)
            state = self._next_state(cursor, seen_cursors)

        self.logger.info(f"Pagination finished after {self.pages_fetched} pages, {len(records)} records")
        return records

    def _fetch(self, cursor: PaginationCursor) -> Tuple[List[T], PaginationCursor]:
        document = self.fetch_page(cursor)
        self.pages_fetched += 1
        page_records, next_cursor = self.extract_page(document)
        self.logger.debug(
            f"Page {self.pages_fetched}: {len(page_records)} records, next cursor {next_cursor!r}"
        )
        return page_records, next_cursor

    def _next_state(self, cursor: PaginationCursor, seen_cursors: Set[str]) -> WalkState:
        if not cursor:
            return WalkState.DONE

        if cursor in seen_cursors:
            self.logger.warning(f"Cursor {cursor!r} was already followed. Stopping pagination.")
            return WalkState.DONE

        if self.max_pages is not None and self.pages_fetched >= self.max_pages:
            self.logger.info(f"Reached page limit of {self.max_pages}. Stopping pagination.")
            return WalkState.DONE

        return WalkState.HAS_CURSOR
