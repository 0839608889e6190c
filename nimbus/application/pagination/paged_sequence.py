"""
Paged Sequence

Architectural Intent:
- Presents page-by-page fetching as one lazy, forward-only async sequence,
  either of pages or of flattened items
- The single place a caller awaits a network round trip while listing

Design Decisions:
- Single use: once pages() or items() has been requested the sequence is
  claimed, and a second request raises SequenceConsumedError. Build a new
  sequence (or call the adapter's list() again) to iterate again.
- No prefetch: the next page is requested only when the consumer asks for
  the item after the last one of the current page
- Leaving an `async for` early simply stops fetching; nothing to clean up
- Order is exactly the backend's: pages in token order, items in page order
"""

from __future__ import annotations
import logging
from typing import AsyncIterator, Generic, Optional, TypeVar

from nimbus.application.pagination.page_cursor import PageCursor
from nimbus.domain.errors import SequenceConsumedError
from nimbus.domain.ports.page_fetcher_port import PageFetcherPort
from nimbus.domain.value_objects.list_options import ListOptions
from nimbus.domain.value_objects.list_scope import ListScope
from nimbus.domain.value_objects.page import Page

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PagedSequence(Generic[T]):
    """Lazy sequence over every page of a collection."""

    def __init__(self, cursor: PageCursor[T]) -> None:
        self.cursor = cursor
        self._claimed = False

    @classmethod
    def of(
        cls,
        fetch: PageFetcherPort[T],
        scope: ListScope,
        options: Optional[ListOptions] = None,
        not_found_as_empty: bool = False,
    ) -> PagedSequence[T]:
        return cls(
            PageCursor(fetch, scope, options, not_found_as_empty=not_found_as_empty)
        )

    @property
    def scope(self) -> ListScope:
        return self.cursor.scope

    def _claim(self) -> None:
        if self._claimed:
            raise SequenceConsumedError(
                f"Paged sequence over {self.cursor.scope} was already iterated; "
                "create a new one to list again"
            )
        self._claimed = True

    def pages(self) -> AsyncIterator[Page[T]]:
        """Iterate pages, ending after the first page without a continuation token."""
        self._claim()
        return self._iter_pages()

    def items(self) -> AsyncIterator[T]:
        """Iterate items of every page, in order."""
        self._claim()
        return self._iter_items()

    def __aiter__(self) -> AsyncIterator[T]:
        return self.items()

    async def collect(self) -> list[T]:
        """Drain the sequence into a list."""
        return [item async for item in self.items()]

    async def first_page(self) -> Page[T]:
        """Fetch only the first page. Does not claim the sequence."""
        return await self.cursor.fetch_next(None)

    async def _iter_pages(self) -> AsyncIterator[Page[T]]:
        page = await self.cursor.fetch_next(None)
        count = 1
        while True:
            yield page
            if page.is_terminal:
                logger.debug(
                    "Listing of %s exhausted after %d page(s)", self.cursor.scope, count
                )
                return
            page = await self.cursor.fetch_next(page.next_token)
            count += 1

    async def _iter_items(self) -> AsyncIterator[T]:
        async for page in self._iter_pages():
            for item in page.items:
                yield item

    def __repr__(self) -> str:
        return f"PagedSequence({self.cursor!r}, claimed={self._claimed})"
