"""
Page Cursor

Architectural Intent:
- Knows how to get "the page after token T" for one scoped collection
  without the caller knowing provider URLs or query parameters
- Holds a fetch function plus the immutable scope/options it is called with

Design Decisions:
- No retry, caching or deduplication: those belong to the transport
- Errors from the fetch function propagate unchanged unless the cursor was
  built with not_found_as_empty, in which case a not-found error becomes an
  empty terminal page
"""

import logging
from typing import Generic, Optional, TypeVar

from nimbus.application.pagination.fallbacks import (
    NotFoundPredicate,
    empty_page_on_not_found,
    is_not_found,
)
from nimbus.domain.ports.page_fetcher_port import PageFetcherPort
from nimbus.domain.value_objects.list_options import ListOptions
from nimbus.domain.value_objects.list_scope import ListScope
from nimbus.domain.value_objects.page import Page

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PageCursor(Generic[T]):
    """Fetches successive pages of one scoped collection."""

    def __init__(
        self,
        fetch: PageFetcherPort[T],
        scope: ListScope,
        options: Optional[ListOptions] = None,
        not_found_as_empty: bool = False,
        not_found_predicate: NotFoundPredicate = is_not_found,
    ) -> None:
        self.scope = scope
        self.options = options or ListOptions()
        self.not_found_as_empty = not_found_as_empty
        self._fetch = (
            empty_page_on_not_found(fetch, not_found_predicate)
            if not_found_as_empty
            else fetch
        )

    async def fetch_next(self, token: Optional[str] = None) -> Page[T]:
        """Fetch the page starting at token; None fetches the first page."""
        logger.debug(
            "Fetching page (scope=%s, token=%s)",
            self.scope,
            token,
            extra={"scope": self.scope, "token": token},
        )
        page = await self._fetch(self.scope, self.options, token)
        logger.debug(
            "Fetched %d item(s) (scope=%s, next_token=%s)",
            len(page),
            self.scope,
            page.next_token,
            extra={
                "scope": self.scope,
                "next_token": page.next_token,
                "item_count": len(page),
            },
        )
        return page

    def __repr__(self) -> str:
        return (
            f"PageCursor(scope={self.scope!s}, options={self.options!r}, "
            f"not_found_as_empty={self.not_found_as_empty})"
        )
