"""
Page Fetcher Port

Architectural Intent:
- The one operation the pagination core needs from a resource adapter:
  fetch a single page of a scoped collection
- Owned and implemented by the concrete REST adapter, never by the core

Design Decisions:
- Uses Protocol for structural typing; a bound method or a plain async
  function with the same signature both satisfy it
- A None token means "first page"
"""

from typing import Optional, Protocol, TypeVar, runtime_checkable

from nimbus.domain.value_objects.list_options import ListOptions
from nimbus.domain.value_objects.list_scope import ListScope
from nimbus.domain.value_objects.page import Page

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class PageFetcherPort(Protocol[T_co]):
    """Fetches one page of a collection."""

    async def __call__(
        self,
        scope: ListScope,
        options: ListOptions,
        token: Optional[str],
    ) -> Page[T_co]:
        ...
