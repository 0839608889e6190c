"""
Fan-Out Listing

Architectural Intent:
- Compose per-scope listings (one per zone or region) into one logical
  listing without introducing a stateful component
- chain_scopes is the lazy, ordered composition; gather_scopes is the
  parallel variant for throughput

Design Decisions:
- A scope's sequence is built only when iteration reaches that scope, so a
  consumer that stops early never touches later zones
- gather_scopes relies on independent sequences sharing no state; one
  failing scope fails the whole gather
"""

from __future__ import annotations
import asyncio
import logging
from typing import AsyncIterator, Callable, Hashable, Iterable, TypeVar

from nimbus.application.pagination.paged_sequence import PagedSequence

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=Hashable)
T = TypeVar("T")

SequenceFactory = Callable[[S], PagedSequence[T]]


async def chain_scopes(
    scopes: Iterable[S], sequence_factory: SequenceFactory
) -> AsyncIterator[T]:
    """Yield every item of every scope, scope by scope, in input order."""
    for scope in scopes:
        logger.debug("Fan-out listing entering scope %s", scope)
        async for item in sequence_factory(scope).items():
            yield item


async def gather_scopes(
    scopes: Iterable[S], sequence_factory: SequenceFactory
) -> dict[S, list[T]]:
    """Collect every scope concurrently. Keys keep input order."""
    scope_list = list(scopes)
    results = await asyncio.gather(
        *(sequence_factory(scope).collect() for scope in scope_list)
    )
    logger.debug(
        "Fan-out gather finished: %s",
        {str(scope): len(items) for scope, items in zip(scope_list, results)},
    )
    return dict(zip(scope_list, results))
