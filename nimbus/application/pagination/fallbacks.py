"""
Not-Found Fallback Policies

Architectural Intent:
- Explicit per-call error normalization for endpoints where "not found"
  means "nothing there" rather than a failure
- Each adapter method picks its policy; nothing here is applied globally

Design Decisions:
- with_fallback() takes the awaitable and the default value so the policy
  reads inline at the call site
- The not-found test is an injectable predicate; the default matches
  ResourceNotFoundError raised by the transport for HTTP 404
"""

import logging
from enum import Enum
from typing import Awaitable, Callable, Optional, TypeVar

from nimbus.domain.errors import ResourceNotFoundError
from nimbus.domain.value_objects.list_options import ListOptions
from nimbus.domain.value_objects.list_scope import ListScope
from nimbus.domain.value_objects.page import Page
from nimbus.domain.ports.page_fetcher_port import PageFetcherPort

logger = logging.getLogger(__name__)

T = TypeVar("T")
D = TypeVar("D")

NotFoundPredicate = Callable[[BaseException], bool]


def is_not_found(error: BaseException) -> bool:
    return isinstance(error, ResourceNotFoundError)


class NotFoundPolicy(Enum):
    """What a call evaluates to when the backend answers "not found"."""

    EMPTY_PAGE = "empty_page"
    NONE = "none"
    FALSE = "false"
    PROPAGATE = "propagate"

    def default(self):
        if self is NotFoundPolicy.EMPTY_PAGE:
            return Page.empty()
        if self is NotFoundPolicy.FALSE:
            return False
        return None


async def with_fallback(
    call: Awaitable[T],
    default: D,
    when: NotFoundPredicate = is_not_found,
) -> "T | D":
    """Await call, returning default instead of raising when `when(error)` holds."""
    try:
        return await call
    except Exception as e:
        if not when(e):
            raise
        logger.debug("Not-found normalised to %r: %s", default, e)
        return default


async def apply_policy(
    call: Awaitable[T],
    policy: NotFoundPolicy,
    when: NotFoundPredicate = is_not_found,
):
    """Await call under a NotFoundPolicy. PROPAGATE leaves errors untouched."""
    if policy is NotFoundPolicy.PROPAGATE:
        return await call
    return await with_fallback(call, policy.default(), when)


def empty_page_on_not_found(
    fetch: PageFetcherPort[T],
    when: NotFoundPredicate = is_not_found,
) -> PageFetcherPort[T]:
    """Wrap a page fetcher so a missing collection reads as an empty terminal page."""

    async def fetch_or_empty(
        scope: ListScope, options: ListOptions, token: Optional[str]
    ) -> Page[T]:
        return await with_fallback(fetch(scope, options, token), Page.empty(), when)

    return fetch_or_empty
