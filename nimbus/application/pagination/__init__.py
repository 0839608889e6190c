"""
Pagination Package

Architectural Intent:
- Provider-agnostic listing protocol: cursor, lazy sequence, fan-out and
  not-found fallbacks
"""

from nimbus.application.pagination.fallbacks import (
    NotFoundPolicy,
    apply_policy,
    empty_page_on_not_found,
    is_not_found,
    with_fallback,
)
from nimbus.application.pagination.page_cursor import PageCursor
from nimbus.application.pagination.paged_sequence import PagedSequence
from nimbus.application.pagination.fan_out import chain_scopes, gather_scopes

__all__ = [
    "NotFoundPolicy",
    "apply_policy",
    "empty_page_on_not_found",
    "is_not_found",
    "with_fallback",
    "PageCursor",
    "PagedSequence",
    "chain_scopes",
    "gather_scopes",
]
