"""
ListOptions Value Object

Architectural Intent:
- Caller-supplied filtering, page size and ordering for one listing
- Built once and passed unchanged to every page fetch of that listing

Design Decisions:
- Provider-neutral field names; each resource adapter translates them into
  its own query parameters (maxResults/pageToken vs limit/marker)
- The continuation token is NOT part of the options: it belongs to the
  cursor and changes between fetches
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ListOptions:
    """Filtering, page-size and sort options recognised by list endpoints."""

    max_results: Optional[int] = None
    filter: Optional[str] = None
    order_by: Optional[str] = None
    fields: Optional[str] = None
    sort_descending: bool = False

    def __post_init__(self) -> None:
        if self.max_results is not None and self.max_results < 1:
            raise ValueError(
                f"max_results must be a positive integer, got {self.max_results}"
            )

    @staticmethod
    def max_results_of(count: int) -> "ListOptions":
        return ListOptions(max_results=count)

    @staticmethod
    def filter_by(expression: str) -> "ListOptions":
        return ListOptions(filter=expression)
