"""
GCE Aggregated List API

Architectural Intent:
- Project-wide listings across every zone or region in one paged call
  (projects/{project}/aggregated/{collection})
- The response `items` is a map of scope name to a per-scope envelope; a
  page is the concatenation of those envelopes in response order

Design Decisions:
- Scopes that carry only a `warning` (no resources there) contribute
  nothing to the page
- Pagination, options and not-found behaviour are the same as the
  per-scope listings
"""

from __future__ import annotations
import logging
from typing import Any, Callable, Optional, TypeVar

from nimbus.application.pagination.fallbacks import NotFoundPolicy, apply_policy
from nimbus.application.pagination.paged_sequence import PagedSequence
from nimbus.domain.entities.gce.instance import Instance
from nimbus.domain.entities.gce.resources import Address, MachineType
from nimbus.domain.ports.page_fetcher_port import PageFetcherPort
from nimbus.domain.value_objects.http_exchange import HttpRequest
from nimbus.domain.value_objects.list_options import ListOptions
from nimbus.domain.value_objects.list_scope import ListScope
from nimbus.domain.value_objects.page import Page
from nimbus.infrastructure.adapters.gce.base import gce_query
from nimbus.infrastructure.http.rest_client import RestClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_aggregated_page(
    data: Optional[dict[str, Any]],
    collection: str,
    parse_item: Callable[[dict], T],
) -> Page[T]:
    data = data or {}
    items: list[T] = []
    for scope_name, envelope in (data.get("items") or {}).items():
        resources = envelope.get(collection, [])
        if not resources and "warning" in envelope:
            logger.debug("No %s in %s: %s", collection, scope_name,
                         envelope["warning"].get("code"))
        items.extend(parse_item(item) for item in resources)
    return Page(items=tuple(items), next_token=data.get("nextPageToken"))


class AggregatedListApi:
    def __init__(self, client: RestClient, project: str) -> None:
        self.client = client
        self.project = project

    def _fetcher(
        self, collection: str, parse_item: Callable[[dict], T]
    ) -> PageFetcherPort[T]:
        async def fetch(
            scope: ListScope, options: ListOptions, token: Optional[str]
        ) -> Page[T]:
            request = HttpRequest(
                "GET",
                f"projects/{scope.project}/aggregated/{collection}",
                query=gce_query(options, token),
            )
            page = await self.client.execute(
                request,
                lambda data: parse_aggregated_page(data, collection, parse_item),
            )
            self.client.record_page(f"aggregated/{collection}", len(page))
            return page

        return fetch

    def _page(
        self,
        collection: str,
        parse_item: Callable[[dict], T],
        token: Optional[str],
        options: Optional[ListOptions],
    ):
        fetch = self._fetcher(collection, parse_item)
        return apply_policy(
            fetch(ListScope(project=self.project), options or ListOptions(), token),
            NotFoundPolicy.EMPTY_PAGE,
        )

    def _sequence(
        self,
        collection: str,
        parse_item: Callable[[dict], T],
        options: Optional[ListOptions],
    ) -> PagedSequence[T]:
        return PagedSequence.of(
            self._fetcher(collection, parse_item),
            ListScope(project=self.project),
            options,
            not_found_as_empty=True,
        )

    async def page_of_instances(
        self, token: Optional[str] = None, options: Optional[ListOptions] = None
    ) -> Page[Instance]:
        return await self._page("instances", Instance.from_json, token, options)

    def instances(self, options: Optional[ListOptions] = None) -> PagedSequence[Instance]:
        return self._sequence("instances", Instance.from_json, options)

    async def page_of_addresses(
        self, token: Optional[str] = None, options: Optional[ListOptions] = None
    ) -> Page[Address]:
        return await self._page("addresses", Address.from_json, token, options)

    def addresses(self, options: Optional[ListOptions] = None) -> PagedSequence[Address]:
        return self._sequence("addresses", Address.from_json, options)

    async def page_of_machine_types(
        self, token: Optional[str] = None, options: Optional[ListOptions] = None
    ) -> Page[MachineType]:
        return await self._page("machineTypes", MachineType.from_json, token, options)

    def machine_types(
        self, options: Optional[ListOptions] = None
    ) -> PagedSequence[MachineType]:
        return self._sequence("machineTypes", MachineType.from_json, options)
