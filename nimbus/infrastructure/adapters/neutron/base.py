"""
Neutron Resource API Base

Architectural Intent:
- Shared plumbing for OpenStack Neutron v2.0 collection adapters
- Maps ListOptions to Neutron's limit/marker/fields/sort query parameters
  and a collection envelope to a Page

Design Decisions:
- The endpoint is the versioned Neutron URL (http://host:9696/v2.0);
  collection paths are relative to it
- The continuation token is the `marker` query parameter of the
  `<collection>_links` entry with rel "next"; no such link ends the listing
- Request bodies are wrapped in the singular resource key
  ({"network": {...}}) and responses unwrapped from it
- ListOptions.filter is a query-string fragment ("name=web&status=ACTIVE")
  passed through as Neutron attribute filters
- scope.project, when set, restricts the listing to that tenant;
  scope.parent_id filters on the collection's parent attribute
"""

from __future__ import annotations
import logging
from typing import Any, Callable, Generic, Optional, TypeVar
from urllib.parse import parse_qsl, urlparse

from nimbus.application.pagination.fallbacks import NotFoundPolicy, apply_policy
from nimbus.application.pagination.paged_sequence import PagedSequence
from nimbus.domain.value_objects.http_exchange import HttpRequest
from nimbus.domain.value_objects.list_options import ListOptions
from nimbus.domain.value_objects.list_scope import ListScope
from nimbus.domain.value_objects.page import Page
from nimbus.infrastructure.http.rest_client import RestClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


def neutron_query(
    scope: ListScope,
    options: Optional[ListOptions],
    marker: Optional[str],
    parent_attribute: Optional[str] = None,
) -> tuple[tuple[str, str], ...]:
    query: list[tuple[str, str]] = []
    if scope.project:
        query.append(("tenant_id", scope.project))
    if scope.parent_id and parent_attribute:
        query.append((parent_attribute, scope.parent_id))
    if options is not None:
        if options.filter:
            query.extend(parse_qsl(options.filter))
        if options.max_results is not None:
            query.append(("limit", str(options.max_results)))
        fields = [f.strip() for f in (options.fields or "").split(",") if f.strip()]
        if fields and "id" not in fields:
            # every resource parses from its id
            fields.append("id")
        query.extend(("fields", name) for name in fields)
        if options.order_by:
            query.append(("sort_key", options.order_by))
            query.append(("sort_dir", "desc" if options.sort_descending else "asc"))
    if marker:
        query.append(("marker", marker))
    return tuple(query)


def next_marker(links: Optional[list[dict[str, Any]]]) -> Optional[str]:
    """Marker of the rel=next link, or None on the last page."""
    for link in links or []:
        if link.get("rel") != "next":
            continue
        for key, value in parse_qsl(urlparse(link.get("href", "")).query):
            if key == "marker":
                return value
    return None


def parse_collection(
    data: Optional[dict[str, Any]],
    collection: str,
    parse_item: Callable[[dict], T],
) -> Page[T]:
    data = data or {}
    return Page(
        items=tuple(parse_item(item) for item in data.get(collection, [])),
        next_token=next_marker(data.get(f"{collection}_links")),
    )


class NeutronResourceApi(Generic[T]):
    """Base class for one Neutron collection."""

    collection: str = ""
    resource: str = ""
    parent_attribute: Optional[str] = None

    def __init__(self, client: RestClient, tenant_id: str = "") -> None:
        self.client = client
        self.tenant_id = tenant_id

    def parse_item(self, data: dict[str, Any]) -> T:
        raise NotImplementedError

    def scope(self, parent_id: Optional[str] = None) -> ListScope:
        return ListScope(project=self.tenant_id, parent_id=parent_id)

    def _unwrap(self, data: Optional[dict[str, Any]]) -> T:
        return self.parse_item((data or {})[self.resource])

    def _item_path(self, resource_id: str) -> str:
        return f"{self.collection}/{resource_id}"

    async def _fetch_page(
        self, scope: ListScope, options: ListOptions, token: Optional[str]
    ) -> Page[T]:
        request = HttpRequest(
            "GET",
            self.collection,
            query=neutron_query(scope, options, token, self.parent_attribute),
        )
        page = await self.client.execute(
            request, lambda data: parse_collection(data, self.collection, self.parse_item)
        )
        self.client.record_page(self.collection, len(page))
        return page

    async def list_page(
        self, marker: Optional[str] = None, options: Optional[ListOptions] = None
    ) -> Page[T]:
        """One page; marker None is the first page."""
        return await apply_policy(
            self._fetch_page(self.scope(), options or ListOptions(), marker),
            NotFoundPolicy.EMPTY_PAGE,
        )

    def list(self, options: Optional[ListOptions] = None) -> PagedSequence[T]:
        return self._sequence(self.scope(), options)

    def _sequence(
        self, scope: ListScope, options: Optional[ListOptions]
    ) -> PagedSequence[T]:
        return PagedSequence.of(
            self._fetch_page, scope, options, not_found_as_empty=True
        )

    async def get(self, resource_id: str) -> Optional[T]:
        request = HttpRequest("GET", self._item_path(resource_id))
        return await apply_policy(
            self.client.execute(request, self._unwrap), NotFoundPolicy.NONE
        )

    async def _create(self, body: dict[str, Any]) -> T:
        logger.info("Neutron %s.create: %s", self.resource, body.get("name"))
        request = HttpRequest("POST", self.collection, json_body={self.resource: body})
        return await self.client.execute(request, self._unwrap)

    async def _update(self, resource_id: str, body: dict[str, Any]) -> Optional[T]:
        request = HttpRequest(
            "PUT", self._item_path(resource_id), json_body={self.resource: body}
        )
        return await apply_policy(
            self.client.execute(request, self._unwrap), NotFoundPolicy.NONE
        )

    async def delete(self, resource_id: str) -> bool:
        """True when deleted, False when there was nothing to delete."""
        logger.info("Neutron %s.delete: %s", self.resource, resource_id)
        request = HttpRequest("DELETE", self._item_path(resource_id))
        return await apply_policy(
            self.client.execute(request, lambda _: True), NotFoundPolicy.FALSE
        )
