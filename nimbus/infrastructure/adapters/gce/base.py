"""
GCE Resource API Base

Architectural Intent:
- Shared plumbing for Compute Engine collection adapters: scope -> URL path,
  ListOptions -> query string, list JSON -> Page
- Each concrete API names its collection and item parser and exposes the
  resource's operations in terms of these helpers

Design Decisions:
- _fetch_page has the PageFetcherPort signature, so a bound method is the
  fetch function handed to PageCursor/PagedSequence
- Listing endpoints treat 404 as an empty collection; get and delete treat
  it as None. Mutations other than delete propagate every error.
- The continuation token is the `nextPageToken` response field, sent back
  as the `pageToken` query parameter
"""

import logging
from typing import Any, Callable, Generic, Optional, TypeVar

from nimbus.application.pagination.fallbacks import NotFoundPolicy, apply_policy
from nimbus.application.pagination.paged_sequence import PagedSequence
from nimbus.domain.entities.gce.operation import Operation
from nimbus.domain.value_objects.http_exchange import HttpRequest
from nimbus.domain.value_objects.list_options import ListOptions
from nimbus.domain.value_objects.list_scope import ListScope
from nimbus.domain.value_objects.page import Page
from nimbus.infrastructure.http.rest_client import RestClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


def gce_query(
    options: Optional[ListOptions], token: Optional[str]
) -> tuple[tuple[str, str], ...]:
    """Translate listing options and a page token into GCE query parameters."""
    query: list[tuple[str, str]] = []
    if token:
        query.append(("pageToken", token))
    if options is not None:
        if options.max_results is not None:
            query.append(("maxResults", str(options.max_results)))
        if options.filter:
            query.append(("filter", options.filter))
        if options.order_by:
            order = options.order_by
            if options.sort_descending:
                order += " desc"
            query.append(("orderBy", order))
    return tuple(query)


def scope_path(scope: ListScope) -> str:
    """projects/{project}/(global|regions/{region}|zones/{zone})"""
    if not scope.project:
        raise ValueError("GCE listing requires a project in its scope")
    base = f"projects/{scope.project}"
    if scope.zone:
        return f"{base}/zones/{scope.zone}"
    if scope.region:
        return f"{base}/regions/{scope.region}"
    return f"{base}/global"


def parse_page(data: Optional[dict[str, Any]], parse_item: Callable[[dict], T]) -> Page[T]:
    data = data or {}
    return Page(
        items=tuple(parse_item(item) for item in data.get("items", [])),
        next_token=data.get("nextPageToken"),
    )


class GceResourceApi(Generic[T]):
    """Base class for one Compute Engine collection."""

    collection: str = ""

    def __init__(self, client: RestClient, project: str) -> None:
        self.client = client
        self.project = project

    def parse_item(self, data: dict[str, Any]) -> T:
        raise NotImplementedError

    def scope(
        self,
        region: Optional[str] = None,
        zone: Optional[str] = None,
        project: Optional[str] = None,
    ) -> ListScope:
        return ListScope(project=project or self.project, region=region, zone=zone)

    def collection_path(self, scope: ListScope) -> str:
        return f"{scope_path(scope)}/{self.collection}"

    async def _fetch_page(
        self, scope: ListScope, options: ListOptions, token: Optional[str]
    ) -> Page[T]:
        request = HttpRequest(
            "GET", self.collection_path(scope), query=gce_query(options, token)
        )
        page = await self.client.execute(
            request, lambda data: parse_page(data, self.parse_item)
        )
        self.client.record_page(self.collection, len(page))
        return page

    async def _list_page(
        self,
        scope: ListScope,
        token: Optional[str],
        options: Optional[ListOptions],
    ) -> Page[T]:
        return await apply_policy(
            self._fetch_page(scope, options or ListOptions(), token),
            NotFoundPolicy.EMPTY_PAGE,
        )

    def _sequence(
        self, scope: ListScope, options: Optional[ListOptions]
    ) -> PagedSequence[T]:
        return PagedSequence.of(
            self._fetch_page, scope, options, not_found_as_empty=True
        )

    async def _get(self, scope: ListScope, name: str) -> Optional[T]:
        request = HttpRequest("GET", f"{self.collection_path(scope)}/{name}")
        return await apply_policy(
            self.client.execute(request, self.parse_item), NotFoundPolicy.NONE
        )

    async def _delete(self, scope: ListScope, name: str) -> Optional[Operation]:
        request = HttpRequest("DELETE", f"{self.collection_path(scope)}/{name}")
        logger.info("GCE %s.delete: %s (%s)", self.collection, name, scope)
        return await apply_policy(
            self.client.execute(request, Operation.from_json), NotFoundPolicy.NONE
        )

    async def _insert(self, scope: ListScope, body: dict[str, Any]) -> Operation:
        request = HttpRequest("POST", self.collection_path(scope), json_body=body)
        logger.info(
            "GCE %s.insert: %s (%s)", self.collection, body.get("name"), scope
        )
        return await self.client.execute(request, Operation.from_json)

    async def _post_action(
        self,
        scope: ListScope,
        name: str,
        action: str,
        body: Optional[Any] = None,
        query: tuple[tuple[str, str], ...] = (),
        policy: NotFoundPolicy = NotFoundPolicy.PROPAGATE,
    ) -> Optional[Operation]:
        request = HttpRequest(
            "POST",
            f"{self.collection_path(scope)}/{name}/{action}",
            query=query,
            json_body=body,
        )
        logger.info("GCE %s.%s: %s (%s)", self.collection, action, name, scope)
        return await apply_policy(
            self.client.execute(request, Operation.from_json), policy
        )
