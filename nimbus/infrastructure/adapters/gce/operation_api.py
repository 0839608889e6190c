"""
GCE Operation API

Architectural Intent:
- Poll and list Compute Engine operations at global, regional and zonal
  scope
- Operations are addressed by their selfLink, which already names the scope
"""

from __future__ import annotations
import logging
from typing import Optional
from urllib.parse import urlparse

from nimbus.application.pagination.fallbacks import NotFoundPolicy, apply_policy
from nimbus.application.pagination.paged_sequence import PagedSequence
from nimbus.domain.entities.gce.operation import Operation
from nimbus.domain.value_objects.http_exchange import HttpRequest
from nimbus.domain.value_objects.list_options import ListOptions
from nimbus.domain.value_objects.page import Page
from nimbus.infrastructure.adapters.gce.base import GceResourceApi

logger = logging.getLogger(__name__)


class OperationApi(GceResourceApi[Operation]):
    collection = "operations"

    def parse_item(self, data: dict) -> Operation:
        return Operation.from_json(data)

    def _relative_path(self, self_link: str) -> str:
        """Strip the endpoint prefix from an operation selfLink."""
        base_path = urlparse(self.client.base_url).path.rstrip("/")
        path = urlparse(self_link).path
        if base_path and path.startswith(base_path):
            path = path[len(base_path):]
        return path.lstrip("/")

    async def get(self, self_link: str) -> Optional[Operation]:
        request = HttpRequest("GET", self._relative_path(self_link))
        return await apply_policy(
            self.client.execute(request, self.parse_item), NotFoundPolicy.NONE
        )

    async def delete(self, self_link: str) -> None:
        """Delete an operation record; a missing one is ignored."""
        request = HttpRequest("DELETE", self._relative_path(self_link))
        await apply_policy(self.client.execute(request), NotFoundPolicy.NONE)

    async def list_page(
        self, token: Optional[str] = None, options: Optional[ListOptions] = None
    ) -> Page[Operation]:
        return await self._list_page(self.scope(), token, options)

    def list(self, options: Optional[ListOptions] = None) -> PagedSequence[Operation]:
        return self._sequence(self.scope(), options)

    async def list_page_in_region(
        self,
        region: str,
        token: Optional[str] = None,
        options: Optional[ListOptions] = None,
    ) -> Page[Operation]:
        return await self._list_page(self.scope(region=region), token, options)

    def list_in_region(
        self, region: str, options: Optional[ListOptions] = None
    ) -> PagedSequence[Operation]:
        return self._sequence(self.scope(region=region), options)

    async def list_page_in_zone(
        self,
        zone: str,
        token: Optional[str] = None,
        options: Optional[ListOptions] = None,
    ) -> Page[Operation]:
        return await self._list_page(self.scope(zone=zone), token, options)

    def list_in_zone(
        self, zone: str, options: Optional[ListOptions] = None
    ) -> PagedSequence[Operation]:
        return self._sequence(self.scope(zone=zone), options)
