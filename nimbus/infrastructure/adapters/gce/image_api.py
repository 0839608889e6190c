"""
GCE Image API

Global images. Listing accepts a foreign project so public image projects
(debian-cloud, ubuntu-os-cloud, ...) can be browsed with the same client.
"""

from __future__ import annotations
from typing import Optional

from nimbus.application.pagination.fallbacks import NotFoundPolicy, apply_policy
from nimbus.application.pagination.paged_sequence import PagedSequence
from nimbus.domain.entities.gce.operation import Operation
from nimbus.domain.entities.gce.resources import Image
from nimbus.domain.value_objects.http_exchange import HttpRequest
from nimbus.domain.value_objects.list_options import ListOptions
from nimbus.domain.value_objects.page import Page
from nimbus.infrastructure.adapters.gce.base import GceResourceApi


class ImageApi(GceResourceApi[Image]):
    collection = "images"

    def parse_item(self, data: dict) -> Image:
        return Image.from_json(data)

    async def get(self, name: str, project: Optional[str] = None) -> Optional[Image]:
        return await self._get(self.scope(project=project), name)

    async def get_from_family(
        self, family: str, project: Optional[str] = None
    ) -> Optional[Image]:
        """Latest non-deprecated image of a family."""
        path = f"{self.collection_path(self.scope(project=project))}/family/{family}"
        return await apply_policy(
            self.client.execute(HttpRequest("GET", path), self.parse_item),
            NotFoundPolicy.NONE,
        )

    async def delete(self, name: str) -> Optional[Operation]:
        return await self._delete(self.scope(), name)

    async def list_page(
        self,
        token: Optional[str] = None,
        options: Optional[ListOptions] = None,
        project: Optional[str] = None,
    ) -> Page[Image]:
        return await self._list_page(self.scope(project=project), token, options)

    def list(
        self, options: Optional[ListOptions] = None, project: Optional[str] = None
    ) -> PagedSequence[Image]:
        return self._sequence(self.scope(project=project), options)
