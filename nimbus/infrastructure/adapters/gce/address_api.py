"""
GCE Address API

Regional static IP addresses: get, reserve, release and list per region.
"""

from __future__ import annotations
from typing import Optional

from nimbus.application.pagination.paged_sequence import PagedSequence
from nimbus.domain.entities.gce.operation import Operation
from nimbus.domain.entities.gce.resources import Address
from nimbus.domain.value_objects.list_options import ListOptions
from nimbus.domain.value_objects.page import Page
from nimbus.infrastructure.adapters.gce.base import GceResourceApi


class AddressApi(GceResourceApi[Address]):
    collection = "addresses"

    def parse_item(self, data: dict) -> Address:
        return Address.from_json(data)

    async def get(self, region: str, name: str) -> Optional[Address]:
        return await self._get(self.scope(region=region), name)

    async def create(
        self, region: str, name: str, description: Optional[str] = None
    ) -> Operation:
        body = {"name": name}
        if description:
            body["description"] = description
        return await self._insert(self.scope(region=region), body)

    async def delete(self, region: str, name: str) -> Optional[Operation]:
        return await self._delete(self.scope(region=region), name)

    async def list_page(
        self,
        region: str,
        token: Optional[str] = None,
        options: Optional[ListOptions] = None,
    ) -> Page[Address]:
        return await self._list_page(self.scope(region=region), token, options)

    def list(
        self, region: str, options: Optional[ListOptions] = None
    ) -> PagedSequence[Address]:
        return self._sequence(self.scope(region=region), options)
