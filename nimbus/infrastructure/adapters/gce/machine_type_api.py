"""
GCE Machine Type API

Read-only, zonal.
"""

from __future__ import annotations
from typing import Optional

from nimbus.application.pagination.paged_sequence import PagedSequence
from nimbus.domain.entities.gce.resources import MachineType
from nimbus.domain.value_objects.list_options import ListOptions
from nimbus.domain.value_objects.page import Page
from nimbus.infrastructure.adapters.gce.base import GceResourceApi


class MachineTypeApi(GceResourceApi[MachineType]):
    collection = "machineTypes"

    def parse_item(self, data: dict) -> MachineType:
        return MachineType.from_json(data)

    async def get(self, zone: str, name: str) -> Optional[MachineType]:
        return await self._get(self.scope(zone=zone), name)

    async def list_page(
        self,
        zone: str,
        token: Optional[str] = None,
        options: Optional[ListOptions] = None,
    ) -> Page[MachineType]:
        return await self._list_page(self.scope(zone=zone), token, options)

    def list(
        self, zone: str, options: Optional[ListOptions] = None
    ) -> PagedSequence[MachineType]:
        return self._sequence(self.scope(zone=zone), options)
