"""Neutron ports (/v2.0/ports)."""

from __future__ import annotations
from typing import Optional

from nimbus.application.pagination.paged_sequence import PagedSequence
from nimbus.domain.entities.neutron.port import CreatePort, Port, UpdatePort
from nimbus.domain.value_objects.list_options import ListOptions
from nimbus.infrastructure.adapters.neutron.base import NeutronResourceApi


class PortApi(NeutronResourceApi[Port]):
    collection = "ports"
    resource = "port"
    parent_attribute = "network_id"

    def parse_item(self, data: dict) -> Port:
        return Port.from_json(data)

    async def create(self, port: CreatePort) -> Port:
        return await self._create(port.to_json())

    async def update(self, port_id: str, port: UpdatePort) -> Optional[Port]:
        return await self._update(port_id, port.to_json())

    def list_in_network(
        self, network_id: str, options: Optional[ListOptions] = None
    ) -> PagedSequence[Port]:
        return self._sequence(self.scope(parent_id=network_id), options)
