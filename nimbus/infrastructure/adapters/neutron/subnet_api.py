"""
Neutron subnets (/v2.0/subnets).

Subnets belong to a network; list_in_network narrows a listing to one of
them via the network_id attribute filter.
"""

from __future__ import annotations
from typing import Optional

from nimbus.application.pagination.paged_sequence import PagedSequence
from nimbus.domain.entities.neutron.subnet import CreateSubnet, Subnet, UpdateSubnet
from nimbus.domain.value_objects.list_options import ListOptions
from nimbus.infrastructure.adapters.neutron.base import NeutronResourceApi


class SubnetApi(NeutronResourceApi[Subnet]):
    collection = "subnets"
    resource = "subnet"
    parent_attribute = "network_id"

    def parse_item(self, data: dict) -> Subnet:
        return Subnet.from_json(data)

    async def create(self, subnet: CreateSubnet) -> Subnet:
        return await self._create(subnet.to_json())

    async def update(self, subnet_id: str, subnet: UpdateSubnet) -> Optional[Subnet]:
        return await self._update(subnet_id, subnet.to_json())

    def list_in_network(
        self, network_id: str, options: Optional[ListOptions] = None
    ) -> PagedSequence[Subnet]:
        return self._sequence(self.scope(parent_id=network_id), options)
