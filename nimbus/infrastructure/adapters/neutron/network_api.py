"""Neutron networks (/v2.0/networks)."""

from __future__ import annotations
from typing import Optional

from nimbus.domain.entities.neutron.network import CreateNetwork, Network, UpdateNetwork
from nimbus.infrastructure.adapters.neutron.base import NeutronResourceApi


class NetworkApi(NeutronResourceApi[Network]):
    collection = "networks"
    resource = "network"

    def parse_item(self, data: dict) -> Network:
        return Network.from_json(data)

    async def create(self, network: CreateNetwork) -> Network:
        return await self._create(network.to_json())

    async def update(self, network_id: str, network: UpdateNetwork) -> Optional[Network]:
        return await self._update(network_id, network.to_json())
