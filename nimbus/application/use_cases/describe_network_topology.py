"""
Describe Network Topology Use Case

Lists the tenant's Neutron networks and, for each one, its subnets. The
per-network subnet listings are a fan-out over parent scopes.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from nimbus.application.pagination.fan_out import gather_scopes
from nimbus.domain.entities.neutron.network import Network
from nimbus.domain.entities.neutron.subnet import Subnet
from nimbus.domain.value_objects.list_options import ListOptions
from nimbus.infrastructure.adapters.neutron.network_api import NetworkApi
from nimbus.infrastructure.adapters.neutron.subnet_api import SubnetApi

logger = logging.getLogger(__name__)


@dataclass
class NetworkTopology:
    networks: list[Network] = field(default_factory=list)
    subnets: dict[str, list[Subnet]] = field(default_factory=dict)

    def subnets_of(self, network_id: str) -> list[Subnet]:
        return self.subnets.get(network_id, [])


class DescribeNetworkTopology:
    def __init__(self, network_api: NetworkApi, subnet_api: SubnetApi):
        self.network_api = network_api
        self.subnet_api = subnet_api

    async def execute(self, options: Optional[ListOptions] = None) -> NetworkTopology:
        networks = await self.network_api.list(options).collect()
        by_network = await gather_scopes(
            [network.id for network in networks],
            self.subnet_api.list_in_network,
        )
        logger.info(
            "Topology: %d network(s), %d subnet(s)",
            len(networks),
            sum(len(s) for s in by_network.values()),
        )
        return NetworkTopology(networks=networks, subnets=by_network)
