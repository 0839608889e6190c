"""Tests for the InventoryInstances and DescribeNetworkTopology use cases."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from nimbus.application.pagination.paged_sequence import PagedSequence
from nimbus.application.use_cases.describe_network_topology import DescribeNetworkTopology
from nimbus.application.use_cases.inventory_instances import InventoryInstances
from nimbus.domain.entities.gce.instance import Instance, InstanceStatus
from nimbus.domain.entities.neutron.network import Network
from nimbus.domain.entities.neutron.subnet import Subnet
from nimbus.domain.value_objects.list_options import ListOptions
from nimbus.domain.value_objects.list_scope import ListScope
from nimbus.domain.value_objects.page import Page
from nimbus.infrastructure.adapters.gce.instance_api import InstanceApi


def instance(name, zone, status=InstanceStatus.RUNNING):
    return Instance(
        id=name,
        name=name,
        zone=f"https://compute.example.com/projects/p/zones/{zone}",
        status=status,
    )


def sequence_of(*items):
    async def fetch(scope, options, token):
        return Page(items=items)

    return PagedSequence.of(fetch, ListScope(project="tenant"))


class TestInventoryInstances:
    @pytest.mark.asyncio
    async def test_sequential_inventory(self):
        api = MagicMock()
        listed = {
            "zone-a": [
                instance("web-1", "zone-a"),
                instance("web-2", "zone-a", InstanceStatus.TERMINATED),
            ],
            "zone-b": [instance("db-1", "zone-b")],
            "zone-c": [],
        }
        api.list = MagicMock(side_effect=lambda zone, options: sequence_of(*listed[zone]))
        options = ListOptions(max_results=100)

        inventory = await InventoryInstances(api).execute(["zone-a", "zone-b", "zone-c"], options)

        assert [c.args for c in api.list.call_args_list] == [
            ("zone-a", options),
            ("zone-b", options),
            ("zone-c", options),
        ]
        assert inventory.total == 3
        assert inventory.by_zone == {"zone-a": 2, "zone-b": 1, "zone-c": 0}
        assert inventory.by_status[InstanceStatus.RUNNING] == 2
        assert inventory.by_status[InstanceStatus.TERMINATED] == 1
        assert [i.name for i in inventory.running()] == ["web-1", "db-1"]

    @pytest.mark.asyncio
    async def test_concurrent_inventory(self):
        api = MagicMock()
        api.gather_in_zones = AsyncMock(return_value={
            "zone-b": [instance("db-1", "zone-b")],
            "zone-a": [],
        })

        inventory = await InventoryInstances(api).execute(
            ["zone-a", "zone-b"], concurrent=True
        )

        api.gather_in_zones.assert_awaited_once_with(["zone-a", "zone-b"], None)
        assert list(inventory.by_zone) == ["zone-a", "zone-b"]
        assert inventory.by_zone == {"zone-a": 0, "zone-b": 1}
        assert inventory.total == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("concurrent", [False, True])
    async def test_counts_under_requested_zone(self, transport, gce_client, concurrent):
        transport.reply({"items": [{"name": "web-1", "status": "RUNNING"}]})
        api = InstanceApi(gce_client, "acme")

        inventory = await InventoryInstances(api).execute(["us-a"], concurrent=concurrent)

        assert inventory.by_zone == {"us-a": 1}
        assert inventory.total == 1
        assert transport.last.path == "projects/acme/zones/us-a/instances"


class TestDescribeNetworkTopology:
    @pytest.mark.asyncio
    async def test_subnets_grouped_by_network(self):
        network_api = MagicMock()
        network_api.list = MagicMock(return_value=sequence_of(
            Network(id="net-1", name="private"),
            Network(id="net-2", name="public"),
        ))
        subnet_api = MagicMock()
        subnets = {
            "net-1": [Subnet(id="sub-1", network_id="net-1")],
            "net-2": [],
        }
        subnet_api.list_in_network = MagicMock(
            side_effect=lambda network_id: sequence_of(*subnets[network_id])
        )

        topology = await DescribeNetworkTopology(network_api, subnet_api).execute()

        assert [n.id for n in topology.networks] == ["net-1", "net-2"]
        assert topology.subnets_of("net-1")[0].id == "sub-1"
        assert topology.subnets_of("net-2") == []
        assert topology.subnets_of("missing") == []
