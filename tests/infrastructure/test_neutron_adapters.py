"""
Tests for the OpenStack Neutron resource adapters.

Coverage strategy
-----------------
  1. Marker pagination follows the rel=next link until it disappears.
  2. ListOptions map to limit/fields/sort_key/sort_dir and attribute filters.
  3. get/update answer None for a missing resource; delete answers False.
  4. create wraps the body in the singular resource key and propagates
     every error.
  5. Router interfaces use flat bodies on add/remove_router_interface.
"""

import pytest

from nimbus.domain.entities.neutron.common import NetworkStatus
from nimbus.domain.entities.neutron.network import CreateNetwork, UpdateNetwork
from nimbus.domain.entities.neutron.port import CreatePort, UpdatePort
from nimbus.domain.entities.neutron.router import CreateRouter, UpdateRouter
from nimbus.domain.entities.neutron.subnet import CreateSubnet, UpdateSubnet
from nimbus.domain.errors import ClientRequestError, ResourceNotFoundError
from nimbus.domain.value_objects.list_options import ListOptions
from nimbus.domain.value_objects.list_scope import ListScope
from nimbus.infrastructure.adapters.neutron.base import neutron_query, next_marker
from nimbus.infrastructure.adapters.neutron.network_api import NetworkApi
from nimbus.infrastructure.adapters.neutron.port_api import PortApi
from nimbus.infrastructure.adapters.neutron.router_api import RouterApi
from nimbus.infrastructure.adapters.neutron.subnet_api import SubnetApi

ENDPOINT = "http://neutron.example.com:9696/v2.0"


def next_link(collection, marker, limit=2):
    return [
        {"rel": "next", "href": f"{ENDPOINT}/{collection}?limit={limit}&marker={marker}"},
        {"rel": "previous", "href": f"{ENDPOINT}/{collection}?limit={limit}&marker=prev&page_reverse=True"},
    ]


class TestMarker:
    def test_next_marker_from_link(self):
        assert next_marker(next_link("networks", "net-2")) == "net-2"

    def test_no_next_link(self):
        assert next_marker(None) is None
        assert next_marker([]) is None
        assert next_marker([{"rel": "previous", "href": f"{ENDPOINT}/networks?marker=x"}]) is None

    def test_query_mapping(self):
        options = ListOptions(
            max_results=20,
            filter="name=web&status=ACTIVE",
            fields="id,name",
            order_by="name",
            sort_descending=True,
        )
        query = neutron_query(ListScope(project="tenant-1"), options, "m1")
        assert query == (
            ("tenant_id", "tenant-1"),
            ("name", "web"),
            ("status", "ACTIVE"),
            ("limit", "20"),
            ("fields", "id"),
            ("fields", "name"),
            ("sort_key", "name"),
            ("sort_dir", "desc"),
            ("marker", "m1"),
        )

    def test_fields_always_request_id(self):
        query = neutron_query(ListScope(), ListOptions(fields="name, status"), None)
        assert query == (("fields", "name"), ("fields", "status"), ("fields", "id"))

    def test_parent_filter(self):
        scope = ListScope().with_parent("net-1")
        assert neutron_query(scope, None, None, "network_id") == (("network_id", "net-1"),)
        assert neutron_query(scope, None, None) == ()


class TestNetworkApi:
    @pytest.mark.asyncio
    async def test_list_follows_markers(self, transport, neutron_client):
        transport.reply({
            "networks": [{"id": "net-1"}, {"id": "net-2"}],
            "networks_links": next_link("networks", "net-2"),
        })
        transport.reply({"networks": [{"id": "net-3", "status": "ACTIVE"}], "networks_links": []})
        api = NetworkApi(neutron_client)

        networks = await api.list(ListOptions(max_results=2)).collect()

        assert [n.id for n in networks] == ["net-1", "net-2", "net-3"]
        assert networks[2].status is NetworkStatus.ACTIVE
        assert transport.base_urls[0] == ENDPOINT
        assert transport.requests[0].path == "networks"
        assert transport.query_of(0) == {"limit": "2"}
        assert transport.query_of(1) == {"limit": "2", "marker": "net-2"}

    @pytest.mark.asyncio
    async def test_list_with_fields_excluding_id(self, transport, neutron_client):
        transport.reply({"networks": [{"name": "a"}, {"name": "b"}]})

        networks = [n async for n in NetworkApi(neutron_client).list(ListOptions(fields="name")).items()]

        assert [n.name for n in networks] == ["a", "b"]
        assert transport.last.query == (("fields", "name"), ("fields", "id"))

    @pytest.mark.asyncio
    async def test_tenant_scoped_listing(self, transport, neutron_client):
        transport.reply({"networks": []})
        await NetworkApi(neutron_client, tenant_id="t-1").list().collect()
        assert transport.query_of() == {"tenant_id": "t-1"}

    @pytest.mark.asyncio
    async def test_list_page(self, transport, neutron_client):
        transport.reply({"networks": [{"id": "net-3"}], "networks_links": next_link("networks", "net-3")})
        page = await NetworkApi(neutron_client).list_page(marker="net-2")
        assert page.next_token == "net-3"
        assert transport.query_of() == {"marker": "net-2"}

    @pytest.mark.asyncio
    async def test_list_not_found_is_empty(self, transport, neutron_client):
        transport.fail(404)
        api = NetworkApi(neutron_client)
        assert await api.list().collect() == []

    @pytest.mark.asyncio
    async def test_list_page_not_found_is_empty(self, transport, neutron_client):
        transport.fail(404)
        page = await NetworkApi(neutron_client).list_page()
        assert page.is_terminal and len(page) == 0

    @pytest.mark.asyncio
    async def test_get(self, transport, neutron_client):
        transport.reply({"network": {"id": "net-1", "name": "private"}})
        network = await NetworkApi(neutron_client).get("net-1")
        assert network.name == "private"
        assert transport.last.path == "networks/net-1"

    @pytest.mark.asyncio
    async def test_get_missing_is_none(self, transport, neutron_client):
        transport.fail(404)
        assert await NetworkApi(neutron_client).get("ghost") is None

    @pytest.mark.asyncio
    async def test_create_wraps_body(self, transport, neutron_client):
        transport.reply({"network": {"id": "net-9", "name": "ext"}}, status=201)
        network = await NetworkApi(neutron_client).create(CreateNetwork(name="ext", external=True))
        assert network.id == "net-9"
        assert transport.last.method == "POST"
        assert transport.last.json_body == {"network": {"name": "ext", "router:external": True}}

    @pytest.mark.asyncio
    async def test_create_errors_propagate(self, transport, neutron_client):
        transport.fail(404).fail(409)
        api = NetworkApi(neutron_client)
        with pytest.raises(ResourceNotFoundError):
            await api.create(CreateNetwork(name="a"))
        with pytest.raises(ClientRequestError):
            await api.create(CreateNetwork(name="a"))

    @pytest.mark.asyncio
    async def test_update(self, transport, neutron_client):
        transport.reply({"network": {"id": "net-1", "name": "renamed"}}).fail(404)
        api = NetworkApi(neutron_client)

        updated = await api.update("net-1", UpdateNetwork(name="renamed"))
        assert updated.name == "renamed"
        assert transport.last.method == "PUT"
        assert transport.last.json_body == {"network": {"name": "renamed"}}
        assert await api.update("ghost", UpdateNetwork(name="x")) is None

    @pytest.mark.asyncio
    async def test_delete(self, transport, neutron_client):
        transport.reply(None, status=204).fail(404)
        api = NetworkApi(neutron_client)
        assert await api.delete("net-1") is True
        assert await api.delete("net-1") is False


class TestSubnetAndPortApi:
    @pytest.mark.asyncio
    async def test_subnets_in_network(self, transport, neutron_client):
        transport.reply({"subnets": [{"id": "sub-1", "network_id": "net-1"}]})
        subnets = await SubnetApi(neutron_client).list_in_network("net-1").collect()
        assert subnets[0].id == "sub-1"
        assert transport.last.path == "subnets"
        assert transport.query_of() == {"network_id": "net-1"}

    @pytest.mark.asyncio
    async def test_subnet_crud(self, transport, neutron_client):
        transport.reply({"subnet": {"id": "sub-1", "network_id": "net-1", "cidr": "10.0.0.0/24"}})
        transport.reply({"subnet": {"id": "sub-1", "network_id": "net-1", "name": "s"}})
        api = SubnetApi(neutron_client)

        created = await api.create(CreateSubnet(network_id="net-1", cidr="10.0.0.0/24"))
        assert created.cidr == "10.0.0.0/24"
        assert transport.last.json_body == {
            "subnet": {"network_id": "net-1", "cidr": "10.0.0.0/24", "ip_version": 4}
        }
        updated = await api.update("sub-1", UpdateSubnet(name="s"))
        assert updated.name == "s"
        assert transport.last.path == "subnets/sub-1"

    @pytest.mark.asyncio
    async def test_ports(self, transport, neutron_client):
        transport.reply({
            "ports": [{"id": "p-1", "network_id": "net-1"}],
            "ports_links": next_link("ports", "p-1"),
        })
        transport.reply({"ports": []})
        transport.reply({"port": {"id": "p-2", "network_id": "net-1"}})
        transport.fail(404)
        api = PortApi(neutron_client)

        ports = await api.list_in_network("net-1", ListOptions(max_results=1)).collect()
        assert [p.id for p in ports] == ["p-1"]
        assert transport.query_of(1) == {"network_id": "net-1", "limit": "1", "marker": "p-1"}

        created = await api.create(CreatePort(network_id="net-1", name="vip"))
        assert created.id == "p-2"
        assert await api.update("ghost", UpdatePort(name="x")) is None


class TestRouterApi:
    @pytest.mark.asyncio
    async def test_crud(self, transport, neutron_client):
        transport.reply({"router": {"id": "r-1", "name": "edge"}})
        transport.reply({"router": {"id": "r-1", "name": "edge-2"}})
        transport.reply({"routers": [{"id": "r-1"}]})
        api = RouterApi(neutron_client)

        assert (await api.create(CreateRouter(name="edge"))).id == "r-1"
        assert transport.last.json_body == {"router": {"name": "edge"}}
        assert (await api.update("r-1", UpdateRouter(name="edge-2"))).name == "edge-2"
        assert [r.id for r in await api.list().collect()] == ["r-1"]

    @pytest.mark.asyncio
    async def test_add_interfaces(self, transport, neutron_client):
        transport.reply({"subnet_id": "sub-1", "port_id": "p-9"})
        transport.reply({"subnet_id": "sub-2", "port_id": "p-1"})
        api = RouterApi(neutron_client)

        by_subnet = await api.add_interface_for_subnet("r-1", "sub-1")
        assert by_subnet.port_id == "p-9"
        assert transport.last.method == "PUT"
        assert transport.last.path == "routers/r-1/add_router_interface"
        assert transport.last.json_body == {"subnet_id": "sub-1"}

        by_port = await api.add_interface_for_port("r-1", "p-1")
        assert by_port.subnet_id == "sub-2"
        assert transport.last.json_body == {"port_id": "p-1"}

    @pytest.mark.asyncio
    async def test_add_interface_to_missing_router(self, transport, neutron_client):
        transport.fail(404).fail(404)
        api = RouterApi(neutron_client)
        assert await api.add_interface_for_subnet("ghost", "sub-1") is None
        assert await api.add_interface_for_port("ghost", "p-1") is None

    @pytest.mark.asyncio
    async def test_remove_interfaces(self, transport, neutron_client):
        transport.reply({"subnet_id": "sub-1"}).fail(404)
        api = RouterApi(neutron_client)

        assert await api.remove_interface_for_subnet("r-1", "sub-1") is True
        assert transport.last.path == "routers/r-1/remove_router_interface"
        assert await api.remove_interface_for_port("r-1", "p-404") is False
        assert transport.last.json_body == {"port_id": "p-404"}

    @pytest.mark.asyncio
    async def test_delete_missing_is_false(self, transport, neutron_client):
        transport.fail(404)
        assert await RouterApi(neutron_client).delete("ghost") is False
