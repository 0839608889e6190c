"""Tests for Neutron entities and their Create/Update request types."""

from nimbus.domain.entities.neutron.common import NetworkStatus
from nimbus.domain.entities.neutron.network import CreateNetwork, Network, UpdateNetwork
from nimbus.domain.entities.neutron.port import CreatePort, FixedIP, Port
from nimbus.domain.entities.neutron.router import (
    CreateRouter,
    ExternalGatewayInfo,
    Router,
    RouterInterface,
    UpdateRouter,
)
from nimbus.domain.entities.neutron.subnet import (
    AllocationPool,
    CreateSubnet,
    Subnet,
    UpdateSubnet,
)


class TestNetwork:
    def test_from_json_with_extension_attributes(self):
        network = Network.from_json({
            "id": "net-1",
            "name": "private",
            "status": "ACTIVE",
            "router:external": False,
            "provider:network_type": "vxlan",
            "provider:segmentation_id": 1001,
            "subnets": ["sub-1", "sub-2"],
        })
        assert network.status is NetworkStatus.ACTIVE
        assert network.network_type == "vxlan"
        assert network.segmentation_id == 1001
        assert network.external is False
        assert network.subnets == ("sub-1", "sub-2")

    def test_unknown_status(self):
        assert Network.from_json({"id": "n", "status": "DEGRADED"}).status is (
            NetworkStatus.UNRECOGNIZED
        )

    def test_partial_response_without_id(self):
        network = Network.from_json({"name": "private"})
        assert network.id == ""
        assert network.name == "private"

    def test_create_uses_wire_names_and_skips_unset(self):
        body = CreateNetwork(name="ext", external=True, network_type="flat").to_json()
        assert body == {
            "name": "ext",
            "router:external": True,
            "provider:network_type": "flat",
        }

    def test_update_only_sends_given_fields(self):
        assert UpdateNetwork(admin_state_up=False).to_json() == {"admin_state_up": False}


class TestSubnet:
    def test_from_json(self):
        subnet = Subnet.from_json({
            "id": "sub-1",
            "network_id": "net-1",
            "cidr": "10.0.0.0/24",
            "ip_version": 4,
            "allocation_pools": [{"start": "10.0.0.2", "end": "10.0.0.254"}],
            "host_routes": [{"destination": "0.0.0.0/0", "nexthop": "10.0.0.1"}],
        })
        assert subnet.allocation_pools == (AllocationPool("10.0.0.2", "10.0.0.254"),)
        assert subnet.host_routes[0].nexthop == "10.0.0.1"

    def test_create_expands_nested_values(self):
        body = CreateSubnet(
            network_id="net-1",
            cidr="10.0.0.0/24",
            dns_nameservers=("8.8.8.8",),
            allocation_pools=(AllocationPool("10.0.0.10", "10.0.0.20"),),
        ).to_json()
        assert body == {
            "network_id": "net-1",
            "cidr": "10.0.0.0/24",
            "ip_version": 4,
            "dns_nameservers": ["8.8.8.8"],
            "allocation_pools": [{"start": "10.0.0.10", "end": "10.0.0.20"}],
        }

    def test_update_is_independent_of_create(self):
        body = UpdateSubnet(name="renamed", enable_dhcp=False).to_json()
        assert body == {"name": "renamed", "enable_dhcp": False}


class TestPort:
    def test_from_json(self):
        port = Port.from_json({
            "id": "port-1",
            "network_id": "net-1",
            "status": "DOWN",
            "mac_address": "fa:16:3e:00:00:01",
            "fixed_ips": [{"ip_address": "10.0.0.5", "subnet_id": "sub-1"}],
        })
        assert port.status is NetworkStatus.DOWN
        assert port.fixed_ips == (FixedIP("10.0.0.5", "sub-1"),)

    def test_create_with_fixed_ip(self):
        body = CreatePort(
            network_id="net-1", fixed_ips=(FixedIP(subnet_id="sub-1"),)
        ).to_json()
        assert body == {"network_id": "net-1", "fixed_ips": [{"subnet_id": "sub-1"}]}


class TestRouter:
    def test_from_json_with_gateway(self):
        router = Router.from_json({
            "id": "r-1",
            "name": "edge",
            "status": "ACTIVE",
            "external_gateway_info": {"network_id": "ext-net", "enable_snat": True},
        })
        assert router.external_gateway_info == ExternalGatewayInfo("ext-net", True)

    def test_from_json_without_gateway(self):
        router = Router.from_json({"id": "r-2", "external_gateway_info": None})
        assert router.external_gateway_info is None

    def test_create_and_update(self):
        gateway = ExternalGatewayInfo(network_id="ext-net")
        assert CreateRouter(name="edge", external_gateway_info=gateway).to_json() == {
            "name": "edge",
            "external_gateway_info": {"network_id": "ext-net"},
        }
        assert UpdateRouter(name="edge-2").to_json() == {"name": "edge-2"}

    def test_router_interface(self):
        interface = RouterInterface.from_json({"subnet_id": "sub-1", "port_id": "p-1"})
        assert interface.subnet_id == "sub-1"
        assert interface.port_id == "p-1"
