"""Tests for composition root DI container."""

import pytest

from nimbus.composition_root import NimbusContainer, create_container
from nimbus.infrastructure.config import GceConfig, NeutronConfig, NimbusConfig
from nimbus.infrastructure.http.auth import BearerTokenSigner, KeystoneTokenSigner, NoopSigner
from nimbus.infrastructure.http.urllib_transport import UrllibTransport


def configured():
    return NimbusConfig(
        gce=GceConfig(project="acme", token="ya29.tok", zones=("us-central1-a",)),
        neutron=NeutronConfig(
            endpoint="http://neutron:9696/v2.0", token="gAAAA", tenant_id="t-1"
        ),
    )


class TestCompositionRoot:
    def test_create_container_defaults(self):
        container = create_container()

        assert isinstance(container, NimbusContainer)
        assert isinstance(container.gce_client.transport, UrllibTransport)
        assert container.gce_client.transport is container.neutron_client.transport
        assert isinstance(container.neutron_client.signer, NoopSigner)

    def test_signers_per_provider(self):
        container = create_container(configured())

        assert isinstance(container.gce_client.signer, BearerTokenSigner)
        assert isinstance(container.neutron_client.signer, KeystoneTokenSigner)

    def test_apis_share_clients_and_scope(self):
        container = create_container(configured())

        for api in (
            container.instances,
            container.addresses,
            container.images,
            container.machine_types,
            container.operations,
            container.aggregated,
        ):
            assert api.client is container.gce_client
            assert api.project == "acme"
        for api in (container.networks, container.subnets, container.ports, container.routers):
            assert api.client is container.neutron_client
            assert api.tenant_id == "t-1"

    def test_use_cases_wired_to_apis(self):
        container = create_container(configured())

        assert container.inventory_instances.instance_api is container.instances
        assert container.describe_network_topology.network_api is container.networks
        assert container.describe_network_topology.subnet_api is container.subnets

    def test_injected_transport(self, transport):
        container = create_container(configured(), transport=transport)
        assert container.gce_client.transport is transport

    def test_transport_settings_applied(self):
        container = create_container()
        assert container.gce_client.transport.timeout_seconds == 30
        assert container.gce_client.transport.user_agent == "nimbus"

    @pytest.mark.asyncio
    async def test_initialize_without_telemetry_endpoint(self):
        container = create_container()
        await container.initialize()
        assert container.telemetry.enabled is False
        await container.shutdown()
