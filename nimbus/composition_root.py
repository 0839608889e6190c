"""
Composition Root

Architectural Intent:
- Single place where transport, signers, REST clients, resource APIs and
  use cases are wired together from a NimbusConfig
- No adapter instantiation should occur outside this module (except tests)

Design Decisions:
- Uses a simple dataclass container instead of a DI framework
- One transport is shared by every REST client; each provider gets its own
  client (endpoint + signer)
- Telemetry stays disabled until initialize() is awaited, and only turns on
  when an endpoint is configured
"""

import logging
from dataclasses import dataclass
from typing import Optional

from nimbus.application.use_cases.describe_network_topology import DescribeNetworkTopology
from nimbus.application.use_cases.inventory_instances import InventoryInstances
from nimbus.domain.ports.transport_port import HttpTransportPort
from nimbus.infrastructure.adapters.gce.address_api import AddressApi
from nimbus.infrastructure.adapters.gce.aggregated_list_api import AggregatedListApi
from nimbus.infrastructure.adapters.gce.image_api import ImageApi
from nimbus.infrastructure.adapters.gce.instance_api import InstanceApi
from nimbus.infrastructure.adapters.gce.machine_type_api import MachineTypeApi
from nimbus.infrastructure.adapters.gce.operation_api import OperationApi
from nimbus.infrastructure.adapters.neutron.network_api import NetworkApi
from nimbus.infrastructure.adapters.neutron.port_api import PortApi
from nimbus.infrastructure.adapters.neutron.router_api import RouterApi
from nimbus.infrastructure.adapters.neutron.subnet_api import SubnetApi
from nimbus.infrastructure.config import NimbusConfig
from nimbus.infrastructure.http.auth import NoopSigner, signer_for_token
from nimbus.infrastructure.http.rest_client import RestClient
from nimbus.infrastructure.http.urllib_transport import UrllibTransport
from nimbus.infrastructure.telemetry.otel_exporter import OTELConfig, OTELExporter

logger = logging.getLogger(__name__)


@dataclass
class NimbusContainer:
    """DI container holding all wired dependencies."""

    config: NimbusConfig
    telemetry: OTELExporter
    gce_client: RestClient
    neutron_client: RestClient
    instances: InstanceApi
    addresses: AddressApi
    images: ImageApi
    machine_types: MachineTypeApi
    operations: OperationApi
    aggregated: AggregatedListApi
    networks: NetworkApi
    subnets: SubnetApi
    ports: PortApi
    routers: RouterApi
    inventory_instances: InventoryInstances
    describe_network_topology: DescribeNetworkTopology

    async def initialize(self) -> None:
        await self.telemetry.initialize()

    async def shutdown(self) -> None:
        await self.telemetry.export()


def create_container(
    config: Optional[NimbusConfig] = None,
    transport: Optional[HttpTransportPort] = None,
) -> NimbusContainer:
    """Create and wire all dependencies."""
    config = config or NimbusConfig()
    telemetry = OTELExporter(
        OTELConfig(
            endpoint=config.telemetry.endpoint,
            insecure=config.telemetry.insecure,
        )
    )
    transport = transport or UrllibTransport(
        timeout_seconds=config.transport.timeout_seconds,
        user_agent=config.transport.user_agent,
    )

    gce_client = RestClient(
        config.gce.endpoint,
        transport,
        signer=signer_for_token(config.gce.token, "bearer"),
        telemetry=telemetry,
        service="gce",
    )
    neutron_client = RestClient(
        config.neutron.endpoint,
        transport,
        signer=(
            signer_for_token(config.neutron.token, "keystone")
            if config.neutron.endpoint
            else NoopSigner()
        ),
        telemetry=telemetry,
        service="neutron",
    )

    project = config.gce.project
    tenant_id = config.neutron.tenant_id
    instances = InstanceApi(gce_client, project)
    networks = NetworkApi(neutron_client, tenant_id)
    subnets = SubnetApi(neutron_client, tenant_id)

    logger.debug(
        "Container wired: gce=%s (project=%s) neutron=%s",
        gce_client.base_url,
        project or "-",
        neutron_client.base_url or "-",
    )

    return NimbusContainer(
        config=config,
        telemetry=telemetry,
        gce_client=gce_client,
        neutron_client=neutron_client,
        instances=instances,
        addresses=AddressApi(gce_client, project),
        images=ImageApi(gce_client, project),
        machine_types=MachineTypeApi(gce_client, project),
        operations=OperationApi(gce_client, project),
        aggregated=AggregatedListApi(gce_client, project),
        networks=networks,
        subnets=subnets,
        ports=PortApi(neutron_client, tenant_id),
        routers=RouterApi(neutron_client, tenant_id),
        inventory_instances=InventoryInstances(instances),
        describe_network_topology=DescribeNetworkTopology(networks, subnets),
    )
