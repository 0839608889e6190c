"""
GCE Instance API

Architectural Intent:
- Zonal Compute Engine instances: get, insert, delete, list and the
  network-interface / metadata actions
- list_in_zones composes one listing per zone into a single lazy sequence

Design Decisions:
- Zone is a per-call argument rather than a bound property of the API, so
  one InstanceApi serves every zone of the project
- get/delete/set_metadata answer None for a missing instance; serial port
  output and access-config changes propagate not-found as an error
"""

from __future__ import annotations
import logging
from typing import AsyncIterator, Iterable, Optional

from nimbus.application.pagination.fallbacks import NotFoundPolicy
from nimbus.application.pagination.fan_out import chain_scopes, gather_scopes
from nimbus.application.pagination.paged_sequence import PagedSequence
from nimbus.domain.entities.gce.instance import (
    AccessConfig,
    Instance,
    InstanceTemplate,
    Metadata,
    SerialPortOutput,
)
from nimbus.domain.entities.gce.operation import Operation
from nimbus.domain.value_objects.http_exchange import HttpRequest
from nimbus.domain.value_objects.list_options import ListOptions
from nimbus.domain.value_objects.page import Page
from nimbus.infrastructure.adapters.gce.base import GceResourceApi

logger = logging.getLogger(__name__)


class InstanceApi(GceResourceApi[Instance]):
    collection = "instances"

    def parse_item(self, data: dict) -> Instance:
        return Instance.from_json(data)

    async def get(self, zone: str, name: str) -> Optional[Instance]:
        return await self._get(self.scope(zone=zone), name)

    async def create_in_zone(
        self, name: str, template: InstanceTemplate, zone: str
    ) -> Operation:
        project_url = f"{self.client.base_url}/projects/{self.project}"
        body = template.to_json(name, project_url, zone)
        return await self._insert(self.scope(zone=zone), body)

    async def delete(self, zone: str, name: str) -> Optional[Operation]:
        return await self._delete(self.scope(zone=zone), name)

    async def list_page(
        self,
        zone: str,
        token: Optional[str] = None,
        options: Optional[ListOptions] = None,
    ) -> Page[Instance]:
        """One page of instances; token None is the first page."""
        return await self._list_page(self.scope(zone=zone), token, options)

    def list(
        self, zone: str, options: Optional[ListOptions] = None
    ) -> PagedSequence[Instance]:
        return self._sequence(self.scope(zone=zone), options)

    def list_in_zones(
        self, zones: Iterable[str], options: Optional[ListOptions] = None
    ) -> AsyncIterator[Instance]:
        """Every instance of every zone, zone by zone in the given order."""
        return chain_scopes(
            [self.scope(zone=zone) for zone in zones],
            lambda scope: self._sequence(scope, options),
        )

    async def gather_in_zones(
        self, zones: Iterable[str], options: Optional[ListOptions] = None
    ) -> dict[str, list[Instance]]:
        """List several zones concurrently; result keyed by zone name."""
        by_scope = await gather_scopes(
            [self.scope(zone=zone) for zone in zones],
            lambda scope: self._sequence(scope, options),
        )
        return {scope.zone: instances for scope, instances in by_scope.items()}

    async def get_serial_port_output(self, zone: str, name: str) -> SerialPortOutput:
        request = HttpRequest(
            "GET", f"{self.collection_path(self.scope(zone=zone))}/{name}/serialPort"
        )
        return await self.client.execute(request, SerialPortOutput.from_json)

    async def set_metadata(
        self, zone: str, name: str, metadata: Metadata
    ) -> Optional[Operation]:
        return await self._post_action(
            self.scope(zone=zone),
            name,
            "setMetadata",
            body=metadata.to_json(),
            policy=NotFoundPolicy.NONE,
        )

    async def add_access_config_to_nic(
        self,
        zone: str,
        name: str,
        access_config: AccessConfig,
        network_interface: str = "nic0",
    ) -> Operation:
        return await self._post_action(
            self.scope(zone=zone),
            name,
            "addAccessConfig",
            body=access_config.to_json(),
            query=(("networkInterface", network_interface),),
        )

    async def delete_access_config_from_nic(
        self,
        zone: str,
        name: str,
        access_config_name: str,
        network_interface: str = "nic0",
    ) -> Operation:
        return await self._post_action(
            self.scope(zone=zone),
            name,
            "deleteAccessConfig",
            query=(
                ("accessConfig", access_config_name),
                ("networkInterface", network_interface),
            ),
        )
