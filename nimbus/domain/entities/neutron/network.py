"""
Neutron Network Entity

Architectural Intent:
- Read model of a Neutron network plus its Create/Update request types

Design Decisions:
- CreateNetwork and UpdateNetwork are separate frozen dataclasses; both
  serialize through request_payload() instead of inheriting a builder
- Provider-specific extension attributes use their wire names
  (provider:network_type, router:external) via the renames table
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

from nimbus.domain.entities.neutron.common import NetworkStatus, request_payload

_WIRE_NAMES = {
    "network_type": "provider:network_type",
    "physical_network": "provider:physical_network",
    "segmentation_id": "provider:segmentation_id",
    "external": "router:external",
}


@dataclass(frozen=True)
class Network:
    id: str
    name: Optional[str] = None
    status: NetworkStatus = NetworkStatus.UNRECOGNIZED
    tenant_id: Optional[str] = None
    admin_state_up: Optional[bool] = None
    shared: Optional[bool] = None
    external: Optional[bool] = None
    network_type: Optional[str] = None
    physical_network: Optional[str] = None
    segmentation_id: Optional[int] = None
    subnets: tuple[str, ...] = ()

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Network":
        return cls(
            id=data.get("id", ""),
            name=data.get("name"),
            status=NetworkStatus.parse(data.get("status")),
            tenant_id=data.get("tenant_id"),
            admin_state_up=data.get("admin_state_up"),
            shared=data.get("shared"),
            external=data.get("router:external"),
            network_type=data.get("provider:network_type"),
            physical_network=data.get("provider:physical_network"),
            segmentation_id=data.get("provider:segmentation_id"),
            subnets=tuple(data.get("subnets", [])),
        )


@dataclass(frozen=True)
class CreateNetwork:
    name: Optional[str] = None
    admin_state_up: Optional[bool] = None
    shared: Optional[bool] = None
    external: Optional[bool] = None
    tenant_id: Optional[str] = None
    network_type: Optional[str] = None
    physical_network: Optional[str] = None
    segmentation_id: Optional[int] = None

    def to_json(self) -> dict[str, Any]:
        return request_payload(self, _WIRE_NAMES)


@dataclass(frozen=True)
class UpdateNetwork:
    name: Optional[str] = None
    admin_state_up: Optional[bool] = None
    shared: Optional[bool] = None
    external: Optional[bool] = None

    def to_json(self) -> dict[str, Any]:
        return request_payload(self, _WIRE_NAMES)
