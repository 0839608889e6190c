"""
Neutron Router Entity

Architectural Intent:
- Read model of a Neutron L3 router and the interface attachment result
- CreateRouter / UpdateRouter request types

Design Decisions:
- The two request types are independent; tenant_id is only accepted on
  create, matching the API
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

from nimbus.domain.entities.neutron.common import NetworkStatus, request_payload


@dataclass(frozen=True)
class ExternalGatewayInfo:
    network_id: Optional[str] = None
    enable_snat: Optional[bool] = None

    @classmethod
    def from_json(cls, data: Optional[dict[str, Any]]) -> Optional["ExternalGatewayInfo"]:
        if not data:
            return None
        return cls(network_id=data.get("network_id"), enable_snat=data.get("enable_snat"))

    def to_json(self) -> dict[str, Any]:
        return request_payload(self)


@dataclass(frozen=True)
class Router:
    id: str
    name: Optional[str] = None
    status: NetworkStatus = NetworkStatus.UNRECOGNIZED
    tenant_id: Optional[str] = None
    admin_state_up: Optional[bool] = None
    external_gateway_info: Optional[ExternalGatewayInfo] = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Router":
        return cls(
            id=data.get("id", ""),
            name=data.get("name"),
            status=NetworkStatus.parse(data.get("status")),
            tenant_id=data.get("tenant_id"),
            admin_state_up=data.get("admin_state_up"),
            external_gateway_info=ExternalGatewayInfo.from_json(
                data.get("external_gateway_info")
            ),
        )


@dataclass(frozen=True)
class RouterInterface:
    subnet_id: Optional[str] = None
    port_id: Optional[str] = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "RouterInterface":
        return cls(subnet_id=data.get("subnet_id"), port_id=data.get("port_id"))


@dataclass(frozen=True)
class CreateRouter:
    name: Optional[str] = None
    tenant_id: Optional[str] = None
    admin_state_up: Optional[bool] = None
    external_gateway_info: Optional[ExternalGatewayInfo] = None

    def to_json(self) -> dict[str, Any]:
        return request_payload(self)


@dataclass(frozen=True)
class UpdateRouter:
    name: Optional[str] = None
    admin_state_up: Optional[bool] = None
    external_gateway_info: Optional[ExternalGatewayInfo] = None

    def to_json(self) -> dict[str, Any]:
        return request_payload(self)
