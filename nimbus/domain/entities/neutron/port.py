"""
Neutron Port Entity
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

from nimbus.domain.entities.neutron.common import NetworkStatus, request_payload


@dataclass(frozen=True)
class FixedIP:
    ip_address: Optional[str] = None
    subnet_id: Optional[str] = None

    def to_json(self) -> dict[str, str]:
        payload = {}
        if self.ip_address:
            payload["ip_address"] = self.ip_address
        if self.subnet_id:
            payload["subnet_id"] = self.subnet_id
        return payload


@dataclass(frozen=True)
class Port:
    id: str
    network_id: str
    name: Optional[str] = None
    status: NetworkStatus = NetworkStatus.UNRECOGNIZED
    tenant_id: Optional[str] = None
    admin_state_up: Optional[bool] = None
    mac_address: Optional[str] = None
    device_id: Optional[str] = None
    device_owner: Optional[str] = None
    fixed_ips: tuple[FixedIP, ...] = ()
    security_groups: tuple[str, ...] = ()

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Port":
        return cls(
            id=data.get("id", ""),
            network_id=data.get("network_id", ""),
            name=data.get("name"),
            status=NetworkStatus.parse(data.get("status")),
            tenant_id=data.get("tenant_id"),
            admin_state_up=data.get("admin_state_up"),
            mac_address=data.get("mac_address"),
            device_id=data.get("device_id"),
            device_owner=data.get("device_owner"),
            fixed_ips=tuple(
                FixedIP(ip.get("ip_address"), ip.get("subnet_id"))
                for ip in data.get("fixed_ips", [])
            ),
            security_groups=tuple(data.get("security_groups", [])),
        )


@dataclass(frozen=True)
class CreatePort:
    network_id: str
    name: Optional[str] = None
    tenant_id: Optional[str] = None
    admin_state_up: Optional[bool] = None
    mac_address: Optional[str] = None
    device_id: Optional[str] = None
    device_owner: Optional[str] = None
    fixed_ips: Optional[tuple[FixedIP, ...]] = None
    security_groups: Optional[tuple[str, ...]] = None

    def to_json(self) -> dict[str, Any]:
        return request_payload(self)


@dataclass(frozen=True)
class UpdatePort:
    name: Optional[str] = None
    admin_state_up: Optional[bool] = None
    device_id: Optional[str] = None
    device_owner: Optional[str] = None
    fixed_ips: Optional[tuple[FixedIP, ...]] = None
    security_groups: Optional[tuple[str, ...]] = None

    def to_json(self) -> dict[str, Any]:
        return request_payload(self)
