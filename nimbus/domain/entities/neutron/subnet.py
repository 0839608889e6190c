"""
Neutron Subnet Entity
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

from nimbus.domain.entities.neutron.common import request_payload


@dataclass(frozen=True)
class AllocationPool:
    start: str
    end: str

    def to_json(self) -> dict[str, str]:
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class HostRoute:
    destination: str
    nexthop: str

    def to_json(self) -> dict[str, str]:
        return {"destination": self.destination, "nexthop": self.nexthop}


@dataclass(frozen=True)
class Subnet:
    id: str
    network_id: str
    name: Optional[str] = None
    tenant_id: Optional[str] = None
    cidr: Optional[str] = None
    ip_version: Optional[int] = None
    gateway_ip: Optional[str] = None
    enable_dhcp: Optional[bool] = None
    dns_nameservers: tuple[str, ...] = ()
    allocation_pools: tuple[AllocationPool, ...] = ()
    host_routes: tuple[HostRoute, ...] = ()

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Subnet":
        return cls(
            id=data.get("id", ""),
            network_id=data.get("network_id", ""),
            name=data.get("name"),
            tenant_id=data.get("tenant_id"),
            cidr=data.get("cidr"),
            ip_version=data.get("ip_version"),
            gateway_ip=data.get("gateway_ip"),
            enable_dhcp=data.get("enable_dhcp"),
            dns_nameservers=tuple(data.get("dns_nameservers", [])),
            allocation_pools=tuple(
                AllocationPool(p["start"], p["end"])
                for p in data.get("allocation_pools", [])
            ),
            host_routes=tuple(
                HostRoute(r["destination"], r["nexthop"])
                for r in data.get("host_routes", [])
            ),
        )


@dataclass(frozen=True)
class CreateSubnet:
    network_id: str
    cidr: str
    ip_version: int = 4
    name: Optional[str] = None
    tenant_id: Optional[str] = None
    gateway_ip: Optional[str] = None
    enable_dhcp: Optional[bool] = None
    dns_nameservers: Optional[tuple[str, ...]] = None
    allocation_pools: Optional[tuple[AllocationPool, ...]] = None
    host_routes: Optional[tuple[HostRoute, ...]] = None

    def to_json(self) -> dict[str, Any]:
        return request_payload(self)


@dataclass(frozen=True)
class UpdateSubnet:
    name: Optional[str] = None
    gateway_ip: Optional[str] = None
    enable_dhcp: Optional[bool] = None
    dns_nameservers: Optional[tuple[str, ...]] = None
    host_routes: Optional[tuple[HostRoute, ...]] = None

    def to_json(self) -> dict[str, Any]:
        return request_payload(self)
