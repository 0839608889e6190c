"""
GCE Address, Image and MachineType Entities

Read models for the simpler Compute Engine resources listed alongside
instances.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

from nimbus.domain.entities.gce.instance import short_name


@dataclass(frozen=True)
class Address:
    """A reserved regional IP address."""

    id: str
    name: str
    address: Optional[str] = None
    status: Optional[str] = None
    region: Optional[str] = None
    description: Optional[str] = None
    self_link: Optional[str] = None
    users: tuple[str, ...] = ()

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Address":
        return cls(
            id=str(data.get("id", "")),
            name=data["name"],
            address=data.get("address"),
            status=data.get("status"),
            region=short_name(data.get("region")),
            description=data.get("description"),
            self_link=data.get("selfLink"),
            users=tuple(data.get("users", [])),
        )


@dataclass(frozen=True)
class Image:
    id: str
    name: str
    family: Optional[str] = None
    status: Optional[str] = None
    description: Optional[str] = None
    self_link: Optional[str] = None
    disk_size_gb: Optional[int] = None
    deprecated_state: Optional[str] = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Image":
        disk_size = data.get("diskSizeGb")
        return cls(
            id=str(data.get("id", "")),
            name=data["name"],
            family=data.get("family"),
            status=data.get("status"),
            description=data.get("description"),
            self_link=data.get("selfLink"),
            disk_size_gb=int(disk_size) if disk_size is not None else None,
            deprecated_state=(data.get("deprecated") or {}).get("state"),
        )


@dataclass(frozen=True)
class MachineType:
    id: str
    name: str
    guest_cpus: int = 0
    memory_mb: int = 0
    zone: Optional[str] = None
    description: Optional[str] = None
    self_link: Optional[str] = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "MachineType":
        return cls(
            id=str(data.get("id", "")),
            name=data["name"],
            guest_cpus=int(data.get("guestCpus", 0)),
            memory_mb=int(data.get("memoryMb", 0)),
            zone=short_name(data.get("zone")),
            description=data.get("description"),
            self_link=data.get("selfLink"),
        )
