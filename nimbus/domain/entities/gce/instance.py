"""
GCE Instance Entity

Architectural Intent:
- Read model of a Compute Engine instance resource (compute#instance)
- Request model (InstanceTemplate) for instances.insert

Design Decisions:
- Frozen dataclasses parsed from the provider's camelCase JSON via from_json;
  dataclasses.replace() is the copy-with-changes operation
- Nested resources (network interfaces, disks, metadata) are their own
  value objects so callers can pattern-match without dict lookups
- Unknown status strings map to InstanceStatus.UNRECOGNIZED instead of
  failing the whole page
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class InstanceStatus(Enum):
    PROVISIONING = "PROVISIONING"
    STAGING = "STAGING"
    RUNNING = "RUNNING"
    STOPPING = "STOPPING"
    STOPPED = "STOPPED"
    SUSPENDED = "SUSPENDED"
    TERMINATED = "TERMINATED"
    UNRECOGNIZED = "UNRECOGNIZED"

    @classmethod
    def parse(cls, value: Optional[str]) -> "InstanceStatus":
        try:
            return cls(value)
        except ValueError:
            return cls.UNRECOGNIZED


def short_name(url: Optional[str]) -> Optional[str]:
    """Return the last path segment of a GCE resource URL."""
    if not url:
        return url
    return url.rstrip("/").rsplit("/", 1)[-1]


@dataclass(frozen=True)
class AccessConfig:
    name: str = "external-nat"
    type: str = "ONE_TO_ONE_NAT"
    nat_ip: Optional[str] = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "AccessConfig":
        return cls(
            name=data.get("name", "external-nat"),
            type=data.get("type", "ONE_TO_ONE_NAT"),
            nat_ip=data.get("natIP"),
        )

    def to_json(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": self.name, "type": self.type}
        if self.nat_ip:
            payload["natIP"] = self.nat_ip
        return payload


@dataclass(frozen=True)
class NetworkInterface:
    name: Optional[str] = None
    network: Optional[str] = None
    network_ip: Optional[str] = None
    access_configs: tuple[AccessConfig, ...] = ()

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "NetworkInterface":
        return cls(
            name=data.get("name"),
            network=data.get("network"),
            network_ip=data.get("networkIP"),
            access_configs=tuple(
                AccessConfig.from_json(a) for a in data.get("accessConfigs", [])
            ),
        )


@dataclass(frozen=True)
class AttachedDisk:
    index: Optional[int] = None
    type: str = "PERSISTENT"
    mode: str = "READ_WRITE"
    source: Optional[str] = None
    device_name: Optional[str] = None
    auto_delete: bool = False
    boot: bool = False

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "AttachedDisk":
        return cls(
            index=data.get("index"),
            type=data.get("type", "PERSISTENT"),
            mode=data.get("mode", "READ_WRITE"),
            source=data.get("source"),
            device_name=data.get("deviceName"),
            auto_delete=bool(data.get("autoDelete", False)),
            boot=bool(data.get("boot", False)),
        )


@dataclass(frozen=True)
class Metadata:
    """Instance metadata items plus the fingerprint required to update them."""

    items: dict[str, str] = field(default_factory=dict)
    fingerprint: Optional[str] = None

    @classmethod
    def from_json(cls, data: Optional[dict[str, Any]]) -> "Metadata":
        if not data:
            return cls()
        return cls(
            items={i["key"]: i.get("value", "") for i in data.get("items", [])},
            fingerprint=data.get("fingerprint"),
        )

    def to_json(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "kind": "compute#metadata",
            "items": [{"key": k, "value": v} for k, v in self.items.items()],
        }
        if self.fingerprint:
            payload["fingerprint"] = self.fingerprint
        return payload


@dataclass(frozen=True)
class SerialPortOutput:
    self_link: Optional[str] = None
    contents: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "SerialPortOutput":
        return cls(self_link=data.get("selfLink"), contents=data.get("contents", ""))


@dataclass(frozen=True)
class Instance:
    """A Compute Engine virtual machine."""

    id: str
    name: str
    self_link: Optional[str] = None
    creation_timestamp: Optional[str] = None
    description: Optional[str] = None
    machine_type: Optional[str] = None
    status: InstanceStatus = InstanceStatus.UNRECOGNIZED
    status_message: Optional[str] = None
    zone: Optional[str] = None
    can_ip_forward: bool = False
    tags: tuple[str, ...] = ()
    labels: dict[str, str] = field(default_factory=dict)
    network_interfaces: tuple[NetworkInterface, ...] = ()
    disks: tuple[AttachedDisk, ...] = ()
    metadata: Metadata = field(default_factory=Metadata)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Instance":
        return cls(
            id=str(data.get("id", "")),
            name=data["name"],
            self_link=data.get("selfLink"),
            creation_timestamp=data.get("creationTimestamp"),
            description=data.get("description"),
            machine_type=data.get("machineType"),
            status=InstanceStatus.parse(data.get("status")),
            status_message=data.get("statusMessage"),
            zone=data.get("zone"),
            can_ip_forward=bool(data.get("canIpForward", False)),
            tags=tuple((data.get("tags") or {}).get("items", [])),
            labels=dict(data.get("labels", {})),
            network_interfaces=tuple(
                NetworkInterface.from_json(n) for n in data.get("networkInterfaces", [])
            ),
            disks=tuple(AttachedDisk.from_json(d) for d in data.get("disks", [])),
            metadata=Metadata.from_json(data.get("metadata")),
        )

    @property
    def zone_name(self) -> Optional[str]:
        return short_name(self.zone)

    @property
    def machine_type_name(self) -> Optional[str]:
        return short_name(self.machine_type)

    @property
    def internal_ip(self) -> Optional[str]:
        if not self.network_interfaces:
            return None
        return self.network_interfaces[0].network_ip


@dataclass(frozen=True)
class InstanceTemplate:
    """Parameters for instances.insert, expanded into the request body by to_json."""

    machine_type: str
    source_image: str
    network: str = "default"
    description: Optional[str] = None
    boot_disk_size_gb: Optional[int] = None
    can_ip_forward: bool = False
    external_ip: bool = True
    tags: tuple[str, ...] = ()
    labels: dict[str, str] = field(default_factory=dict)
    metadata: dict[str, str] = field(default_factory=dict)
    service_account_email: Optional[str] = None
    service_account_scopes: tuple[str, ...] = ()

    def to_json(self, name: str, project_url: str, zone: str) -> dict[str, Any]:
        initialize_params: dict[str, Any] = {"sourceImage": self.source_image}
        if self.boot_disk_size_gb is not None:
            initialize_params["diskSizeGb"] = str(self.boot_disk_size_gb)

        network_interface: dict[str, Any] = {
            "network": f"{project_url}/global/networks/{self.network}",
        }
        if self.external_ip:
            network_interface["accessConfigs"] = [AccessConfig().to_json()]

        payload: dict[str, Any] = {
            "name": name,
            "machineType": f"{project_url}/zones/{zone}/machineTypes/{self.machine_type}",
            "canIpForward": self.can_ip_forward,
            "disks": [
                {
                    "type": "PERSISTENT",
                    "boot": True,
                    "autoDelete": True,
                    "initializeParams": initialize_params,
                }
            ],
            "networkInterfaces": [network_interface],
        }
        if self.description:
            payload["description"] = self.description
        if self.tags:
            payload["tags"] = {"items": list(self.tags)}
        if self.labels:
            payload["labels"] = dict(self.labels)
        if self.metadata:
            payload["metadata"] = Metadata(items=dict(self.metadata)).to_json()
        if self.service_account_email:
            payload["serviceAccounts"] = [
                {
                    "email": self.service_account_email,
                    "scopes": list(self.service_account_scopes),
                }
            ]
        return payload
