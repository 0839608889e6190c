"""
GCE Operation Entity

Architectural Intent:
- Every mutating Compute Engine call returns an Operation that the caller
  polls; this is its read model
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from nimbus.domain.entities.gce.instance import short_name


class OperationStatus(Enum):
    PENDING = "PENDING"
    RUNNING = "RUNNING"
    DONE = "DONE"
    UNRECOGNIZED = "UNRECOGNIZED"

    @classmethod
    def parse(cls, value: Optional[str]) -> "OperationStatus":
        try:
            return cls(value)
        except ValueError:
            return cls.UNRECOGNIZED


@dataclass(frozen=True)
class OperationError:
    code: str
    message: str = ""
    location: Optional[str] = None


@dataclass(frozen=True)
class Operation:
    """A long-running Compute Engine operation."""

    id: str
    name: str
    operation_type: Optional[str] = None
    status: OperationStatus = OperationStatus.UNRECOGNIZED
    target_link: Optional[str] = None
    self_link: Optional[str] = None
    progress: int = 0
    region: Optional[str] = None
    zone: Optional[str] = None
    http_error_status_code: Optional[int] = None
    errors: tuple[OperationError, ...] = ()

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Operation":
        errors = (data.get("error") or {}).get("errors", [])
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            operation_type=data.get("operationType"),
            status=OperationStatus.parse(data.get("status")),
            target_link=data.get("targetLink"),
            self_link=data.get("selfLink"),
            progress=int(data.get("progress", 0)),
            region=short_name(data.get("region")),
            zone=short_name(data.get("zone")),
            http_error_status_code=data.get("httpErrorStatusCode"),
            errors=tuple(
                OperationError(
                    code=e.get("code", ""),
                    message=e.get("message", ""),
                    location=e.get("location"),
                )
                for e in errors
            ),
        )

    @property
    def is_done(self) -> bool:
        return self.status == OperationStatus.DONE

    @property
    def failed(self) -> bool:
        return bool(self.errors)
