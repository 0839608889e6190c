"""
Shared Neutron helpers: the status enum every resource reports and the
payload builder shared by Create/Update request types.
"""

from dataclasses import fields
from enum import Enum
from typing import Any, Optional


class NetworkStatus(Enum):
    ACTIVE = "ACTIVE"
    DOWN = "DOWN"
    BUILD = "BUILD"
    ERROR = "ERROR"
    UNRECOGNIZED = "UNRECOGNIZED"

    @classmethod
    def parse(cls, value: Optional[str]) -> "NetworkStatus":
        try:
            return cls(value)
        except ValueError:
            return cls.UNRECOGNIZED


def request_payload(request: Any, renames: Optional[dict[str, str]] = None) -> dict[str, Any]:
    """Serialize a request dataclass, omitting unset (None) fields.

    Create and Update request types are independent dataclasses; this is the
    one construction function they share. Tuples become lists and nested
    objects exposing to_json() are expanded.
    """
    renames = renames or {}
    payload: dict[str, Any] = {}
    for f in fields(request):
        value = getattr(request, f.name)
        if value is None:
            continue
        if hasattr(value, "to_json"):
            value = value.to_json()
        elif isinstance(value, tuple):
            value = [v.to_json() if hasattr(v, "to_json") else v for v in value]
        payload[renames.get(f.name, f.name)] = value
    return payload
