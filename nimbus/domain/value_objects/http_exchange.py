"""
HTTP Exchange Value Objects

Architectural Intent:
- Explicit request/response objects built by resource adapters and executed
  by the transport
- Replaces annotation-driven request synthesis: every adapter method states
  its verb, path, query and payload in plain code
"""

import json
from dataclasses import dataclass, field, replace
from typing import Any, Optional
from urllib.parse import urlencode


@dataclass(frozen=True)
class HttpRequest:
    """A provider-neutral HTTP request relative to a service base URL."""

    method: str
    path: str
    query: tuple[tuple[str, str], ...] = ()
    json_body: Optional[Any] = None
    headers: tuple[tuple[str, str], ...] = (("Accept", "application/json"),)

    def with_header(self, name: str, value: str) -> "HttpRequest":
        kept = tuple((k, v) for k, v in self.headers if k.lower() != name.lower())
        return replace(self, headers=kept + ((name, value),))

    def header(self, name: str) -> Optional[str]:
        for key, value in self.headers:
            if key.lower() == name.lower():
                return value
        return None

    def url(self, base_url: str) -> str:
        url = base_url.rstrip("/") + "/" + self.path.lstrip("/")
        if self.query:
            url += "?" + urlencode(self.query)
        return url

    def body_bytes(self) -> Optional[bytes]:
        if self.json_body is None:
            return None
        return json.dumps(self.json_body).encode("utf-8")


@dataclass(frozen=True)
class HttpResponse:
    """Status, headers and raw payload of a completed HTTP call."""

    status: int
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)

    def json(self) -> Any:
        if not self.body:
            return None
        return json.loads(self.body.decode("utf-8"))

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300
