"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces (abstract contracts) for external dependencies
- Ports define what the domain needs, adapters implement how
"""

from nimbus.domain.ports.page_fetcher_port import PageFetcherPort
from nimbus.domain.ports.transport_port import HttpTransportPort, RequestSignerPort

__all__ = [
    "PageFetcherPort",
    "HttpTransportPort",
    "RequestSignerPort",
]
