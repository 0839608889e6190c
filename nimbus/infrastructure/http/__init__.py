"""
HTTP Infrastructure Package

Architectural Intent:
- Transport, request signing and the execute-and-deserialize client shared
  by every resource adapter
"""

from nimbus.infrastructure.http.auth import (
    BearerTokenSigner,
    KeystoneTokenSigner,
    NoopSigner,
    signer_for_token,
)
from nimbus.infrastructure.http.rest_client import RestClient
from nimbus.infrastructure.http.urllib_transport import UrllibTransport

__all__ = [
    "BearerTokenSigner",
    "KeystoneTokenSigner",
    "NoopSigner",
    "signer_for_token",
    "RestClient",
    "UrllibTransport",
]
