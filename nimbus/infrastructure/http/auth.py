"""
Request Signers

Architectural Intent:
- Implement RequestSignerPort for the two credential styles in use:
  OAuth2 bearer tokens (GCE) and Keystone tokens (OpenStack)
- Applied by RestClient to every outgoing request, exactly once
"""

import logging

from nimbus.domain.value_objects.http_exchange import HttpRequest

logger = logging.getLogger(__name__)


class NoopSigner:
    """Leaves requests untouched (anonymous endpoints, tests)."""

    def sign(self, request: HttpRequest) -> HttpRequest:
        return request


class BearerTokenSigner:
    """Adds an OAuth2 `Authorization: Bearer` header."""

    def __init__(self, token: str) -> None:
        if not token:
            raise ValueError("Bearer token cannot be empty")
        self._token = token

    def sign(self, request: HttpRequest) -> HttpRequest:
        return request.with_header("Authorization", f"Bearer {self._token}")

    def __repr__(self) -> str:
        return "BearerTokenSigner(token=***)"


class KeystoneTokenSigner:
    """Adds the Keystone `X-Auth-Token` header."""

    def __init__(self, token: str) -> None:
        if not token:
            raise ValueError("Keystone token cannot be empty")
        self._token = token

    def sign(self, request: HttpRequest) -> HttpRequest:
        return request.with_header("X-Auth-Token", self._token)

    def __repr__(self) -> str:
        return "KeystoneTokenSigner(token=***)"


def signer_for_token(token: str, style: str = "bearer"):
    """Return the signer for a token, or NoopSigner when no token is configured."""
    if not token:
        logger.warning("No %s token configured; requests will be unauthenticated", style)
        return NoopSigner()
    if style == "keystone":
        return KeystoneTokenSigner(token)
    return BearerTokenSigner(token)
