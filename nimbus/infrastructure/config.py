"""
Configuration Module

Architectural Intent:
- Centralized configuration for provider endpoints, credentials, transport
  and telemetry
- Falls back to sensible defaults when the config file is absent
- Environment variables override file-based config

Design Decisions:
- Config is a frozen dataclass for immutability after load
- Nested config sections map to sub-dataclasses
- Credentials are plain bearer/Keystone tokens; obtaining them (OAuth2 JWT
  exchange, Keystone password auth) happens outside this library
"""

from __future__ import annotations
import dataclasses
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

GCE_DEFAULT_ENDPOINT = "https://compute.googleapis.com/compute/v1"


@dataclass(frozen=True)
class GceConfig:
    """Google Compute Engine endpoint and listing defaults."""
    endpoint: str = GCE_DEFAULT_ENDPOINT
    project: str = ""
    token: str = ""
    zones: tuple[str, ...] = ()
    regions: tuple[str, ...] = ()


@dataclass(frozen=True)
class NeutronConfig:
    """OpenStack Neutron endpoint (already resolved from the service catalog)."""
    endpoint: str = ""
    token: str = ""
    tenant_id: str = ""


@dataclass(frozen=True)
class TransportConfig:
    """HTTP transport settings."""
    timeout_seconds: int = 30
    user_agent: str = "nimbus"


@dataclass(frozen=True)
class TelemetryConfig:
    """OpenTelemetry configuration."""
    endpoint: str = ""
    insecure: bool = False


@dataclass(frozen=True)
class NimbusConfig:
    """Root configuration for the nimbus client library."""
    gce: GceConfig = field(default_factory=GceConfig)
    neutron: NeutronConfig = field(default_factory=NeutronConfig)
    transport: TransportConfig = field(default_factory=TransportConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)
    default_page_size: Optional[int] = None
    log_level: str = "WARNING"
    log_json: bool = False


def _env_override(data: dict, prefix: str = "NIMBUS") -> dict:
    """Override config values with environment variables.

    Environment variables follow the pattern NIMBUS_SECTION_KEY.
    For example: NIMBUS_GCE_PROJECT=my-project, NIMBUS_GCE_ZONES=us-central1-a,us-central1-b
    Top-level keys use NIMBUS_KEY, e.g. NIMBUS_LOG_LEVEL=DEBUG.
    """
    sections = {f.name for f in dataclasses.fields(NimbusConfig)}
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        name = key[len(prefix) + 1:].lower()
        if name in sections:
            logger.warning("Ignoring %s: sections cannot be set as a whole", key)
            continue
        if "_" not in name:
            data[name] = value
            continue
        section, field_name = name.split("_", 1)
        if section in sections:
            if not isinstance(data.get(section), dict):
                data[section] = {}
            data[section][field_name] = value
        else:
            data[name] = value
    return data


def _parse_config_file(path: Path) -> dict:
    """Parse a JSON config file. Returns empty dict on failure."""
    try:
        with open(path) as f:
            return json.load(f)
    except FileNotFoundError:
        logger.debug("Config file not found: %s", path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Invalid config file %s: %s", path, e)
        return {}


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.lower() in ("true", "1", "yes")
    return bool(value)


def _build_sub_config(cls, data: dict):
    """Build a sub-config dataclass from a dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.items() if k in valid_fields}

    for f in dataclasses.fields(cls):
        if f.name not in filtered:
            continue
        val = filtered[f.name]
        # Comma-separated strings and JSON lists become tuples
        if f.type == "tuple[str, ...]":
            if isinstance(val, str):
                filtered[f.name] = tuple(v.strip() for v in val.split(",") if v.strip())
            elif isinstance(val, list):
                filtered[f.name] = tuple(val)
        elif isinstance(val, str):
            if f.type == "int":
                filtered[f.name] = int(val)
            elif f.type == "bool":
                filtered[f.name] = _as_bool(val)

    return cls(**filtered)


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "NIMBUS",
) -> NimbusConfig:
    """Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (NIMBUS_SECTION_KEY)
    2. Config file values
    3. Defaults

    Args:
        path: Path to config file (JSON). Defaults to nimbus.json in CWD.
        env_prefix: Environment variable prefix. Defaults to NIMBUS.
    """
    config_path = Path(path) if path else Path("nimbus.json")
    data = _parse_config_file(config_path)
    data = _env_override(data, env_prefix)

    page_size = data.get("default_page_size")
    return NimbusConfig(
        gce=_build_sub_config(GceConfig, data.get("gce", {})),
        neutron=_build_sub_config(NeutronConfig, data.get("neutron", {})),
        transport=_build_sub_config(TransportConfig, data.get("transport", {})),
        telemetry=_build_sub_config(TelemetryConfig, data.get("telemetry", {})),
        default_page_size=int(page_size) if page_size not in (None, "") else None,
        log_level=data.get("log_level", "WARNING"),
        log_json=_as_bool(data.get("log_json", False)),
    )
