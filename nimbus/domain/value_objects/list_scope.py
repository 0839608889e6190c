"""
ListScope Value Object

Architectural Intent:
- Identifies which collection a listing operation pages through
- Immutable for the lifetime of a listing; every fetch of that listing
  receives the same instance

Design Decisions:
- Region and zone are mutually exclusive: GCE resources are either global,
  regional or zonal
- parent_id covers nested collections (e.g. ports of a network)
"""

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class ListScope:
    """Path-level parameters selecting a collection."""

    project: str = ""
    region: Optional[str] = None
    zone: Optional[str] = None
    parent_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.region and self.zone:
            raise ValueError(
                f"Scope cannot be both regional and zonal "
                f"(region={self.region!r}, zone={self.zone!r})"
            )

    def in_region(self, region: str) -> "ListScope":
        return replace(self, region=region, zone=None)

    def in_zone(self, zone: str) -> "ListScope":
        return replace(self, zone=zone, region=None)

    def with_parent(self, parent_id: str) -> "ListScope":
        return replace(self, parent_id=parent_id)

    @property
    def is_global(self) -> bool:
        return self.region is None and self.zone is None

    def __str__(self) -> str:
        parts = [self.project or "-"]
        if self.region:
            parts.append(f"regions/{self.region}")
        if self.zone:
            parts.append(f"zones/{self.zone}")
        if self.parent_id:
            parts.append(f"parent/{self.parent_id}")
        return "/".join(parts)
