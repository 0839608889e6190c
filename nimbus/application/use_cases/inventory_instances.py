"""
Inventory Instances Use Case

Architectural Intent:
- Lists every instance of a project across a set of zones and summarises
  them by zone and by status
- Zone listings are either chained (lazy, zone order) or gathered
  concurrently

Design Decisions:
- A zone that does not exist contributes an empty listing, not an error
- The inventory keeps zone order as given by the caller and counts each
  instance under the zone it was listed from
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional, Sequence

from nimbus.domain.entities.gce.instance import Instance, InstanceStatus
from nimbus.domain.value_objects.list_options import ListOptions
from nimbus.infrastructure.adapters.gce.instance_api import InstanceApi

logger = logging.getLogger(__name__)


@dataclass
class InstanceInventory:
    instances: list[Instance] = field(default_factory=list)
    by_zone: dict[str, int] = field(default_factory=dict)
    by_status: Counter = field(default_factory=Counter)

    def add(self, zone: str, instance: Instance) -> None:
        self.instances.append(instance)
        self.by_zone[zone] = self.by_zone.get(zone, 0) + 1
        self.by_status[instance.status] += 1

    @property
    def total(self) -> int:
        return len(self.instances)

    def running(self) -> list[Instance]:
        return [i for i in self.instances if i.status is InstanceStatus.RUNNING]


class InventoryInstances:
    def __init__(self, instance_api: InstanceApi):
        self.instance_api = instance_api

    async def execute(
        self,
        zones: Sequence[str],
        options: Optional[ListOptions] = None,
        concurrent: bool = False,
    ) -> InstanceInventory:
        inventory = InstanceInventory(by_zone={zone: 0 for zone in zones})

        if concurrent:
            by_zone = await self.instance_api.gather_in_zones(zones, options)
            for zone in zones:
                for instance in by_zone.get(zone, []):
                    inventory.add(zone, instance)
        else:
            for zone in zones:
                async for instance in self.instance_api.list(zone, options):
                    inventory.add(zone, instance)

        logger.info(
            "Inventoried %d instance(s) across %d zone(s)", inventory.total, len(zones)
        )
        return inventory
