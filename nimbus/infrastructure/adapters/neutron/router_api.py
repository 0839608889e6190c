"""
Neutron Router API (/v2.0/routers)

Architectural Intent:
- CRUD and listing of L3 routers plus attaching/detaching router
  interfaces by subnet or by port

Design Decisions:
- Interface bodies are flat ({"subnet_id": ...}), not wrapped in the
  resource key
- Adding an interface to a missing router yields None; removing one
  yields False
"""

from __future__ import annotations
import logging
from typing import Optional

from nimbus.application.pagination.fallbacks import NotFoundPolicy, apply_policy
from nimbus.domain.entities.neutron.router import (
    CreateRouter,
    Router,
    RouterInterface,
    UpdateRouter,
)
from nimbus.domain.value_objects.http_exchange import HttpRequest
from nimbus.infrastructure.adapters.neutron.base import NeutronResourceApi

logger = logging.getLogger(__name__)


class RouterApi(NeutronResourceApi[Router]):
    collection = "routers"
    resource = "router"

    def parse_item(self, data: dict) -> Router:
        return Router.from_json(data)

    async def create(self, router: CreateRouter) -> Router:
        return await self._create(router.to_json())

    async def update(self, router_id: str, router: UpdateRouter) -> Optional[Router]:
        return await self._update(router_id, router.to_json())

    def _interface_request(self, router_id: str, action: str, key: str, value: str):
        logger.info("Neutron router.%s: %s %s=%s", action, router_id, key, value)
        return HttpRequest(
            "PUT", f"{self._item_path(router_id)}/{action}", json_body={key: value}
        )

    async def add_interface_for_subnet(
        self, router_id: str, subnet_id: str
    ) -> Optional[RouterInterface]:
        request = self._interface_request(
            router_id, "add_router_interface", "subnet_id", subnet_id
        )
        return await apply_policy(
            self.client.execute(request, RouterInterface.from_json), NotFoundPolicy.NONE
        )

    async def add_interface_for_port(
        self, router_id: str, port_id: str
    ) -> Optional[RouterInterface]:
        request = self._interface_request(
            router_id, "add_router_interface", "port_id", port_id
        )
        return await apply_policy(
            self.client.execute(request, RouterInterface.from_json), NotFoundPolicy.NONE
        )

    async def remove_interface_for_subnet(self, router_id: str, subnet_id: str) -> bool:
        request = self._interface_request(
            router_id, "remove_router_interface", "subnet_id", subnet_id
        )
        return await apply_policy(
            self.client.execute(request, lambda _: True), NotFoundPolicy.FALSE
        )

    async def remove_interface_for_port(self, router_id: str, port_id: str) -> bool:
        request = self._interface_request(
            router_id, "remove_router_interface", "port_id", port_id
        )
        return await apply_policy(
            self.client.execute(request, lambda _: True), NotFoundPolicy.FALSE
        )
