"""Local router builder."""

from dataclasses import dataclass, field
from typing import Optional

from iaas_service.domain.base.exceptions import IaasServiceError
from iaas_service.domain.base.ports.api_ports import LocalRouterAPI
from iaas_service.domain.resources.local_router import (
    LocalRouter,
    LocalRouterCreateParams,
    LocalRouterInterface,
    LocalRouterPeer,
    LocalRouterStaticRoute,
    LocalRouterSwitch,
    LocalRouterUpdateParams,
    LocalRouterUpdateSettingsParams,
)


@dataclass
class LocalRouterBuilder:
    """Create a local router, then push its network settings and peers."""

    client: LocalRouterAPI
    name: str
    description: str = ""
    tags: list[str] = field(default_factory=list)
    icon_id: Optional[str] = None
    switch: Optional[LocalRouterSwitch] = None
    interface: Optional[LocalRouterInterface] = None
    peers: list[LocalRouterPeer] = field(default_factory=list)
    static_routes: list[LocalRouterStaticRoute] = field(default_factory=list)
    settings_hash: str = ""

    def has_network_settings(self) -> bool:
        return (
            self.interface is not None
            and self.switch is not None
            and self.interface.network_mask_len > 0
            and bool(self.interface.virtual_ip_address)
            and len(self.interface.ip_address) > 0
            and bool(self.switch.code)
        )

    def build(self) -> LocalRouter:
        """
        Create the local router.

        Peers can only be added once the network settings exist, so they go
        out in a second settings update using the hash the first one returned.
        """
        local_router = self.client.create(
            LocalRouterCreateParams(
                name=self.name,
                description=self.description,
                tags=self.tags,
                icon_id=self.icon_id,
            )
        )
        if not self.has_network_settings():
            return local_router

        try:
            local_router = self.client.update_settings(
                local_router.id,
                LocalRouterUpdateSettingsParams(
                    switch=self.switch,
                    interface=self.interface,
                    static_routes=self.static_routes,
                    settings_hash=self.settings_hash,
                ),
            )
            if self.peers:
                local_router = self.client.update_settings(
                    local_router.id,
                    LocalRouterUpdateSettingsParams(
                        switch=local_router.switch,
                        interface=local_router.interface,
                        static_routes=local_router.static_routes,
                        peers=self.peers,
                        settings_hash=local_router.settings_hash,
                    ),
                )
        except IaasServiceError as e:
            if e.resource is None:
                e.resource = local_router
            raise
        return local_router

    def update(self, resource_id: str) -> LocalRouter:
        """Update an existing local router in one call."""
        self.client.read(resource_id)
        return self.client.update(
            resource_id,
            LocalRouterUpdateParams(
                switch=self.switch,
                interface=self.interface,
                peers=self.peers,
                static_routes=self.static_routes,
                settings_hash=self.settings_hash,
                name=self.name,
                description=self.description,
                tags=self.tags,
                icon_id=self.icon_id,
            ),
        )
