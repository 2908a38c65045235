"""Ports the wrapped IaaS API client must implement, one per resource type.

The service layer never talks to the platform directly. Each port lists the
primitive calls a builder or service needs; errors are reported by raising
``APIError`` (``NotFoundError`` for missing resources).
"""

from abc import ABC, abstractmethod

from iaas_service.domain.resources.local_router import (
    LocalRouter,
    LocalRouterCreateParams,
    LocalRouterUpdateParams,
    LocalRouterUpdateSettingsParams,
)
from iaas_service.domain.resources.nfs import NFS, NFSCreateParams, NFSUpdateParams
from iaas_service.domain.resources.server import Server
from iaas_service.domain.resources.sim import (
    SIM,
    SIMCreateParams,
    SIMNetworkOperatorConfig,
    SIMUpdateParams,
)
from iaas_service.domain.resources.vpc_router import (
    VPCRouter,
    VPCRouterCreateParams,
    VPCRouterUpdateParams,
    VPCRouterUpdateSettingsParams,
)


class PowerControlPort(ABC):
    """Power operations shared by every bootable zonal resource."""

    @abstractmethod
    def read(self, zone: str, resource_id: str):
        """Read the resource, including its instance status."""

    @abstractmethod
    def boot(self, zone: str, resource_id: str) -> None:
        """Request the resource to power on."""

    @abstractmethod
    def shutdown(self, zone: str, resource_id: str, force: bool = False) -> None:
        """Request the resource to power off."""


class VPCRouterAPI(PowerControlPort):
    """VPC router operations."""

    @abstractmethod
    def create(self, zone: str, params: VPCRouterCreateParams) -> VPCRouter:
        """Create a VPC router."""

    @abstractmethod
    def read(self, zone: str, resource_id: str) -> VPCRouter:
        """Read a VPC router."""

    @abstractmethod
    def update(self, zone: str, resource_id: str, params: VPCRouterUpdateParams) -> VPCRouter:
        """Update name, tags and router settings."""

    @abstractmethod
    def update_settings(
        self, zone: str, resource_id: str, params: VPCRouterUpdateSettingsParams
    ) -> VPCRouter:
        """Update router settings only."""

    @abstractmethod
    def delete(self, zone: str, resource_id: str) -> None:
        """Delete a VPC router."""

    @abstractmethod
    def config(self, zone: str, resource_id: str) -> None:
        """Apply the stored settings to the running router."""

    @abstractmethod
    def connect_to_switch(self, zone: str, resource_id: str, index: int, switch_id: str) -> None:
        """Attach the interface at ``index`` to a switch."""

    @abstractmethod
    def disconnect_from_switch(self, zone: str, resource_id: str, index: int) -> None:
        """Detach the interface at ``index``."""


class NFSAPI(PowerControlPort):
    """NFS appliance operations."""

    @abstractmethod
    def create(self, zone: str, params: NFSCreateParams) -> NFS:
        """Create an NFS appliance."""

    @abstractmethod
    def read(self, zone: str, resource_id: str) -> NFS:
        """Read an NFS appliance."""

    @abstractmethod
    def update(self, zone: str, resource_id: str, params: NFSUpdateParams) -> NFS:
        """Update mutable NFS fields."""

    @abstractmethod
    def delete(self, zone: str, resource_id: str) -> None:
        """Delete an NFS appliance."""


class ServerAPI(PowerControlPort):
    """Server operations."""

    @abstractmethod
    def read(self, zone: str, resource_id: str) -> Server:
        """Read a server."""

    @abstractmethod
    def delete(self, zone: str, resource_id: str) -> None:
        """Delete a server, keeping its disks."""

    @abstractmethod
    def delete_with_disks(self, zone: str, resource_id: str, disk_ids: list[str]) -> None:
        """Delete a server together with the given disks."""


class SIMAPI(ABC):
    """SIM operations. SIMs are global resources and take no zone."""

    @abstractmethod
    def create(self, params: SIMCreateParams) -> SIM:
        """Register a SIM."""

    @abstractmethod
    def read(self, resource_id: str) -> SIM:
        """Read a SIM."""

    @abstractmethod
    def update(self, resource_id: str, params: SIMUpdateParams) -> SIM:
        """Update mutable SIM fields."""

    @abstractmethod
    def delete(self, resource_id: str) -> None:
        """Delete a SIM."""

    @abstractmethod
    def set_network_operator(
        self, resource_id: str, configs: list[SIMNetworkOperatorConfig]
    ) -> None:
        """Replace the carriers the SIM may use."""

    @abstractmethod
    def activate(self, resource_id: str) -> None:
        """Activate the SIM."""

    @abstractmethod
    def deactivate(self, resource_id: str) -> None:
        """Deactivate the SIM."""

    @abstractmethod
    def imei_lock(self, resource_id: str, imei: str) -> None:
        """Lock the SIM to a device IMEI."""

    @abstractmethod
    def imei_unlock(self, resource_id: str) -> None:
        """Remove the IMEI lock."""


class LocalRouterAPI(ABC):
    """Local router operations. Local routers are global resources."""

    @abstractmethod
    def create(self, params: LocalRouterCreateParams) -> LocalRouter:
        """Create a local router."""

    @abstractmethod
    def read(self, resource_id: str) -> LocalRouter:
        """Read a local router."""

    @abstractmethod
    def update(self, resource_id: str, params: LocalRouterUpdateParams) -> LocalRouter:
        """Update a local router."""

    @abstractmethod
    def update_settings(
        self, resource_id: str, params: LocalRouterUpdateSettingsParams
    ) -> LocalRouter:
        """Update network settings only."""

    @abstractmethod
    def delete(self, resource_id: str) -> None:
        """Delete a local router."""
