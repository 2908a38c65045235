"""VPC router snapshot and parameters."""

from enum import IntEnum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from iaas_service.domain.base.value_objects import InstanceStatus

from .base import ResourceModel


class VPCRouterPlan(IntEnum):
    """VPC router plans. Every plan above STANDARD uses premium NICs."""

    STANDARD = 1
    PREMIUM = 2
    HIGH_SPEC = 3
    HIGH_SPEC_4000 = 4


class VPCRouterInterface(BaseModel):
    """Interface currently attached to a VPC router."""

    index: int
    switch_id: Optional[str] = None
    ip_addresses: list[str] = Field(default_factory=list)


class VPCRouterInterfaceSetting(BaseModel):
    """Addressing of one VPC router interface."""

    index: int
    ip_addresses: list[str] = Field(default_factory=list)
    virtual_ip_address: str = ""
    ip_aliases: list[str] = Field(default_factory=list)
    network_mask_len: int = 0


class VPCRouterSettings(BaseModel):
    """Router configuration applied by the platform's config call."""

    vrid: int = 0
    internet_connection_enabled: bool = True
    interfaces: list[VPCRouterInterfaceSetting] = Field(default_factory=list)
    static_nat: Optional[list[dict[str, Any]]] = None
    port_forwarding: Optional[list[dict[str, Any]]] = None
    firewall: Optional[list[dict[str, Any]]] = None
    dhcp_server: Optional[list[dict[str, Any]]] = None
    dhcp_static_mapping: Optional[list[dict[str, Any]]] = None
    dns_forwarding: Optional[dict[str, Any]] = None
    pptp_server: Optional[dict[str, Any]] = None
    pptp_server_enabled: bool = False
    l2tp_ipsec_server: Optional[dict[str, Any]] = None
    l2tp_ipsec_server_enabled: bool = False
    wireguard: Optional[dict[str, Any]] = None
    wireguard_enabled: bool = False
    remote_access_users: Optional[list[dict[str, Any]]] = None
    site_to_site_ipsec_vpn: Optional[dict[str, Any]] = None
    static_route: Optional[list[dict[str, Any]]] = None
    syslog_host: str = ""
    scheduled_maintenance: Optional[dict[str, Any]] = None


class VPCRouter(ResourceModel):
    """VPC router with its interfaces and configuration."""

    plan_id: VPCRouterPlan = VPCRouterPlan.STANDARD
    version: int = 2
    instance_status: InstanceStatus = InstanceStatus.UNKNOWN
    interfaces: list[VPCRouterInterface] = Field(default_factory=list)
    settings: Optional[VPCRouterSettings] = None
    settings_hash: str = ""

    @field_validator("instance_status", mode="before")
    @classmethod
    def coerce_instance_status(cls, v):
        return InstanceStatus.from_value(v)

    def find_interface(self, index: int) -> Optional[VPCRouterInterface]:
        """Return the interface attached at ``index``, if any."""
        for iface in self.interfaces:
            if iface.index == index:
                return iface
        return None


class VPCRouterCreateParams(BaseModel):
    """Parameters for creating a VPC router."""

    name: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    icon_id: Optional[str] = None
    plan_id: VPCRouterPlan
    switch_id: str = "shared"
    ip_addresses: list[str] = Field(default_factory=list)
    version: int = 2
    settings: VPCRouterSettings


class VPCRouterUpdateSettingsParams(BaseModel):
    """Router configuration pushed to an existing VPC router."""

    settings: VPCRouterSettings
    settings_hash: str = ""


class VPCRouterUpdateParams(VPCRouterUpdateSettingsParams):
    """Full update of a VPC router."""

    name: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    icon_id: Optional[str] = None
