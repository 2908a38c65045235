"""Local router snapshot and parameters."""

from typing import Optional

from pydantic import BaseModel, Field

from .base import ResourceModel


class LocalRouterSwitch(BaseModel):
    """Switch or VPC router the local router is attached to."""

    code: str = ""
    category: str = "cloud"
    zone_id: str = ""


class LocalRouterInterface(BaseModel):
    """Network settings of the local router."""

    virtual_ip_address: str = ""
    ip_address: list[str] = Field(default_factory=list)
    network_mask_len: int = 0
    vrid: int = 0


class LocalRouterPeer(BaseModel):
    """Peering with another local router."""

    id: str
    secret_key: str
    enabled: bool = True
    description: str = ""


class LocalRouterStaticRoute(BaseModel):
    """Static route announced by the local router."""

    prefix: str
    next_hop: str


class LocalRouter(ResourceModel):
    """Local router with its network configuration."""

    switch: Optional[LocalRouterSwitch] = None
    interface: Optional[LocalRouterInterface] = None
    peers: list[LocalRouterPeer] = Field(default_factory=list)
    static_routes: list[LocalRouterStaticRoute] = Field(default_factory=list)
    settings_hash: str = ""


class LocalRouterCreateParams(BaseModel):
    """Parameters for creating a local router."""

    name: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    icon_id: Optional[str] = None


class LocalRouterUpdateSettingsParams(BaseModel):
    """Network settings pushed to an existing local router."""

    switch: Optional[LocalRouterSwitch] = None
    interface: Optional[LocalRouterInterface] = None
    peers: list[LocalRouterPeer] = Field(default_factory=list)
    static_routes: list[LocalRouterStaticRoute] = Field(default_factory=list)
    settings_hash: str = ""


class LocalRouterUpdateParams(LocalRouterUpdateSettingsParams):
    """Full update of a local router."""

    name: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    icon_id: Optional[str] = None
