"""Resource snapshots and parameter models exchanged with the wrapped API client."""

from .base import ResourceModel
from .local_router import (
    LocalRouter,
    LocalRouterCreateParams,
    LocalRouterInterface,
    LocalRouterPeer,
    LocalRouterStaticRoute,
    LocalRouterSwitch,
    LocalRouterUpdateParams,
    LocalRouterUpdateSettingsParams,
)
from .nfs import NFS, NFSCreateParams, NFSPlan, NFSUpdateParams
from .server import Server, ServerDisk
from .sim import (
    SIM,
    SIMCreateParams,
    SIMInfo,
    SIMNetworkOperatorConfig,
    SIMUpdateParams,
)
from .vpc_router import (
    VPCRouter,
    VPCRouterCreateParams,
    VPCRouterInterface,
    VPCRouterInterfaceSetting,
    VPCRouterPlan,
    VPCRouterSettings,
    VPCRouterUpdateParams,
    VPCRouterUpdateSettingsParams,
)

__all__ = [
    "LocalRouter",
    "LocalRouterCreateParams",
    "LocalRouterInterface",
    "LocalRouterPeer",
    "LocalRouterStaticRoute",
    "LocalRouterSwitch",
    "LocalRouterUpdateParams",
    "LocalRouterUpdateSettingsParams",
    "NFS",
    "NFSCreateParams",
    "NFSPlan",
    "NFSUpdateParams",
    "ResourceModel",
    "SIM",
    "SIMCreateParams",
    "SIMInfo",
    "SIMNetworkOperatorConfig",
    "SIMUpdateParams",
    "Server",
    "ServerDisk",
    "VPCRouter",
    "VPCRouterCreateParams",
    "VPCRouterInterface",
    "VPCRouterInterfaceSetting",
    "VPCRouterPlan",
    "VPCRouterSettings",
    "VPCRouterUpdateParams",
    "VPCRouterUpdateSettingsParams",
]
