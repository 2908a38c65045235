"""Service facades, one per resource type."""

from .local_router_service import LocalRouterService
from .nfs_service import NFSService
from .server_service import ServerService
from .sim_service import SIMService
from .vpc_router_service import VPCRouterService

__all__ = [
    "LocalRouterService",
    "NFSService",
    "SIMService",
    "ServerService",
    "VPCRouterService",
]
