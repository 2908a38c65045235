"""Resource builders composing several API calls into one build or update."""

from .local_router_builder import LocalRouterBuilder
from .nfs_builder import NFSBuilder
from .sim_builder import SIMBuilder
from .vpc_router import VPCRouterBuilder

__all__ = ["LocalRouterBuilder", "NFSBuilder", "SIMBuilder", "VPCRouterBuilder"]
