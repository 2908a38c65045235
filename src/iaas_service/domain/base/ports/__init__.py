"""Domain ports for the wrapped API client."""

from .api_ports import (
    NFSAPI,
    SIMAPI,
    LocalRouterAPI,
    PowerControlPort,
    ServerAPI,
    VPCRouterAPI,
)

__all__ = [
    "LocalRouterAPI",
    "NFSAPI",
    "PowerControlPort",
    "SIMAPI",
    "ServerAPI",
    "VPCRouterAPI",
]
