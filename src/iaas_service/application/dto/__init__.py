"""Request DTOs for the service facades."""

from .requests import (
    BaseRequest,
    DeleteRequest,
    GlobalResourceRequest,
    LocalRouterApplyRequest,
    NFSApplyRequest,
    ServerDeleteRequest,
    ShutdownRequest,
    SIMApplyRequest,
    VPCRouterApplyRequest,
    ZonalResourceRequest,
)

__all__ = [
    "BaseRequest",
    "DeleteRequest",
    "GlobalResourceRequest",
    "LocalRouterApplyRequest",
    "NFSApplyRequest",
    "SIMApplyRequest",
    "ServerDeleteRequest",
    "ShutdownRequest",
    "VPCRouterApplyRequest",
    "ZonalResourceRequest",
]
