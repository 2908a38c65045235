"""Request DTOs accepted by the service facades."""

from __future__ import annotations

import ipaddress
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from iaas_service.application.builders.vpc_router.builder import RouterSetting
from iaas_service.application.builders.vpc_router.nic_settings import (
    AdditionalNICSetting,
    NICSetting,
)
from iaas_service.domain.base.exceptions import ValidationError
from iaas_service.domain.resources.local_router import (
    LocalRouterInterface,
    LocalRouterPeer,
    LocalRouterStaticRoute,
    LocalRouterSwitch,
)
from iaas_service.domain.resources.nfs import NFSPlan
from iaas_service.domain.resources.sim import SIMNetworkOperatorConfig
from iaas_service.domain.resources.vpc_router import VPCRouterPlan


class BaseRequest(BaseModel):
    """Base class for service requests."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BaseRequest":
        """
        Build a request from raw data.

        Raises:
            ValidationError: If the data does not validate
        """
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            messages = [
                f"{'.'.join(str(x) for x in error['loc'])}: {error['msg']}" for error in e.errors()
            ]
            raise ValidationError(
                f"invalid {cls.__name__}: {'; '.join(messages)}",
                details={"errors": messages},
            ) from e


class ZonalResourceRequest(BaseRequest):
    """Target a single zonal resource."""

    zone: str = Field(min_length=1)
    id: str = Field(min_length=1)


class GlobalResourceRequest(BaseRequest):
    """Target a single global resource."""

    id: str = Field(min_length=1)


class ShutdownRequest(ZonalResourceRequest):
    """Power off a resource."""

    force: bool = False
    no_wait: bool = False


class DeleteRequest(ZonalResourceRequest):
    """Delete a resource, shutting it down first when ``force`` is set."""

    force: bool = False
    fail_if_not_found: bool = False


class ServerDeleteRequest(DeleteRequest):
    """Delete a server, optionally together with its disks."""

    with_disks: bool = False


def _validate_ipv4_list(addresses: list[str]) -> list[str]:
    for address in addresses:
        try:
            ipaddress.IPv4Address(address)
        except ValueError:
            raise ValueError(f"invalid IPv4 address: {address}")
    return addresses


class VPCRouterApplyRequest(BaseRequest):
    """Create (no ``id``) or update a VPC router."""

    zone: str = Field(min_length=1)
    id: Optional[str] = None

    name: str = Field(min_length=1)
    description: str = Field("", max_length=512)
    tags: list[str] = Field(default_factory=list)
    icon_id: Optional[str] = None

    plan_id: VPCRouterPlan
    version: int = 2
    nic_setting: NICSetting
    additional_nic_settings: list[AdditionalNICSetting] = Field(default_factory=list)
    router_setting: Optional[RouterSetting] = None
    no_wait: bool = False
    boot_after_create: bool = False


class NFSApplyRequest(BaseRequest):
    """Create (no ``id``) or update an NFS appliance."""

    zone: str = Field(min_length=1)
    id: Optional[str] = None

    name: str = Field(min_length=1)
    description: str = Field("", max_length=512)
    tags: list[str] = Field(default_factory=list)
    icon_id: Optional[str] = None

    switch_id: str = Field(min_length=1)
    plan: NFSPlan
    size: int = Field(gt=0)
    ip_addresses: list[str] = Field(min_length=1, max_length=2)
    network_mask_len: int = Field(ge=8, le=29)
    default_route: str = ""
    no_wait: bool = False

    @field_validator("ip_addresses")
    @classmethod
    def validate_ip_addresses(cls, v: list[str]) -> list[str]:
        return _validate_ipv4_list(v)

    @field_validator("default_route")
    @classmethod
    def validate_default_route(cls, v: str) -> str:
        if v:
            _validate_ipv4_list([v])
        return v


class SIMApplyRequest(BaseRequest):
    """Register (no ``id``) or update a SIM."""

    id: Optional[str] = None

    name: str = Field(min_length=1)
    description: str = Field("", max_length=512)
    tags: list[str] = Field(default_factory=list)
    icon_id: Optional[str] = None

    iccid: str = Field(min_length=1)
    passcode: str = ""
    activate: bool = False
    imei: str = ""
    carriers: list[SIMNetworkOperatorConfig] = Field(min_length=1)


class LocalRouterApplyRequest(BaseRequest):
    """Create (no ``id``) or update a local router."""

    id: Optional[str] = None

    name: str = Field(min_length=1)
    description: str = Field("", max_length=512)
    tags: list[str] = Field(default_factory=list)
    icon_id: Optional[str] = None

    switch: Optional[LocalRouterSwitch] = None
    interface: Optional[LocalRouterInterface] = None
    peers: list[LocalRouterPeer] = Field(default_factory=list)
    static_routes: list[LocalRouterStaticRoute] = Field(default_factory=list)
    settings_hash: str = ""
