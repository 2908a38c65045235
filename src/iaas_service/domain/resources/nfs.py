"""NFS appliance snapshot and parameters."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from iaas_service.domain.base.value_objects import InstanceStatus

from .base import ResourceModel


class NFSPlan(str, Enum):
    """Disk plan backing an NFS appliance."""

    HDD = "hdd"
    SSD = "ssd"


class NFS(ResourceModel):
    """NFS appliance connected to a switch."""

    instance_status: InstanceStatus = InstanceStatus.UNKNOWN
    switch_id: Optional[str] = None
    plan: NFSPlan = NFSPlan.HDD
    size: int = 100
    ip_addresses: list[str] = Field(default_factory=list)
    network_mask_len: int = 24
    default_route: str = ""

    @field_validator("instance_status", mode="before")
    @classmethod
    def coerce_instance_status(cls, v):
        return InstanceStatus.from_value(v)


class NFSCreateParams(BaseModel):
    """Parameters for creating an NFS appliance."""

    name: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    icon_id: Optional[str] = None
    switch_id: str
    plan: NFSPlan
    size: int
    ip_addresses: list[str]
    network_mask_len: int
    default_route: str = ""


class NFSUpdateParams(BaseModel):
    """Mutable NFS fields."""

    name: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    icon_id: Optional[str] = None
