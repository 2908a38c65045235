"""Server snapshot."""

from pydantic import BaseModel, Field, field_validator

from iaas_service.domain.base.value_objects import InstanceStatus

from .base import ResourceModel


class ServerDisk(BaseModel):
    """Disk connected to a server."""

    id: str
    name: str = ""


class Server(ResourceModel):
    """Server with its power state and connected disks."""

    instance_status: InstanceStatus = InstanceStatus.UNKNOWN
    disks: list[ServerDisk] = Field(default_factory=list)

    @field_validator("instance_status", mode="before")
    @classmethod
    def coerce_instance_status(cls, v):
        return InstanceStatus.from_value(v)
