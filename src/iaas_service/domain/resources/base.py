"""Base model for resource snapshots."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from iaas_service.domain.base.value_objects import Availability


class ResourceModel(BaseModel):
    """Fields every platform resource carries."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    id: str
    name: str = ""
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    icon_id: Optional[str] = None
    availability: Availability = Availability.UNKNOWN

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        """IDs arrive as numbers from some endpoints."""
        return str(v)

    @field_validator("availability", mode="before")
    @classmethod
    def coerce_availability(cls, v):
        return Availability.from_value(v)
