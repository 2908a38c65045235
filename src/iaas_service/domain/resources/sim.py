"""SIM snapshot and parameters."""

from typing import Optional

from pydantic import BaseModel, Field

from .base import ResourceModel


class SIMInfo(BaseModel):
    """Runtime information of a SIM."""

    activated: bool = False
    imei_lock: bool = False
    imei: str = ""


class SIMNetworkOperatorConfig(BaseModel):
    """Carrier a SIM is allowed to attach to."""

    name: str
    allow: bool = True
    country_code: str = ""


class SIM(ResourceModel):
    """SIM registered on the platform."""

    iccid: str = ""
    info: SIMInfo = Field(default_factory=SIMInfo)


class SIMCreateParams(BaseModel):
    """Parameters for registering a SIM."""

    name: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    icon_id: Optional[str] = None
    iccid: str
    passcode: str


class SIMUpdateParams(BaseModel):
    """Mutable SIM fields."""

    name: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    icon_id: Optional[str] = None
