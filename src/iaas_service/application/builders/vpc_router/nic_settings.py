"""NIC settings of a VPC router.

The primary NIC is either a ``StandardNICSetting`` (standard plan, shared
segment) or a ``PremiumNICSetting`` (premium-class plans, own switch).
Additional NICs follow the same split. Each helper below dispatches over the
closed set of variants and rejects anything else.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from iaas_service.domain.resources.vpc_router import VPCRouterInterfaceSetting

SHARED_SEGMENT = "shared"


class StandardNICSetting(BaseModel):
    """Primary NIC of a standard plan router, connected to the shared segment."""

    kind: Literal["standard"] = "standard"


class PremiumNICSetting(BaseModel):
    """Primary NIC of a premium-class router with a redundant address pair."""

    kind: Literal["premium"] = "premium"
    switch_id: str
    ip_addresses: list[str] = Field(min_length=2, max_length=2)
    virtual_ip_address: str
    ip_aliases: list[str] = Field(default_factory=list)


class AdditionalStandardNICSetting(BaseModel):
    """Extra NIC of a standard plan router."""

    kind: Literal["standard"] = "standard"
    switch_id: str
    ip_address: str
    network_mask_len: int = Field(ge=8, le=29)
    index: int = Field(ge=0, le=7)


class AdditionalPremiumNICSetting(BaseModel):
    """Extra NIC of a premium-class router."""

    kind: Literal["premium"] = "premium"
    switch_id: str
    ip_addresses: list[str] = Field(min_length=2, max_length=2)
    virtual_ip_address: str
    network_mask_len: int = Field(ge=8, le=29)
    index: int = Field(ge=0, le=7)


NICSetting = Annotated[
    Union[StandardNICSetting, PremiumNICSetting],
    Field(discriminator="kind"),
]
AdditionalNICSetting = Annotated[
    Union[AdditionalStandardNICSetting, AdditionalPremiumNICSetting],
    Field(discriminator="kind"),
]


def connected_switch(nic: NICSetting) -> str:
    """Switch the primary NIC is created on."""
    if isinstance(nic, StandardNICSetting):
        return SHARED_SEGMENT
    if isinstance(nic, PremiumNICSetting):
        return nic.switch_id
    raise TypeError(f"unsupported NIC setting: {nic!r}")


def ip_addresses(nic: NICSetting) -> list[str]:
    """Addresses assigned to the router appliances on the primary NIC."""
    if isinstance(nic, StandardNICSetting):
        return []
    if isinstance(nic, PremiumNICSetting):
        return list(nic.ip_addresses)
    raise TypeError(f"unsupported NIC setting: {nic!r}")


def interface_setting(nic: NICSetting) -> Optional[VPCRouterInterfaceSetting]:
    """Interface configuration of the primary NIC, if it needs one."""
    if isinstance(nic, StandardNICSetting):
        return None
    if isinstance(nic, PremiumNICSetting):
        return VPCRouterInterfaceSetting(
            index=0,
            ip_addresses=list(nic.ip_addresses),
            virtual_ip_address=nic.virtual_ip_address,
            ip_aliases=list(nic.ip_aliases),
        )
    raise TypeError(f"unsupported NIC setting: {nic!r}")


def additional_interface_setting(nic: AdditionalNICSetting) -> VPCRouterInterfaceSetting:
    """Interface configuration of an additional NIC."""
    if isinstance(nic, AdditionalStandardNICSetting):
        return VPCRouterInterfaceSetting(
            index=nic.index,
            ip_addresses=[nic.ip_address],
            network_mask_len=nic.network_mask_len,
        )
    if isinstance(nic, AdditionalPremiumNICSetting):
        return VPCRouterInterfaceSetting(
            index=nic.index,
            ip_addresses=list(nic.ip_addresses),
            virtual_ip_address=nic.virtual_ip_address,
            network_mask_len=nic.network_mask_len,
        )
    raise TypeError(f"unsupported additional NIC setting: {nic!r}")


def switch_info(nic: AdditionalNICSetting) -> tuple[str, int]:
    """Return ``(switch_id, index)`` of an additional NIC."""
    if isinstance(nic, (AdditionalStandardNICSetting, AdditionalPremiumNICSetting)):
        return nic.switch_id, nic.index
    raise TypeError(f"unsupported additional NIC setting: {nic!r}")


def is_standard(nic: Union[NICSetting, AdditionalNICSetting]) -> bool:
    """True for the standard variants, False for the premium ones."""
    if isinstance(nic, (StandardNICSetting, AdditionalStandardNICSetting)):
        return True
    if isinstance(nic, (PremiumNICSetting, AdditionalPremiumNICSetting)):
        return False
    raise TypeError(f"unsupported NIC setting: {nic!r}")
