"""VPC router builder and its NIC setting variants."""

from .builder import RouterSetting, VPCRouterBuilder
from .nic_settings import (
    AdditionalNICSetting,
    AdditionalPremiumNICSetting,
    AdditionalStandardNICSetting,
    NICSetting,
    PremiumNICSetting,
    StandardNICSetting,
)

__all__ = [
    "AdditionalNICSetting",
    "AdditionalPremiumNICSetting",
    "AdditionalStandardNICSetting",
    "NICSetting",
    "PremiumNICSetting",
    "RouterSetting",
    "StandardNICSetting",
    "VPCRouterBuilder",
]
