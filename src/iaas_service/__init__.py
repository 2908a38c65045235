"""Service layer over an IaaS provider's resource API."""

from iaas_service.application.setup import RetryableSetup, SetupOptions
from iaas_service.domain.base import (
    Availability,
    InstanceStatus,
    MaxRetryCountExceededError,
    OperationCancelledError,
    OperationContext,
    ProvisioningError,
    SetupConfigurationError,
    UpWaitError,
)
from iaas_service.infrastructure.waiter import StatePollingWaiter

__version__ = "0.1.0"

__all__ = [
    "Availability",
    "InstanceStatus",
    "MaxRetryCountExceededError",
    "OperationCancelledError",
    "OperationContext",
    "ProvisioningError",
    "RetryableSetup",
    "SetupConfigurationError",
    "SetupOptions",
    "StatePollingWaiter",
    "UpWaitError",
    "__version__",
]
