"""Domain base package - shared primitives for every resource type."""

from .context import OperationContext
from .exceptions import (
    APIError,
    ConfigurationError,
    IaasServiceError,
    MaxRetryCountExceededError,
    NotFoundError,
    OperationCancelledError,
    PollingError,
    ProvisioningError,
    SetupConfigurationError,
    SetupError,
    StateTimeoutError,
    UnexpectedStateError,
    UpWaitError,
    ValidationError,
)
from .value_objects import Availability, InstanceStatus, is_empty_id

__all__ = [
    "APIError",
    "Availability",
    "ConfigurationError",
    "IaasServiceError",
    "InstanceStatus",
    "MaxRetryCountExceededError",
    "NotFoundError",
    "OperationCancelledError",
    "OperationContext",
    "PollingError",
    "ProvisioningError",
    "SetupConfigurationError",
    "SetupError",
    "StateTimeoutError",
    "UnexpectedStateError",
    "UpWaitError",
    "ValidationError",
    "is_empty_id",
]
