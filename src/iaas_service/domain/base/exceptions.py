"""Exception hierarchy for the IaaS service layer.

Error Hierarchy:
- IaasServiceError: base for every error raised by this package
  - ValidationError: request or builder settings rejected before any API call
  - ConfigurationError: invalid service configuration
  - APIError: failure reported by the wrapped API client
    - NotFoundError: the target resource does not exist
  - PollingError: the state poller ended without reaching a target state
    - UnexpectedStateError, StateTimeoutError, OperationCancelledError
  - SetupError: the retryable setup engine gave up
    - SetupConfigurationError, MaxRetryCountExceededError,
      ProvisioningError, UpWaitError

Errors raised after a resource was created carry it in ``resource`` so callers
can decide whether to clean it up or keep it.
"""

from typing import Any, Optional


class IaasServiceError(Exception):
    """Base class for all service layer errors."""

    default_error_code = "IAAS_SERVICE_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        resource: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        self.resource = resource

    def to_dict(self) -> dict[str, Any]:
        """Convert the error to a dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(IaasServiceError):
    """Settings or request values are invalid."""

    default_error_code = "VALIDATION_ERROR"


class ConfigurationError(IaasServiceError):
    """Service configuration is invalid."""

    default_error_code = "CONFIGURATION_ERROR"


class APIError(IaasServiceError):
    """Error reported by the wrapped API client."""

    default_error_code = "API_ERROR"

    def __init__(self, message: str, status_code: Optional[int] = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.status_code = status_code


class NotFoundError(APIError):
    """The requested resource does not exist."""

    default_error_code = "NOT_FOUND"

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("status_code", 404)
        super().__init__(message, **kwargs)


def is_not_found(error: BaseException) -> bool:
    """Check whether an error means the resource is already gone."""
    if isinstance(error, NotFoundError):
        return True
    return isinstance(error, APIError) and error.status_code == 404


class PollingError(IaasServiceError):
    """The state poller stopped before reaching a target state."""

    default_error_code = "POLLING_ERROR"


class UnexpectedStateError(PollingError):
    """The resource reached a state that is neither target nor pending."""

    default_error_code = "UNEXPECTED_STATE"

    def __init__(self, message: str, snapshot: Any = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.snapshot = snapshot


class StateTimeoutError(PollingError, TimeoutError):
    """The resource did not reach a target state within the timeout."""

    default_error_code = "STATE_TIMEOUT"


class OperationCancelledError(PollingError):
    """The operation context was cancelled or its deadline passed."""

    default_error_code = "OPERATION_CANCELLED"


class SetupError(IaasServiceError):
    """Base class for errors raised by the retryable setup engine."""

    default_error_code = "SETUP_ERROR"


class SetupConfigurationError(SetupError):
    """A collaborator required by the requested setup phases is missing."""

    default_error_code = "SETUP_CONFIGURATION_ERROR"


class MaxRetryCountExceededError(SetupError):
    """Every attempt ended with the resource failing to copy."""

    default_error_code = "MAX_RETRY_COUNT_EXCEEDED"

    def __init__(self, attempts: int, **kwargs: Any) -> None:
        super().__init__(f"max retry count exceeded: {attempts} attempts failed", **kwargs)
        self.attempts = attempts


class ProvisioningError(SetupError):
    """The pre-boot provisioning hook failed after all of its attempts."""

    default_error_code = "PROVISIONING_FAILED"


class UpWaitError(SetupError):
    """Waiting for the created resource to boot failed."""

    default_error_code = "UP_WAIT_FAILED"
