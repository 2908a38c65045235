"""Retry and timing policy for one setup run."""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MAX_RETRY_COUNT = 3
DEFAULT_POLLING_INTERVAL = 5.0
DEFAULT_POLLING_TIMEOUT = 20 * 60.0
DEFAULT_DELETE_RETRY_COUNT = 10
DEFAULT_DELETE_RETRY_INTERVAL = 10.0
DEFAULT_PROVISIONING_RETRY_COUNT = 10
DEFAULT_PROVISIONING_RETRY_INTERVAL = 5.0
DEFAULT_NIC_UPDATE_WAIT_DURATION = 5.0


class SetupOptions(BaseModel):
    """Retry and timing policy of the retryable setup engine."""

    model_config = ConfigDict(validate_assignment=True)

    boot_after_build: bool = Field(False, description="Boot the resource once it is built")
    retry_count: int = Field(
        DEFAULT_MAX_RETRY_COUNT,
        ge=0,
        description="Extra create attempts after a copy failure",
    )
    polling_interval: float = Field(DEFAULT_POLLING_INTERVAL, ge=0, description="Seconds between reads")
    polling_timeout: float = Field(
        DEFAULT_POLLING_TIMEOUT, gt=0, description="Maximum seconds for one wait phase"
    )
    delete_retry_count: int = Field(
        DEFAULT_DELETE_RETRY_COUNT,
        ge=1,
        description="Delete attempts for a resource that failed to copy",
    )
    delete_retry_interval: float = Field(
        DEFAULT_DELETE_RETRY_INTERVAL, ge=0, description="Seconds to wait before each delete attempt"
    )
    provisioning_retry_count: int = Field(
        DEFAULT_PROVISIONING_RETRY_COUNT,
        ge=1,
        description="Attempts of the provision-before-up hook",
    )
    provisioning_retry_interval: float = Field(
        DEFAULT_PROVISIONING_RETRY_INTERVAL,
        ge=0,
        description="Seconds between provisioning attempts",
    )
    nic_update_wait_duration: float = Field(
        DEFAULT_NIC_UPDATE_WAIT_DURATION,
        ge=0,
        description="Seconds to wait after connecting or disconnecting NICs",
    )
