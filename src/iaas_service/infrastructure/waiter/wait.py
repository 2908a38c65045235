"""State sets used by the setup engine and the ready-made waits built on them."""

from typing import Any, Callable, Optional

from iaas_service.domain.base.context import OperationContext
from iaas_service.domain.base.value_objects import Availability, InstanceStatus

from .state_polling_waiter import (
    DEFAULT_POLLING_INTERVAL,
    DEFAULT_POLLING_TIMEOUT,
    StatePollingWaiter,
)

PENDING_AVAILABILITY = (
    Availability.UNKNOWN,
    Availability.MIGRATING,
    Availability.UPLOADING,
    Availability.TRANSFERRING,
    Availability.DISCONTINUED,
)

# Failed is a target while copying so the caller can delete and retry.
COPY_TARGET_AVAILABILITY = (Availability.AVAILABLE, Availability.FAILED)

UP_TARGET_AVAILABILITY = (Availability.AVAILABLE,)
UP_TARGET_INSTANCE_STATUS = (InstanceStatus.UP,)
UP_PENDING_INSTANCE_STATUS = (
    InstanceStatus.UNKNOWN,
    InstanceStatus.CLEANING,
    InstanceStatus.DOWN,
)

DOWN_TARGET_INSTANCE_STATUS = (InstanceStatus.DOWN,)
DOWN_PENDING_INSTANCE_STATUS = (
    InstanceStatus.UNKNOWN,
    InstanceStatus.CLEANING,
    InstanceStatus.UP,
)


def copy_waiter(
    read_func: Callable[[], Any],
    interval: float = DEFAULT_POLLING_INTERVAL,
    timeout: float = DEFAULT_POLLING_TIMEOUT,
) -> StatePollingWaiter:
    """Waiter for a freshly created resource that is still being copied."""
    return StatePollingWaiter(
        read_func=read_func,
        target_availability=COPY_TARGET_AVAILABILITY,
        pending_availability=PENDING_AVAILABILITY,
        interval=interval,
        timeout=timeout,
    )


def up_waiter(
    read_func: Callable[[], Any],
    interval: float = DEFAULT_POLLING_INTERVAL,
    timeout: float = DEFAULT_POLLING_TIMEOUT,
) -> StatePollingWaiter:
    """Waiter for a resource that is booting."""
    return StatePollingWaiter(
        read_func=read_func,
        target_availability=UP_TARGET_AVAILABILITY,
        pending_availability=PENDING_AVAILABILITY,
        target_instance_status=UP_TARGET_INSTANCE_STATUS,
        pending_instance_status=UP_PENDING_INSTANCE_STATUS,
        interval=interval,
        timeout=timeout,
    )


def down_waiter(
    read_func: Callable[[], Any],
    interval: float = DEFAULT_POLLING_INTERVAL,
    timeout: float = DEFAULT_POLLING_TIMEOUT,
) -> StatePollingWaiter:
    """Waiter for a resource that is shutting down."""
    return StatePollingWaiter(
        read_func=read_func,
        target_availability=UP_TARGET_AVAILABILITY,
        pending_availability=PENDING_AVAILABILITY,
        target_instance_status=DOWN_TARGET_INSTANCE_STATUS,
        pending_instance_status=DOWN_PENDING_INSTANCE_STATUS,
        interval=interval,
        timeout=timeout,
    )


def until_up(
    context: Optional[OperationContext],
    read_func: Callable[[], Any],
    interval: float = DEFAULT_POLLING_INTERVAL,
    timeout: float = DEFAULT_POLLING_TIMEOUT,
) -> Any:
    """Block until the resource is available and up."""
    return up_waiter(read_func, interval, timeout).wait_for_state(context)


def until_down(
    context: Optional[OperationContext],
    read_func: Callable[[], Any],
    interval: float = DEFAULT_POLLING_INTERVAL,
    timeout: float = DEFAULT_POLLING_TIMEOUT,
) -> Any:
    """Block until the resource is available and down."""
    return down_waiter(read_func, interval, timeout).wait_for_state(context)


def until_ready(
    context: Optional[OperationContext],
    read_func: Callable[[], Any],
    interval: float = DEFAULT_POLLING_INTERVAL,
    timeout: float = DEFAULT_POLLING_TIMEOUT,
) -> Any:
    """Block until a resource without power state becomes available."""
    return StatePollingWaiter(
        read_func=read_func,
        target_availability=UP_TARGET_AVAILABILITY,
        pending_availability=PENDING_AVAILABILITY,
        interval=interval,
        timeout=timeout,
    ).wait_for_state(context)
