"""State polling and power helpers."""

from .power import boot, shutdown
from .state_polling_waiter import StatePollingTask, StatePollingWaiter
from .wait import (
    COPY_TARGET_AVAILABILITY,
    PENDING_AVAILABILITY,
    UP_PENDING_INSTANCE_STATUS,
    UP_TARGET_AVAILABILITY,
    UP_TARGET_INSTANCE_STATUS,
    copy_waiter,
    down_waiter,
    until_down,
    until_ready,
    until_up,
    up_waiter,
)

__all__ = [
    "COPY_TARGET_AVAILABILITY",
    "PENDING_AVAILABILITY",
    "StatePollingTask",
    "StatePollingWaiter",
    "UP_PENDING_INSTANCE_STATUS",
    "UP_TARGET_AVAILABILITY",
    "UP_TARGET_INSTANCE_STATUS",
    "boot",
    "copy_waiter",
    "down_waiter",
    "shutdown",
    "until_down",
    "until_ready",
    "until_up",
    "up_waiter",
]
