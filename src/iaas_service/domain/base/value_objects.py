"""Value objects shared by all resource types."""

from enum import Enum
from typing import Any, Optional


class Availability(str, Enum):
    """Lifecycle state of a resource on the platform.

    Which values count as pending and which as terminal is decided by the
    caller of the poller, not by the enum.
    """

    UNKNOWN = "unknown"
    MIGRATING = "migrating"
    UPLOADING = "uploading"
    TRANSFERRING = "transferring"
    DISCONTINUED = "discontinued"
    AVAILABLE = "available"
    FAILED = "failed"

    @classmethod
    def from_value(cls, value: Any) -> "Availability":
        """Coerce a raw API value, mapping empty values to UNKNOWN."""
        if isinstance(value, cls):
            return value
        if not value:
            return cls.UNKNOWN
        return cls(str(value).lower())

    def is_available(self) -> bool:
        return self is Availability.AVAILABLE

    def is_failed(self) -> bool:
        return self is Availability.FAILED


class InstanceStatus(str, Enum):
    """Power state of a resource that can be booted."""

    UNKNOWN = "unknown"
    CLEANING = "cleaning"
    DOWN = "down"
    UP = "up"

    @classmethod
    def from_value(cls, value: Any) -> "InstanceStatus":
        """Coerce a raw API value, mapping empty values to UNKNOWN."""
        if isinstance(value, cls):
            return value
        if not value:
            return cls.UNKNOWN
        return cls(str(value).lower())

    def is_up(self) -> bool:
        return self is InstanceStatus.UP

    def is_down(self) -> bool:
        return self is InstanceStatus.DOWN


def is_empty_id(value: Optional[Any]) -> bool:
    """Return True for the platform's "no resource" identifiers (None, "", 0)."""
    if value is None:
        return True
    text = str(value).strip()
    return text in ("", "0")
