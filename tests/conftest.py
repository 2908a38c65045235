"""Global test configuration and fixtures."""

import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Optional

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from iaas_service.application.setup.options import SetupOptions  # noqa: E402
from iaas_service.config.settings import ServiceSettings  # noqa: E402


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")


def make_snapshot(
    resource_id: str = "100",
    availability: Optional[str] = "available",
    instance_status: Optional[str] = None,
    **kwargs: Any,
) -> SimpleNamespace:
    """Build a bare resource snapshot for poller and setup tests."""
    attrs = {"id": resource_id, **kwargs}
    if availability is not None:
        attrs["availability"] = availability
    if instance_status is not None:
        attrs["instance_status"] = instance_status
    return SimpleNamespace(**attrs)


class SequenceReader:
    """Read function returning queued items in order; the last one repeats.

    Queued exceptions are raised instead of returned.
    """

    def __init__(self, *items: Any) -> None:
        self._items = list(items)
        self.calls = 0

    def __call__(self, *args: Any) -> Any:
        self.calls += 1
        item = self._items.pop(0) if len(self._items) > 1 else self._items[0]
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def snapshot():
    """Snapshot factory."""
    return make_snapshot


@pytest.fixture
def sequence_reader():
    """SequenceReader factory."""
    return SequenceReader


@pytest.fixture
def fast_options() -> SetupOptions:
    """Setup options that never sleep noticeably."""
    return SetupOptions(
        polling_interval=0.001,
        polling_timeout=5,
        delete_retry_interval=0,
        provisioning_retry_interval=0,
        nic_update_wait_duration=0,
    )


@pytest.fixture
def fast_settings(fast_options) -> ServiceSettings:
    """Service settings whose setup defaults never sleep noticeably."""
    return ServiceSettings(default_zone="is1a", setup=fast_options)
