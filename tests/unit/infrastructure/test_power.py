"""Tests for the boot and shutdown helpers."""

from unittest.mock import Mock

import pytest

from iaas_service.domain.base.exceptions import StateTimeoutError
from iaas_service.domain.base.ports.api_ports import PowerControlPort
from iaas_service.domain.resources.server import Server
from iaas_service.infrastructure.waiter import power
from iaas_service.infrastructure.waiter.wait import until_ready


def _client(status):
    state = {"status": status}
    client = Mock(spec=PowerControlPort)
    client.read.side_effect = lambda zone, resource_id: Server(
        id=resource_id, availability="available", instance_status=state["status"]
    )
    client.boot.side_effect = lambda zone, resource_id: state.update(status="up")
    client.shutdown.side_effect = lambda zone, resource_id, force=False: state.update(status="down")
    return client


@pytest.mark.unit
class TestPowerHelpers:
    """Test boot and shutdown."""

    def test_boot_waits_until_up(self):
        """boot powers on and returns the running snapshot."""
        client = _client("down")

        result = power.boot(None, client, "is1a", "1", interval=0.001, timeout=5)

        client.boot.assert_called_once_with("is1a", "1")
        assert result.instance_status.is_up()

    def test_boot_skips_running_resource(self):
        """Booting a running resource is a no-op."""
        client = _client("up")

        power.boot(None, client, "is1a", "1", interval=0.001, timeout=5)

        client.boot.assert_not_called()

    def test_shutdown_forwards_force(self):
        """shutdown passes the force flag and waits for down."""
        client = _client("up")

        result = power.shutdown(None, client, "is1a", "1", force=True, interval=0.001, timeout=5)

        client.shutdown.assert_called_once_with("is1a", "1", force=True)
        assert result.instance_status.is_down()

    def test_shutdown_skips_stopped_resource(self):
        """Shutting down a stopped resource is a no-op."""
        client = _client("down")

        power.shutdown(None, client, "is1a", "1", interval=0.001, timeout=5)

        client.shutdown.assert_not_called()

    def test_boot_times_out(self):
        """A resource that never comes up times out."""
        client = _client("down")
        client.boot.side_effect = None

        with pytest.raises(StateTimeoutError):
            power.boot(None, client, "is1a", "1", interval=0.001, timeout=0.05)

    def test_until_ready_ignores_power_state(self, snapshot, sequence_reader):
        """until_ready only waits for availability."""
        final = snapshot(availability="available", instance_status="down")
        read = sequence_reader(snapshot(availability="migrating"), final)

        assert until_ready(None, read, interval=0.001, timeout=5) is final
