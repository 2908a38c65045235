"""Tests for the local router builder."""

from unittest.mock import Mock

import pytest

from iaas_service.application.builders.local_router_builder import LocalRouterBuilder
from iaas_service.domain.base.exceptions import APIError
from iaas_service.domain.base.ports.api_ports import LocalRouterAPI
from iaas_service.domain.resources.local_router import (
    LocalRouter,
    LocalRouterInterface,
    LocalRouterPeer,
    LocalRouterSwitch,
)

SWITCH = LocalRouterSwitch(code="100", zone_id="is1a")
INTERFACE = LocalRouterInterface(
    virtual_ip_address="192.168.0.1",
    ip_address=["192.168.0.11", "192.168.0.12"],
    network_mask_len=24,
    vrid=100,
)


def _client():
    client = Mock(spec=LocalRouterAPI)
    client.create.return_value = LocalRouter(id="1")
    client.update_settings.side_effect = [
        LocalRouter(id="1", switch=SWITCH, interface=INTERFACE, settings_hash="h1"),
        LocalRouter(id="1", switch=SWITCH, interface=INTERFACE, settings_hash="h2"),
    ]
    return client


@pytest.mark.unit
class TestLocalRouterBuilder:
    """Test LocalRouterBuilder."""

    def test_has_network_settings(self):
        """Network settings need a switch code and a complete interface."""
        complete = LocalRouterBuilder(client=Mock(), name="lr", switch=SWITCH, interface=INTERFACE)
        no_switch = LocalRouterBuilder(client=Mock(), name="lr", interface=INTERFACE)

        assert complete.has_network_settings()
        assert not no_switch.has_network_settings()
        assert not LocalRouterBuilder(
            client=Mock(),
            name="lr",
            switch=SWITCH,
            interface=LocalRouterInterface(virtual_ip_address="192.168.0.1"),
        ).has_network_settings()

    def test_build_without_network_settings(self):
        """A bare local router is only created."""
        client = _client()

        result = LocalRouterBuilder(client=client, name="lr").build()

        assert result.id == "1"
        client.update_settings.assert_not_called()

    def test_build_pushes_settings_then_peers(self):
        """Peers are sent in a second update using the first update's hash."""
        client = _client()
        peer = LocalRouterPeer(id="2", secret_key="key")

        result = LocalRouterBuilder(
            client=client, name="lr", switch=SWITCH, interface=INTERFACE, peers=[peer]
        ).build()

        assert result.settings_hash == "h2"
        first, second = client.update_settings.call_args_list
        assert first.args[1].peers == []
        assert second.args[1].peers == [peer]
        assert second.args[1].settings_hash == "h1"

    def test_build_without_peers_updates_once(self):
        """Without peers the settings go out in one update."""
        client = _client()

        LocalRouterBuilder(client=client, name="lr", switch=SWITCH, interface=INTERFACE).build()

        client.update_settings.assert_called_once()

    def test_settings_error_carries_router(self):
        """A settings failure exposes the created router."""
        client = _client()
        client.update_settings.side_effect = APIError("bad settings")

        with pytest.raises(APIError) as exc_info:
            LocalRouterBuilder(client=client, name="lr", switch=SWITCH, interface=INTERFACE).build()

        assert exc_info.value.resource.id == "1"

    def test_update(self):
        """Update reads the router and sends one full update."""
        client = _client()
        client.update.return_value = LocalRouter(id="1", name="renamed")

        result = LocalRouterBuilder(client=client, name="renamed", switch=SWITCH).update("1")

        client.read.assert_called_once_with("1")
        params = client.update.call_args.args[1]
        assert params.name == "renamed"
        assert params.switch == SWITCH
        assert result.name == "renamed"
