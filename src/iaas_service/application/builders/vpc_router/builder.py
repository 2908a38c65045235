"""VPC router builder - create, attach networks, configure and boot."""

import time
from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel, Field

from iaas_service.application.setup.options import SetupOptions
from iaas_service.application.setup.retryable_setup import RetryableSetup
from iaas_service.domain.base.context import OperationContext
from iaas_service.domain.base.exceptions import ValidationError
from iaas_service.domain.base.ports.api_ports import VPCRouterAPI
from iaas_service.domain.base.value_objects import is_empty_id
from iaas_service.domain.resources.vpc_router import (
    VPCRouter,
    VPCRouterCreateParams,
    VPCRouterInterfaceSetting,
    VPCRouterPlan,
    VPCRouterSettings,
    VPCRouterUpdateParams,
    VPCRouterUpdateSettingsParams,
)
from iaas_service.infrastructure.logging.logger import get_logger
from iaas_service.infrastructure.waiter import power

from .nic_settings import (
    AdditionalNICSetting,
    NICSetting,
    additional_interface_setting,
    connected_switch,
    interface_setting,
    ip_addresses,
    is_standard,
    switch_info,
)

logger = get_logger(__name__)


class RouterSetting(BaseModel):
    """Router configuration requested by the caller."""

    vrid: int = 0
    internet_connection_enabled: bool = True
    static_nat: Optional[list[dict[str, Any]]] = None
    port_forwarding: Optional[list[dict[str, Any]]] = None
    firewall: Optional[list[dict[str, Any]]] = None
    dhcp_server: Optional[list[dict[str, Any]]] = None
    dhcp_static_mapping: Optional[list[dict[str, Any]]] = None
    dns_forwarding: Optional[dict[str, Any]] = None
    pptp_server: Optional[dict[str, Any]] = None
    l2tp_ipsec_server: Optional[dict[str, Any]] = None
    wireguard: Optional[dict[str, Any]] = None
    remote_access_users: Optional[list[dict[str, Any]]] = None
    site_to_site_ipsec_vpn: Optional[dict[str, Any]] = None
    static_route: Optional[list[dict[str, Any]]] = None
    syslog_host: str = ""
    scheduled_maintenance: Optional[dict[str, Any]] = None


@dataclass
class VPCRouterBuilder:
    """
    Build a new VPC router or bring an existing one to the requested shape.

    Creating runs on ``RetryableSetup``: the router is created on its primary
    NIC, then the provisioning hook connects the additional NICs, pushes the
    full configuration, applies it and optionally boots the router.

    Updating diffs the live interfaces against ``additional_nic_settings``.
    Moving, removing or adding an interface needs the router powered off, so
    a running router is shut down first and booted again afterwards.
    """

    client: VPCRouterAPI
    zone: str
    name: str
    plan_id: VPCRouterPlan
    nic_setting: Optional[NICSetting]
    id: Optional[str] = None
    description: str = ""
    tags: list[str] = field(default_factory=list)
    icon_id: Optional[str] = None
    version: int = 2
    additional_nic_settings: list[AdditionalNICSetting] = field(default_factory=list)
    router_setting: Optional[RouterSetting] = None
    setup_options: Optional[SetupOptions] = None
    no_wait: bool = False

    def _options(self) -> SetupOptions:
        options = (self.setup_options or SetupOptions()).model_copy()
        options.provisioning_retry_count = 1
        return options

    def _router_setting(self) -> RouterSetting:
        return self.router_setting or RouterSetting()

    def validate(self) -> None:
        """
        Validate the builder settings before any API call.

        Raises:
            ValidationError: If the NIC shape does not fit the plan or an
                option combination is unsupported
        """
        self._validate_common()

        if self.no_wait:
            if self.additional_nic_settings or self.router_setting is not None:
                raise ValidationError(
                    "no_wait=True is not supported with additional_nic_settings and router_setting"
                )
            if self.setup_options is not None and self.setup_options.boot_after_build:
                raise ValidationError("no_wait=True is not supported with boot_after_build")

        if self.plan_id == VPCRouterPlan.STANDARD:
            self._validate_for_standard()
        else:
            self._validate_for_premium()

    def _validate_common(self) -> None:
        if self.nic_setting is None:
            raise ValidationError("required field is missing: nic_setting")
        try:
            VPCRouterPlan(self.plan_id)
        except ValueError:
            raise ValidationError(f"invalid plan: plan_id: {self.plan_id}")

        seen_indexes = set()
        for i, nic in enumerate(self.additional_nic_settings):
            switch_id, index = switch_info(nic)
            if is_empty_id(switch_id):
                raise ValidationError(
                    f"invalid switch_id is specified: additional_nic_settings[{i}].switch_id is empty"
                )
            if index == 0:
                raise ValidationError(
                    f"invalid index is specified: additional_nic_settings[{i}].index is zero"
                )
            if index in seen_indexes:
                raise ValidationError(
                    f"duplicate index is specified: additional_nic_settings[{i}].index is {index}"
                )
            seen_indexes.add(index)

    def _validate_for_standard(self) -> None:
        if not is_standard(self.nic_setting):
            raise ValidationError(f"invalid nic_setting is specified: {self.nic_setting!r}")
        for i, nic in enumerate(self.additional_nic_settings):
            if not is_standard(nic):
                raise ValidationError(
                    f"invalid additional_nic_settings is specified: additional_nic_settings[{i}]: {nic!r}"
                )
        if self._router_setting().static_nat is not None:
            raise ValidationError(
                "invalid router_setting is specified: static_nat is only for premium+ plan"
            )

    def _validate_for_premium(self) -> None:
        if is_standard(self.nic_setting):
            raise ValidationError(f"invalid nic_setting is specified: {self.nic_setting!r}")
        for i, nic in enumerate(self.additional_nic_settings):
            if is_standard(nic):
                raise ValidationError(
                    f"invalid additional_nic_settings is specified: additional_nic_settings[{i}]: {nic!r}"
                )

    def build(self, context: Optional[OperationContext] = None) -> VPCRouter:
        """Create the router when ``id`` is empty, update it otherwise."""
        context = context or OperationContext()
        if is_empty_id(self.id):
            return self._create(context)
        return self._update(context, str(self.id))

    def _initial_interface_settings(self) -> list[VPCRouterInterfaceSetting]:
        setting = interface_setting(self.nic_setting)
        return [setting] if setting is not None else []

    def _interface_settings(self) -> list[VPCRouterInterfaceSetting]:
        settings = self._initial_interface_settings()
        settings.extend(additional_interface_setting(nic) for nic in self.additional_nic_settings)
        return settings

    def _full_settings(self) -> VPCRouterSettings:
        rs = self._router_setting()
        return VPCRouterSettings(
            vrid=rs.vrid,
            internet_connection_enabled=rs.internet_connection_enabled,
            interfaces=self._interface_settings(),
            static_nat=rs.static_nat,
            port_forwarding=rs.port_forwarding,
            firewall=rs.firewall,
            dhcp_server=rs.dhcp_server,
            dhcp_static_mapping=rs.dhcp_static_mapping,
            dns_forwarding=rs.dns_forwarding,
            pptp_server=rs.pptp_server,
            pptp_server_enabled=rs.pptp_server is not None,
            l2tp_ipsec_server=rs.l2tp_ipsec_server,
            l2tp_ipsec_server_enabled=rs.l2tp_ipsec_server is not None,
            wireguard=rs.wireguard,
            wireguard_enabled=rs.wireguard is not None,
            remote_access_users=rs.remote_access_users,
            site_to_site_ipsec_vpn=rs.site_to_site_ipsec_vpn,
            static_route=rs.static_route,
            syslog_host=rs.syslog_host,
            scheduled_maintenance=rs.scheduled_maintenance,
        )

    def _create(self, context: OperationContext) -> VPCRouter:
        self.validate()
        options = self._options()

        def create(_context: OperationContext, zone: str) -> VPCRouter:
            rs = self._router_setting()
            return self.client.create(
                zone,
                VPCRouterCreateParams(
                    name=self.name,
                    description=self.description,
                    tags=self.tags,
                    icon_id=self.icon_id,
                    plan_id=self.plan_id,
                    switch_id=connected_switch(self.nic_setting),
                    ip_addresses=ip_addresses(self.nic_setting),
                    version=self.version,
                    settings=VPCRouterSettings(
                        vrid=rs.vrid,
                        internet_connection_enabled=rs.internet_connection_enabled,
                        interfaces=self._initial_interface_settings(),
                        syslog_host=rs.syslog_host,
                    ),
                ),
            )

        def provision(context: OperationContext, zone: str, resource_id: str, router: VPCRouter) -> None:
            if self.no_wait:
                return

            for nic in self.additional_nic_settings:
                switch_id, index = switch_info(nic)
                self.client.connect_to_switch(zone, resource_id, index, switch_id)

            # The platform can reject settings pushed right after a switch change.
            time.sleep(options.nic_update_wait_duration)

            self.client.update_settings(
                zone,
                resource_id,
                VPCRouterUpdateSettingsParams(
                    settings=self._full_settings(),
                    settings_hash=router.settings_hash,
                ),
            )
            self.client.config(zone, resource_id)

            if options.boot_after_build:
                power.boot(
                    context,
                    self.client,
                    zone,
                    resource_id,
                    interval=options.polling_interval,
                    timeout=options.polling_timeout,
                )

        setup = RetryableSetup(
            create=create,
            read=lambda _context, zone, resource_id: self.client.read(zone, resource_id),
            delete=lambda _context, zone, resource_id: self.client.delete(zone, resource_id),
            provision_before_up=provision,
            wait_for_copy=not self.no_wait,
            wait_for_up=not self.no_wait and options.boot_after_build,
            options=options,
        )
        router = setup.setup(context, self.zone)
        logger.info(
            "VPC router %s created",
            router.id,
            extra={"zone": self.zone, "resource_id": router.id, "plan_id": int(self.plan_id)},
        )
        return self.client.read(self.zone, router.id)

    def _update(self, context: OperationContext, resource_id: str) -> VPCRouter:
        self.validate()
        options = self._options()
        zone = self.zone

        router = self.client.read(zone, resource_id)
        need_shutdown = self._collect_update_info(router)

        need_restart = False
        if router.instance_status.is_up() and need_shutdown:
            if self.no_wait:
                raise ValidationError("no_wait option is not available due to the need to shut down")
            need_restart = True
            power.shutdown(
                context,
                self.client,
                zone,
                resource_id,
                force=False,
                interval=options.polling_interval,
                timeout=options.polling_timeout,
            )

        topology_changed = False
        for iface in router.interfaces:
            if iface.index == 0:
                continue
            new_switch_id = self._find_additional_switch(iface.index)
            if (iface.switch_id or None) != new_switch_id:
                self.client.disconnect_from_switch(zone, resource_id, iface.index)
                if new_switch_id is not None:
                    self.client.connect_to_switch(zone, resource_id, iface.index, new_switch_id)
                topology_changed = True

        for nic in self.additional_nic_settings:
            switch_id, index = switch_info(nic)
            if router.find_interface(index) is None:
                self.client.connect_to_switch(zone, resource_id, index, switch_id)
                topology_changed = True

        if topology_changed:
            time.sleep(options.nic_update_wait_duration)

        self.client.update(
            zone,
            resource_id,
            VPCRouterUpdateParams(
                name=self.name,
                description=self.description,
                tags=self.tags,
                icon_id=self.icon_id,
                settings=self._full_settings(),
                settings_hash=router.settings_hash,
            ),
        )
        self.client.config(zone, resource_id)

        if need_restart:
            power.boot(
                context,
                self.client,
                zone,
                resource_id,
                interval=options.polling_interval,
                timeout=options.polling_timeout,
            )

        return self.client.read(zone, resource_id)

    def _collect_update_info(self, router: VPCRouter) -> bool:
        """Return True when the interface changes need the router powered off."""
        if router.plan_id != self.plan_id:
            raise ValidationError(
                f"unsupported operation: changing the plan of a VPC router is not allowed: "
                f"current plan: {VPCRouterPlan(router.plan_id).name}"
            )

        attached = [iface for iface in router.interfaces if iface.index != 0]
        for iface in attached:
            if (iface.switch_id or None) != self._find_additional_switch(iface.index):
                return True

        return len(attached) != len(self.additional_nic_settings)

    def _find_additional_switch(self, index: int) -> Optional[str]:
        for nic in self.additional_nic_settings:
            switch_id, nic_index = switch_info(nic)
            if nic_index == index:
                return switch_id
        return None
