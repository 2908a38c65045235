"""NFS appliance builder."""

import ipaddress
from dataclasses import dataclass, field
from typing import Optional

from iaas_service.application.setup.options import SetupOptions
from iaas_service.application.setup.retryable_setup import RetryableSetup
from iaas_service.domain.base.context import OperationContext
from iaas_service.domain.base.exceptions import ValidationError
from iaas_service.domain.base.ports.api_ports import NFSAPI
from iaas_service.domain.base.value_objects import is_empty_id
from iaas_service.domain.resources.nfs import NFS, NFSCreateParams, NFSPlan, NFSUpdateParams
from iaas_service.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)


@dataclass
class NFSBuilder:
    """Create an NFS appliance and wait for it to copy and boot."""

    client: NFSAPI
    zone: str
    name: str
    switch_id: str
    plan: NFSPlan
    size: int
    ip_addresses: list[str]
    network_mask_len: int
    id: Optional[str] = None
    description: str = ""
    tags: list[str] = field(default_factory=list)
    icon_id: Optional[str] = None
    default_route: str = ""
    setup_options: Optional[SetupOptions] = None
    no_wait: bool = False

    def validate(self) -> None:
        """Reject settings the platform would refuse."""
        try:
            NFSPlan(self.plan)
        except ValueError:
            raise ValidationError(f"invalid plan: {self.plan}")
        if is_empty_id(self.switch_id):
            raise ValidationError("required field is missing: switch_id")
        if not 1 <= len(self.ip_addresses) <= 2:
            raise ValidationError("ip_addresses must contain one or two addresses")
        for address in [*self.ip_addresses, *([self.default_route] if self.default_route else [])]:
            try:
                ipaddress.IPv4Address(address)
            except ValueError:
                raise ValidationError(f"invalid IPv4 address: {address}")
        if not 8 <= self.network_mask_len <= 29:
            raise ValidationError(f"invalid network_mask_len: {self.network_mask_len}")

    def build(self, context: Optional[OperationContext] = None) -> NFS:
        """Create the appliance when ``id`` is empty, update it otherwise."""
        context = context or OperationContext()
        self.validate()
        if is_empty_id(self.id):
            return self._create(context)
        return self._update(str(self.id))

    def _create(self, context: OperationContext) -> NFS:
        setup = RetryableSetup(
            create=lambda _context, zone: self.client.create(
                zone,
                NFSCreateParams(
                    name=self.name,
                    description=self.description,
                    tags=self.tags,
                    icon_id=self.icon_id,
                    switch_id=self.switch_id,
                    plan=self.plan,
                    size=self.size,
                    ip_addresses=self.ip_addresses,
                    network_mask_len=self.network_mask_len,
                    default_route=self.default_route,
                ),
            ),
            read=lambda _context, zone, resource_id: self.client.read(zone, resource_id),
            delete=lambda _context, zone, resource_id: self.client.delete(zone, resource_id),
            wait_for_copy=not self.no_wait,
            wait_for_up=not self.no_wait,
            options=self.setup_options,
        )
        nfs = setup.setup(context, self.zone)
        logger.info("NFS %s created", nfs.id, extra={"zone": self.zone, "resource_id": nfs.id})
        return self.client.read(self.zone, nfs.id)

    def _update(self, resource_id: str) -> NFS:
        self.client.read(self.zone, resource_id)
        self.client.update(
            self.zone,
            resource_id,
            NFSUpdateParams(
                name=self.name,
                description=self.description,
                tags=self.tags,
                icon_id=self.icon_id,
            ),
        )
        return self.client.read(self.zone, resource_id)
