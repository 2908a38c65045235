"""SIM builder."""

from dataclasses import dataclass, field
from typing import Optional

from iaas_service.domain.base.exceptions import IaasServiceError, ValidationError
from iaas_service.domain.base.ports.api_ports import SIMAPI
from iaas_service.domain.resources.sim import (
    SIM,
    SIMCreateParams,
    SIMNetworkOperatorConfig,
    SIMUpdateParams,
)
from iaas_service.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)


@dataclass
class SIMBuilder:
    """Register a SIM and configure carriers, activation and IMEI lock."""

    client: SIMAPI
    name: str
    iccid: str
    passcode: str = ""
    description: str = ""
    tags: list[str] = field(default_factory=list)
    icon_id: Optional[str] = None
    activate: bool = False
    imei: str = ""
    carriers: list[SIMNetworkOperatorConfig] = field(default_factory=list)

    def validate(self) -> None:
        if not self.iccid:
            raise ValidationError("iccid is required")
        if not self.carriers:
            raise ValidationError("carrier is required")

    def build(self) -> SIM:
        """
        Register the SIM and apply its settings.

        Raises:
            IaasServiceError: If a step after registration fails; the
                registered SIM is attached as ``resource``
        """
        self.validate()

        sim = self.client.create(
            SIMCreateParams(
                name=self.name,
                description=self.description,
                tags=self.tags,
                icon_id=self.icon_id,
                iccid=self.iccid,
                passcode=self.passcode,
            )
        )
        logger.info("SIM %s registered", sim.id, extra={"resource_id": sim.id})

        try:
            self.client.set_network_operator(sim.id, self.carriers)
            if self.activate:
                self.client.activate(sim.id)
            if self.imei:
                self.client.imei_lock(sim.id, self.imei)
            return self.client.read(sim.id)
        except IaasServiceError as e:
            if e.resource is None:
                e.resource = sim
            raise

    def update(self, resource_id: str) -> SIM:
        """Bring an existing SIM to the requested settings."""
        self.validate()

        sim = self.client.read(resource_id)
        self.client.update(
            resource_id,
            SIMUpdateParams(
                name=self.name,
                description=self.description,
                tags=self.tags,
                icon_id=self.icon_id,
            ),
        )
        self.client.set_network_operator(resource_id, self.carriers)

        if not self.activate and sim.info.activated:
            self.client.deactivate(resource_id)
        if self.activate and not sim.info.activated:
            self.client.activate(resource_id)

        # A lock to a different IMEI has to be released before locking again.
        if sim.info.imei_lock and (not self.imei or self.imei != sim.info.imei):
            self.client.imei_unlock(resource_id)
        if self.imei and self.imei != sim.info.imei:
            self.client.imei_lock(resource_id, self.imei)

        return self.client.read(resource_id)
