"""SIM service facade."""

from typing import Optional

from iaas_service.application.builders.sim_builder import SIMBuilder
from iaas_service.application.dto.requests import GlobalResourceRequest, SIMApplyRequest
from iaas_service.config.settings import ServiceSettings
from iaas_service.domain.base.exceptions import IaasServiceError
from iaas_service.domain.base.ports.api_ports import SIMAPI
from iaas_service.domain.resources.sim import SIM

from .base import ResourceService, handle_not_found_error


class SIMService(ResourceService):
    """Register, update and delete SIMs."""

    def __init__(self, client: SIMAPI, settings: Optional[ServiceSettings] = None) -> None:
        super().__init__(settings)
        self._client = client

    def builder(self, request: SIMApplyRequest) -> SIMBuilder:
        return SIMBuilder(
            client=self._client,
            name=request.name,
            description=request.description,
            tags=request.tags,
            icon_id=request.icon_id,
            iccid=request.iccid,
            passcode=request.passcode,
            activate=request.activate,
            imei=request.imei,
            carriers=request.carriers,
        )

    def apply(self, request: SIMApplyRequest) -> SIM:
        builder = self.builder(request)
        if request.id:
            return builder.update(request.id)
        return builder.build()

    def read(self, request: GlobalResourceRequest) -> SIM:
        return self._client.read(request.id)

    def delete(self, request: GlobalResourceRequest, fail_if_not_found: bool = False) -> None:
        """Delete a SIM, deactivating it first when it is active."""
        try:
            sim = self._client.read(request.id)
            if sim.info.activated:
                self._client.deactivate(request.id)
            self._client.delete(request.id)
        except IaasServiceError as e:
            handle_not_found_error(e, not fail_if_not_found)
