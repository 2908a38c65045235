"""Local router service facade."""

from typing import Optional

from iaas_service.application.builders.local_router_builder import LocalRouterBuilder
from iaas_service.application.dto.requests import GlobalResourceRequest, LocalRouterApplyRequest
from iaas_service.config.settings import ServiceSettings
from iaas_service.domain.base.exceptions import IaasServiceError
from iaas_service.domain.base.ports.api_ports import LocalRouterAPI
from iaas_service.domain.resources.local_router import LocalRouter

from .base import ResourceService, handle_not_found_error


class LocalRouterService(ResourceService):
    """Create, update and delete local routers."""

    def __init__(self, client: LocalRouterAPI, settings: Optional[ServiceSettings] = None) -> None:
        super().__init__(settings)
        self._client = client

    def builder(self, request: LocalRouterApplyRequest) -> LocalRouterBuilder:
        return LocalRouterBuilder(
            client=self._client,
            name=request.name,
            description=request.description,
            tags=request.tags,
            icon_id=request.icon_id,
            switch=request.switch,
            interface=request.interface,
            peers=request.peers,
            static_routes=request.static_routes,
            settings_hash=request.settings_hash,
        )

    def apply(self, request: LocalRouterApplyRequest) -> LocalRouter:
        builder = self.builder(request)
        if request.id:
            return builder.update(request.id)
        return builder.build()

    def read(self, request: GlobalResourceRequest) -> LocalRouter:
        return self._client.read(request.id)

    def delete(self, request: GlobalResourceRequest, fail_if_not_found: bool = False) -> None:
        try:
            self._client.delete(request.id)
        except IaasServiceError as e:
            handle_not_found_error(e, not fail_if_not_found)
