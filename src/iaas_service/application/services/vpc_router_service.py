"""VPC router service facade."""

from typing import Optional

from iaas_service.application.builders.vpc_router.builder import VPCRouterBuilder
from iaas_service.application.dto.requests import (
    DeleteRequest,
    ShutdownRequest,
    VPCRouterApplyRequest,
    ZonalResourceRequest,
)
from iaas_service.config.settings import ServiceSettings
from iaas_service.domain.base.context import OperationContext
from iaas_service.domain.base.exceptions import ValidationError
from iaas_service.domain.base.ports.api_ports import VPCRouterAPI
from iaas_service.domain.resources.vpc_router import VPCRouter

from .base import ResourceService


class VPCRouterService(ResourceService):
    """Create, update, power and delete VPC routers."""

    def __init__(self, client: VPCRouterAPI, settings: Optional[ServiceSettings] = None) -> None:
        super().__init__(settings)
        self._client = client

    def builder(self, request: VPCRouterApplyRequest) -> VPCRouterBuilder:
        """Translate an apply request into a builder."""
        return VPCRouterBuilder(
            client=self._client,
            zone=request.zone,
            id=request.id,
            name=request.name,
            description=request.description,
            tags=request.tags,
            icon_id=request.icon_id,
            plan_id=request.plan_id,
            version=request.version,
            nic_setting=request.nic_setting,
            additional_nic_settings=request.additional_nic_settings,
            router_setting=request.router_setting,
            no_wait=request.no_wait,
            setup_options=self._setup_options(boot_after_build=request.boot_after_create),
        )

    def apply(
        self, request: VPCRouterApplyRequest, context: Optional[OperationContext] = None
    ) -> VPCRouter:
        """Create the router when the request has no id, update it otherwise."""
        return self.builder(request).build(context)

    def create(
        self, request: VPCRouterApplyRequest, context: Optional[OperationContext] = None
    ) -> VPCRouter:
        if request.id:
            raise ValidationError("id must be empty when creating a VPC router")
        return self.apply(request, context)

    def update(
        self, request: VPCRouterApplyRequest, context: Optional[OperationContext] = None
    ) -> VPCRouter:
        if not request.id:
            raise ValidationError("id is required when updating a VPC router")
        return self.apply(request, context)

    def read(self, request: ZonalResourceRequest) -> VPCRouter:
        return self._client.read(request.zone, request.id)

    def delete(self, request: DeleteRequest, context: Optional[OperationContext] = None) -> None:
        self._delete_powered_resource(
            context,
            self._client,
            request.zone,
            request.id,
            force=request.force,
            fail_if_not_found=request.fail_if_not_found,
            delete=lambda _target: self._client.delete(request.zone, request.id),
        )

    def boot(self, request: ZonalResourceRequest, context: Optional[OperationContext] = None) -> VPCRouter:
        return self._boot(context, self._client, request.zone, request.id)

    def shutdown(self, request: ShutdownRequest, context: Optional[OperationContext] = None) -> None:
        self._shutdown(context, self._client, request.zone, request.id, request.force, request.no_wait)

    def wait_boot(
        self, request: ZonalResourceRequest, context: Optional[OperationContext] = None
    ) -> VPCRouter:
        return self._wait_up(context, self._client, request.zone, request.id)

    def wait_shutdown(
        self, request: ZonalResourceRequest, context: Optional[OperationContext] = None
    ) -> VPCRouter:
        return self._wait_down(context, self._client, request.zone, request.id)
