"""NFS service facade."""

from typing import Optional

from iaas_service.application.builders.nfs_builder import NFSBuilder
from iaas_service.application.dto.requests import (
    DeleteRequest,
    NFSApplyRequest,
    ZonalResourceRequest,
)
from iaas_service.config.settings import ServiceSettings
from iaas_service.domain.base.context import OperationContext
from iaas_service.domain.base.ports.api_ports import NFSAPI
from iaas_service.domain.resources.nfs import NFS

from .base import ResourceService


class NFSService(ResourceService):
    """Create, update, wait on and delete NFS appliances."""

    def __init__(self, client: NFSAPI, settings: Optional[ServiceSettings] = None) -> None:
        super().__init__(settings)
        self._client = client

    def builder(self, request: NFSApplyRequest) -> NFSBuilder:
        return NFSBuilder(
            client=self._client,
            zone=request.zone,
            id=request.id,
            name=request.name,
            description=request.description,
            tags=request.tags,
            icon_id=request.icon_id,
            switch_id=request.switch_id,
            plan=request.plan,
            size=request.size,
            ip_addresses=request.ip_addresses,
            network_mask_len=request.network_mask_len,
            default_route=request.default_route,
            no_wait=request.no_wait,
            setup_options=self._setup_options(),
        )

    def apply(self, request: NFSApplyRequest, context: Optional[OperationContext] = None) -> NFS:
        return self.builder(request).build(context)

    def read(self, request: ZonalResourceRequest) -> NFS:
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

    def wait_boot(self, request: ZonalResourceRequest, context: Optional[OperationContext] = None) -> NFS:
        return self._wait_up(context, self._client, request.zone, request.id)

    def wait_shutdown(
        self, request: ZonalResourceRequest, context: Optional[OperationContext] = None
    ) -> NFS:
        return self._wait_down(context, self._client, request.zone, request.id)
