"""Server service facade."""

from typing import Optional

from iaas_service.application.dto.requests import (
    ServerDeleteRequest,
    ShutdownRequest,
    ZonalResourceRequest,
)
from iaas_service.config.settings import ServiceSettings
from iaas_service.domain.base.context import OperationContext
from iaas_service.domain.base.ports.api_ports import ServerAPI
from iaas_service.domain.resources.server import Server

from .base import ResourceService


class ServerService(ResourceService):
    """Power control and deletion of servers."""

    def __init__(self, client: ServerAPI, settings: Optional[ServiceSettings] = None) -> None:
        super().__init__(settings)
        self._client = client

    def read(self, request: ZonalResourceRequest) -> Server:
        return self._client.read(request.zone, request.id)

    def boot(self, request: ZonalResourceRequest, context: Optional[OperationContext] = None) -> Server:
        return self._boot(context, self._client, request.zone, request.id)

    def shutdown(self, request: ShutdownRequest, context: Optional[OperationContext] = None) -> None:
        self._shutdown(context, self._client, request.zone, request.id, request.force, request.no_wait)

    def wait_boot(
        self, request: ZonalResourceRequest, context: Optional[OperationContext] = None
    ) -> Server:
        return self._wait_up(context, self._client, request.zone, request.id)

    def delete(self, request: ServerDeleteRequest, context: Optional[OperationContext] = None) -> None:
        """Delete a server, with its disks when ``with_disks`` is set."""

        def delete(target: Server) -> None:
            if request.with_disks:
                self._client.delete_with_disks(
                    request.zone, request.id, [disk.id for disk in target.disks]
                )
            else:
                self._client.delete(request.zone, request.id)

        self._delete_powered_resource(
            context,
            self._client,
            request.zone,
            request.id,
            force=request.force,
            fail_if_not_found=request.fail_if_not_found,
            delete=delete,
        )
