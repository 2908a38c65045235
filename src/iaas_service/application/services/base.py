"""Shared behaviour of the resource service facades."""

from typing import Any, Callable, Optional

from iaas_service.application.setup.options import SetupOptions
from iaas_service.config.settings import ServiceSettings
from iaas_service.domain.base.context import OperationContext
from iaas_service.domain.base.exceptions import IaasServiceError, ValidationError, is_not_found
from iaas_service.domain.base.ports.api_ports import PowerControlPort
from iaas_service.domain.base.value_objects import InstanceStatus
from iaas_service.infrastructure.logging.logger import get_logger
from iaas_service.infrastructure.waiter import power
from iaas_service.infrastructure.waiter.wait import until_down, until_up

logger = get_logger(__name__)


def handle_not_found_error(error: Exception, ignore: bool) -> None:
    """Swallow a not-found error when ``ignore`` is set, re-raise anything else."""
    if ignore and is_not_found(error):
        logger.debug("Ignoring not found error: %s", error)
        return
    raise error


class ResourceService:
    """Base class holding settings and the power helpers shared by services."""

    def __init__(self, settings: Optional[ServiceSettings] = None) -> None:
        self._settings = settings or ServiceSettings()

    @property
    def settings(self) -> ServiceSettings:
        return self._settings

    def _setup_options(self, **overrides: Any) -> SetupOptions:
        return self._settings.setup_options(**overrides)

    def _boot(
        self, context: Optional[OperationContext], client: PowerControlPort, zone: str, resource_id: str
    ) -> Any:
        options = self._setup_options()
        return power.boot(
            context,
            client,
            zone,
            resource_id,
            interval=options.polling_interval,
            timeout=options.polling_timeout,
        )

    def _shutdown(
        self,
        context: Optional[OperationContext],
        client: PowerControlPort,
        zone: str,
        resource_id: str,
        force: bool,
        no_wait: bool,
    ) -> Any:
        if no_wait:
            client.shutdown(zone, resource_id, force=force)
            return None
        options = self._setup_options()
        return power.shutdown(
            context,
            client,
            zone,
            resource_id,
            force=force,
            interval=options.polling_interval,
            timeout=options.polling_timeout,
        )

    def _wait_up(
        self, context: Optional[OperationContext], client: PowerControlPort, zone: str, resource_id: str
    ) -> Any:
        options = self._setup_options()
        return until_up(
            context,
            lambda: client.read(zone, resource_id),
            options.polling_interval,
            options.polling_timeout,
        )

    def _wait_down(
        self, context: Optional[OperationContext], client: PowerControlPort, zone: str, resource_id: str
    ) -> Any:
        options = self._setup_options()
        return until_down(
            context,
            lambda: client.read(zone, resource_id),
            options.polling_interval,
            options.polling_timeout,
        )

    def _delete_powered_resource(
        self,
        context: Optional[OperationContext],
        client: PowerControlPort,
        zone: str,
        resource_id: str,
        force: bool,
        fail_if_not_found: bool,
        delete: Callable[[Any], None],
    ) -> None:
        """
        Delete a resource with a power state.

        A running resource is only deleted with ``force``; it is forcibly shut
        down first. Unless its status was unknown the resource is waited on
        until it is down before ``delete`` is called with the snapshot.

        Raises:
            ValidationError: If the resource is running and ``force`` is not set
        """
        try:
            target = client.read(zone, resource_id)
        except IaasServiceError as e:
            handle_not_found_error(e, not fail_if_not_found)
            return

        if not force and target.instance_status.is_up():
            raise ValidationError(f"target {zone}:{resource_id!r} has not yet shut down")

        if target.instance_status.is_up():
            client.shutdown(zone, resource_id, force=True)

        if target.instance_status != InstanceStatus.UNKNOWN:
            self._wait_down(context, client, zone, resource_id)

        try:
            delete(target)
        except IaasServiceError as e:
            handle_not_found_error(e, not fail_if_not_found)
            return
        logger.info("Deleted resource %s", resource_id, extra={"zone": zone, "resource_id": resource_id})
