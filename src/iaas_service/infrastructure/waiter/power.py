"""Boot and shutdown helpers that wait for the resulting power state."""

from typing import Any, Optional

from iaas_service.domain.base.context import OperationContext
from iaas_service.domain.base.ports.api_ports import PowerControlPort
from iaas_service.infrastructure.logging.logger import get_logger

from .state_polling_waiter import DEFAULT_POLLING_INTERVAL, DEFAULT_POLLING_TIMEOUT
from .wait import until_down, until_up

logger = get_logger(__name__)


def boot(
    context: Optional[OperationContext],
    client: PowerControlPort,
    zone: str,
    resource_id: str,
    interval: float = DEFAULT_POLLING_INTERVAL,
    timeout: float = DEFAULT_POLLING_TIMEOUT,
) -> Any:
    """
    Power on a resource and wait until it is up.

    Args:
        context: Operation context observed while waiting
        client: API client exposing ``boot`` and ``read``
        zone: Zone of the resource
        resource_id: Resource to boot
        interval: Polling interval in seconds
        timeout: Maximum seconds to wait for the up state

    Returns:
        The snapshot of the running resource
    """
    current = client.read(zone, resource_id)
    if current.instance_status.is_up():
        logger.debug("Resource %s is already up, skipping boot", resource_id)
        return current

    logger.info("Booting resource %s", resource_id, extra={"zone": zone, "resource_id": resource_id})
    client.boot(zone, resource_id)
    return until_up(context, lambda: client.read(zone, resource_id), interval, timeout)


def shutdown(
    context: Optional[OperationContext],
    client: PowerControlPort,
    zone: str,
    resource_id: str,
    force: bool = False,
    interval: float = DEFAULT_POLLING_INTERVAL,
    timeout: float = DEFAULT_POLLING_TIMEOUT,
) -> Any:
    """Power off a resource and wait until it is down."""
    current = client.read(zone, resource_id)
    if current.instance_status.is_down():
        logger.debug("Resource %s is already down, skipping shutdown", resource_id)
        return current

    logger.info(
        "Shutting down resource %s",
        resource_id,
        extra={"zone": zone, "resource_id": resource_id, "force": force},
    )
    client.shutdown(zone, resource_id, force=force)
    return until_down(context, lambda: client.read(zone, resource_id), interval, timeout)
