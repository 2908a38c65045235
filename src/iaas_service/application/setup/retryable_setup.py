"""Retryable setup engine for resources that need copy or boot waits."""

import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from iaas_service.domain.base.context import OperationContext
from iaas_service.domain.base.exceptions import (
    MaxRetryCountExceededError,
    OperationCancelledError,
    ProvisioningError,
    SetupConfigurationError,
    SetupError,
    UpWaitError,
)
from iaas_service.domain.base.value_objects import Availability
from iaas_service.infrastructure.logging.logger import get_logger
from iaas_service.infrastructure.waiter.wait import copy_waiter, up_waiter

from .options import SetupOptions

logger = get_logger(__name__)

CreateFunc = Callable[[OperationContext, str], Any]
ReadFunc = Callable[[OperationContext, str, str], Any]
DeleteFunc = Callable[[OperationContext, str, str], None]
ProvisionBeforeUpFunc = Callable[[OperationContext, str, str, Any], None]


@dataclass
class RetryableSetup:
    """
    Create a resource and drive it to a ready state.

    Each attempt runs Create -> CopyWait -> ProvisionBeforeUp -> UpWait in
    order. A resource that turns ``failed`` while being copied is deleted and
    the attempt starts over, up to ``options.retry_count`` extra times. Every
    other failure is raised immediately; failures after the resource exists
    carry it in ``error.resource``.

    Attributes:
        create: Creates the resource and returns it (must expose ``id``)
        read: Reads the resource by id, used by the wait phases
        delete: Deletes a resource that failed to copy
        provision_before_up: Optional hook run after copy and before boot wait
        wait_for_copy: Whether to wait for the copy to finish
        wait_for_up: Whether to wait for the resource to boot
        options: Retry and timing policy, defaults to ``SetupOptions()``
    """

    create: Optional[CreateFunc] = None
    read: Optional[ReadFunc] = None
    delete: Optional[DeleteFunc] = None
    provision_before_up: Optional[ProvisionBeforeUpFunc] = None
    wait_for_copy: bool = False
    wait_for_up: bool = False
    options: Optional[SetupOptions] = None

    def setup(self, context: Optional[OperationContext] = None, zone: str = "") -> Any:
        """
        Build the resource, deleting and recreating it when its copy fails.

        Args:
            context: Cancellation token for the whole operation
            zone: Zone the resource is created in

        Returns:
            The created resource as seen when it left the copy phase

        Raises:
            SetupConfigurationError: If a required function is missing
            MaxRetryCountExceededError: If every attempt failed to copy
            ProvisioningError: If the provisioning hook kept failing
            UpWaitError: If the resource did not boot
            OperationCancelledError: If the context was cancelled
        """
        self._validate()
        context = context or OperationContext()
        options = self.options or SetupOptions()
        max_attempts = options.retry_count + 1

        for attempt in range(1, max_attempts + 1):
            context.raise_if_cancelled()
            logger.debug(
                "Setup attempt %d/%d in zone %s",
                attempt,
                max_attempts,
                zone,
                extra={"zone": zone, "attempt": attempt},
            )

            target = self.create(context, zone)
            if target is None:
                raise SetupError("create func returned no resource")
            resource_id = str(target.id)

            if self.wait_for_copy:
                try:
                    created = self._wait_for_copy_with_cleanup(context, zone, resource_id, options)
                except OperationCancelledError as e:
                    e.resource = target
                    raise
                if created is None:
                    logger.warning(
                        "Resource %s failed to copy (attempt %d/%d)",
                        resource_id,
                        attempt,
                        max_attempts,
                        extra={"zone": zone, "resource_id": resource_id, "attempt": attempt},
                    )
                    continue
            else:
                created = target

            self._raise_if_cancelled(context, created)
            self._provision_before_up(context, zone, resource_id, created, options)
            self._raise_if_cancelled(context, created)
            self._wait_for_up(context, zone, resource_id, created, options)

            logger.info(
                "Resource %s set up after %d attempt(s)",
                resource_id,
                attempt,
                extra={"zone": zone, "resource_id": resource_id, "attempt": attempt},
            )
            return created

        raise MaxRetryCountExceededError(max_attempts, details={"zone": zone})

    def _validate(self) -> None:
        if self.create is None:
            raise SetupConfigurationError("create func is required")
        if (self.wait_for_copy or self.wait_for_up) and self.read is None:
            raise SetupConfigurationError(
                "read func is required when wait_for_copy or wait_for_up is true"
            )
        if self.wait_for_copy and self.delete is None:
            raise SetupConfigurationError("delete func is required when wait_for_copy is true")

    @staticmethod
    def _raise_if_cancelled(context: OperationContext, created: Any) -> None:
        try:
            context.raise_if_cancelled()
        except OperationCancelledError as e:
            e.resource = created
            raise

    def _wait_for_copy_with_cleanup(
        self,
        context: OperationContext,
        zone: str,
        resource_id: str,
        options: SetupOptions,
    ) -> Any:
        """Wait for the copy; return None after cleaning up a failed resource."""
        waiter = copy_waiter(
            lambda: self.read(context, zone, resource_id),
            interval=options.polling_interval,
            timeout=options.polling_timeout,
        )
        task = waiter.wait_for_state_async(
            context,
            on_progress=lambda state: logger.debug(
                "Resource %s is still copying: %s",
                resource_id,
                getattr(state, "availability", None),
            ),
            keep_progress=False,
        )
        state = task.result()

        if not Availability.from_value(getattr(state, "availability", None)).is_failed():
            return state

        self._delete_failed_resource(context, zone, resource_id, options)
        return None

    def _delete_failed_resource(
        self,
        context: OperationContext,
        zone: str,
        resource_id: str,
        options: SetupOptions,
    ) -> None:
        # Deleting right after the failed transition can be rejected while the
        # platform is still finishing the copy.
        last_error: Optional[Exception] = None
        for attempt in range(1, options.delete_retry_count + 1):
            time.sleep(options.delete_retry_interval)
            try:
                self.delete(context, zone, resource_id)
            except Exception as e:
                last_error = e
                logger.warning(
                    "Failed to delete resource %s (attempt %d/%d): %s",
                    resource_id,
                    attempt,
                    options.delete_retry_count,
                    e,
                    extra={"zone": zone, "resource_id": resource_id},
                )
                continue
            logger.info(
                "Deleted resource %s after failed copy",
                resource_id,
                extra={"zone": zone, "resource_id": resource_id},
            )
            return

        logger.error(
            "Giving up deleting resource %s after %d attempts: %s",
            resource_id,
            options.delete_retry_count,
            last_error,
            extra={"zone": zone, "resource_id": resource_id},
        )

    def _provision_before_up(
        self,
        context: OperationContext,
        zone: str,
        resource_id: str,
        created: Any,
        options: SetupOptions,
    ) -> None:
        if self.provision_before_up is None:
            return

        last_error: Optional[Exception] = None
        for attempt in range(1, options.provisioning_retry_count + 1):
            try:
                self.provision_before_up(context, zone, resource_id, created)
                return
            except OperationCancelledError as e:
                e.resource = created
                raise
            except Exception as e:
                last_error = e
                logger.warning(
                    "Provisioning of resource %s failed (attempt %d/%d): %s",
                    resource_id,
                    attempt,
                    options.provisioning_retry_count,
                    e,
                    extra={"zone": zone, "resource_id": resource_id},
                )
                if attempt < options.provisioning_retry_count:
                    time.sleep(options.provisioning_retry_interval)

        raise ProvisioningError(
            f"provisioning resource {resource_id} failed: {last_error}",
            resource=created,
            details={"zone": zone, "attempts": options.provisioning_retry_count},
        ) from last_error

    def _wait_for_up(
        self,
        context: OperationContext,
        zone: str,
        resource_id: str,
        created: Any,
        options: SetupOptions,
    ) -> None:
        if not self.wait_for_up:
            return

        waiter = up_waiter(
            lambda: self.read(context, zone, resource_id),
            interval=options.polling_interval,
            timeout=options.polling_timeout,
        )
        try:
            waiter.wait_for_state(context)
        except OperationCancelledError as e:
            e.resource = created
            raise
        except Exception as e:
            raise UpWaitError(
                f"waiting for resource {resource_id} to boot failed: {e}",
                resource=created,
                details={"zone": zone},
            ) from e
