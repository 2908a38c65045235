"""State poller that drives a resource read until it reaches a target state."""

from __future__ import annotations

import itertools
import queue
import threading
import time
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

from iaas_service.domain.base.context import OperationContext
from iaas_service.domain.base.exceptions import (
    OperationCancelledError,
    StateTimeoutError,
    UnexpectedStateError,
)
from iaas_service.domain.base.value_objects import Availability, InstanceStatus
from iaas_service.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)

DEFAULT_POLLING_INTERVAL = 5.0
DEFAULT_POLLING_TIMEOUT = 20 * 60.0

ReadFunc = Callable[[], Any]
ProgressCallback = Callable[[Any], None]

_task_counter = itertools.count(1)


@dataclass
class StatePollingTask:
    """
    Handle on a poll running in its own thread.

    ``future`` resolves exactly once: with the terminal snapshot on success or
    with the terminal exception. ``progress`` receives every intermediate
    snapshot observed before that.
    """

    future: Future
    progress: "queue.Queue[Any]"
    thread: threading.Thread

    def result(self, timeout: Optional[float] = None) -> Any:
        """Block until the poll terminates and return its snapshot."""
        return self.future.result(timeout)

    def done(self) -> bool:
        return self.future.done()

    def drain_progress(self) -> list[Any]:
        """Return the intermediate snapshots received so far."""
        items = []
        while True:
            try:
                items.append(self.progress.get_nowait())
            except queue.Empty:
                return items


@dataclass
class StatePollingWaiter:
    """
    Poll a read function until the resource reaches a target state.

    A snapshot is matched on its ``availability`` and, when present,
    ``instance_status`` attribute. An empty target set means that dimension
    needs no particular value.
    """

    read_func: ReadFunc
    target_availability: Iterable[Availability] = field(default_factory=tuple)
    pending_availability: Iterable[Availability] = field(default_factory=tuple)
    target_instance_status: Iterable[InstanceStatus] = field(default_factory=tuple)
    pending_instance_status: Iterable[InstanceStatus] = field(default_factory=tuple)
    interval: float = DEFAULT_POLLING_INTERVAL
    timeout: float = DEFAULT_POLLING_TIMEOUT

    def __post_init__(self) -> None:
        self.target_availability = frozenset(self.target_availability)
        self.pending_availability = frozenset(self.pending_availability)
        self.target_instance_status = frozenset(self.target_instance_status)
        self.pending_instance_status = frozenset(self.pending_instance_status)

    def wait_for_state(self, context: Optional[OperationContext] = None) -> Any:
        """
        Poll until a terminal state and return the final snapshot.

        Raises:
            OperationCancelledError: If the context is cancelled
            StateTimeoutError: If the timeout elapses first
            UnexpectedStateError: If the resource reaches an unhandled state
            Exception: Whatever the read function raises
        """
        return self.wait_for_state_async(context, keep_progress=False).result()

    def wait_for_state_async(
        self,
        context: Optional[OperationContext] = None,
        on_progress: Optional[ProgressCallback] = None,
        keep_progress: bool = True,
    ) -> StatePollingTask:
        """
        Start polling in a background thread and return its task handle.

        Args:
            context: Cancellation token observed between and after reads
            on_progress: Called with every intermediate snapshot
            keep_progress: Also queue intermediate snapshots on ``task.progress``;
                callers that only use ``on_progress`` should turn this off
        """
        context = context or OperationContext()
        future: Future = Future()
        future.set_running_or_notify_cancel()
        progress: "queue.Queue[Any]" = queue.Queue()

        thread = threading.Thread(
            target=self._run,
            args=(context, future, progress if keep_progress else None, on_progress),
            name=f"state-poller-{next(_task_counter)}",
            daemon=True,
        )
        thread.start()
        return StatePollingTask(future=future, progress=progress, thread=thread)

    def _run(
        self,
        context: OperationContext,
        future: Future,
        progress: "Optional[queue.Queue[Any]]",
        on_progress: Optional[ProgressCallback],
    ) -> None:
        try:
            future.set_result(self._poll(context, progress, on_progress))
        except BaseException as e:
            future.set_exception(e)

    def _poll(
        self,
        context: OperationContext,
        progress: "Optional[queue.Queue[Any]]",
        on_progress: Optional[ProgressCallback],
    ) -> Any:
        deadline = time.monotonic() + self.timeout

        while True:
            if context.cancelled:
                raise OperationCancelledError(context.reason or "operation cancelled")

            snapshot = self.read_func()
            # A cancel that lands during the read wins over its result.
            if context.cancelled:
                raise OperationCancelledError(context.reason or "operation cancelled")
            if self._is_complete(snapshot):
                return snapshot

            if progress is not None:
                progress.put(snapshot)
            if on_progress is not None:
                on_progress(snapshot)

            now = time.monotonic()
            if now >= deadline:
                raise StateTimeoutError(
                    f"resource did not reach a target state within {self.timeout:g}s",
                    details={"last_state": _describe(snapshot)},
                )
            if context.wait(min(self.interval, deadline - now)):
                raise OperationCancelledError(context.reason or "operation cancelled")

    def _is_complete(self, snapshot: Any) -> bool:
        """Return True on a target state, False on a pending one, raise otherwise."""
        availability = getattr(snapshot, "availability", None)
        instance_status = getattr(snapshot, "instance_status", None)

        if availability is None and instance_status is None:
            raise UnexpectedStateError(
                f"snapshot has neither availability nor instance status: {snapshot!r}",
                snapshot=snapshot,
            )

        complete = True
        if availability is not None:
            complete = self._check(
                "availability",
                Availability.from_value(availability),
                self.target_availability,
                self.pending_availability,
                snapshot,
            )
        if instance_status is not None:
            complete = (
                self._check(
                    "instance status",
                    InstanceStatus.from_value(instance_status),
                    self.target_instance_status,
                    self.pending_instance_status,
                    snapshot,
                )
                and complete
            )
        return complete

    @staticmethod
    def _check(label: str, value: Any, targets: frozenset, pendings: frozenset, snapshot: Any) -> bool:
        if not targets or value in targets:
            return True
        if value in pendings:
            return False
        raise UnexpectedStateError(
            f"got unexpected value of {label}: {value.value}",
            snapshot=snapshot,
            details={"state": _describe(snapshot)},
        )


def _describe(snapshot: Any) -> dict[str, Any]:
    availability = getattr(snapshot, "availability", None)
    instance_status = getattr(snapshot, "instance_status", None)
    return {
        "id": getattr(snapshot, "id", None),
        "availability": getattr(availability, "value", availability),
        "instance_status": getattr(instance_status, "value", instance_status),
    }
